# ABOUTME: Key casing and canonical entity type naming
# ABOUTME: Splits on separators and case transitions, then joins as camelCase or PascalCase

import re

_SEPARATORS = re.compile(r"[\s_.\-]+")
_CASE_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


def _words(value: str) -> list[str]:
    words: list[str] = []
    for chunk in _SEPARATORS.split(value.strip()):
        words.extend(word for word in _CASE_BOUNDARY.split(chunk) if word)
    return words


def camel_case(value: str, pascal: bool = False) -> str:
    """Convert ``featured_media`` to ``featuredMedia`` (or ``FeaturedMedia``)."""
    words = [word.lower() for word in _words(value)]
    if not words:
        return ""
    head = words[0].capitalize() if pascal else words[0]
    return head + "".join(word.capitalize() for word in words[1:])


class TypeNamer:
    """Derives canonical entity type names from a shared prefix."""

    def __init__(self, prefix: str):
        self.prefix = prefix

    def __call__(self, name: str = "") -> str:
        return camel_case(f"{self.prefix} {name}", pascal=True)
