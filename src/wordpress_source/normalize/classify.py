# ABOUTME: Pure shape classification for raw JSON field values
# ABOUTME: Decides which rewrite the normalizer applies without performing any side effects

import re
from enum import Enum
from typing import Any

IMAGE_URL_PATTERN = re.compile(r"^https://.*/.*\.(jpg|png|svg|jpeg)($|\?)", re.IGNORECASE)


class ValueKind(str, Enum):
    NULL = "null"
    SEQUENCE = "sequence"
    EMBEDDED_IMAGE = "embedded_image"
    FOREIGN_ENTITY = "foreign_entity"
    ATTACHMENT = "attachment"
    RICH_TEXT = "rich_text"
    MAPPING = "mapping"
    IMAGE_URL = "image_url"
    SCALAR = "scalar"


def entity_id(value: dict[str, Any]) -> Any:
    """ACF relations use ``ID``, REST objects use ``id``."""
    return value.get("ID") or value.get("id")


def classify_value(value: Any, images_enabled: bool = False) -> ValueKind:
    """Classify a raw value.

    Args:
        value: Any decoded JSON value
        images_enabled: True inside a special field group with image downloads on

    Returns:
        The kind of rewrite that applies to ``value``
    """
    if value is None:
        return ValueKind.NULL

    if isinstance(value, list):
        return ValueKind.SEQUENCE

    if isinstance(value, dict):
        if images_enabled and value.get("type") == "image" and value.get("filename") and value.get("url"):
            return ValueKind.EMBEDDED_IMAGE
        if value.get("post_type") and entity_id(value):
            return ValueKind.FOREIGN_ENTITY
        if value.get("filename") and entity_id(value):
            return ValueKind.ATTACHMENT
        if "rendered" in value:
            return ValueKind.RICH_TEXT
        return ValueKind.MAPPING

    if images_enabled and isinstance(value, str) and IMAGE_URL_PATTERN.match(value):
        return ValueKind.IMAGE_URL

    return ValueKind.SCALAR
