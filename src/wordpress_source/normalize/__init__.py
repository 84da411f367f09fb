# ABOUTME: Field normalization and reference resolution
# ABOUTME: Pipeline Stage 2: raw records → canonical node fields

from .casing import TypeNamer, camel_case
from .classify import ValueKind, classify_value
from .models import AssetDescriptor, FragmentImage, PostFragment, Reference
from .normalizer import FieldNormalizer

__all__ = [
    "AssetDescriptor",
    "FieldNormalizer",
    "FragmentImage",
    "PostFragment",
    "Reference",
    "TypeNamer",
    "ValueKind",
    "camel_case",
    "classify_value",
]
