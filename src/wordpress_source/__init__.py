# ABOUTME: WordPress REST connector producing normalized nodes and typed references
# ABOUTME: Exposes the orchestrator, the sink interface, and the in-memory content graph

from wordpress_source.core import ContentGraph, ContentSink, IngestionReport, WordPressSource
from wordpress_source.normalize import AssetDescriptor, FieldNormalizer, PostFragment, Reference

__all__ = [
    "AssetDescriptor",
    "ContentGraph",
    "ContentSink",
    "FieldNormalizer",
    "IngestionReport",
    "PostFragment",
    "Reference",
    "WordPressSource",
]
