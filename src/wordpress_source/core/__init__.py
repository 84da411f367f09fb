# ABOUTME: Ingestion orchestration and the content sink boundary
# ABOUTME: Pipeline Stage 3: normalized nodes → host content graph

from .graph import ContentGraph, EntityCollection
from .sink import ContentSink, EntityTypeHandle
from .source import IngestionReport, IngestionStage, RestBases, WordPressSource

__all__ = [
    "ContentGraph",
    "ContentSink",
    "EntityCollection",
    "EntityTypeHandle",
    "IngestionReport",
    "IngestionStage",
    "RestBases",
    "WordPressSource",
]
