# ABOUTME: Interface between the connector and the host content-graph store
# ABOUTME: Exactly three operations: register a type, add a node, create a reference

from collections.abc import Mapping
from typing import Any, Protocol

from wordpress_source.normalize.models import Reference


class EntityTypeHandle(Protocol):
    """Handle returned for a registered entity type."""

    def add_node(self, fields: Mapping[str, Any]) -> Any:
        """Store one normalized node. ``fields`` always contains ``id``."""
        ...


class ContentSink(Protocol):
    """Protocol for any store that receives normalized WordPress content."""

    def register_entity_type(self, type_name: str, route: str | None) -> EntityTypeHandle:
        """Declare an entity type and return the handle nodes are added through."""
        ...

    def create_reference(self, type_name: str, id: Any) -> Reference:
        """Create a pointer to a node that may not exist yet."""
        ...
