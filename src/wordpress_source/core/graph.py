# ABOUTME: In-memory content graph implementing the sink interface
# ABOUTME: Used by the CLI and tests to collect nodes and check references after a run

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel

from wordpress_source.normalize.models import Reference


def _node_key(id: Any) -> str:
    return str(id)


def to_jsonable(value: Any) -> Any:
    """Dump pydantic values nested anywhere inside node fields."""
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, Mapping):
        return {str(key): to_jsonable(item) for key, item in value.items()}
    if isinstance(value, list | tuple):
        return [to_jsonable(item) for item in value]
    return value


@dataclass
class EntityCollection:
    """Nodes of one entity type keyed by id."""

    type_name: str
    route: str | None = None
    nodes: dict[str, dict[str, Any]] = field(default_factory=dict)

    def add_node(self, fields: Mapping[str, Any]) -> dict[str, Any]:
        if "id" not in fields:
            raise ValueError(f"{self.type_name}: node is missing an id")
        node = dict(fields)
        self.nodes[_node_key(node["id"])] = node
        return node

    def get_node(self, id: Any) -> dict[str, Any] | None:
        return self.nodes.get(_node_key(id))

    def __len__(self) -> int:
        return len(self.nodes)


class ContentGraph:
    """Collects everything a run produces."""

    def __init__(self):
        self.collections: dict[str, EntityCollection] = {}

    def register_entity_type(self, type_name: str, route: str | None) -> EntityCollection:
        collection = self.collections.get(type_name)
        if collection is None:
            collection = self.collections[type_name] = EntityCollection(type_name=type_name, route=route)
        elif route is not None:
            collection.route = route
        return collection

    def create_reference(self, type_name: str, id: Any) -> Reference:
        return Reference(type_name=type_name, id=id)

    def resolve(self, reference: Reference) -> dict[str, Any] | list[dict[str, Any] | None] | None:
        collection = self.collections.get(reference.type_name)
        if isinstance(reference.id, list):
            return [collection.get_node(id) if collection else None for id in reference.id]
        return collection.get_node(reference.id) if collection else None

    def iter_references(self) -> Iterator[tuple[str, Any, Reference]]:
        """Yield ``(type_name, node_id, reference)`` for every reference in every node."""

        def walk(value: Any) -> Iterator[Reference]:
            if isinstance(value, Reference):
                yield value
            elif isinstance(value, Mapping):
                for item in value.values():
                    yield from walk(item)
            elif isinstance(value, list):
                for item in value:
                    yield from walk(item)

        for collection in self.collections.values():
            for node_id, node in collection.nodes.items():
                for reference in walk(node):
                    yield collection.type_name, node_id, reference

    def dangling_references(self) -> list[tuple[str, Any, Reference]]:
        dangling = []
        for entry in self.iter_references():
            resolved = self.resolve(entry[2])
            targets = resolved if isinstance(resolved, list) else [resolved]
            if any(target is None for target in targets):
                dangling.append(entry)
        return dangling

    def node_counts(self) -> dict[str, int]:
        return {name: len(collection) for name, collection in self.collections.items()}

    def to_jsonable(self) -> dict[str, Any]:
        return {
            name: {"route": collection.route, "nodes": to_jsonable(list(collection.nodes.values()))}
            for name, collection in self.collections.items()
        }
