# ABOUTME: Persistence models for snapshots of an ingested content graph
# ABOUTME: One row per entity type and one row per normalized node

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from sqlmodel import Column, Field, SQLModel

from wordpress_source.persistence.json_types import PydanticJson


def utcnow() -> datetime:
    """Returns the current UTC timestamp."""

    return datetime.now(UTC)


class EntityTypeRow(SQLModel, table=True):
    """A registered entity type and the size of its last snapshot."""

    __tablename__ = "entity_type"  # type: ignore[assignment]

    name: str = Field(primary_key=True, description="Canonical entity type name")
    route: str | None = Field(default=None, description="Route template for the type")
    node_count: int = Field(default=0, description="Nodes stored in the latest snapshot")
    updated_at: datetime = Field(default_factory=utcnow, description="Last snapshot timestamp")


class ContentNodeRow(SQLModel, table=True):
    """One normalized node."""

    __tablename__ = "content_node"  # type: ignore[assignment]

    id: int | None = Field(default=None, primary_key=True)
    type_name: str = Field(index=True, foreign_key="entity_type.name", description="FK to entity_type.name")
    node_id: str = Field(index=True, description="Node id as reported by WordPress")
    payload: dict[str, Any] = Field(
        default_factory=dict,
        sa_column=Column(PydanticJson(dict[str, Any])),
        description="Normalized node fields",
    )
    created_at: datetime = Field(default_factory=utcnow, description="Creation timestamp")
