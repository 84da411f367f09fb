# ABOUTME: Database manager that snapshots a finished content graph into SQLite
# ABOUTME: Replaces each entity type's nodes wholesale on every save

from __future__ import annotations

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from wordpress_source.core.graph import ContentGraph
from wordpress_source.persistence.models import ContentNodeRow, EntityTypeRow, utcnow
from wordpress_source.utils.logging import get_logger


class DatabaseManager:
    """Manages async database operations for content graph snapshots."""

    def __init__(self, database_url: str = "sqlite+aiosqlite:///./wordpress_source.db"):
        self.database_url = database_url
        self.logger = get_logger(__name__)
        self.engine = create_async_engine(database_url, echo=False)
        self.async_session = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    async def create_tables(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)

    async def save_graph(self, graph: ContentGraph) -> dict[str, int]:
        """Store every collection of ``graph``, replacing earlier snapshots of the same types."""
        counts: dict[str, int] = {}
        async with self.async_session() as session:
            for name, collection in graph.collections.items():
                row = await session.get(EntityTypeRow, name)
                if row is None:
                    row = EntityTypeRow(name=name)
                row.route = collection.route
                row.node_count = len(collection)
                row.updated_at = utcnow()
                session.add(row)

                await session.exec(delete(ContentNodeRow).where(ContentNodeRow.type_name == name))
                for node_id, fields in collection.nodes.items():
                    session.add(ContentNodeRow(type_name=name, node_id=node_id, payload=fields))
                counts[name] = len(collection)

            await session.commit()

        self.logger.info("Saved content graph", entity_types=len(counts), nodes=sum(counts.values()))
        return counts

    async def list_entity_types(self) -> list[EntityTypeRow]:
        async with self.async_session() as session:
            result = await session.exec(select(EntityTypeRow).order_by(EntityTypeRow.name))
            return list(result.scalars().all())

    async def get_nodes(self, type_name: str) -> list[ContentNodeRow]:
        async with self.async_session() as session:
            result = await session.exec(
                select(ContentNodeRow).where(ContentNodeRow.type_name == type_name).order_by(ContentNodeRow.id)
            )
            return list(result.scalars().all())

    async def close(self) -> None:
        await self.engine.dispose()
