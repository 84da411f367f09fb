# ABOUTME: Tests for content graph snapshots in SQLite
# ABOUTME: Uses an in-memory StaticPool engine shared across sessions

from __future__ import annotations

import pytest
import pytest_asyncio
from sqlalchemy.pool import StaticPool

from wordpress_source.core import ContentGraph
from wordpress_source.normalize import AssetDescriptor, Reference
from wordpress_source.persistence import DatabaseManager


@pytest_asyncio.fixture
async def temp_db() -> DatabaseManager:
    """Provide an in-memory database manager for async tests."""
    from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
    from sqlmodel.ext.asyncio.session import AsyncSession

    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    db = DatabaseManager("sqlite+aiosqlite:///:memory:")
    await db.engine.dispose()
    db.engine = engine
    db.async_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    await db.create_tables()
    yield db
    await db.close()


def _graph(title: str = "Hello") -> ContentGraph:
    graph = ContentGraph()
    graph.register_entity_type("WordPressAuthor", "/author/:slug").add_node({"id": 7, "title": "Jane"})
    graph.register_entity_type("WordPressPost", "/:slug").add_node(
        {
            "id": 1,
            "title": title,
            "author": Reference(type_name="WordPressAuthor", id=7),
            "acf": {"hero": AssetDescriptor(src="/img/hero.jpg", remote_url="https://cdn.example.com/hero.jpg")},
        }
    )
    graph.register_entity_type("WordPressWpBlock", "/wp_block/:slug")
    return graph


@pytest.mark.asyncio
async def test_save_graph_records_types(temp_db: DatabaseManager):
    counts = await temp_db.save_graph(_graph())

    assert counts == {"WordPressAuthor": 1, "WordPressPost": 1, "WordPressWpBlock": 0}

    types = await temp_db.list_entity_types()
    assert [(row.name, row.route, row.node_count) for row in types] == [
        ("WordPressAuthor", "/author/:slug", 1),
        ("WordPressPost", "/:slug", 1),
        ("WordPressWpBlock", "/wp_block/:slug", 0),
    ]


@pytest.mark.asyncio
async def test_node_payload_is_plain_json(temp_db: DatabaseManager):
    await temp_db.save_graph(_graph())

    nodes = await temp_db.get_nodes("WordPressPost")

    assert len(nodes) == 1
    assert nodes[0].node_id == "1"
    payload = nodes[0].payload
    assert payload["title"] == "Hello"
    assert payload["author"] == {"type_name": "WordPressAuthor", "id": 7}
    assert payload["acf"]["hero"]["remote_url"] == "https://cdn.example.com/hero.jpg"


@pytest.mark.asyncio
async def test_saving_again_replaces_nodes(temp_db: DatabaseManager):
    await temp_db.save_graph(_graph("First"))
    await temp_db.save_graph(_graph("Second"))

    nodes = await temp_db.get_nodes("WordPressPost")

    assert [node.payload["title"] for node in nodes] == ["Second"]


@pytest.mark.asyncio
async def test_unknown_type_has_no_nodes(temp_db: DatabaseManager):
    assert await temp_db.get_nodes("WordPressNothing") == []
