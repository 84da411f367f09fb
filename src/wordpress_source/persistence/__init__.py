# ABOUTME: Database snapshots of ingested content graphs
# ABOUTME: SQLModel tables plus an async manager for saving and listing them

from .json_types import PydanticJson
from .manager import DatabaseManager
from .models import ContentNodeRow, EntityTypeRow

__all__ = [
    "ContentNodeRow",
    "DatabaseManager",
    "EntityTypeRow",
    "PydanticJson",
]
