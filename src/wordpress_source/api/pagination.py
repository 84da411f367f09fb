# ABOUTME: Paged collection retrieval with a bounded number of concurrent page requests
# ABOUTME: Page 1 failures are fatal, later page failures are logged and skipped

import asyncio
import json
from typing import Any, NamedTuple

from wordpress_source.api.client import WordPressClient
from wordpress_source.errors import ResponseDecodeError, WordPressSourceError
from wordpress_source.utils.logging import get_logger

PREVIEW_LENGTH = 150


class PageCursor(NamedTuple):
    page: int
    per_page: int

    @property
    def params(self) -> dict[str, int]:
        return {"per_page": self.per_page, "page": self.page}


def ensure_list_data(path: str, data: Any) -> list[Any]:
    """Return a page body as a list, parsing it when it arrived as text."""
    if isinstance(data, list):
        return data

    text = data if isinstance(data, str) else str(data)
    try:
        parsed = json.loads(text)
    except ValueError:
        parsed = None

    if not isinstance(parsed, list):
        raise ResponseDecodeError(path, text.strip()[:PREVIEW_LENGTH])
    return parsed


class PaginatedFetcher:
    """Fetches every page of a collection endpoint."""

    def __init__(self, client: WordPressClient, per_page: int = 100, concurrent: int = 10):
        if not 1 <= per_page <= 100:
            raise ValueError("per_page cannot be more than 100 or less than 1")
        if concurrent < 1:
            raise ValueError("concurrent must be at least 1")

        self.client = client
        self.per_page = per_page
        self.concurrent = concurrent
        self.logger = get_logger(__name__)

    async def fetch_all(self, path: str) -> list[Any]:
        first = await self.client.fetch(path, {"per_page": self.per_page})
        records = ensure_list_data(path, first.data)

        total_items = first.total_items
        total_pages = first.total_pages

        if not total_items or total_pages <= 1:
            return records

        cursors = [PageCursor(page, self.per_page) for page in range(2, total_pages + 1)]
        semaphore = asyncio.Semaphore(self.concurrent)

        async def fetch_page(cursor: PageCursor) -> list[Any]:
            async with semaphore:
                try:
                    response = await self.client.fetch(path, cursor.params)
                    return ensure_list_data(path, response.data)
                except WordPressSourceError as e:
                    self.logger.warning("Skipping page", path=path, page=cursor.page, error=str(e))
                    return []

        pages = await asyncio.gather(*(fetch_page(cursor) for cursor in cursors))
        for items in pages:
            records.extend(items)

        self.logger.debug(
            "Fetched collection",
            path=path,
            total_items=total_items,
            total_pages=total_pages,
            received=len(records),
        )
        return records
