# ABOUTME: Shared fixtures: a fake WordPress site served through httpx.MockTransport
# ABOUTME: Paginates collections from canned data and records every request it receives

import math
from pathlib import Path
from typing import Any

import httpx
import pytest

BASE_URL = "https://blog.example.com"


class FakeWordPress:
    """Canned wp/v2 endpoints plus image files on a CDN host."""

    def __init__(self):
        self.objects: dict[str, Any] = {}
        self.collections: dict[str, list[dict[str, Any]]] = {}
        self.page_failures: dict[tuple[str, int], int] = {}
        self.images: dict[str, bytes] = {}
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if path in self.images:
            return httpx.Response(200, content=self.images[path])

        key = path.split("/wp-json/", 1)[-1]
        if key in self.objects:
            return httpx.Response(200, json=self.objects[key])

        if key in self.collections:
            page = int(request.url.params.get("page", 1))
            per_page = int(request.url.params.get("per_page", 10))
            status = self.page_failures.get((key, page))
            if status:
                return httpx.Response(status, json={"code": "error", "message": "nope", "data": {"status": status}})

            items = self.collections[key]
            chunk = items[(page - 1) * per_page : page * per_page]
            headers = {"X-WP-Total": str(len(items)), "X-WP-TotalPages": str(math.ceil(len(items) / per_page))}
            return httpx.Response(200, json=chunk, headers=headers)

        return httpx.Response(404, json={"code": "rest_no_route", "message": "No route", "data": {"status": 404}})

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))

    def requested_paths(self) -> list[str]:
        return [request.url.path for request in self.requests]

    def requests_for(self, key: str) -> list[httpx.Request]:
        return [request for request in self.requests if request.url.path.endswith(f"/wp-json/{key}")]


class RecordingDownloader:
    """Stands in for AssetDownloader where only scheduling matters."""

    def __init__(self, download_dir: str = "/srv/images"):
        self.download_dir = Path(download_dir)
        self.scheduled: list[tuple[str, str]] = []

    def schedule(self, url: str, file_name: str) -> Path:
        self.scheduled.append((url, file_name))
        return self.download_dir / file_name


@pytest.fixture
def site() -> FakeWordPress:
    return FakeWordPress()


@pytest.fixture
def recording_downloader() -> RecordingDownloader:
    return RecordingDownloader()
