# ABOUTME: Idempotent remote asset downloads with atomic staging
# ABOUTME: Per-destination locks collapse duplicate requests; scheduled downloads are joined explicitly

import asyncio
import itertools
import os
import uuid
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager, suppress
from pathlib import Path

import httpx

from wordpress_source.errors import AssetDownloadError
from wordpress_source.utils.logging import get_logger


class AssetDownloader:
    """Keeps exactly one local copy of each remote asset.

    A destination that already exists is treated as downloaded, so files are
    deduplicated across runs by name. Within a run, concurrent requests for the
    same destination wait on one lock and only the first performs a transfer.
    """

    def __init__(
        self,
        download_dir: Path | str = "wp-images",
        tmp_dir: Path | str = ".temp/downloads",
        client: httpx.AsyncClient | None = None,
    ):
        self.download_dir = Path(download_dir).resolve()
        self.tmp_dir = Path(tmp_dir).resolve()
        self._owns_client = client is None
        self.http_client = client or httpx.AsyncClient(
            headers={"User-Agent": "wordpress-source/0.1"},
            follow_redirects=True,
            timeout=None,
        )
        self.logger = get_logger(__name__)

        self._locks: dict[Path, tuple[asyncio.Lock, int]] = {}
        self._pending: set[asyncio.Task] = set()
        self._staging_ids = itertools.count(1)
        self.failed_downloads: list[AssetDownloadError] = []

    def local_path(self, file_name: str, destination_dir: Path | str | None = None) -> Path:
        directory = Path(destination_dir).resolve() if destination_dir is not None else self.download_dir
        return directory / file_name

    def _staging_path(self) -> Path:
        return self.tmp_dir / f"{next(self._staging_ids)}-{uuid.uuid4().hex[:8]}.tmp"

    @asynccontextmanager
    async def _destination_lock(self, destination: Path) -> AsyncIterator[None]:
        """Serialize work on one destination; the lock is dropped once nobody holds or awaits it."""
        lock, users = self._locks.get(destination, (asyncio.Lock(), 0))
        self._locks[destination] = (lock, users + 1)
        try:
            async with lock:
                yield
        finally:
            lock, users = self._locks[destination]
            if users == 1:
                del self._locks[destination]
            else:
                self._locks[destination] = (lock, users - 1)

    async def ensure_downloaded(self, url: str, file_name: str, destination_dir: Path | str | None = None) -> Path:
        """Download ``url`` to ``file_name`` unless it is already there.

        Raises:
            AssetDownloadError: The URL, the transfer, or a filesystem step failed
        """
        destination = self.local_path(file_name, destination_dir)

        async with self._destination_lock(destination):
            if destination.exists():
                self.logger.debug("Asset already present", url=url, path=str(destination))
                return destination

            staging = self._staging_path()
            try:
                destination.parent.mkdir(parents=True, exist_ok=True)
                self.tmp_dir.mkdir(parents=True, exist_ok=True)
                async with self.http_client.stream("GET", url) as response:
                    response.raise_for_status()
                    with staging.open("wb") as fh:
                        async for chunk in response.aiter_bytes():
                            fh.write(chunk)
                os.replace(staging, destination)
            except (httpx.HTTPError, httpx.InvalidURL, ValueError, OSError) as e:
                with suppress(OSError):
                    staging.unlink(missing_ok=True)
                raise AssetDownloadError(url, str(e) or type(e).__name__) from e

            self.logger.info("Downloaded asset", url=url, path=str(destination))
            return destination

    def schedule(self, url: str, file_name: str) -> Path:
        """Start a download in the background and return where it will land."""
        task = asyncio.get_running_loop().create_task(self._download_and_log(url, file_name))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return self.local_path(file_name)

    async def _download_and_log(self, url: str, file_name: str) -> None:
        try:
            await self.ensure_downloaded(url, file_name)
        except AssetDownloadError as e:
            self.failed_downloads.append(e)
            self.logger.warning("Image download failed", url=url, file_name=file_name, error=e.reason)

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    async def wait_pending(self) -> int:
        """Wait for every scheduled download, including ones scheduled meanwhile."""
        awaited = 0
        while self._pending:
            batch = list(self._pending)
            await asyncio.gather(*batch)
            self._pending.difference_update(batch)
            awaited += len(batch)
        return awaited

    async def close(self) -> None:
        await self.wait_pending()
        if self._owns_client:
            await self.http_client.aclose()
