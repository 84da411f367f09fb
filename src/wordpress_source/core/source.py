# ABOUTME: Orchestrates one ingestion run from a WordPress site into a content sink
# ABOUTME: Stages run in order: discover types, users, taxonomies, posts; downloads are joined per stage

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from wordpress_source.api import PaginatedFetcher, WordPressClient
from wordpress_source.assets import AssetDownloader, asset_file_name
from wordpress_source.config import Config
from wordpress_source.content import split_post_fragments
from wordpress_source.core.sink import ContentSink, EntityTypeHandle
from wordpress_source.errors import SourceConfigError, WordPressSourceError
from wordpress_source.normalize import FieldNormalizer, TypeNamer, camel_case
from wordpress_source.utils.logging import get_logger, with_async_operation_context

TYPE_AUTHOR = "author"
TYPE_ATTACHMENT = "attachment"
DEFAULT_AUTHOR_ID = "0"
FEATURED_MEDIA_EMBED = "wp:featuredmedia"


class IngestionStage(str, Enum):
    DISCOVER_TYPES = "discover_types"
    INGEST_USERS = "ingest_users"
    INGEST_TAXONOMIES = "ingest_taxonomies"
    INGEST_POSTS = "ingest_posts"
    DONE = "done"


@dataclass(slots=True)
class RestBases:
    """REST collection path segments learned during discovery, keyed by type name."""

    posts: dict[str, str] = field(default_factory=dict)
    taxonomies: dict[str, str] = field(default_factory=dict)


@dataclass(slots=True)
class IngestionReport:
    completed_stages: list[IngestionStage] = field(default_factory=list)
    node_counts: dict[str, int] = field(default_factory=dict)
    failed_downloads: int = 0

    @property
    def total_nodes(self) -> int:
        return sum(self.node_counts.values())


class WordPressSource:
    """Pulls a WordPress site's content into a sink."""

    def __init__(
        self,
        config: Config,
        client: WordPressClient | None = None,
        downloader: AssetDownloader | None = None,
    ):
        if not config.type_name:
            raise SourceConfigError("Missing type_name option.")
        if not config.base_url and client is None:
            raise SourceConfigError(f"{config.type_name}: Missing base_url option.")

        self.config = config
        self.logger = get_logger(__name__)
        self.client = client or WordPressClient(config.base_url, config.api_base, timeout=config.request_timeout)
        self.fetcher = PaginatedFetcher(self.client, per_page=config.per_page, concurrent=config.concurrent)
        self.downloader = downloader or AssetDownloader(config.download_dir, config.tmp_dir)
        self.type_name = TypeNamer(config.type_name)
        self.routes = dict(config.routes)

        self.rest_bases = RestBases()
        self.stage = IngestionStage.DISCOVER_TYPES
        self._handles: dict[str, EntityTypeHandle] = {}
        self._report = IngestionReport()

    def _normalizer(self, sink: ContentSink) -> FieldNormalizer:
        return FieldNormalizer(
            self.type_name,
            reference_factory=sink.create_reference,
            downloader=self.downloader if self.config.download_acf_images else None,
        )

    def _register(self, sink: ContentSink, type_name: str, route: str | None) -> EntityTypeHandle:
        handle = sink.register_entity_type(type_name, route)
        self._handles[type_name] = handle
        self._report.node_counts.setdefault(type_name, 0)
        return handle

    def _add_node(self, handle: EntityTypeHandle, type_name: str, fields: dict[str, Any]) -> None:
        handle.add_node(fields)
        self._report.node_counts[type_name] = self._report.node_counts.get(type_name, 0) + 1

    async def load(
        self, sink: ContentSink, on_stage: Callable[[IngestionStage], None] | None = None
    ) -> IngestionReport:
        """Run every stage against ``sink``.

        Args:
            sink: Receives entity types, nodes, and references
            on_stage: Called with each stage as it begins, and with DONE at the end

        Returns:
            Completed stages, node counts, and the number of failed downloads
        """
        self.logger.info("Loading data", base_url=self.client.base_url)

        stages = [
            (IngestionStage.DISCOVER_TYPES, self.discover_types),
            (IngestionStage.INGEST_USERS, self.ingest_users),
            (IngestionStage.INGEST_TAXONOMIES, self.ingest_taxonomies),
            (IngestionStage.INGEST_POSTS, self.ingest_posts),
        ]
        for stage, run_stage in stages:
            self.stage = stage
            if on_stage:
                on_stage(stage)
            await run_stage(sink)
            await self.downloader.wait_pending()
            self._report.completed_stages.append(stage)

        self.stage = IngestionStage.DONE
        if on_stage:
            on_stage(IngestionStage.DONE)
        self._report.failed_downloads += len(self.downloader.failed_downloads)
        return self._report

    @with_async_operation_context("type discovery")
    async def discover_types(self, sink: ContentSink) -> None:
        response = await self.client.fetch("wp/v2/types", fallback={})

        for post_type, options in (response.data or {}).items():
            self._register(sink, self.type_name(post_type), self.routes.get(post_type) or f"/{post_type}/:slug")
            if not options.get("rest_base"):
                self.logger.debug("Type has no REST collection", post_type=post_type)
                continue
            self.rest_bases.posts[post_type] = options["rest_base"]

    @with_async_operation_context("user ingestion")
    async def ingest_users(self, sink: ContentSink) -> None:
        type_name = self.type_name(TYPE_AUTHOR)
        authors = self._register(sink, type_name, self.routes.get(TYPE_AUTHOR))
        normalizer = self._normalizer(sink)

        for author in await self.fetcher.fetch_all("wp/v2/users"):
            fields = normalizer.normalize(author)
            avatars = {f"avatar{size}": url for size, url in (author.get("avatar_urls") or {}).items()}
            self._add_node(
                authors,
                type_name,
                {**fields, "id": author["id"], "title": author.get("name"), "avatars": avatars},
            )

    @with_async_operation_context("taxonomy ingestion")
    async def ingest_taxonomies(self, sink: ContentSink) -> None:
        response = await self.client.fetch("wp/v2/taxonomies", fallback={})

        for taxonomy, options in (response.data or {}).items():
            type_name = self.type_name(taxonomy)
            handle = self._register(sink, type_name, self.routes.get(taxonomy))
            rest_base = options.get("rest_base")
            if not rest_base:
                self.logger.debug("Taxonomy has no REST collection", taxonomy=taxonomy)
                continue
            self.rest_bases.taxonomies[taxonomy] = rest_base

            for term in await self.fetcher.fetch_all(f"wp/v2/{rest_base}"):
                self._add_node(
                    handle,
                    type_name,
                    {
                        "id": term["id"],
                        "title": term.get("name"),
                        "slug": term.get("slug"),
                        "content": term.get("description"),
                        "count": term.get("count"),
                    },
                )

    @with_async_operation_context("post ingestion")
    async def ingest_posts(self, sink: ContentSink) -> None:
        normalizer = self._normalizer(sink)
        author_type = self.type_name(TYPE_AUTHOR)
        attachment_type = self.type_name(TYPE_ATTACHMENT)

        for post_type, rest_base in self.rest_bases.posts.items():
            type_name = self.type_name(post_type)
            posts = self._handles[type_name]

            for post in await self.fetcher.fetch_all(f"wp/v2/{rest_base}?_embed"):
                fields = normalizer.normalize(post)
                fields["author"] = sink.create_reference(author_type, post.get("author") or DEFAULT_AUTHOR_ID)

                if post.get("type") != TYPE_ATTACHMENT:
                    fields["featuredMedia"] = sink.create_reference(attachment_type, post.get("featured_media"))

                for taxonomy, prop_name in self.rest_bases.taxonomies.items():
                    if prop_name in post:
                        fields[camel_case(prop_name)] = sink.create_reference(self.type_name(taxonomy), post[prop_name])

                content = fields.get("content")
                if self.config.split_posts_into_fragments and content and isinstance(content, str):
                    downloader = self.downloader if self.config.download_remote_images_from_posts else None
                    fields["postFragments"] = split_post_fragments(content, downloader)

                if self.config.download_remote_featured_images:
                    image_path = await self._download_featured_image(post)
                    if image_path is not None:
                        fields["featuredMediaImage"] = image_path

                self._add_node(posts, type_name, {**fields, "id": post["id"]})

    async def _download_featured_image(self, post: dict[str, Any]) -> str | None:
        embedded = post.get("_embedded") or {}
        if not embedded.get(FEATURED_MEDIA_EMBED):
            return None

        try:
            url = embedded[FEATURED_MEDIA_EMBED][0]["source_url"]
            path = await self.downloader.ensure_downloaded(url, asset_file_name(url))
        except (WordPressSourceError, LookupError, TypeError, ValueError) as e:
            self.logger.warning("No featured image for post", slug=post.get("slug"), error=str(e))
            self._report.failed_downloads += 1
            return None
        return str(path)

    async def close(self) -> None:
        await self.downloader.close()
        await self.client.close()
