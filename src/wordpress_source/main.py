# ABOUTME: Main CLI application entry point using asyncclick for native async support
# ABOUTME: Provides commands to ingest a WordPress site, inspect stored snapshots, and show logging status

import asyncclick as click
from rich.console import Console
from rich.panel import Panel

from wordpress_source.config import get_config
from wordpress_source.core import ContentGraph, WordPressSource
from wordpress_source.errors import WordPressSourceError
from wordpress_source.persistence import DatabaseManager
from wordpress_source.utils.logging import (
    LoggingMode,
    configure_logging,
    create_smart_progress,
    get_logging_status,
    with_pipeline_context,
)
from wordpress_source.utils.rich_tables import (
    create_entity_types_table,
    create_ingestion_summary_table,
    create_logging_status_table,
    print_rich_table,
)

console = Console()


@click.command()
@click.option("--base-url", help="WordPress site URL (defaults to WORDPRESS_SOURCE_BASE_URL)")
@click.option("--type-name", help="Prefix for entity type names")
@click.option("--per-page", type=click.IntRange(1, 100), help="Page size for collection requests")
@click.option("--concurrent", type=click.IntRange(min=1), help="Maximum concurrent page requests")
@click.option("--split-fragments/--no-split-fragments", default=None, help="Split post bodies into fragments")
@click.option("--download-post-images/--no-download-post-images", default=None, help="Download post body images")
@click.option("--download-featured-images/--no-download-featured-images", default=None, help="Download featured images")
@click.option("--download-acf-images/--no-download-acf-images", default=None, help="Download images in ACF fields")
@click.option("--save/--no-save", default=True, help="Store the resulting content graph in the database")
@click.pass_context
async def ingest(
    ctx,
    base_url: str | None,
    type_name: str | None,
    per_page: int | None,
    concurrent: int | None,
    split_fragments: bool | None,
    download_post_images: bool | None,
    download_featured_images: bool | None,
    download_acf_images: bool | None,
    save: bool,
):
    """
    📥 Pull posts, users, and taxonomies from a WordPress site.

    Options override the WORDPRESS_SOURCE_* environment settings for this run.
    """
    overrides = {
        "base_url": base_url,
        "type_name": type_name,
        "per_page": per_page,
        "concurrent": concurrent,
        "split_posts_into_fragments": split_fragments,
        "download_remote_images_from_posts": download_post_images,
        "download_remote_featured_images": download_featured_images,
        "download_acf_images": download_acf_images,
    }
    config = get_config().model_copy(update={key: value for key, value in overrides.items() if value is not None})
    json_output = ctx.obj["json_output"]

    with with_pipeline_context("wordpress_ingest", base_url=config.base_url) as logger:
        try:
            source = WordPressSource(config)
        except WordPressSourceError as e:
            raise click.UsageError(str(e)) from e

        graph = ContentGraph()
        try:
            if json_output:
                report = await source.load(graph)
            else:
                console.print(Panel.fit(f"📡 [bold cyan]Ingesting[/bold cyan] {config.base_url}", border_style="cyan"))
                progress, _, tracker = create_smart_progress(console)
                with progress:
                    report = await source.load(graph, on_stage=tracker)
        except WordPressSourceError as e:
            logger.error("Ingestion aborted", error=str(e))
            raise click.ClickException(str(e)) from e
        finally:
            await source.close()

        dangling = len(graph.dangling_references())
        logger.info(
            "Ingestion complete",
            nodes=report.total_nodes,
            failed_downloads=report.failed_downloads,
            dangling_references=dangling,
        )

        if save:
            db = DatabaseManager(config.database_url)
            try:
                await db.create_tables()
                await db.save_graph(graph)
            finally:
                await db.close()

        if not json_output:
            print_rich_table(console, create_ingestion_summary_table(report, dangling))


@click.command(name="show-types")
async def show_types():
    """
    🗂️ List entity types stored by previous ingest runs.
    """
    db = DatabaseManager(get_config().database_url)
    try:
        await db.create_tables()
        entity_types = await db.list_entity_types()
    finally:
        await db.close()

    if not entity_types:
        console.print("[yellow]No stored entity types. Run `ingest` first.[/yellow]")
        return

    print_rich_table(console, create_entity_types_table(entity_types))


def _initialize_logging(json_output: bool, log_level: str | None = None, log_file: str | None = None) -> None:
    """Initialize logging configuration."""
    config = get_config()
    mode = LoggingMode.PRODUCTION if json_output else config.log_mode

    # Use config defaults when CLI parameters are not provided
    final_log_level = log_level or config.log_level
    final_log_file = log_file or (str(config.log_file) if config.log_file else None)

    configure_logging(mode=mode, log_level=final_log_level, log_file=final_log_file)


@click.command(name="logging-status")
def logging_status():
    """
    📊 Show current logging configuration and status.
    """
    status = get_logging_status()
    print_rich_table(console, create_logging_status_table(status))


@click.group(invoke_without_command=True)
@click.option("--json", is_flag=True, help="Output structured JSON logs instead of rich interface")
@click.option("--log-level", default=None, help="Logging level (DEBUG, INFO, WARNING, ERROR)")
@click.option("--log-file", help="Custom log file path")
@click.pass_context
def app(ctx, json: bool, log_level: str | None, log_file: str | None):
    """
    📰 WordPress Source - REST content ingestion for content graphs

    Pull a WordPress site's posts, authors, and taxonomies into normalized
    nodes with typed references, optionally downloading referenced images.
    """
    ctx.ensure_object(dict)
    ctx.obj["json_output"] = json

    _initialize_logging(json, log_level, log_file)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


app.add_command(ingest)
app.add_command(show_types)
app.add_command(logging_status)


if __name__ == "__main__":
    app()
