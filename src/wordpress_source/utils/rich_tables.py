# ABOUTME: Rich tables for ingestion summaries, stored snapshots, and logging status
# ABOUTME: All tables share one rounded, left-titled look so CLI output stays consistent

from typing import Any

from rich.box import ROUNDED
from rich.console import Console
from rich.table import Table

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def _base_table(title: str, title_style: str = "bold cyan", expand: bool = True) -> Table:
    return Table(
        title=f"[{title_style}]{title}[/{title_style}]",
        box=ROUNDED,
        header_style="bold magenta",
        border_style="cyan",
        title_justify="left",
        row_styles=["", "dim"],
        expand=expand,
    )


def create_ingestion_summary_table(report: Any, dangling_references: int | None = None) -> Table:
    """Node counts per entity type for one run.

    Args:
        report: The run's IngestionReport
        dangling_references: Number of references with no target node, if known

    Returns:
        Table with a totals row and the download/reference problems as caption
    """
    table = _base_table("📚 Ingested Content")
    table.add_column("Entity Type", style="cyan")
    table.add_column("Nodes", style="green", justify="right")

    for name, count in sorted(report.node_counts.items()):
        table.add_row(name, f"{count:,}")
    table.add_section()
    table.add_row("[bold]Total[/bold]", f"[bold]{report.total_nodes:,}[/bold]")

    caption = f"Failed downloads: {report.failed_downloads}"
    if dangling_references is not None:
        caption += f" | Dangling references: {dangling_references}"
    table.caption = caption
    return table


def create_entity_types_table(entity_types: list[Any]) -> Table:
    table = _base_table("🗂️ Stored Entity Types")
    table.add_column("Entity Type", style="cyan")
    table.add_column("Route", style="blue")
    table.add_column("Nodes", style="green", justify="right")
    table.add_column("Updated", style="white")

    for row in entity_types:
        table.add_row(row.name, row.route or "-", f"{row.node_count:,}", row.updated_at.strftime(TIMESTAMP_FORMAT))
    return table


def create_logging_status_table(status: dict[str, Any]) -> Table:
    """Two-column view of ``get_logging_status()``."""
    table = _base_table("🔍 Logging Configuration", title_style="bold green", expand=False)
    table.add_column("Setting", style="blue")
    table.add_column("Value", style="white")

    table.add_row("🔧 Mode", status["mode"].title())
    table.add_row("📁 Log Directory", status["log_directory"] or "N/A (not created yet)")
    table.add_row("🔇 Suppressed Libraries", ", ".join(status["third_party_suppressed"]))

    labels = {"main": "📝 Main Log", "json": "📊 JSON Log", "errors": "🚨 Error Log"}
    for key, path in status["log_files"].items():
        if path:
            table.add_row(labels[key], path)
    return table


def print_rich_table(console: Console, table: Table) -> None:
    console.print(table)
    console.print()
