# ABOUTME: Transient Rich spinner that follows an ingestion run stage by stage
# ABOUTME: The tracker is handed to the source as its on_stage callback

from typing import Any

from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn

STAGE_LABELS = {
    "discover_types": "🔎 Discovering post types...",
    "ingest_users": "👤 Fetching authors...",
    "ingest_taxonomies": "🏷️ Fetching taxonomies...",
    "ingest_posts": "📚 Fetching posts and images...",
    "done": "✅ Done",
}


class SimpleProgressTracker:
    """Updates one spinner task's description."""

    def __init__(self, progress: Progress, task_id: Any):
        self.progress = progress
        self.task_id = task_id

    def update(self, description: str) -> None:
        self.progress.update(self.task_id, description=description)

    def __call__(self, stage: Any) -> None:
        key = str(getattr(stage, "value", stage))
        self.update(STAGE_LABELS.get(key, key))


def create_smart_progress(
    console: Console, initial_description: str = "📡 Contacting WordPress..."
) -> tuple[Progress, Any, SimpleProgressTracker]:
    """Create a spinner with elapsed time that disappears when the run ends.

    Returns:
        Tuple of (progress, task_id, tracker)
    """
    progress = Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        TimeElapsedColumn(),
        console=console,
        transient=True,
    )
    task_id = progress.add_task(initial_description, total=None)
    return progress, task_id, SimpleProgressTracker(progress, task_id)
