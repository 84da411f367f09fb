# ABOUTME: Logging configuration, progress tracking, and structured logger helpers
# ABOUTME: Provides rich console output and structured logging for ingestion runs

from .config import LoggingMode, configure_logging, detect_logging_mode, get_logging_status
from .progress import SimpleProgressTracker, create_smart_progress
from .utils import generate_operation_id, get_logger, with_async_operation_context, with_pipeline_context

__all__ = [
    # Configuration
    "LoggingMode",
    "configure_logging",
    "detect_logging_mode",
    "get_logging_status",
    # Progress
    "SimpleProgressTracker",
    "create_smart_progress",
    # Utilities
    "generate_operation_id",
    "get_logger",
    "with_async_operation_context",
    "with_pipeline_context",
]
