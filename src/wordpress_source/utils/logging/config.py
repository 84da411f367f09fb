# ABOUTME: loguru sink setup for the two output modes of the CLI
# ABOUTME: Interactive runs log to rotating files under logs/, production runs emit JSON lines on stdout

import logging
import os
import sys
from pathlib import Path
from typing import Any

from loguru import logger

LOG_DIR = Path("logs")
MODE_ENV_VAR = "WORDPRESS_SOURCE_LOG_MODE"
THIRD_PARTY_LOGGERS = ["httpx", "httpcore", "asyncio", "aiosqlite", "sqlalchemy.engine"]

TEXT_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"
JSON_FORMAT = "{time} | {level} | {name} | {message}"

# name -> (file name, minimum level or None for the configured level, serialize)
FILE_SINKS = {
    "main": ("wordpress-source.log", None, False),
    "json": ("wordpress-source.json", None, True),
    "errors": ("errors.log", "ERROR", False),
}


class LoggingMode:
    INTERACTIVE = "interactive"
    PRODUCTION = "production"


def detect_logging_mode() -> str:
    """Environment override first, otherwise interactive only on a terminal."""
    requested = (os.getenv(MODE_ENV_VAR) or "").lower()
    if requested in (LoggingMode.INTERACTIVE, LoggingMode.PRODUCTION):
        return requested
    return LoggingMode.INTERACTIVE if sys.stdout.isatty() else LoggingMode.PRODUCTION


def setup_third_party_logging() -> None:
    """Keep HTTP and database client chatter out of the ingestion logs."""
    for name in THIRD_PARTY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    logging.captureWarnings(True)
    logging.getLogger("py.warnings").setLevel(logging.ERROR)


def _add_file_sinks(log_level: str, log_file: str | None) -> None:
    for name, (file_name, level, serialize) in FILE_SINKS.items():
        path = log_file if name == "main" and log_file else LOG_DIR / file_name
        if name == "errors":
            options: dict[str, Any] = {"backtrace": True, "diagnose": True}
        else:
            options = {"rotation": "10 MB", "retention": "7 days"}
        logger.add(
            path,
            level=level or log_level,
            format=JSON_FORMAT if serialize else TEXT_FORMAT,
            serialize=serialize,
            **options,
        )


def configure_logging(mode: str | None = None, log_level: str = "INFO", log_file: str | None = None) -> None:
    """Replace loguru's default handler with the sinks for ``mode``.

    Args:
        mode: interactive or production, detected when None
        log_level: Minimum level for the main sinks
        log_file: Path for the human readable log instead of logs/wordpress-source.log
    """
    mode = mode or detect_logging_mode()
    setup_third_party_logging()
    logging.getLogger().setLevel(getattr(logging, log_level.upper(), logging.INFO))
    logger.remove()

    if mode == LoggingMode.INTERACTIVE:
        try:
            LOG_DIR.mkdir(exist_ok=True)
        except OSError:
            # Read-only working directory
            mode = LoggingMode.PRODUCTION

    if mode == LoggingMode.PRODUCTION:
        logger.add(sys.stdout, level=log_level, format=JSON_FORMAT, serialize=True)
        return

    _add_file_sinks(log_level, log_file)


def get_logging_status() -> dict[str, Any]:
    """Describe where logs go in the detected mode."""
    mode = detect_logging_mode()
    interactive = mode == LoggingMode.INTERACTIVE

    return {
        "mode": mode,
        "log_directory": str(LOG_DIR.absolute()) if LOG_DIR.exists() else None,
        "log_files": {
            name: str(LOG_DIR / file_name) if interactive else None for name, (file_name, _, _) in FILE_SINKS.items()
        },
        "third_party_suppressed": list(THIRD_PARTY_LOGGERS),
    }
