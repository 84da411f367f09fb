# ABOUTME: structlog logger access plus run and stage context helpers
# ABOUTME: Stage decorator times each ingestion stage, run context binds one id per CLI run

import functools
import time
import uuid
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any, TypeVar

import structlog

F = TypeVar("F", bound=Callable[..., Any])

ROOT_LOGGER = "wordpress_source"


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name or ROOT_LOGGER)


def generate_operation_id() -> str:
    """Short random id used to correlate the log lines of one run or stage."""
    return uuid.uuid4().hex[:8]


def with_async_operation_context(operation: str, **context) -> Callable[[F], F]:
    """Log start, completion, and failure of an async stage.

    The stage's own return value and exceptions pass through untouched.
    When the decorated callable is a method, the instance's current
    ``stage`` attribute (if any) is bound alongside ``operation``.

    Args:
        operation: Human readable stage name, e.g. "post ingestion"
        **context: Extra fields bound to every line the wrapper logs
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            stage = getattr(args[0], "stage", None) if args else None
            log = get_logger(func.__module__).bind(
                operation=operation,
                operation_id=generate_operation_id(),
                **({"stage": str(getattr(stage, "value", stage))} if stage is not None else {}),
                **context,
            )

            log.info(f"Starting {operation}")
            started = time.perf_counter()
            try:
                result = await func(*args, **kwargs)
            except Exception as e:
                log.error(
                    f"Failed {operation}",
                    elapsed_seconds=round(time.perf_counter() - started, 3),
                    error=str(e),
                    error_type=type(e).__name__,
                )
                raise

            log.info(f"Completed {operation}", elapsed_seconds=round(time.perf_counter() - started, 3))
            return result

        return wrapper  # type: ignore[return-value]

    return decorator


@contextmanager
def with_pipeline_context(pipeline_name: str, **context) -> Iterator[structlog.stdlib.BoundLogger]:
    """Bind a run id for one ingestion run and log if the run raises.

    Args:
        pipeline_name: Name of the run, e.g. "wordpress_ingest"
        **context: Extra fields such as the site URL

    Yields:
        Logger bound with ``pipeline``, ``run_id``, and ``context``
    """
    log = get_logger().bind(pipeline=pipeline_name, run_id=generate_operation_id(), **context)
    try:
        yield log
    except Exception as e:
        log.error("Run failed", error=str(e), error_type=type(e).__name__)
        raise
