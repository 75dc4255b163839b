"""Timing and failure boundary for claim operations."""

import time
from collections.abc import Awaitable, Callable
from functools import wraps
from typing import Any, ParamSpec

from beartype import beartype

from ..core.config import get_settings
from ..core.errors import ServiceError
from ..core.logging_utils import get_logger
from ..core.result_types import Err

P = ParamSpec("P")

logger = get_logger(__name__)


@beartype
def monitored_operation(
    operation_name: str,
    max_duration_ms: int | None = None,
) -> Callable[[Callable[P, Awaitable[Any]]], Callable[P, Awaitable[Any]]]:
    """Decorator for async service operations returning a ``Result``.

    Logs the outcome and duration of every call and warns when the call
    takes longer than ``max_duration_ms`` (``settings.slow_operation_ms``
    by default). An exception escaping the operation is logged with its
    traceback and returned as an internal error, so callers only ever see
    ``Ok`` or ``Err``.

    Args:
        operation_name: Name used in log lines and in the internal error
        max_duration_ms: Slow operation threshold in milliseconds
    """

    def decorator(
        func: Callable[P, Awaitable[Any]],
    ) -> Callable[P, Awaitable[Any]]:
        @wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> Any:
            start_time = time.perf_counter()
            try:
                result = await func(*args, **kwargs)
            except Exception:
                duration_ms = (time.perf_counter() - start_time) * 1000
                logger.exception(
                    "%s failed after %.2fms", operation_name, duration_ms
                )
                return Err(ServiceError.internal(f"Failed to {operation_name}"))

            duration_ms = (time.perf_counter() - start_time) * 1000
            _log_outcome(operation_name, result, duration_ms, max_duration_ms)
            return result

        return wrapper

    return decorator


def _log_outcome(
    operation_name: str,
    result: Any,
    duration_ms: float,
    max_duration_ms: int | None,
) -> None:
    if isinstance(result, Err):
        error = result.error
        count = len(error.messages) if isinstance(error, ServiceError) else 1
        logger.info(
            "%s rejected in %.2fms (%d violation(s))",
            operation_name,
            duration_ms,
            count,
        )
    else:
        logger.info("%s completed in %.2fms", operation_name, duration_ms)

    threshold = (
        max_duration_ms
        if max_duration_ms is not None
        else get_settings().slow_operation_ms
    )
    if duration_ms > threshold:
        logger.warning(
            "Slow operation: %s took %.2fms (threshold %dms)",
            operation_name,
            duration_ms,
            threshold,
        )
