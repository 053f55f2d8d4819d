"""Graceful-degradation helpers for optional platform capabilities.

Capability providers (geolocation, wake lock, share sheet, clipboard) are
best-effort: a failure is logged and turned into a default value instead of
reaching the caller. Backend calls do NOT use these helpers; their failures are
re-raised as typed errors by the services.
"""

from typing import Any, Awaitable, TypeVar

from food_search.utils.logger import logger

T = TypeVar("T")


def _log_error(operation_name: str, exception: BaseException, log_level: str = "warning") -> None:
    """Log error with appropriate level.

    Args:
        operation_name: Description for logging
        exception: Exception that occurred
        log_level: Logging level ("debug", "warning", "error"). Default: "warning".
    """
    msg = f"{operation_name}: {exception!r}"
    if log_level == "debug":
        logger.debug(msg)
    elif log_level == "error":
        logger.error(msg)
    else:
        logger.warning(msg)


async def safe_execute_async(
    coro: Awaitable[T],
    operation_name: str,
    log_level: str = "warning",
    default_return: Any = None,
) -> T | Any:
    """Await a capability call, returning `default_return` if it fails.

    Args:
        coro: Awaitable to execute.
        operation_name: Description for logging (e.g., "Acquire wake lock").
        log_level: Logging level for failures. Default: "warning".
        default_return: Value returned on exception. Default: None.

    Returns:
        Result of the awaitable, or default_return on exception (including timeouts).

    Example:
        coords = await safe_execute_async(provider.locate(), "Locate device")
    """
    try:
        return await coro
    except Exception as e:
        _log_error(operation_name, e, log_level)
        return default_return

