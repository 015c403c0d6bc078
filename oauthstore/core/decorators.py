"""Decorators for the OAuth persistence core."""

import functools
import logging
import traceback
import uuid
from collections.abc import Awaitable, Callable
from datetime import UTC, datetime
from typing import ParamSpec, TypeVar

from .logging import logger, request_id_ctx

P = ParamSpec("P")
R = TypeVar("R")


def track_operation(
    operation_name: str,
) -> Callable[[Callable[P, Awaitable[R]]], Callable[P, Awaitable[R]]]:
    """Decorator to track store operations with timing and error handling.

    A request id is generated only when the caller has not already set one,
    so ids assigned by the token endpoint carry through to store log lines.

    Args:
        operation_name: Name of the store operation being tracked

    Returns:
        Decorated coroutine with operation tracking
    """

    def decorator(func: Callable[P, Awaitable[R]]) -> Callable[P, Awaitable[R]]:
        @functools.wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            token = None
            if request_id_ctx.get() is None:
                token = request_id_ctx.set(str(uuid.uuid4())[:8])
            start_time = datetime.now(UTC).timestamp()

            logger.debug("Starting %s", operation_name)

            try:
                result = await func(*args, **kwargs)
            except Exception as e:
                duration = datetime.now(UTC).timestamp() - start_time
                logger.error("Failed %s after %.3fs: %s", operation_name, duration, str(e))
                if logger.isEnabledFor(logging.DEBUG):
                    logger.debug("Traceback: %s", traceback.format_exc())
                raise
            else:
                duration = datetime.now(UTC).timestamp() - start_time
                logger.debug("Completed %s in %.3fs", operation_name, duration)
            finally:
                if token is not None:
                    request_id_ctx.reset(token)

            return result

        return wrapper

    return decorator
