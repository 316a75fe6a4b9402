"""Decorator utilities for cross-cutting concerns."""
import functools
import logging
import time
from typing import Any, Callable, Optional, TypeVar, cast

# Setup logging
logger = logging.getLogger(__name__)

F = TypeVar('F', bound=Callable[..., Any])


def log_execution_time(label: Optional[str] = None) -> Callable[[F], F]:
    """Decorator to log how long a remote file-store call took.

    Failures are logged with their exception type only; the exception itself
    may carry URLs that embed the bot token.

    Args:
        label: Name used in the log line (defaults to the function name)

    Returns:
        Decorator function
    """
    def decorator(func: F) -> F:
        name = label or func.__name__

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            start_time = time.monotonic()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                duration = time.monotonic() - start_time
                logger.warning(f"{name} failed after {duration:.2f}s: {type(e).__name__}")
                raise
            duration = time.monotonic() - start_time
            logger.info(f"{name} completed in {duration:.2f}s")
            return result

        return cast(F, wrapper)

    return decorator
