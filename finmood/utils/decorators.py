"""Utility decorators for operation logging."""
import functools
import time
from typing import Callable
from finmood.utils.logging import get_logger

logger = get_logger(__name__)


def log_execution(log_args: bool = True, log_result: bool = False):
    """
    Decorator to log function execution with timing.

    Exceptions are logged and re-raised unchanged.

    Args:
        log_args: Whether to log function arguments
        log_result: Whether to log function result

    Example:
        @log_execution(log_args=True)
        def get_user_mood_analytics(self, user_id, timeframe):
            ...
    """
    def decorator(func: Callable):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            start_time = time.time()
            func_name = func.__name__

            extra = {"function": func_name}
            if log_args:
                # Skip ``self`` for bound methods
                shown = args[1:] if args and hasattr(args[0], func_name) else args
                extra["function_args"] = str(shown)[:100]
                extra["function_kwargs"] = str(kwargs)[:100]

            logger.debug(f"Starting {func_name}", extra=extra)

            try:
                result = func(*args, **kwargs)
            except Exception as e:
                execution_time = (time.time() - start_time) * 1000
                logger.error(
                    f"Failed {func_name}",
                    extra={"function": func_name, "execution_time_ms": round(execution_time, 2), "error": str(e)}
                )
                raise

            execution_time = (time.time() - start_time) * 1000
            log_extra = {"function": func_name, "execution_time_ms": round(execution_time, 2)}
            if log_result:
                log_extra["result"] = str(result)[:100]

            logger.info(f"Completed {func_name}", extra=log_extra)
            return result

        return wrapper

    return decorator
