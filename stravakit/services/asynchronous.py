"""Non-blocking variants of the façade operations.

Every method decorated with ``@operation`` on a class decorated with
``@with_async_operations`` gains a ``<name>_async`` twin that runs the
synchronous method on a worker thread and returns a Future. The Future
resolves to the same value, or raises the same exception, as the blocking call.
"""

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable, Optional

from stravakit.config import Config

logger = logging.getLogger(__name__)

_ASYNC_MARKER = "_stravakit_operation"


def operation(func: Callable) -> Callable:
    """Mark a façade method as a remote operation with an async twin."""
    setattr(func, _ASYNC_MARKER, True)
    return func


def run_async(
    executor: Optional[ThreadPoolExecutor],
    func: Callable[..., Any],
    *args,
    **kwargs,
) -> Future:
    """Schedule func(*args, **kwargs) and return its Future."""
    pool = executor or get_executor()
    return pool.submit(func, *args, **kwargs)


def _async_twin(name: str) -> Callable[..., Future]:
    def method(self, *args, **kwargs) -> Future:
        return run_async(self.executor, getattr(self, name), *args, **kwargs)

    method.__name__ = f"{name}_async"
    method.__doc__ = f"Run :meth:`{name}` on a worker thread and return a Future."
    return method


def with_async_operations(cls):
    """Add an ``_async`` twin for every ``@operation`` method of cls."""
    for name, member in list(vars(cls).items()):
        if getattr(member, _ASYNC_MARKER, False):
            setattr(cls, f"{name}_async", _async_twin(name))
    return cls


# Shared executor for all credentials (one pool per process)
_executor_instance: Optional[ThreadPoolExecutor] = None
_executor_lock = threading.Lock()


def get_executor() -> ThreadPoolExecutor:
    """Get the shared worker pool, creating it on first use."""
    global _executor_instance
    with _executor_lock:
        if _executor_instance is None:
            _executor_instance = ThreadPoolExecutor(
                max_workers=Config.ASYNC_MAX_WORKERS,
                thread_name_prefix="stravakit",
            )
            logger.debug(f"Started async pool with {Config.ASYNC_MAX_WORKERS} workers")
        return _executor_instance


def shutdown_executor(wait: bool = True) -> None:
    """Shut down the shared worker pool (a later call creates a new one)."""
    global _executor_instance
    with _executor_lock:
        if _executor_instance is not None:
            _executor_instance.shutdown(wait=wait)
            _executor_instance = None


__all__ = ["operation", "run_async", "with_async_operations", "get_executor", "shutdown_executor"]
