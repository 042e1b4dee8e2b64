"""Helpers to run the analysis coroutines from sync or async callers."""

from __future__ import annotations

import asyncio
import threading
from queue import Queue
from typing import TYPE_CHECKING, Any, TypeVar

from certverify.exceptions import AsyncExecutionError

if TYPE_CHECKING:
    from collections.abc import Callable, Coroutine

T = TypeVar("T")


async def gather_in_threads(*calls: Callable[[], Any]) -> list[Any]:
    """Run blocking, CPU-bound callables concurrently in worker threads.

    Results keep the order of `calls`. The first exception propagates once
    every call has been scheduled.

    Args:
        *calls: Zero-argument callables.

    Returns:
        list[Any]: One result per callable.
    """
    return list(await asyncio.gather(*(asyncio.to_thread(call) for call in calls)))


def _run_in_background_thread(coro: Coroutine[Any, Any, T]) -> T:
    """Run a coroutine in a dedicated thread with its own event loop.

    Args:
        coro: The coroutine to run.

    Raises:
        AsyncExecutionError: If the coroutine raises an exception.

    Returns:
        The result of the coroutine.
    """
    output: Queue[T | BaseException] = Queue(maxsize=1)

    def _runner() -> None:
        try:
            output.put(asyncio.run(coro))
        except BaseException as exc:
            output.put(exc)

    thread = threading.Thread(target=_runner, daemon=True)
    thread.start()
    thread.join()

    result = output.get()
    if isinstance(result, BaseException):
        raise AsyncExecutionError(result=result) from result
    return result


def run_async(coro: Coroutine[Any, Any, T]) -> T:
    """Run a coroutine whether or not an event loop is already running.

    Without a running loop the coroutine runs on a fresh loop in this thread;
    inside a running loop it runs on a dedicated thread so the caller's loop
    is not re-entered.

    Args:
        coro: The coroutine to run.

    Returns:
        The result of the coroutine.
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(coro)

    return _run_in_background_thread(coro)
