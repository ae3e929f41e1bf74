"""
Worker runner - Runs enumerations off the event loop.

Enumerations can take exponential time, so async callers hand them to a
worker thread. The search works on an immutable snapshot taken before
the thread starts, and a CancellationToken carries both the timeout and
cancellation of the awaiting task into the search loop.
"""

import asyncio
from typing import Callable

from .enumeration import CancellationToken, EnumerationResult


async def run_enumeration(
    search: Callable[..., EnumerationResult],
    *args,
    timeout: float | None = None,
    **kwargs
) -> EnumerationResult:
    """
    Run `search(*args, token=..., **kwargs)` in a worker thread.

    When `timeout` passes, the search stops by itself and returns a
    TIMED_OUT result with the paths found so far. If the awaiting task is
    cancelled, the search is told to stop before the cancellation
    propagates.
    """
    token = CancellationToken(timeout=timeout)
    try:
        return await asyncio.to_thread(search, *args, token=token, **kwargs)
    except asyncio.CancelledError:
        token.cancel()
        raise
