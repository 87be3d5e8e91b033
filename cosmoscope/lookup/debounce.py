"""
Debounced, cancellable lookups.

Newest request wins: each ``schedule`` for a key cancels the task armed by the
previous one (whether it is still waiting out the delay or already awaiting
its work) and bumps the key's generation. A result is delivered only if its
generation is still current when the work settles, so network completion
order never matters.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Dict, Generic, Optional, TypeVar


logger = logging.getLogger(__name__)

T = TypeVar("T")
Work = Callable[[], Awaitable[T]]


class DebouncedLookup(Generic[T]):
    """
    Per-key debounce with cancellation by supersession.

    Args:
        delay: Quiet period in seconds before work starts
        on_result: Called with (key, result) for the newest settled request
        on_error: Called with (key, exception) if the newest request fails.
            Failures are logged either way.
    """

    def __init__(
        self,
        delay: float,
        on_result: Callable[[str, T], None],
        on_error: Optional[Callable[[str, Exception], None]] = None,
    ):
        self.delay = delay
        self._on_result = on_result
        self._on_error = on_error
        self._tasks: Dict[str, asyncio.Task] = {}
        self._generations: Dict[str, int] = {}

    def schedule(self, key: str, work: Work, delay: Optional[float] = None) -> asyncio.Task:
        """
        Arm a new request for ``key``, superseding any pending one.

        Must be called from within a running event loop.

        Args:
            key: Logical input stream
            work: Zero-argument coroutine factory
            delay: Per-call quiet period, defaults to ``self.delay``
        """
        self.cancel(key)
        generation = self._generations.get(key, 0) + 1
        self._generations[key] = generation
        task = asyncio.get_running_loop().create_task(
            self._run(key, generation, work, self.delay if delay is None else delay)
        )
        self._tasks[key] = task
        return task

    def cancel(self, key: str) -> None:
        """Drop the pending request for ``key`` without delivering anything."""
        self._generations[key] = self._generations.get(key, 0) + 1
        task = self._tasks.pop(key, None)
        if task is not None and not task.done():
            task.cancel()

    def cancel_all(self) -> None:
        for key in list(self._tasks):
            self.cancel(key)

    def pending(self, key: str) -> bool:
        task = self._tasks.get(key)
        return task is not None and not task.done()

    async def wait(self, key: str) -> None:
        """Wait until the current request for ``key`` settles or is cancelled."""
        task = self._tasks.get(key)
        if task is None:
            return
        try:
            await task
        except asyncio.CancelledError:
            if not task.cancelled():
                raise

    def _is_current(self, key: str, generation: int) -> bool:
        return self._generations.get(key) == generation

    async def _run(self, key: str, generation: int, work: Work, delay: float) -> None:
        await asyncio.sleep(delay)
        try:
            result = await work()
        except asyncio.CancelledError:
            raise
        except Exception as e:
            if not self._is_current(key, generation):
                return
            logger.warning(f"[lookup={key}] Debounced work failed: {e}")
            if self._on_error is not None:
                self._on_error(key, e)
            return

        if not self._is_current(key, generation):
            logger.debug(f"[lookup={key}] Discarding stale result (gen={generation})")
            return
        self._on_result(key, result)
