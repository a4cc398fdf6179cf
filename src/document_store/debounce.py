"""Timer-coalescing wrapper for host notifications.

The editor calls update() once per keystroke. Propagating every intermediate
state to the host would re-render it on every key, so notifications go
through a Debouncer: a burst of calls collapses into one call carrying the
last arguments, fired after a quiet period.

The debouncer is a small state machine driven by the running asyncio loop:

    Idle --schedule--> Pending(timer, last_args) --fire/flush--> Idle
                              |
                              +--schedule--> Pending(new timer, new args)
                              +--cancel----> Idle
"""

import asyncio
import inspect
import logging
from enum import Enum
from typing import Any, Callable, Optional, Set, Tuple

logger = logging.getLogger(__name__)


class DebounceState(Enum):
    """States of a Debouncer."""
    IDLE = "idle"
    PENDING = "pending"


class Debouncer:
    """Coalesces bursts of calls into a single delayed call.

    Attributes:
        delay_seconds: Quiet period before the pending call fires
        flush_sync_turns: Loop turns flush_sync() yields after firing

    Example:
        >>> debounced = Debouncer(notify_host, delay_seconds=0.3)
        >>> debounced.schedule("p1", page_v1)
        >>> debounced.schedule("p1", page_v2)   # replaces v1
        >>> await debounced.flush_sync()        # notify_host("p1", page_v2)
    """

    def __init__(
        self,
        func: Callable[..., Any],
        delay_seconds: float,
        flush_sync_turns: int = 2,
    ):
        """Initialize debouncer.

        Args:
            func: Callable to invoke; may return an awaitable, which is
                scheduled as a task on the running loop
            delay_seconds: Quiet period before firing
            flush_sync_turns: Loop turns flush_sync() waits for the host
        """
        self._func = func
        self.delay_seconds = delay_seconds
        self.flush_sync_turns = flush_sync_turns
        self._handle: Optional[asyncio.TimerHandle] = None
        self._args: Optional[Tuple[Any, ...]] = None
        self._tasks: Set[asyncio.Future] = set()

    @property
    def state(self) -> DebounceState:
        """Current state of the debouncer."""
        return DebounceState.PENDING if self._handle is not None else DebounceState.IDLE

    def schedule(self, *args: Any) -> None:
        """Schedule a call, replacing any pending one and restarting the timer.

        Must be called from within a running event loop.
        """
        loop = asyncio.get_running_loop()
        if self._handle is not None:
            self._handle.cancel()
        self._args = args
        self._handle = loop.call_later(self.delay_seconds, self._fire)

    def pending(self) -> bool:
        """Check whether a call is waiting to fire."""
        return self._handle is not None

    def flush(self) -> None:
        """Fire the pending call now, if any. Fire-and-forget."""
        if self._handle is None:
            return
        self._handle.cancel()
        self._fire()

    async def flush_sync(self) -> None:
        """Fire the pending call now and give the host a chance to process it.

        Yields a fixed number of loop turns so that work the host scheduled
        with call_soon in response to the notification can run. This is a
        best-effort barrier; callers that need certainty should re-read host
        state afterwards.
        """
        self.flush()
        for _ in range(self.flush_sync_turns):
            await asyncio.sleep(0)

    def cancel(self) -> None:
        """Drop the pending call without firing it."""
        if self._handle is not None:
            self._handle.cancel()
            logger.debug("Cancelled pending debounced call")
        self._handle = None
        self._args = None

    def _fire(self) -> None:
        args = self._args
        self._handle = None
        self._args = None
        if args is None:
            return

        try:
            result = self._func(*args)
        except Exception:
            logger.exception("Debounced call failed")
            return

        if inspect.isawaitable(result):
            task = asyncio.ensure_future(result)
            self._tasks.add(task)
            task.add_done_callback(self._task_done)

    def _task_done(self, task: asyncio.Future) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error("Debounced call failed", exc_info=error)
