from __future__ import annotations
from typing import Callable, List, Optional, Protocol, Tuple
import asyncio
import heapq
import itertools

from ..utils.time import ms_to_seconds

Callback = Callable[[], None]


class Scheduler(Protocol):
    def call_later(self, delay_ms: float, fn: Callback) -> None: ...


class AsyncioScheduler:
    """
    Runs callbacks on an asyncio event loop (single thread, cooperative).

    The loop is bound at construction; pass `loop=` when building the
    scheduler outside a running loop.
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        if loop is None:
            try:
                loop = asyncio.get_running_loop()
            except RuntimeError as e:
                raise RuntimeError(
                    "AsyncioScheduler needs a running event loop; pass loop= when created outside one"
                ) from e
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        return self._loop

    def now(self) -> float:
        return self._loop.time() * 1000.0

    def call_later(self, delay_ms: float, fn: Callback) -> None:
        self._loop.call_later(ms_to_seconds(delay_ms), fn)


class ManualScheduler:
    """
    Virtual-time scheduler. Time only moves through `advance()` or
    `run_until_idle()`; `now` doubles as the clock for the same timeline.
    """

    def __init__(self, start_ms: float = 0.0) -> None:
        self._now = float(start_ms)
        self._queue: List[Tuple[float, int, Callback]] = []
        self._seq = itertools.count()

    def now(self) -> float:
        return self._now

    @property
    def pending(self) -> int:
        return len(self._queue)

    def call_later(self, delay_ms: float, fn: Callback) -> None:
        due = self._now + max(0.0, float(delay_ms))
        heapq.heappush(self._queue, (due, next(self._seq), fn))

    def _run_next(self) -> None:
        due, _, fn = heapq.heappop(self._queue)
        self._now = max(self._now, due)
        fn()

    def advance(self, ms: float) -> int:
        """Move time forward by `ms`, running every callback that falls due. Returns the count run."""
        target = self._now + max(0.0, float(ms))
        ran = 0
        while self._queue and self._queue[0][0] <= target:
            self._run_next()
            ran += 1
        self._now = target
        return ran

    def run_until_idle(self, max_steps: int = 1_000_000) -> int:
        ran = 0
        while self._queue:
            if ran >= max_steps:
                raise RuntimeError(f"scheduler still busy after {max_steps} callbacks")
            self._run_next()
            ran += 1
        return ran
