# src/logic/scheduler.py
"""
Single-threaded delayed-callback queue.

Everything that "waits" (game lead-in, cue hold / gap, prompt hide,
long-press combos) is a callback registered here with call_later().
The main loop calls run_due(now) once per frame; tests call it with a
manual clock so elapsed time is simulated instead of slept.
"""

from __future__ import annotations

import heapq
import itertools
import time
from typing import Callable, List, Optional, Tuple


class TimerHandle:
    """
    Handle returned by Scheduler.call_later().

    cancel() is safe to call more than once, and after the callback ran.
    """

    def __init__(self, due: float, callback: Callable[[], None]) -> None:
        self.due = due
        self._callback: Optional[Callable[[], None]] = callback
        self._cancelled = False
        self._fired = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def fired(self) -> bool:
        return self._fired

    @property
    def pending(self) -> bool:
        return not (self._cancelled or self._fired)

    def cancel(self) -> None:
        self._cancelled = True
        self._callback = None

    def _run(self) -> None:
        callback = self._callback
        self._fired = True
        self._callback = None
        if callback is not None:
            callback()


class Scheduler:
    """
    Min-heap of TimerHandles ordered by (due time, insertion order).

    Callbacks registered while run_due() is executing are timed from the
    due time of the callback that registered them, not from the frame time.
    That keeps chained delays (hold 0.5 s, then gap 0.2 s, ...) exact even
    when frames arrive late.
    """

    def __init__(self, time_fn: Callable[[], float] = time.monotonic) -> None:
        self._time_fn = time_fn
        self._queue: List[Tuple[float, int, TimerHandle]] = []
        self._counter = itertools.count()
        self._now: float = time_fn()
        self._running = False

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def now(self) -> float:
        """Current scheduler time (the due time of the running callback, if any)."""
        if self._running:
            return self._now
        return max(self._now, self._time_fn())

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        due = self.now() + max(0.0, float(delay))
        handle = TimerHandle(due, callback)
        heapq.heappush(self._queue, (due, next(self._counter), handle))
        return handle

    def run_due(self, now: Optional[float] = None) -> int:
        """
        Run every callback whose due time is <= now, in order.

        Returns the number of callbacks executed.
        """
        if now is None:
            now = self._time_fn()

        ran = 0
        self._running = True
        try:
            while self._queue and self._queue[0][0] <= now:
                due, _, handle = heapq.heappop(self._queue)
                if not handle.pending:
                    continue
                self._now = max(self._now, due)
                handle._run()
                ran += 1
        finally:
            self._running = False
            self._now = max(self._now, now)
        return ran

    def pending_count(self) -> int:
        return sum(1 for _, _, h in self._queue if h.pending)

    def next_due(self) -> Optional[float]:
        for due, _, handle in sorted(self._queue):
            if handle.pending:
                return due
        return None

    def clear(self) -> None:
        """Cancel everything (used on shutdown)."""
        for _, _, handle in self._queue:
            handle.cancel()
        self._queue.clear()


class ManualClock:
    """
    Settable time source for driving a Scheduler without real delays.

    Usage:
        clock = ManualClock()
        scheduler = Scheduler(time_fn=clock)
        clock.advance(scheduler, 1.5)
    """

    def __init__(self, start: float = 0.0) -> None:
        self.t = float(start)

    def __call__(self) -> float:
        return self.t

    def advance(self, scheduler: Scheduler, seconds: float) -> int:
        self.t += float(seconds)
        return scheduler.run_due(self.t)
