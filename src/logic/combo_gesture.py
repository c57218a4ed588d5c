# src/logic/combo_gesture.py
"""
Long-press combo detector.

A combo is a condition ("these two inputs are both held") that has to stay
true for a fixed time before its action fires. The detector is fed the
current value of the condition every time the inputs it watches change:

    false -> true   arm a timer
    true  -> false  cancel the timer (nothing fires)
    timer elapses   fire the action once

After firing, the condition has to go false and true again before the
action can fire a second time.
"""

from __future__ import annotations

from typing import Callable, Optional

from src.logic.input_config import COMBO_HOLD_SEC
from src.logic.scheduler import Scheduler, TimerHandle


class ComboGestureDetector:
    def __init__(
        self,
        name: str,
        scheduler: Scheduler,
        action: Callable[[], None],
        hold_sec: float = COMBO_HOLD_SEC,
        debug: bool = False,
    ) -> None:
        self.name = name
        self.scheduler = scheduler
        self.action = action
        self.hold_sec = hold_sec
        self.debug = debug

        self._last: bool = False
        self._timer: Optional[TimerHandle] = None
        self.armed_at: Optional[float] = None
        self.fire_count: int = 0

    @property
    def armed(self) -> bool:
        return self._timer is not None and self._timer.pending

    def update(self, condition: bool) -> None:
        condition = bool(condition)

        if condition and not self._last:
            self._arm()
        elif not condition and self._last:
            self._cancel()

        self._last = condition

    def reset(self) -> None:
        self._cancel()
        self._last = False

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _arm(self) -> None:
        self._cancel()
        self.armed_at = self.scheduler.now()
        self._timer = self.scheduler.call_later(self.hold_sec, self._fire)
        if self.debug:
            print(f"[Combo:{self.name}] armed ({self.hold_sec:.1f}s)")

    def _cancel(self) -> None:
        if self._timer is not None and self._timer.pending:
            self._timer.cancel()
            if self.debug:
                print(f"[Combo:{self.name}] cancelled")
        self._timer = None
        self.armed_at = None

    def _fire(self) -> None:
        held_for = self.scheduler.now() - self.armed_at if self.armed_at is not None else self.hold_sec
        self._timer = None
        self.armed_at = None
        self.fire_count += 1
        print(f"[Combo:{self.name}] fired after {held_for:.1f}s")
        self.action()
