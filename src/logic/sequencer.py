# src/logic/sequencer.py
"""
Step sequencer: runs a small ordered list of timed actions on a Scheduler.

Each step waits `delay` seconds after the previous step ran, then calls its
action. The next step is only scheduled once the current one has run, so
steps never overlap.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from src.logic.scheduler import Scheduler, TimerHandle


@dataclass(frozen=True)
class TimedStep:
    delay: float              # seconds after the previous step
    action: Callable[[], None]
    label: str = ""


class StepSequencer:
    def __init__(
        self,
        scheduler: Scheduler,
        steps: Sequence[TimedStep],
        on_done: Optional[Callable[[], None]] = None,
        debug: bool = False,
    ) -> None:
        self.scheduler = scheduler
        self.steps: List[TimedStep] = list(steps)
        self.on_done = on_done
        self.debug = debug

        self.index: int = 0
        self._handle: Optional[TimerHandle] = None
        self._started = False

    @property
    def finished(self) -> bool:
        return self._started and self.index >= len(self.steps) and self._handle is None

    @property
    def running(self) -> bool:
        return self._started and not self.finished

    def start(self) -> None:
        if self._started:
            return
        self._started = True
        self._schedule_next()

    def _schedule_next(self) -> None:
        if self.index >= len(self.steps):
            self._handle = None
            if self.on_done is not None:
                self.on_done()
            return

        step = self.steps[self.index]
        self._handle = self.scheduler.call_later(step.delay, self._run_current)

    def _run_current(self) -> None:
        step = self.steps[self.index]
        self.index += 1
        if self.debug and step.label:
            print(f"[Sequencer] step {self.index}/{len(self.steps)}: {step.label}")
        step.action()
        self._schedule_next()
