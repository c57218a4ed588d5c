# src/logic/input_controller.py

from typing import List, Optional

from src.logic.input_event import InputEvent
from src.hardware.input.keyboard_input import KeyboardInput


class InputController:
    """
    Aggregates input events from all enabled input sources.
    Provides a unified poll() method to collect all input events.

    A failing source is reported and skipped for that frame, so one broken
    device does not stop the others.
    """

    def __init__(self, use_keyboard: bool = True, sources: Optional[list] = None) -> None:
        self.keyboard: Optional[KeyboardInput] = KeyboardInput() if use_keyboard else None
        self.extra_sources: list = list(sources or [])

    def poll(self) -> List[InputEvent]:
        """
        Poll all enabled input sources and aggregate their events into a single list.
        """
        events: List[InputEvent] = []

        for source in self._sources():
            try:
                events.extend(source.poll())
            except Exception as e:
                print(f"[InputController] {type(source).__name__}.poll error:", e)

        return events

    def _sources(self) -> list:
        sources = []
        if self.keyboard is not None:
            sources.append(self.keyboard)
        sources.extend(self.extra_sources)
        return sources
