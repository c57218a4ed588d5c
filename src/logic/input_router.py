# src/logic/input_router.py

from __future__ import annotations

from typing import Callable, FrozenSet, List, Set

from src.hardware.config.keys import InputMap, PhysicalInput
from src.hardware.config.notes import NoteId
from src.logic.input_event import EventType, InputEvent
from src.logic.modes.melody_game import MelodyGame
from src.logic.presenter import Presenter
from src.logic.synth_engine import SynthesisEngine


class InputRouter:
    """
    Turns raw press / release events into notes.

    - Unmapped inputs are ignored.
    - A press of an input that is already held is ignored, so key repeat
      never re-triggers a note.
    - Keyboard keys and mouse buttons go through exactly the same path:
      both reach the synth, the presenter and the game.
    - on_held_changed(held) is called after every change to the held set
      (the enter-game-mode combo watches it).
    """

    def __init__(
        self,
        input_map: InputMap,
        synth: SynthesisEngine,
        game: MelodyGame,
        presenter: Presenter,
        debug: bool = False,
    ) -> None:
        self.input_map = input_map
        self.synth = synth
        self.game = game
        self.presenter = presenter
        self.debug = debug

        self.held: Set[PhysicalInput] = set()
        self._listeners: List[Callable[[FrozenSet[PhysicalInput]], None]] = []

    def on_held_changed(self, listener: Callable[[FrozenSet[PhysicalInput]], None]) -> None:
        self._listeners.append(listener)

    def _notify(self) -> None:
        held = frozenset(self.held)
        for listener in self._listeners:
            listener(held)

    # ------------------------------------------------------------------
    # Raw events
    # ------------------------------------------------------------------

    def press(self, physical: PhysicalInput) -> bool:
        """
        Returns True if the press produced a note.
        """
        note = self.input_map.lookup(physical)
        if note is None:
            return False
        if physical in self.held:
            return False

        self.held.add(physical)
        if self.debug:
            print(f"[Router] press {physical} -> {note}")

        self.synth.trigger(note)
        self.presenter.highlight(note)
        self.game.handle_input(note)

        self._notify()
        return True

    def release(self, physical: PhysicalInput) -> bool:
        """
        Returns True if the input was mapped (whether or not it was held).
        """
        note = self.input_map.lookup(physical)
        if note is None:
            return False

        self.held.discard(physical)
        if self.debug:
            print(f"[Router] release {physical} -> {note}")

        self.synth.release(note)
        self.presenter.unhighlight(note)

        self._notify()
        return True

    def clear_held(self) -> None:
        """Release everything that is still held (focus loss / shutdown)."""
        for physical in list(self.held):
            self.release(physical)

    def is_held(self, physical: PhysicalInput) -> bool:
        return physical in self.held

    def holds_note(self, note: NoteId) -> bool:
        """True if some held input plays `note`."""
        return any(self.input_map.lookup(p) is note for p in self.held)

    # ------------------------------------------------------------------
    # Event batches
    # ------------------------------------------------------------------

    def handle_events(self, events: List[InputEvent]) -> None:
        """
        Consume PRESS / RELEASE events; other event types are left to the caller.
        """
        for ev in events:
            if ev.input is None:
                continue
            if ev.type == EventType.PRESS:
                self.press(ev.input)
            elif ev.type == EventType.RELEASE:
                self.release(ev.input)
