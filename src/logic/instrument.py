# src/logic/instrument.py

from __future__ import annotations

import random
from typing import FrozenSet, List, Optional

from src.hardware.audio.audio_engine import AudioSink, Waveform
from src.hardware.config.keys import DEFAULT_INPUT_MAP, InputMap, PhysicalInput
from src.hardware.config.notes import NoteId
from src.logic.combo_gesture import ComboGestureDetector
from src.logic.input_config import COMBO_HOLD_SEC, GAME_COMBO_INPUTS, TONE_COMBO_NOTES
from src.logic.input_event import EventType, InputEvent
from src.logic.input_router import InputRouter
from src.logic.modes.melody_game import GamePhase, MelodyGame
from src.logic.presenter import Presenter
from src.logic.scheduler import Scheduler
from src.logic.scorer import ScoreSummary
from src.logic.synth_engine import SynthesisEngine


class Instrument:
    """
    Owns every piece of mutable state (voices, held inputs, waveform,
    game) and wires the components together. Nothing lives in module
    globals; build one Instrument and drive it from the main loop:

        instrument.handle_events(events)
        instrument.update(now)

    Combos:
        - game combo: GAME_COMBO_INPUTS held together for COMBO_HOLD_SEC
          while no round is running → open the game prompt.
        - tone combo: TONE_COMBO_NOTES sounding together for COMBO_HOLD_SEC
          → flip the waveform.
    """

    def __init__(
        self,
        sink: AudioSink,
        presenter: Presenter,
        scheduler: Optional[Scheduler] = None,
        input_map: Optional[InputMap] = None,
        rng: Optional[random.Random] = None,
        combo_hold_sec: float = COMBO_HOLD_SEC,
        debug: bool = False,
    ) -> None:
        self.debug = debug
        self.sink = sink
        self.presenter = presenter
        self.scheduler = scheduler or Scheduler()
        self.input_map = input_map or InputMap(DEFAULT_INPUT_MAP)

        for physical in GAME_COMBO_INPUTS:
            if physical not in self.input_map:
                raise ValueError(f"Game combo input {physical} is not in the input map")

        self.synth = SynthesisEngine(sink, debug=debug)
        self.game = MelodyGame(self.scheduler, self.synth, presenter, rng=rng, debug=debug)
        self.router = InputRouter(self.input_map, self.synth, self.game, presenter, debug=debug)
        self.game.is_note_held = self.router.holds_note

        self.game_combo = ComboGestureDetector(
            "game", self.scheduler, self.game.open_prompt, hold_sec=combo_hold_sec, debug=debug
        )
        self.tone_combo = ComboGestureDetector(
            "tone", self.scheduler, self.synth.toggle_waveform, hold_sec=combo_hold_sec, debug=debug
        )

        self.router.on_held_changed(self._check_game_combo)
        self.synth.on_voices_changed(self._check_tone_combo)

        self.quit_requested = False

    # ------------------------------------------------------------------
    # Combo predicates
    # ------------------------------------------------------------------

    def _check_game_combo(self, held: FrozenSet[PhysicalInput]) -> None:
        both_held = all(p in held for p in GAME_COMBO_INPUTS)
        self.game_combo.update(both_held and not self.game.active)

    def _check_tone_combo(self, active: FrozenSet[NoteId]) -> None:
        self.tone_combo.update(all(n in active for n in TONE_COMBO_NOTES))

    # ------------------------------------------------------------------
    # Exposed operations
    # ------------------------------------------------------------------

    def trigger(self, note: NoteId) -> bool:
        return self.synth.trigger(note)

    def release(self, note: NoteId) -> bool:
        return self.synth.release(note)

    def start_game(self) -> bool:
        return self.game.start_game()

    def handle_input(self, note: NoteId) -> bool:
        return self.game.handle_input(note)

    @property
    def phase(self) -> GamePhase:
        return self.game.phase

    @property
    def last_score(self) -> Optional[ScoreSummary]:
        return self.game.last_score

    @property
    def waveform(self) -> Waveform:
        return self.synth.waveform

    # ------------------------------------------------------------------
    # Event handling
    # ------------------------------------------------------------------

    def handle_events(self, events: List[InputEvent]) -> None:
        for ev in events:
            if ev.type in (EventType.PRESS, EventType.RELEASE):
                self.router.handle_events([ev])
            elif ev.type == EventType.START_GAME:
                self.game.start_game()
            elif ev.type == EventType.PLAY_AGAIN:
                self.game.play_again()
            elif ev.type == EventType.CLOSE:
                if self.game.results_open:
                    self.game.close_results()
                if self.game.prompt_open:
                    self.game.close_prompt()
            elif ev.type == EventType.TOGGLE_WAVE:
                self.synth.toggle_waveform()
            elif ev.type == EventType.QUIT:
                self.quit_requested = True

    def update(self, now: float) -> None:
        """Run every timer that is due (cue playback, prompt hide, combos)."""
        self.scheduler.run_due(now)

    def shutdown(self) -> None:
        self.router.clear_held()
        self.synth.release_all()
        self.scheduler.clear()
