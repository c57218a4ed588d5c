# src/logic/modes/melody_game.py

from __future__ import annotations

import random
from enum import Enum
from typing import Callable, List, Optional

from src.hardware.config.notes import ALL_NOTES, NoteId
from src.logic.input_config import (
    CUE_GAP_SEC,
    CUE_HOLD_SEC,
    LEAD_IN_SEC,
    LISTEN_PROMPT,
    MELODY_LENGTH,
    PLAY_PROMPT,
    PROMPT_HIDE_SEC,
)
from src.logic.presenter import Presenter
from src.logic.scheduler import Scheduler, TimerHandle
from src.logic.scorer import ScoreSummary, score_round
from src.logic.sequencer import StepSequencer, TimedStep
from src.logic.synth_engine import SynthesisEngine


class GamePhase(Enum):
    IDLE = "IDLE"
    LISTENING = "LISTENING"
    AWAITING_INPUT = "AWAITING_INPUT"
    SCORED = "SCORED"


class MelodyGame:
    """
    Listen & repeat memory game.

    Round flow:
        IDLE / SCORED
          └─ start_game()        new random melody, "listen" overlay
        LISTENING                lead-in, then each note: on, hold, off, gap
          └─ cue done            "play it back" overlay (auto-hides)
        AWAITING_INPUT           every handle_input() appends one note
          └─ N notes played      score + show results
        SCORED

    There is no timeout: a round only reaches SCORED after exactly
    melody_length calls to handle_input(). Cue playback cannot be
    interrupted once it starts.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        synth: SynthesisEngine,
        presenter: Presenter,
        rng: Optional[random.Random] = None,
        melody_length: int = MELODY_LENGTH,
        is_note_held: Optional[Callable[[NoteId], bool]] = None,
        debug: bool = False,
    ) -> None:
        self.scheduler = scheduler
        self.synth = synth
        self.presenter = presenter
        self.rng = rng or random.Random()
        self.melody_length = melody_length
        # Asked before a cue note is released; a note the player holds keeps sounding
        self.is_note_held = is_note_held or (lambda note: False)
        self.debug = debug

        if melody_length < 1:
            raise ValueError(f"melody_length must be at least 1, got {melody_length}")

        self.active: bool = False
        self.phase: GamePhase = GamePhase.IDLE
        self.melody: List[NoteId] = []
        self.player_input: List[NoteId] = []
        self.current_cue_index: int = 0

        self.last_score: Optional[ScoreSummary] = None
        self.prompt_open: bool = False
        self.results_open: bool = False

        self._cue: Optional[StepSequencer] = None
        self._hide_overlay_timer: Optional[TimerHandle] = None

    # ------------------------------------------------------------------
    # Prompt / results modals
    # ------------------------------------------------------------------

    def open_prompt(self) -> None:
        """Show the "play Listen & Repeat?" prompt (the long-press combo action)."""
        if self.active:
            return
        self.prompt_open = True
        self.presenter.show_game_prompt()

    def close_prompt(self) -> None:
        self.prompt_open = False
        self.presenter.hide_game_prompt()

    def close_results(self) -> None:
        self.results_open = False
        self.presenter.hide_results()

    # ------------------------------------------------------------------
    # Round lifecycle
    # ------------------------------------------------------------------

    def start_game(self) -> bool:
        """
        Start a fresh round. Ignored while the melody is being played.

        Returns True if a round was started.
        """
        if self.phase == GamePhase.LISTENING:
            if self.debug:
                print("[Game] start_game() ignored, cue playback in progress")
            return False

        self.close_prompt()
        if self._hide_overlay_timer is not None:
            self._hide_overlay_timer.cancel()
            self._hide_overlay_timer = None

        self.melody = self.generate_melody()
        self.player_input = []
        self.current_cue_index = 0
        self.active = True
        self.phase = GamePhase.LISTENING

        message, color = LISTEN_PROMPT
        self.presenter.show_overlay(message, color)

        self._cue = StepSequencer(self.scheduler, self._build_cue_steps(), debug=self.debug)
        self._cue.start()

        print(f"[Game] New round: {len(self.melody)} notes")
        if self.debug:
            print(f"[Game] melody = {' '.join(str(n) for n in self.melody)}")
        return True

    def play_again(self) -> bool:
        self.close_results()
        return self.start_game()

    def generate_melody(self) -> List[NoteId]:
        return [self.rng.choice(ALL_NOTES) for _ in range(self.melody_length)]

    # ------------------------------------------------------------------
    # LISTENING: cue playback
    # ------------------------------------------------------------------

    def _build_cue_steps(self) -> List[TimedStep]:
        steps: List[TimedStep] = []
        for i, note in enumerate(self.melody):
            delay = LEAD_IN_SEC if i == 0 else CUE_GAP_SEC
            steps.append(TimedStep(delay, lambda n=note: self._cue_note_on(n), f"on {note}"))
            steps.append(TimedStep(CUE_HOLD_SEC, lambda n=note: self._cue_note_off(n), f"off {note}"))
        steps.append(TimedStep(CUE_GAP_SEC, self._begin_input, "play back"))
        return steps

    def _cue_note_on(self, note: NoteId) -> None:
        self.presenter.highlight(note)
        self.synth.trigger(note)

    def _cue_note_off(self, note: NoteId) -> None:
        self.current_cue_index += 1
        if self.is_note_held(note):
            if self.debug:
                print(f"[Game] cue {note} held by player, left sounding")
            return
        self.synth.release(note)
        self.presenter.unhighlight(note)

    def _begin_input(self) -> None:
        self.phase = GamePhase.AWAITING_INPUT
        self._cue = None

        message, color = PLAY_PROMPT
        self.presenter.show_overlay(message, color)
        self._hide_overlay_timer = self.scheduler.call_later(PROMPT_HIDE_SEC, self.presenter.hide_overlay)

        if self.debug:
            print("[Game] phase=AWAITING_INPUT")

    # ------------------------------------------------------------------
    # AWAITING_INPUT
    # ------------------------------------------------------------------

    def handle_input(self, note: NoteId) -> bool:
        """
        Record one played note. No-op unless a round is waiting for input.

        Returns True if the note was recorded.
        """
        if not self.active or self.phase != GamePhase.AWAITING_INPUT:
            return False

        self.player_input.append(note)
        if self.debug:
            print(f"[Game] input {len(self.player_input)}/{len(self.melody)}: {note}")

        if len(self.player_input) >= len(self.melody):
            self._end_round()
        return True

    # ------------------------------------------------------------------
    # SCORED
    # ------------------------------------------------------------------

    def _end_round(self) -> None:
        self.active = False
        self.phase = GamePhase.SCORED

        summary = score_round(self.melody, self.player_input)
        self.last_score = summary
        print(f"[Game] Round over: {summary.headline()}")

        self.results_open = True
        self.presenter.show_results(summary)
