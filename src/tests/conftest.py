"""Shared fixtures: manual clock, recording audio / presentation sinks."""

from __future__ import annotations

import random
from typing import Iterable, List, Tuple

import pytest

from src.hardware.audio.audio_engine import Waveform
from src.hardware.config.notes import NoteId
from src.logic.instrument import Instrument
from src.logic.scheduler import ManualClock, Scheduler
from src.logic.synth_engine import SynthesisEngine


class RecordingVoice:
    def __init__(self, frequency: float, waveform: Waveform) -> None:
        self.frequency = frequency
        self.waveform = waveform
        self.calls: List[Tuple] = []

    def set_gain(self, value: float) -> None:
        self.calls.append(("set_gain", value))

    def ramp_gain(self, value: float, duration: float) -> None:
        self.calls.append(("ramp_gain", value, duration))

    def start(self) -> None:
        self.calls.append(("start",))

    def stop(self, delay: float = 0.0) -> None:
        self.calls.append(("stop", delay))

    @property
    def stopped(self) -> bool:
        return any(c[0] == "stop" for c in self.calls)


class RecordingSink:
    def __init__(self) -> None:
        self.voices: List[RecordingVoice] = []
        self.closed = False

    def create_voice(self, frequency: float, waveform: Waveform) -> RecordingVoice:
        voice = RecordingVoice(frequency, waveform)
        self.voices.append(voice)
        return voice

    def close(self) -> None:
        self.closed = True


class RecordingPresenter:
    def __init__(self) -> None:
        self.calls: List[Tuple] = []

    def names(self) -> List[str]:
        return [c[0] for c in self.calls]

    def highlight(self, note):
        self.calls.append(("highlight", note))

    def unhighlight(self, note):
        self.calls.append(("unhighlight", note))

    def show_overlay(self, message, color):
        self.calls.append(("show_overlay", message, color))

    def hide_overlay(self):
        self.calls.append(("hide_overlay",))

    def show_game_prompt(self):
        self.calls.append(("show_game_prompt",))

    def hide_game_prompt(self):
        self.calls.append(("hide_game_prompt",))

    def show_results(self, summary):
        self.calls.append(("show_results", summary))

    def hide_results(self):
        self.calls.append(("hide_results",))


class ScriptedRandom(random.Random):
    """random.Random whose choice() returns a fixed sequence of notes."""

    def __init__(self, notes: Iterable[NoteId]) -> None:
        super().__init__(0)
        self._notes = list(notes)
        self._i = 0

    def choice(self, seq):
        note = self._notes[self._i % len(self._notes)]
        self._i += 1
        return note


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def scheduler(clock: ManualClock) -> Scheduler:
    return Scheduler(time_fn=clock)


@pytest.fixture
def advance(clock: ManualClock, scheduler: Scheduler):
    def _advance(seconds: float) -> int:
        return clock.advance(scheduler, seconds)

    return _advance


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def presenter() -> RecordingPresenter:
    return RecordingPresenter()


@pytest.fixture
def synth(sink: RecordingSink) -> SynthesisEngine:
    return SynthesisEngine(sink)


@pytest.fixture
def scripted_rng():
    return ScriptedRandom


@pytest.fixture
def make_instrument(sink, presenter, scheduler):
    def _make(rng=None) -> Instrument:
        return Instrument(sink=sink, presenter=presenter, scheduler=scheduler, rng=rng)

    return _make
