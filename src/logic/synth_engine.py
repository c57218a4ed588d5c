# src/logic/synth_engine.py
"""
Note-voice engine.

VoiceRegistry keeps at most one live Voice per NoteId. SynthesisEngine
creates voices on the audio sink when a note is triggered and fades them
out when it is released. trigger() and release() are idempotent, so a
repeated key press or a stray release never stacks or strands a voice.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, FrozenSet, List, Optional

from src.hardware.audio.audio_engine import AudioSink, VoiceHandle, Waveform
from src.hardware.config.notes import NoteId, note_frequency
from src.logic.input_config import ATTACK_SEC, PEAK_GAIN, RELEASE_SEC, STOP_PAD_SEC


@dataclass
class Voice:
    """
    One currently-sounding note.

    Attributes:
        note: Which note this voice plays.
        handle: Oscillator + gain on the audio sink.
        waveform: Waveform chosen when the voice was created (never changes).
    """
    note: NoteId
    handle: VoiceHandle
    waveform: Waveform


class VoiceRegistry:
    def __init__(self) -> None:
        self._voices: Dict[NoteId, Voice] = {}

    def get(self, note: NoteId) -> Optional[Voice]:
        return self._voices.get(note)

    def has(self, note: NoteId) -> bool:
        return note in self._voices

    def add(self, voice: Voice) -> None:
        if voice.note in self._voices:
            raise ValueError(f"Voice for {voice.note} is already registered")
        self._voices[voice.note] = voice

    def pop(self, note: NoteId) -> Optional[Voice]:
        return self._voices.pop(note, None)

    def active_notes(self) -> FrozenSet[NoteId]:
        return frozenset(self._voices)

    def __len__(self) -> int:
        return len(self._voices)


class SynthesisEngine:
    """
    Turns trigger / release calls into voices on an AudioSink.

    - Attack: gain 0 → PEAK_GAIN over ATTACK_SEC.
    - Release: gain → 0 over RELEASE_SEC, output stops STOP_PAD_SEC later.
      The voice leaves the registry immediately, so the note can be
      triggered again while the old tail is still fading.
    - The current waveform is read only when a voice is created.
    - on_voices_changed(active_notes) is called after every trigger /
      release that actually changed the registry.
    """

    def __init__(
        self,
        sink: AudioSink,
        waveform: Waveform = Waveform.SINE,
        debug: bool = False,
    ) -> None:
        self.sink = sink
        self.waveform = waveform
        self.debug = debug

        self.registry = VoiceRegistry()
        self._listeners: List[Callable[[FrozenSet[NoteId]], None]] = []

    # ---- listeners ----

    def on_voices_changed(self, listener: Callable[[FrozenSet[NoteId]], None]) -> None:
        self._listeners.append(listener)

    def _notify(self) -> None:
        active = self.registry.active_notes()
        for listener in self._listeners:
            listener(active)

    # ---- high-level API for notes ----

    def trigger(self, note: NoteId) -> bool:
        """
        Start `note` unless it is already sounding.

        Returns True if a new voice was created.
        """
        if self.registry.has(note):
            return False

        handle = self.sink.create_voice(note_frequency(note), self.waveform)
        handle.set_gain(0.0)
        handle.ramp_gain(PEAK_GAIN, ATTACK_SEC)
        handle.start()

        self.registry.add(Voice(note=note, handle=handle, waveform=self.waveform))

        if self.debug:
            print(f"[Synth] trigger {note} ({self.waveform.value})")

        self._notify()
        return True

    def release(self, note: NoteId) -> bool:
        """
        Fade out `note` if it is sounding.

        Returns True if a voice was released.
        """
        voice = self.registry.pop(note)
        if voice is None:
            return False

        voice.handle.ramp_gain(0.0, RELEASE_SEC)
        voice.handle.stop(RELEASE_SEC + STOP_PAD_SEC)

        if self.debug:
            print(f"[Synth] release {note}")

        self._notify()
        return True

    def release_all(self) -> None:
        for note in list(self.registry.active_notes()):
            self.release(note)

    def is_sounding(self, note: NoteId) -> bool:
        return self.registry.has(note)

    def active_notes(self) -> FrozenSet[NoteId]:
        return self.registry.active_notes()

    # ---- waveform ----

    def toggle_waveform(self) -> Waveform:
        """
        Flip sine <-> square. Voices that are already sounding keep theirs.
        """
        self.waveform = self.waveform.toggled()
        print(f"[Synth] Waveform is now {self.waveform.value}")
        return self.waveform
