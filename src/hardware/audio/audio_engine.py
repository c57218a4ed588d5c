from __future__ import annotations

from enum import Enum
from typing import List, Protocol


class Waveform(Enum):
    SINE = "sine"
    SQUARE = "square"

    def toggled(self) -> "Waveform":
        return Waveform.SQUARE if self is Waveform.SINE else Waveform.SINE


class VoiceHandle(Protocol):
    """
    One oscillator + gain pair on the audio output.

    Times are relative to "now" on the sink's own clock.
    """

    def set_gain(self, value: float) -> None: ...

    def ramp_gain(self, value: float, duration: float) -> None: ...

    def start(self) -> None: ...

    def stop(self, delay: float = 0.0) -> None: ...


class AudioSink(Protocol):
    """
    Output device the SynthesisEngine draws voices from.

    The surrounding application is responsible for any one-time unlock /
    device-open step before the first create_voice().
    """

    def create_voice(self, frequency: float, waveform: Waveform) -> VoiceHandle: ...

    def close(self) -> None: ...


# ------------------------------------------------------------------
# Null sink (no sound device, --no-audio)
# ------------------------------------------------------------------


class NullVoice:
    def __init__(self, frequency: float, waveform: Waveform) -> None:
        self.frequency = frequency
        self.waveform = waveform
        self.gain: float = 0.0
        self.started = False
        self.stopped = False

    def set_gain(self, value: float) -> None:
        self.gain = value

    def ramp_gain(self, value: float, duration: float) -> None:
        self.gain = value

    def start(self) -> None:
        self.started = True

    def stop(self, delay: float = 0.0) -> None:
        self.stopped = True


class NullAudioSink:
    """
    Audio sink that keeps the voice bookkeeping but produces no sound.
    Stopped voices are dropped the next time a voice is created.
    """

    def __init__(self, debug: bool = False) -> None:
        self.debug = debug
        self.voices: List[NullVoice] = []

    def create_voice(self, frequency: float, waveform: Waveform) -> NullVoice:
        voice = NullVoice(frequency, waveform)
        self.voices = [v for v in self.voices if not v.stopped]
        self.voices.append(voice)
        if self.debug:
            print(f"[NullAudio] voice {frequency:.2f} Hz ({waveform.value})")
        return voice

    def close(self) -> None:
        self.voices.clear()
