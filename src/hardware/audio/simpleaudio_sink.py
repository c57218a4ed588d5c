from __future__ import annotations

import time
from typing import List, Optional

import simpleaudio as sa

from src.hardware.audio.audio_engine import Waveform
from src.hardware.audio.waveforms import SAMPLE_RATE, gain_at, render_voice


# --------------------------------------------------------------------------------------
# simpleaudio cannot change the gain of a buffer that is already playing, so a voice
# is played as two buffers: a sustain buffer (attack ramp + hold at peak) started on
# start(), and a release tail rendered on stop() that continues from the same phase
# and gain the sustain buffer had reached.
# --------------------------------------------------------------------------------------
MAX_SUSTAIN_SEC = 8.0


class SimpleAudioVoice:
    """
    One sine / square voice played through simpleaudio.
    """

    def __init__(self, sink: "SimpleAudioSink", frequency: float, waveform: Waveform) -> None:
        self.sink = sink
        self.frequency = frequency
        self.waveform = waveform

        self._gain: float = 0.0
        self._ramp_target: float = 0.0
        self._ramp_sec: float = 0.0

        self._started_at: Optional[float] = None
        self._sustain_t0: float = 0.0
        self._play_obj: Optional[sa.PlayObject] = None
        self._tail_obj: Optional[sa.PlayObject] = None

    # ------------------------------------------------------------------
    # VoiceHandle API
    # ------------------------------------------------------------------

    def set_gain(self, value: float) -> None:
        self._gain = float(value)
        self._ramp_target = float(value)
        self._ramp_sec = 0.0

    def ramp_gain(self, value: float, duration: float) -> None:
        if self._started_at is not None:
            # Ramp on a playing voice: freeze the level reached so far as the new start point
            self._gain = self._current_gain()
            self._started_at = self.sink.time_fn()
        self._ramp_target = float(value)
        self._ramp_sec = float(duration)

    def start(self) -> None:
        if self._started_at is not None:
            return

        audio = render_voice(
            self.waveform,
            self.frequency,
            MAX_SUSTAIN_SEC,
            start_gain=self._gain,
            target_gain=self._ramp_target,
            ramp_sec=self._ramp_sec,
            sample_rate=self.sink.sample_rate,
        )
        self._started_at = self.sink.time_fn()
        self._sustain_t0 = self._started_at
        self._play_obj = sa.play_buffer(
            audio, num_channels=1, bytes_per_sample=2, sample_rate=self.sink.sample_rate
        )

    def stop(self, delay: float = 0.0) -> None:
        if self._started_at is None or self._play_obj is None:
            return

        now = self.sink.time_fn()
        level = self._current_gain()
        elapsed_total = now - self._sustain_t0
        start_sample = int(elapsed_total * self.sink.sample_rate)

        # Remaining part of the ramp (normally the release) that has not played yet
        ramp_left = max(0.0, self._ramp_sec - (now - self._started_at))

        self._play_obj.stop()
        self._play_obj = None

        if delay <= 0:
            return

        tail = render_voice(
            self.waveform,
            self.frequency,
            delay,
            start_gain=level,
            target_gain=self._ramp_target,
            ramp_sec=ramp_left,
            start_sample=start_sample,
            sample_rate=self.sink.sample_rate,
        )
        self._tail_obj = sa.play_buffer(
            tail, num_channels=1, bytes_per_sample=2, sample_rate=self.sink.sample_rate
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def is_playing(self) -> bool:
        for obj in (self._play_obj, self._tail_obj):
            if obj is not None and obj.is_playing():
                return True
        return False

    def _current_gain(self) -> float:
        if self._started_at is None:
            return self._gain
        elapsed = self.sink.time_fn() - self._started_at
        return gain_at(elapsed, self._gain, self._ramp_target, self._ramp_sec)


class SimpleAudioSink:
    """
    Audio sink that renders voices with numpy and plays them via simpleaudio.

    - Mono, 16-bit PCM at `sample_rate`.
    - Voices longer than MAX_SUSTAIN_SEC fall silent until released.
    """

    def __init__(self, sample_rate: int = SAMPLE_RATE, time_fn=time.monotonic, debug: bool = False) -> None:
        self.sample_rate = sample_rate
        self.time_fn = time_fn
        self.debug = debug
        self._voices: List[SimpleAudioVoice] = []

        print(f"[Audio] simpleaudio sink ready ({sample_rate} Hz, mono)")

    def create_voice(self, frequency: float, waveform: Waveform) -> SimpleAudioVoice:
        voice = SimpleAudioVoice(self, frequency, waveform)
        # Only keep voices that may still be producing sound
        self._voices = [v for v in self._voices if v.is_playing()]
        self._voices.append(voice)
        if self.debug:
            print(f"[Audio] create_voice {frequency:.2f} Hz ({waveform.value})")
        return voice

    def close(self) -> None:
        """
        Stop everything still playing.
        """
        sa.stop_all()
        self._voices.clear()
