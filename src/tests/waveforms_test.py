"""Unit tests for the numpy waveform renderer."""

import numpy as np
import pytest

from src.hardware.audio.audio_engine import NullAudioSink, Waveform
from src.hardware.audio.waveforms import SAMPLE_RATE, gain_at, gain_ramp, oscillator, render_voice


def test_sine_and_square_ranges() -> None:
    sine = oscillator(Waveform.SINE, 440.0, 0.1)
    square = oscillator(Waveform.SQUARE, 440.0, 0.1)

    assert len(sine) == int(SAMPLE_RATE * 0.1)
    assert sine.max() <= 1.0 and sine.min() >= -1.0
    assert set(np.unique(square)) == {-1.0, 1.0}


def test_oscillator_continues_phase() -> None:
    whole = oscillator(Waveform.SINE, 261.63, 0.02)
    half = int(len(whole) / 2)
    tail = oscillator(Waveform.SINE, 261.63, 0.01, start_sample=half)

    np.testing.assert_allclose(tail, whole[half:half + len(tail)])


def test_gain_ramp_then_hold() -> None:
    env = gain_ramp(1000, 0.0, 0.8, 0.01)
    ramp_n = int(round(0.01 * SAMPLE_RATE))

    assert env[0] == 0.0
    assert np.all(np.diff(env[:ramp_n]) > 0)
    assert np.all(env[ramp_n:] == 0.8)


def test_gain_at() -> None:
    assert gain_at(0.0, 0.8, 0.0, 0.05) == 0.8
    assert gain_at(0.025, 0.8, 0.0, 0.05) == pytest.approx(0.4)
    assert gain_at(1.0, 0.8, 0.0, 0.05) == 0.0


def test_render_voice_is_int16_and_starts_silent() -> None:
    pcm = render_voice(Waveform.SQUARE, 440.0, 0.05, start_gain=0.0, target_gain=0.8, ramp_sec=0.01)

    assert pcm.dtype == np.int16
    assert pcm[0] == 0
    assert np.abs(pcm).max() == int(0.8 * (2**15 - 1))


def test_null_sink_keeps_voice_state() -> None:
    sink = NullAudioSink()
    voice = sink.create_voice(440.0, Waveform.SINE)
    voice.start()
    voice.stop(0.06)

    assert voice.started and voice.stopped
    assert sink.voices == [voice]
    sink.close()
    assert sink.voices == []


def test_null_sink_drops_stopped_voices() -> None:
    sink = NullAudioSink()
    held = sink.create_voice(261.63, Waveform.SINE)
    for _ in range(1000):
        sink.create_voice(440.0, Waveform.SQUARE).stop(0.06)

    latest = sink.create_voice(493.88, Waveform.SINE)
    assert sink.voices == [held, latest]
