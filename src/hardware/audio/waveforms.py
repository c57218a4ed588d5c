# src/hardware/audio/waveforms.py
"""
numpy helpers that render oscillator output into 16-bit PCM buffers.
"""

from __future__ import annotations

import numpy as np

from src.hardware.audio.audio_engine import Waveform

SAMPLE_RATE = 44100  # Hz


def oscillator(
    waveform: Waveform,
    freq: float,
    duration: float,
    start_sample: int = 0,
    sample_rate: int = SAMPLE_RATE,
) -> np.ndarray:
    """
    Raw oscillator output in [-1.0, 1.0].

    start_sample lets a continuation buffer (e.g. a release tail) pick up
    at the same phase the previous buffer stopped at.
    """
    n = max(0, int(round(duration * sample_rate)))
    t = (np.arange(n) + start_sample) / float(sample_rate)
    phase = 2 * np.pi * freq * t
    if waveform is Waveform.SQUARE:
        return np.where(np.sin(phase) >= 0, 1.0, -1.0)
    return np.sin(phase)


def gain_ramp(
    n: int,
    start_gain: float,
    target_gain: float,
    ramp_sec: float,
    sample_rate: int = SAMPLE_RATE,
) -> np.ndarray:
    """
    Linear ramp from start_gain to target_gain over ramp_sec, then hold.
    """
    env = np.full(n, float(target_gain))
    ramp_n = min(n, max(1, int(round(ramp_sec * sample_rate))))
    if ramp_n > 0 and n > 0:
        env[:ramp_n] = np.linspace(start_gain, target_gain, ramp_n, endpoint=False)
    return env


def gain_at(elapsed: float, start_gain: float, target_gain: float, ramp_sec: float) -> float:
    """Gain reached `elapsed` seconds into a linear ramp."""
    if ramp_sec <= 0 or elapsed >= ramp_sec:
        return float(target_gain)
    if elapsed <= 0:
        return float(start_gain)
    return float(start_gain + (target_gain - start_gain) * (elapsed / ramp_sec))


def to_pcm16(samples: np.ndarray) -> np.ndarray:
    """Clip to [-1, 1] and scale to int16."""
    clipped = np.clip(samples, -1.0, 1.0)
    return (clipped * (2**15 - 1)).astype(np.int16)


def render_voice(
    waveform: Waveform,
    freq: float,
    duration: float,
    start_gain: float,
    target_gain: float,
    ramp_sec: float,
    start_sample: int = 0,
    sample_rate: int = SAMPLE_RATE,
) -> np.ndarray:
    """
    Oscillator * envelope, ready for playback.
    """
    wave = oscillator(waveform, freq, duration, start_sample, sample_rate)
    env = gain_ramp(len(wave), start_gain, target_gain, ramp_sec, sample_rate)
    return to_pcm16(wave * env)
