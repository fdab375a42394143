"""
Tone synthesis for the drill cues

Renders short oscillator tones into signed 16-bit PCM so they can be wrapped
in pygame.mixer.Sound objects without any sound files on disk.
"""

from typing import Dict, List, NamedTuple

import numpy as np

from .cues import Cue


class ToneSpec(NamedTuple):
    """One oscillator voice"""
    freq_start: float
    freq_end: float
    duration_s: float
    gain_start: float
    gain_end: float = 0.01
    waveform: str = "sine"        # sine | sawtooth
    exponential: bool = True      # exponential vs linear ramps
    delay_s: float = 0.0


# Voices per cue (frequencies in Hz, gains 0.0-1.0)
CUE_TONES: Dict[Cue, List[ToneSpec]] = {
    Cue.TICK: [ToneSpec(900, 520, 0.09, 0.12)],
    Cue.DISPLAY: [ToneSpec(740, 740, 0.14, 0.10)],
    Cue.CORRECT: [
        ToneSpec(freq, freq, 0.28, 0.07, delay_s=i * 0.08)
        for i, freq in enumerate((523.25, 659.25, 783.99))
    ],
    Cue.WRONG: [ToneSpec(180, 120, 0.25, 0.12, waveform="sawtooth", exponential=False)],
    Cue.KEEP: [ToneSpec(480, 480, 0.18, 0.06, exponential=False)],
}


def _ramp(start: float, end: float, t: np.ndarray, exponential: bool) -> np.ndarray:
    """Values at fractions t in [0, 1) between start and end"""
    if exponential and start > 0 and end > 0:
        return start * np.power(end / start, t)
    return start + (end - start) * t


def _oscillator(phase: np.ndarray, waveform: str) -> np.ndarray:
    if waveform == "sawtooth":
        return 2.0 * (phase / (2 * np.pi)) - 1.0
    return np.sin(phase)


def render_voice(tone: ToneSpec, sample_rate: int = 44100) -> np.ndarray:
    """One voice as float samples in [-1, 1], without its delay"""
    length = int(tone.duration_s * sample_rate)
    t = np.linspace(0, 1, length, endpoint=False)
    freq = _ramp(tone.freq_start, tone.freq_end, t, tone.exponential)
    gain = _ramp(tone.gain_start, tone.gain_end, t, tone.exponential)

    # Phase before each sample is the running sum of the previous frequencies
    phase = np.mod(2 * np.pi * (np.cumsum(freq) - freq) / sample_rate, 2 * np.pi)
    return gain * _oscillator(phase, tone.waveform)


def render_tones(tones: List[ToneSpec], sample_rate: int = 44100, channels: int = 1) -> np.ndarray:
    """
    Mix voices into an int16 buffer.

    Args:
        tones: Voices to mix
        sample_rate: Samples per second
        channels: Output channel count (mono signal is duplicated)

    Returns:
        C-contiguous int16 array of shape (frames, channels), ready for
        pygame.mixer.Sound(buffer=...)
    """
    total_s = max((tone.delay_s + tone.duration_s for tone in tones), default=0.0)
    frames = int(total_s * sample_rate)
    mix = np.zeros(frames)

    for tone in tones:
        voice = render_voice(tone, sample_rate)
        start = min(int(tone.delay_s * sample_rate), frames)
        end = min(frames, start + len(voice))
        mix[start:end] += voice[:end - start]

    samples = (np.clip(mix, -1.0, 1.0) * 32767).astype(np.int16)
    return np.ascontiguousarray(np.repeat(samples[:, None], channels, axis=1))
