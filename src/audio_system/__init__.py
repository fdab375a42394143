"""
Audio System Module

Cue names, tone synthesis and cue players for the reverse digit drill.
"""

from .cues import Cue
from .tone_synth import ToneSpec, CUE_TONES, render_tones, render_voice
from .cue_player import CuePlayer
from .mock_cue_player import MockCuePlayer

__all__ = [
    'Cue',
    'ToneSpec',
    'CUE_TONES',
    'render_tones',
    'render_voice',
    'CuePlayer',
    'MockCuePlayer'
]
