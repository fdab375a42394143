"""
Cue names understood by the audio collaborator
"""

import enum


class Cue(enum.Enum):
    """Short sound cues emitted by the drill"""
    TICK = "tick"
    DISPLAY = "display"
    CORRECT = "correct"
    WRONG = "wrong"
    KEEP = "keep"
