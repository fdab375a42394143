"""
Mock Cue Player - No-op implementation for running without audio hardware
"""

from typing import List

from .cues import Cue


class MockCuePlayer:
    """
    Mock implementation of CuePlayer that performs no audio operations.

    Remembers every cue it was asked to play, in order.
    """

    def __init__(self, logger):
        self.logger = logger
        self.played: List[Cue] = []
        self.logger.info("MockCuePlayer initialized (audio disabled)")

    def play_cue(self, cue: Cue) -> None:
        self.played.append(cue)
        self.logger.debug(f"Mock: Playing cue {cue.value}")
        return None

    def clear(self) -> None:
        self.played.clear()

    def cleanup(self) -> None:
        self.logger.debug("Mock: cleanup")
