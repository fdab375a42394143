"""
Cue Player - Plays the drill's sound cues through pygame
"""

import pygame
from typing import Dict

from .cues import Cue
from .tone_synth import CUE_TONES, render_tones


class CuePlayer:
    """
    Plays short synthesized cues for the drill.

    All cue sounds are rendered once at startup and kept as
    pygame.mixer.Sound objects; play_cue() just fires the matching one.
    Mute handling lives in the session machine, which never calls play_cue()
    while sound is off.
    """

    def __init__(self, logger, volume: float = 1.0):
        """
        Initialize pygame mixer and render every cue.

        Args:
            logger: ClassLogger instance for logging
            volume: Playback volume (0.0 to 1.0)

        Raises:
            pygame.error: If the audio device cannot be opened
        """
        self.logger = logger
        self.volume = volume

        self.mixer = pygame.mixer
        self.mixer.init(frequency=44100, size=-16, channels=1)

        self._sound_objects: Dict[Cue, pygame.mixer.Sound] = {}
        self._render_cues()

        self.logger.info(f"CuePlayer initialized: {len(self._sound_objects)} cues")

    def _render_cues(self) -> None:
        """Render all cue tones in the mixer's actual output format"""
        sample_rate, _size, channels = self.mixer.get_init()
        for cue in Cue:
            samples = render_tones(CUE_TONES[cue], sample_rate=sample_rate, channels=channels)
            sound = pygame.mixer.Sound(buffer=samples.tobytes())  # interleaved int16 frames
            sound.set_volume(self.volume)
            self._sound_objects[cue] = sound

    def play_cue(self, cue: Cue) -> pygame.mixer.Channel:
        """
        Play a cue and return the channel it plays on.

        Args:
            cue: Cue to play
        """
        self.logger.debug(f"Playing cue {cue.value}")
        return self._sound_objects[cue].play()

    def cleanup(self) -> None:
        """Stop all sounds and release the audio device"""
        if self.mixer.get_init():
            self.mixer.stop()
            self.mixer.quit()
            self.logger.info("CuePlayer cleaned up")
