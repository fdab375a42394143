"""
Drill system configuration
"""

import logging
from dataclasses import dataclass, field
from typing import Optional, Tuple

from .scoring import MIN_LEVEL, MAX_LEVEL


@dataclass
class TimingConfig:
    """Sub-phase timing (milliseconds unless noted)"""
    countdown_start: int = 3          # pre-round countdown begins at this value
    countdown_step_ms: int = 800
    digit_visible_ms: int = 800
    digit_gap_ms: int = 200
    session_tick_ms: int = 1000       # one session clock second

    def validate(self) -> None:
        if self.countdown_start < 0:
            raise ValueError(f"Countdown start must be >= 0, got {self.countdown_start}")
        for name in ("countdown_step_ms", "digit_visible_ms", "digit_gap_ms", "session_tick_ms"):
            value = getattr(self, name)
            if value <= 0:
                raise ValueError(f"{name} must be positive, got {value}")


@dataclass
class DrillConfig:
    """Main drill configuration"""

    # Session setup defaults
    start_level: int = MIN_LEVEL
    session_duration_seconds: int = 300
    duration_options: Tuple[int, ...] = (60, 180, 300)
    sound_enabled: bool = True

    # Loop and timing
    frame_duration_ms: float = 20  # 50 FPS
    timing: TimingConfig = field(default_factory=TimingConfig)

    # Collaborators
    use_mock_audio: bool = False
    log_dir: Optional[str] = "logs"
    log_level: int = logging.INFO

    @property
    def target_fps(self) -> float:
        """Target FPS derived from frame duration"""
        return 1000.0 / self.frame_duration_ms

    def validate(self) -> None:
        """Basic validation of configuration"""
        if not (MIN_LEVEL <= self.start_level <= MAX_LEVEL):
            raise ValueError(f"Start level must be {MIN_LEVEL}-{MAX_LEVEL}, got {self.start_level}")

        if self.session_duration_seconds <= 0:
            raise ValueError(f"Session duration must be positive, got {self.session_duration_seconds}")

        if not self.duration_options:
            raise ValueError("At least one session duration option must be configured")

        for option in self.duration_options:
            if option <= 0:
                raise ValueError(f"Duration options must be positive, got {option}")

        if self.frame_duration_ms <= 0:
            raise ValueError("Frame duration must be positive")

        self.timing.validate()
