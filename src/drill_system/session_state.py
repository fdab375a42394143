"""
SessionState - the single mutable record owned by the session machine,
and SessionSnapshot - the immutable copy handed to listeners
"""

import enum
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .scoring import MIN_LEVEL, Outcome, ScoreResult
from .stats import SessionStats


class Phase(enum.Enum):
    SETUP = "setup"
    RULES = "rules"
    COUNTDOWN = "countdown"
    DISPLAY = "display"
    INPUT = "input"
    FEEDBACK = "feedback"
    SUMMARY = "summary"


# Phases during which the session clock runs
RUNNING_PHASES = frozenset({Phase.COUNTDOWN, Phase.DISPLAY, Phase.INPUT})


def digits_to_str(digits) -> str:
    return "".join(str(d) for d in digits)


@dataclass(frozen=True)
class LastResult:
    """Result of the most recent submitted round, as shown on the feedback screen"""
    correct_answer: str = ""
    user_answer: str = ""
    is_perfect: bool = False
    accuracy: float = 0.0
    outcome: Outcome = Outcome.STAY
    message: str = ""
    position_matches: Tuple[Optional[bool], ...] = ()

    @classmethod
    def from_score(cls, result: ScoreResult) -> 'LastResult':
        return cls(
            correct_answer=digits_to_str(result.correct_answer),
            user_answer=digits_to_str(result.user_answer),
            is_perfect=result.is_perfect,
            accuracy=result.accuracy,
            outcome=result.outcome,
            message=result.message,
            position_matches=result.position_matches,
        )


@dataclass(frozen=True)
class SessionSnapshot:
    """
    Read-only view of SessionState at one instant.

    Listeners get a new snapshot after every mutation; holding on to one never
    observes later changes.
    """
    phase: Phase
    sound_enabled: bool
    session_duration_seconds: int
    time_left_seconds: int
    digit_count: int
    next_level: int
    sequence: Tuple[int, ...]
    user_input: Tuple[int, ...]
    reveal_index: int
    showing_digit: bool
    countdown_value: int
    last_result: LastResult
    stats: SessionStats

    @property
    def current_digit(self) -> Optional[int]:
        """Digit visible right now during the display phase, else None"""
        if self.phase is not Phase.DISPLAY or not self.showing_digit:
            return None
        if 0 <= self.reveal_index < len(self.sequence):
            return self.sequence[self.reveal_index]
        return None

    @property
    def mean_accuracy(self) -> float:
        return self.stats.mean_accuracy


@dataclass
class SessionState:
    """Mutable session record (owned by SessionStateMachine only)"""
    phase: Phase = Phase.SETUP
    sound_enabled: bool = True
    session_duration_seconds: int = 300
    time_left_seconds: int = 300
    digit_count: int = MIN_LEVEL
    next_level: int = MIN_LEVEL
    sequence: List[int] = field(default_factory=list)
    user_input: List[int] = field(default_factory=list)
    reveal_index: int = -1
    showing_digit: bool = False
    countdown_value: int = 3
    last_result: LastResult = field(default_factory=LastResult)
    stats: SessionStats = field(default_factory=SessionStats)

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            phase=self.phase,
            sound_enabled=self.sound_enabled,
            session_duration_seconds=self.session_duration_seconds,
            time_left_seconds=self.time_left_seconds,
            digit_count=self.digit_count,
            next_level=self.next_level,
            sequence=tuple(self.sequence),
            user_input=tuple(self.user_input),
            reveal_index=self.reveal_index,
            showing_digit=self.showing_digit,
            countdown_value=self.countdown_value,
            last_result=self.last_result,
            stats=self.stats,
        )
