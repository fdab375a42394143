"""
Answer matching and adaptive level decisions
"""

import enum
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from audio_system.cues import Cue


MIN_LEVEL = 3
MAX_LEVEL = 20
LEVEL_STEP = 1
KEEP_THRESHOLD = 0.75  # accuracy below this drops a level


class Outcome(enum.Enum):
    """Adaptive decision for the next round"""
    UP = "up"
    DOWN = "down"
    STAY = "stay"

    @property
    def message(self) -> str:
        return _OUTCOME_MESSAGES[self]

    @property
    def cue(self) -> Cue:
        return _OUTCOME_CUES[self]


_OUTCOME_MESSAGES = {
    Outcome.UP: "Perfect!",
    Outcome.DOWN: "Level Down...",
    Outcome.STAY: "Keep",
}

_OUTCOME_CUES = {
    Outcome.UP: Cue.CORRECT,
    Outcome.DOWN: Cue.WRONG,
    Outcome.STAY: Cue.KEEP,
}


def clamp_level(level: int) -> int:
    """Clamp a tier into [MIN_LEVEL, MAX_LEVEL]"""
    return min(MAX_LEVEL, max(MIN_LEVEL, level))


@dataclass(frozen=True)
class ScoreResult:
    """Outcome of comparing one submitted answer against the reversed sequence"""
    correct_answer: Tuple[int, ...]
    user_answer: Tuple[int, ...]
    match_count: int
    accuracy: float
    is_perfect: bool
    outcome: Outcome
    next_level: int

    @property
    def cue(self) -> Cue:
        return self.outcome.cue

    @property
    def message(self) -> str:
        return self.outcome.message

    @property
    def position_matches(self) -> Tuple[Optional[bool], ...]:
        """
        Per-position verdict for the entered digits.

        One entry per position of the longer of the two answers: True/False
        for an entered digit that does/doesn't match, None where nothing was
        entered.
        """
        width = max(len(self.correct_answer), len(self.user_answer))
        marks = []
        for i in range(width):
            if i >= len(self.user_answer):
                marks.append(None)
            elif i >= len(self.correct_answer):
                marks.append(False)
            else:
                marks.append(self.user_answer[i] == self.correct_answer[i])
        return tuple(marks)


class ScoringEngine:
    """
    Pure scoring: no side effects, the cue to play is part of the result.

    The player must enter the shown sequence in reverse. Accuracy is the share
    of positions of the reversed sequence that the player got right; missing
    trailing digits count as misses.
    """

    @staticmethod
    def reverse(sequence: Sequence[int]) -> Tuple[int, ...]:
        return tuple(reversed(sequence))

    def score(self, sequence: Sequence[int], user_input: Sequence[int], current_level: int) -> ScoreResult:
        """
        Args:
            sequence: Digits in the order they were shown
            user_input: Digits the player entered
            current_level: Tier the round was played at

        Returns:
            ScoreResult with accuracy, outcome and the clamped next level
        """
        correct_answer = self.reverse(sequence)
        user_answer = tuple(user_input)

        match_count = sum(
            1 for i, expected in enumerate(correct_answer)
            if i < len(user_answer) and user_answer[i] == expected
        )
        accuracy = match_count / len(correct_answer) if correct_answer else 0.0
        is_perfect = user_answer == correct_answer

        if is_perfect:
            outcome = Outcome.UP
            next_level = clamp_level(current_level + LEVEL_STEP)
        elif accuracy < KEEP_THRESHOLD:
            outcome = Outcome.DOWN
            next_level = clamp_level(current_level - LEVEL_STEP)
        else:
            outcome = Outcome.STAY
            next_level = clamp_level(current_level)

        return ScoreResult(
            correct_answer=correct_answer,
            user_answer=user_answer,
            match_count=match_count,
            accuracy=accuracy,
            is_perfect=is_perfect,
            outcome=outcome,
            next_level=next_level,
        )
