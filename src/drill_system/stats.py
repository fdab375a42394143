"""
Running session statistics
"""

from dataclasses import dataclass, replace

from .scoring import ScoreResult


@dataclass(frozen=True)
class SessionStats:
    """Aggregate results of one session (reset on every start)"""
    total_attempts: int = 0
    perfect_clears: int = 0
    max_level_reached: int = 3
    start_level: int = 3
    accuracy_sum: float = 0.0
    current_streak: int = 0
    best_streak_this_run: int = 0

    @property
    def mean_accuracy(self) -> float:
        """Average accuracy over all attempts, 0.0 before the first one"""
        if self.total_attempts <= 0:
            return 0.0
        return self.accuracy_sum / self.total_attempts


class StatsAggregator:
    """Folds each round's score into the session statistics"""

    @staticmethod
    def fresh(start_level: int) -> SessionStats:
        return SessionStats(max_level_reached=start_level, start_level=start_level)

    @staticmethod
    def fold(prev: SessionStats, result: ScoreResult, played_level: int) -> SessionStats:
        """
        Args:
            prev: Statistics before this round
            result: Score of the round just submitted
            played_level: Tier the round was played at

        Returns:
            New SessionStats including this round
        """
        streak = prev.current_streak + 1 if result.is_perfect else 0

        # A perfect clear credits the (clamped) tier it unlocks
        reached = result.next_level if result.is_perfect else played_level

        return replace(
            prev,
            total_attempts=prev.total_attempts + 1,
            perfect_clears=prev.perfect_clears + (1 if result.is_perfect else 0),
            accuracy_sum=prev.accuracy_sum + result.accuracy,
            current_streak=streak,
            best_streak_this_run=max(prev.best_streak_this_run, streak),
            max_level_reached=max(prev.max_level_reached, reached),
        )
