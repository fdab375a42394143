import pytest

from drill_system import ScoringEngine, SessionStats, StatsAggregator


@pytest.fixture
def engine():
    return ScoringEngine()


def test_fresh_stats_start_at_level():
    stats = StatsAggregator.fresh(7)

    assert stats == SessionStats(max_level_reached=7, start_level=7)
    assert stats.mean_accuracy == 0.0


def test_fold_counts_attempts_and_accuracy(engine):
    stats = StatsAggregator.fresh(3)
    stats = StatsAggregator.fold(stats, engine.score([1, 2, 3], [3, 2, 1], 3), 3)
    stats = StatsAggregator.fold(stats, engine.score([1, 2, 3, 4], [4, 3, 0, 0], 4), 4)

    assert stats.total_attempts == 2
    assert stats.perfect_clears == 1
    assert stats.accuracy_sum == pytest.approx(1.5)
    assert stats.mean_accuracy == pytest.approx(0.75)


def test_streaks(engine):
    perfect = engine.score([1, 2, 3], [3, 2, 1], 3)
    miss = engine.score([1, 2, 3], [0, 0, 0], 3)

    stats = StatsAggregator.fresh(3)
    for result in (perfect, perfect, perfect, miss, perfect):
        stats = StatsAggregator.fold(stats, result, 3)

    assert stats.current_streak == 1
    assert stats.best_streak_this_run == 3


def test_perfect_clear_credits_unlocked_level(engine):
    stats = StatsAggregator.fresh(5)
    result = engine.score([1, 2, 3, 4, 5], [5, 4, 3, 2, 1], 5)

    stats = StatsAggregator.fold(stats, result, 5)

    assert stats.max_level_reached == 6


def test_clamped_level_caps_credit_at_top_tier(engine):
    sequence = [i % 10 for i in range(20)]
    stats = StatsAggregator.fresh(20)

    stats = StatsAggregator.fold(stats, engine.score(sequence, sequence[::-1], 20), 20)

    assert stats.max_level_reached == 20


def test_miss_never_lowers_max_level(engine):
    stats = StatsAggregator.fresh(8)
    result = engine.score([1] * 8, [0] * 8, 8)

    stats = StatsAggregator.fold(stats, result, 8)

    assert stats.max_level_reached == 8
    assert stats.start_level == 8


def test_fold_returns_new_object(engine):
    before = StatsAggregator.fresh(3)
    after = StatsAggregator.fold(before, engine.score([1, 2, 3], [3, 2, 1], 3), 3)

    assert before.total_attempts == 0
    assert after is not before
