import random

import pytest

from audio_system import Cue
from drill_system import ScoringEngine, Outcome, clamp_level, MIN_LEVEL, MAX_LEVEL


@pytest.fixture
def engine():
    return ScoringEngine()


def test_reverse_keeps_length():
    rng = random.Random(3)
    for n in range(3, 21):
        sequence = [rng.randint(0, 9) for _ in range(n)]
        reversed_answer = ScoringEngine.reverse(sequence)
        assert len(reversed_answer) == n
        assert list(reversed_answer) == sequence[::-1]


def test_perfect_answer_levels_up(engine):
    result = engine.score([1, 2, 3], [3, 2, 1], current_level=3)

    assert result.correct_answer == (3, 2, 1)
    assert result.accuracy == 1.0
    assert result.is_perfect is True
    assert result.outcome is Outcome.UP
    assert result.next_level == 4
    assert result.cue is Cue.CORRECT
    assert result.message == "Perfect!"


def test_low_accuracy_levels_down_but_not_below_minimum(engine):
    result = engine.score([1, 2, 3], [3, 0, 0], current_level=3)

    assert result.match_count == 1
    assert result.accuracy == pytest.approx(1 / 3)
    assert result.is_perfect is False
    assert result.outcome is Outcome.DOWN
    assert result.next_level == 3
    assert result.cue is Cue.WRONG


def test_short_answer_counts_missing_positions_as_misses(engine):
    result = engine.score([5, 5, 5, 5], [5, 5, 5], current_level=4)

    assert result.accuracy == 0.75
    assert result.is_perfect is False
    assert result.outcome is Outcome.STAY
    assert result.next_level == 4
    assert result.cue is Cue.KEEP
    assert result.message == "Keep"


def test_perfect_at_top_tier_reports_up_but_holds_level(engine):
    sequence = list(range(10)) * 2
    result = engine.score(sequence, sequence[::-1], current_level=MAX_LEVEL)

    assert result.outcome is Outcome.UP
    assert result.next_level == MAX_LEVEL


def test_down_from_middle_tier(engine):
    sequence = [1, 2, 3, 4, 5, 6, 7, 8]
    result = engine.score(sequence, [8, 7, 0, 0], current_level=8)

    assert result.accuracy == 0.25
    assert result.outcome is Outcome.DOWN
    assert result.next_level == 7


def test_longer_input_than_sequence_is_not_perfect(engine):
    result = engine.score([1, 2, 3], [3, 2, 1, 0], current_level=3)

    assert result.accuracy == 1.0
    assert result.is_perfect is False
    assert result.outcome is Outcome.STAY


@pytest.mark.parametrize("n", [3, 4, 8, 12, 20])
def test_outcome_bands(engine, n):
    sequence = [(i * 7) % 10 for i in range(n)]
    answer = sequence[::-1]

    for wrong in range(n + 1):
        user = list(answer)
        for i in range(wrong):
            user[i] = (user[i] + 1) % 10
        result = engine.score(sequence, user, current_level=n)
        if wrong == 0:
            assert result.outcome is Outcome.UP
            assert result.next_level == min(n + 1, MAX_LEVEL)
        elif result.accuracy < 0.75:
            assert result.outcome is Outcome.DOWN
            assert result.next_level == max(n - 1, MIN_LEVEL)
        else:
            assert result.outcome is Outcome.STAY
            assert result.next_level == n


def test_position_matches_marks_each_entered_digit(engine):
    result = engine.score([1, 2, 3, 4], [4, 0, 2], current_level=4)

    assert result.position_matches == (True, False, True, None)


def test_clamp_level_bounds():
    assert clamp_level(1) == MIN_LEVEL
    assert clamp_level(25) == MAX_LEVEL
    assert clamp_level(9) == 9
