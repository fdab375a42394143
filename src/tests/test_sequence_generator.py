import random

from drill_system import SequenceGenerator


def test_generates_requested_length_of_single_digits():
    generator = SequenceGenerator(random.Random(1))
    for length in (3, 7, 20):
        sequence = generator.generate(length)
        assert len(sequence) == length
        assert all(0 <= d <= 9 for d in sequence)


def test_same_seed_gives_same_sequences():
    g1 = SequenceGenerator(random.Random(12345))
    g2 = SequenceGenerator(random.Random(12345))

    assert [g1.generate(5) for _ in range(10)] == [g2.generate(5) for _ in range(10)]


def test_every_digit_shows_up_over_many_draws():
    generator = SequenceGenerator(random.Random(7))
    seen = set(generator.generate(500))
    assert seen == set(range(10))


def test_zero_length_is_empty():
    assert SequenceGenerator().generate(0) == []
