"""
Random digit sequence generation
"""

import random
from typing import List, Optional


class SequenceGenerator:
    """
    Produces the digit sequence shown at the start of each round.

    Every digit is drawn independently and uniformly from 0-9. Pass a seeded
    random.Random to get a reproducible run.

    Example:
        generator = SequenceGenerator(random.Random(42))
        generator.generate(5)  # e.g. [1, 0, 4, 3, 3]
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self._rng = rng or random.Random()

    def generate(self, length: int) -> List[int]:
        """
        Args:
            length: Number of digits to produce

        Returns:
            List of ints in 0-9 with exactly `length` entries
        """
        return [self._rng.randint(0, 9) for _ in range(length)]
