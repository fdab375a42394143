import logging
import sys
from pathlib import Path
from typing import List, Optional

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from audio_system import MockCuePlayer
from drill_system import DrillConfig, SequenceGenerator, SessionStateMachine, TaskScheduler
from utils import HybridLogger


class FakeClock:
    """Integer millisecond clock advanced by hand"""

    def __init__(self, start_ms: int = 0):
        self.ms = start_ms

    def __call__(self) -> int:
        return self.ms

    def advance(self, ms: int) -> None:
        self.ms += ms


class QueuedSequenceGenerator(SequenceGenerator):
    """Hands out queued sequences, then 0,1,2,... patterns of the asked length"""

    def __init__(self, sequences: Optional[List[List[int]]] = None):
        super().__init__()
        self.sequences = list(sequences or [])

    def generate(self, length: int) -> List[int]:
        if self.sequences:
            return list(self.sequences.pop(0))
        return [i % 10 for i in range(length)]


class DrillHarness:
    """Session machine on a fake clock with a recording cue player"""

    def __init__(self, machine: SessionStateMachine, scheduler: TaskScheduler,
                 clock: FakeClock, cues: MockCuePlayer):
        self.machine = machine
        self.scheduler = scheduler
        self.clock = clock
        self.cues = cues
        self.snapshots = []
        machine.add_listener(self.snapshots.append)

    @property
    def state(self):
        return self.machine.state

    def advance(self, ms: int, step: int = 100) -> None:
        """Move time forward in small steps, running due timers after each"""
        remaining = ms
        while remaining > 0:
            delta = min(step, remaining)
            self.clock.advance(delta)
            self.scheduler.run_due()
            remaining -= delta

    def type_answer(self, digits) -> None:
        for digit in digits:
            self.machine.enter_digit(digit)

    def reversed_sequence(self) -> List[int]:
        return list(reversed(self.state.sequence))


@pytest.fixture
def logger():
    hybrid = HybridLogger("drill-tests", log_dir=None)
    yield hybrid.get_class_logger("Test", logging.WARNING)
    hybrid.cleanup()


@pytest.fixture
def cue_player(logger):
    return MockCuePlayer(logger)


@pytest.fixture
def make_harness(logger, cue_player):
    def _make(sequences=None, **config_overrides) -> DrillHarness:
        config = DrillConfig(use_mock_audio=True, log_dir=None, **config_overrides)
        config.validate()
        clock = FakeClock()
        scheduler = TaskScheduler(clock_ms=clock)
        machine = SessionStateMachine(
            config=config,
            scheduler=scheduler,
            cue_player=cue_player,
            logger=logger,
            generator=QueuedSequenceGenerator(sequences),
        )
        return DrillHarness(machine, scheduler, clock, cue_player)

    return _make
