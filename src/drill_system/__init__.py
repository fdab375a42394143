"""
Drill System - Timed, adaptive reverse digit span drill

Session state machine, phase timers and the scoring/statistics engine.
"""

from .config import DrillConfig, TimingConfig
from .sequence_generator import SequenceGenerator
from .scoring import ScoringEngine, ScoreResult, Outcome, clamp_level, MIN_LEVEL, MAX_LEVEL, KEEP_THRESHOLD
from .stats import SessionStats, StatsAggregator
from .session_state import Phase, SessionState, SessionSnapshot, LastResult, RUNNING_PHASES
from .timers import TaskScheduler, ScheduledTask, SessionClock, PreRoundCountdown, RevealCadence
from .states import PhaseState
from .session_machine import SessionStateMachine
from .drill_runner import DrillRunner

__all__ = [
    # Configuration
    "DrillConfig",
    "TimingConfig",
    # Engine
    "SequenceGenerator",
    "ScoringEngine",
    "ScoreResult",
    "Outcome",
    "clamp_level",
    "MIN_LEVEL",
    "MAX_LEVEL",
    "KEEP_THRESHOLD",
    "SessionStats",
    "StatsAggregator",
    # Session
    "Phase",
    "SessionState",
    "SessionSnapshot",
    "LastResult",
    "RUNNING_PHASES",
    "PhaseState",
    "SessionStateMachine",
    "DrillRunner",
    # Timers
    "TaskScheduler",
    "ScheduledTask",
    "SessionClock",
    "PreRoundCountdown",
    "RevealCadence",
]
