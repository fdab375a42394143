"""
Session state machine - owns the session record, consumes commands,
drives the phase timers and publishes snapshots and cues
"""

import dataclasses
from typing import Callable, Dict, List, Optional, TYPE_CHECKING

from input_system.commands import Command, CommandType
from .config import DrillConfig
from .scoring import ScoringEngine, clamp_level
from .sequence_generator import SequenceGenerator
from .session_state import LastResult, Phase, SessionSnapshot, SessionState
from .states import PhaseState, SetupState, STATE_CLASSES
from .stats import StatsAggregator
from .timers import PreRoundCountdown, RevealCadence, SessionClock, TaskScheduler

from audio_system.cues import Cue

if TYPE_CHECKING:
    from utils import ClassLogger


SnapshotListener = Callable[[SessionSnapshot], None]

_STATE_FIELDS = frozenset(f.name for f in dataclasses.fields(SessionState))


class SessionStateMachine:
    """
    Orchestrator of one drill session.

    Responsibilities:
    - Apply commands that the current phase accepts, ignore the rest
    - Arm phase timers on enter, cancel every task the new phase doesn't own
    - Score submitted answers and fold them into the session statistics
    - Push a SessionSnapshot to every listener after each mutation
    - Forward cues to the cue player while sound is enabled
    """

    def __init__(self,
                 config: DrillConfig,
                 scheduler: TaskScheduler,
                 cue_player,  # CuePlayer or MockCuePlayer
                 logger: 'ClassLogger',
                 generator: Optional[SequenceGenerator] = None,
                 scoring: Optional[ScoringEngine] = None):
        """
        Args:
            config: Validated drill configuration
            scheduler: Scheduler polled by the drill loop
            cue_player: Audio collaborator with play_cue(cue)
            logger: Logger for transitions and round results
            generator: Sequence source (seeded in tests)
            scoring: Answer scoring engine
        """
        self.config = config
        self.scheduler = scheduler
        self.cue_player = cue_player
        self.logger = logger
        self.generator = generator or SequenceGenerator()
        self.scoring = scoring or ScoringEngine()

        level = clamp_level(config.start_level)
        self.state = SessionState(
            sound_enabled=config.sound_enabled,
            session_duration_seconds=config.session_duration_seconds,
            time_left_seconds=config.session_duration_seconds,
            digit_count=level,
            next_level=level,
            countdown_value=config.timing.countdown_start,
            stats=StatsAggregator.fresh(level),
        )

        timing = config.timing
        self.session_clock = SessionClock(self, scheduler, timing.session_tick_ms)
        self.countdown = PreRoundCountdown(self, scheduler, timing.countdown_step_ms)
        self.reveal = RevealCadence(self, scheduler, timing.digit_visible_ms, timing.digit_gap_ms)

        self._listeners: List[SnapshotListener] = []
        self._handlers: Dict[CommandType, Callable[[Command], None]] = {
            CommandType.START: lambda c: self.start(),
            CommandType.SHOW_RULES: lambda c: self.show_rules(),
            CommandType.CLOSE_RULES: lambda c: self.close_rules(),
            CommandType.SET_LEVEL: lambda c: self.set_digit_count(c.value),
            CommandType.STEP_LEVEL: lambda c: self.step_digit_count(c.value),
            CommandType.SET_DURATION: lambda c: self.set_session_duration(c.value),
            CommandType.CYCLE_DURATION: lambda c: self.cycle_session_duration(),
            CommandType.TOGGLE_SOUND: lambda c: self.toggle_sound(),
            CommandType.ENTER_DIGIT: lambda c: self.enter_digit(c.value),
            CommandType.DELETE: lambda c: self.delete(),
            CommandType.SUBMIT: lambda c: self.submit(),
            CommandType.NEXT_ROUND: lambda c: self.next_round(),
            CommandType.QUIT: lambda c: self.quit(),
            CommandType.BACK_TO_SETUP: lambda c: self.back_to_setup(),
        }

        self.current_state: PhaseState = SetupState(self)
        self.current_state.on_enter()

        self.logger.info(f"SessionStateMachine initialized: level {level}, "
                         f"{config.session_duration_seconds}s session, "
                         f"sound {'on' if self.state.sound_enabled else 'off'}")

    # ------------------------------------------------------------------
    # Outputs
    # ------------------------------------------------------------------

    @property
    def phase(self) -> Phase:
        return self.state.phase

    def add_listener(self, listener: SnapshotListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: SnapshotListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def snapshot(self) -> SessionSnapshot:
        return self.state.snapshot()

    def emit_cue(self, cue: Cue) -> None:
        """Forward a cue to the audio collaborator unless sound is off"""
        if not self.state.sound_enabled:
            return
        self.cue_player.play_cue(cue)

    def _publish(self) -> None:
        snapshot = self.state.snapshot()
        for listener in list(self._listeners):
            listener(snapshot)

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def apply(self, **changes) -> None:
        """
        Apply a patch to the session record.

        A phase change cancels every scheduled task the new phase does not own
        and swaps the phase state object. Listeners get a snapshot, the session
        clock is synced, and only then does the new phase arm its own timers.

        Raises:
            AttributeError: If a key is not a SessionState field
        """
        unknown = set(changes) - _STATE_FIELDS
        if unknown:
            raise AttributeError(f"Unknown session fields: {sorted(unknown)}")

        old_phase = self.state.phase
        new_phase = changes.get("phase", old_phase)
        phase_changed = new_phase is not old_phase

        if phase_changed:
            self.current_state.on_exit()
            cancelled = self.scheduler.cancel_not_owned_by(new_phase)
            if cancelled:
                self.logger.debug(f"Cancelled {cancelled} task(s) not owned by {new_phase.value}")

        for name, value in changes.items():
            setattr(self.state, name, value)

        if phase_changed:
            self.logger.info(f"Phase transition: {old_phase.value} → {new_phase.value}")
            self.current_state = STATE_CLASSES[new_phase](self)

        self._publish()
        self.session_clock.sync()

        if phase_changed:
            self.current_state.on_enter()

    def _accepts(self, command_type: CommandType) -> bool:
        if self.current_state.accepts(command_type):
            return True
        self.logger.debug(f"Ignoring {command_type.value} in {self.state.phase.value} phase")
        return False

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def dispatch(self, command: Command) -> None:
        """Route a translated input command to its handler"""
        self.logger.debug(f"Command: {command}")
        self._handlers[command.type](command)

    def start(self) -> None:
        """Begin a new session at the current level"""
        if not self._accepts(CommandType.START):
            return

        level = self.state.digit_count
        self.logger.info(f"Session started: level {level}, {self.state.session_duration_seconds}s")
        self.apply(
            time_left_seconds=self.state.session_duration_seconds,
            stats=StatsAggregator.fresh(level),
            next_level=level,
            last_result=LastResult(),
        )
        self._start_round(level)

    def _start_round(self, level: int) -> None:
        if self.state.time_left_seconds <= 0:
            self.logger.info("No session time left, skipping round")
            self.apply(phase=Phase.SUMMARY)
            return

        level = clamp_level(level)
        sequence = self.generator.generate(level)
        self.logger.info(f"Round started: {level} digits")
        self.logger.debug(f"Sequence: {sequence}")
        self.apply(
            digit_count=level,
            sequence=sequence,
            user_input=[],
            countdown_value=self.config.timing.countdown_start,
            reveal_index=-1,
            showing_digit=False,
            phase=Phase.COUNTDOWN,
        )

    def show_rules(self) -> None:
        if self._accepts(CommandType.SHOW_RULES):
            self.apply(phase=Phase.RULES)

    def close_rules(self) -> None:
        if self._accepts(CommandType.CLOSE_RULES):
            self.apply(phase=Phase.SETUP)

    def set_digit_count(self, level: int) -> None:
        """Choose the start level (clamped to the valid tier range)"""
        if not self._accepts(CommandType.SET_LEVEL):
            return
        self._set_level(level)

    def step_digit_count(self, delta: int) -> None:
        """Raise or lower the start level by delta (clamped)"""
        if not self._accepts(CommandType.STEP_LEVEL):
            return
        self._set_level(self.state.digit_count + delta)

    def _set_level(self, level: int) -> None:
        level = clamp_level(level)
        self.apply(digit_count=level, next_level=level)

    def set_session_duration(self, seconds: int) -> None:
        """
        Raises:
            ValueError: If seconds is not positive
        """
        if seconds is None or seconds <= 0:
            raise ValueError(f"Session duration must be positive, got {seconds}")
        if not self._accepts(CommandType.SET_DURATION):
            return
        self.apply(session_duration_seconds=seconds, time_left_seconds=seconds)

    def cycle_session_duration(self) -> None:
        """Switch to the next configured session length"""
        if not self._accepts(CommandType.CYCLE_DURATION):
            return
        options = list(self.config.duration_options)
        current = self.state.session_duration_seconds
        if current in options:
            seconds = options[(options.index(current) + 1) % len(options)]
        else:
            seconds = options[0]
        self.apply(session_duration_seconds=seconds, time_left_seconds=seconds)

    def toggle_sound(self) -> None:
        if self._accepts(CommandType.TOGGLE_SOUND):
            self.apply(sound_enabled=not self.state.sound_enabled)

    def enter_digit(self, digit: int) -> None:
        """
        Append one digit to the answer while there is room for it.

        Raises:
            ValueError: If digit is not in 0-9
        """
        if digit is None or not 0 <= digit <= 9:
            raise ValueError(f"Digit must be 0-9, got {digit}")
        if not self._accepts(CommandType.ENTER_DIGIT):
            return

        if len(self.state.user_input) >= self.state.digit_count:
            self.logger.debug(f"Input full ({self.state.digit_count} digits), ignoring {digit}")
            return

        self.apply(user_input=self.state.user_input + [digit])
        self.emit_cue(Cue.TICK)

    def delete(self) -> None:
        if not self._accepts(CommandType.DELETE):
            return
        if self.state.user_input:
            self.apply(user_input=self.state.user_input[:-1])

    def submit(self) -> None:
        """Score the answer and show feedback (no-op on an empty answer)"""
        if not self._accepts(CommandType.SUBMIT):
            return
        if not self.state.user_input:
            self.logger.debug("Empty answer, submit ignored")
            return

        played_level = self.state.digit_count
        result = self.scoring.score(self.state.sequence, self.state.user_input, played_level)
        stats = StatsAggregator.fold(self.state.stats, result, played_level)

        self.logger.info(
            f"Round result: level {played_level}, accuracy {result.accuracy:.0%}, "
            f"{result.outcome.value} → next level {result.next_level}"
        )

        self.emit_cue(result.cue)
        self.apply(
            stats=stats,
            last_result=LastResult.from_score(result),
            next_level=result.next_level,
            phase=Phase.FEEDBACK,
        )

    def next_round(self) -> None:
        if self._accepts(CommandType.NEXT_ROUND):
            self._start_round(self.state.next_level)

    def quit(self) -> None:
        """End the session immediately (confirmation happens in the input layer)"""
        if not self._accepts(CommandType.QUIT):
            return
        self.logger.info(f"Session quit during {self.state.phase.value} phase")
        self.apply(phase=Phase.SUMMARY)

    def back_to_setup(self) -> None:
        if self._accepts(CommandType.BACK_TO_SETUP):
            self.apply(phase=Phase.SETUP)

    def shutdown(self) -> None:
        """Drop every pending timer (used when the drill loop stops)"""
        self.scheduler.cancel_all()
