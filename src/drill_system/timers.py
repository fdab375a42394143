"""
Phase timers - cooperative scheduling for the session clock, the pre-round
countdown and the digit reveal cadence
"""

import time
from typing import Callable, FrozenSet, Iterable, List, Optional, TYPE_CHECKING

from audio_system.cues import Cue
from .session_state import Phase, RUNNING_PHASES

if TYPE_CHECKING:
    from drill_system.session_machine import SessionStateMachine


def monotonic_ms() -> int:
    return int(time.monotonic() * 1000)


class ScheduledTask:
    """A callback due at an absolute time, owned by one or more phases"""

    def __init__(self, due_ms: int, order: int, callback: Callable[[], None],
                 owners: FrozenSet[Phase], name: str):
        self.due_ms = due_ms
        self.order = order
        self.callback = callback
        self.owners = owners
        self.name = name
        self.cancelled = False

    def __repr__(self) -> str:
        owners = ",".join(sorted(p.value for p in self.owners))
        return f"ScheduledTask({self.name!r}, due={self.due_ms}, owners={owners}, cancelled={self.cancelled})"


class TaskScheduler:
    """
    Single-threaded scheduler polled from the drill loop.

    Nothing runs on its own: run_due() executes every task whose due time has
    passed, in (due time, scheduling order). Tasks scheduled from inside a
    callback that are already due run in the same call.

    Every task is keyed by the phases allowed to own it, so a phase change can
    drop everything the new phase does not own with cancel_not_owned_by().
    """

    def __init__(self, clock_ms: Optional[Callable[[], int]] = None):
        """
        Args:
            clock_ms: Integer millisecond clock, defaults to the monotonic clock
        """
        self._clock_ms = clock_ms or monotonic_ms
        self._tasks: List[ScheduledTask] = []
        self._order = 0

    def now_ms(self) -> int:
        return self._clock_ms()

    @property
    def pending_count(self) -> int:
        return len(self._tasks)

    def pending(self) -> List[ScheduledTask]:
        return sorted(self._tasks, key=lambda t: (t.due_ms, t.order))

    def call_at(self, due_ms: int, callback: Callable[[], None],
                owners: Iterable[Phase], name: str = "") -> ScheduledTask:
        self._order += 1
        task = ScheduledTask(due_ms, self._order, callback, frozenset(owners), name)
        self._tasks.append(task)
        return task

    def call_later(self, delay_ms: int, callback: Callable[[], None],
                   owners: Iterable[Phase], name: str = "") -> ScheduledTask:
        return self.call_at(self.now_ms() + delay_ms, callback, owners, name)

    def cancel(self, task: Optional[ScheduledTask]) -> None:
        if task is None or task.cancelled:
            return
        task.cancelled = True
        if task in self._tasks:
            self._tasks.remove(task)

    def cancel_not_owned_by(self, phase: Phase) -> int:
        """
        Cancel every pending task the given phase does not own.

        Returns:
            Number of cancelled tasks
        """
        stale = [task for task in self._tasks if phase not in task.owners]
        for task in stale:
            self.cancel(task)
        return len(stale)

    def cancel_all(self) -> None:
        for task in list(self._tasks):
            self.cancel(task)

    def run_due(self) -> int:
        """
        Run all due tasks.

        Returns:
            Number of callbacks executed
        """
        executed = 0
        while True:
            now = self.now_ms()
            due = [task for task in self._tasks if task.due_ms <= now]
            if not due:
                return executed
            task = min(due, key=lambda t: (t.due_ms, t.order))
            self._tasks.remove(task)
            task.callback()
            executed += 1


class _PhaseTimer:
    """Shared handle bookkeeping for the three phase timers"""

    owners: FrozenSet[Phase] = frozenset()

    def __init__(self, machine: 'SessionStateMachine', scheduler: TaskScheduler):
        self.machine = machine
        self.scheduler = scheduler
        self._task: Optional[ScheduledTask] = None

    @property
    def armed(self) -> bool:
        return self._task is not None and not self._task.cancelled

    def cancel(self) -> None:
        self.scheduler.cancel(self._task)
        self._task = None

    def _schedule(self, delay_ms: int, callback: Callable[[], None]) -> None:
        self._task = self.scheduler.call_later(delay_ms, callback, self.owners, self.__class__.__name__)


class SessionClock(_PhaseTimer):
    """
    Whole-session countdown, one tick per second.

    Runs only while the phase is countdown, display or input and time is left.
    It keeps its cadence across those three phases and stops in every other.
    """

    owners = RUNNING_PHASES

    def __init__(self, machine: 'SessionStateMachine', scheduler: TaskScheduler, tick_ms: int = 1000):
        super().__init__(machine, scheduler)
        self.tick_ms = tick_ms

    def sync(self) -> None:
        """Arm or cancel the clock to match the current phase"""
        state = self.machine.state
        should_run = state.phase in RUNNING_PHASES and state.time_left_seconds > 0

        if should_run and not self.armed:
            self._schedule(self.tick_ms, self._fire)
        elif not should_run and self.armed:
            self.cancel()

    def _fire(self) -> None:
        # Next tick is anchored to this tick's due time, not to when it ran
        fired = self._task
        self._task = self.scheduler.call_at(fired.due_ms + self.tick_ms, self._fire,
                                            self.owners, self.__class__.__name__)

        state = self.machine.state
        if state.time_left_seconds <= 1:
            self.machine.logger.info("Session time is up")
            self.machine.apply(time_left_seconds=0, phase=Phase.SUMMARY)
        else:
            self.machine.apply(time_left_seconds=state.time_left_seconds - 1)


class PreRoundCountdown(_PhaseTimer):
    """3-2-1 before the digits are shown; hands over to the display phase at 0"""

    owners = frozenset({Phase.COUNTDOWN})

    def __init__(self, machine: 'SessionStateMachine', scheduler: TaskScheduler, step_ms: int = 800):
        super().__init__(machine, scheduler)
        self.step_ms = step_ms

    def step(self) -> None:
        self.cancel()
        state = self.machine.state
        if state.phase is not Phase.COUNTDOWN:
            return

        if state.countdown_value > 0:
            self.machine.emit_cue(Cue.TICK)
            self._schedule(self.step_ms, self._fire)
        else:
            self.machine.apply(reveal_index=0, showing_digit=True, phase=Phase.DISPLAY)

    def _fire(self) -> None:
        self._task = None
        self.machine.apply(countdown_value=self.machine.state.countdown_value - 1)
        self.step()


class RevealCadence(_PhaseTimer):
    """
    Shows the sequence one digit at a time.

    Each digit is visible for visible_ms followed by a gap_ms blank before the
    next one. When the index runs past the sequence, the input phase starts.
    """

    owners = frozenset({Phase.DISPLAY})

    def __init__(self, machine: 'SessionStateMachine', scheduler: TaskScheduler,
                 visible_ms: int = 800, gap_ms: int = 200):
        super().__init__(machine, scheduler)
        self.visible_ms = visible_ms
        self.gap_ms = gap_ms
        self._last_cued_index = -1

    def reset(self) -> None:
        """Forget which index already played its cue"""
        self._last_cued_index = -1

    def step(self) -> None:
        self.cancel()
        state = self.machine.state
        if state.phase is not Phase.DISPLAY:
            return

        if state.reveal_index >= len(state.sequence):
            self.machine.apply(phase=Phase.INPUT)
            return

        if state.showing_digit:
            if state.reveal_index != self._last_cued_index:
                self.machine.emit_cue(Cue.DISPLAY)
                self._last_cued_index = state.reveal_index
            self._schedule(self.visible_ms, self._hide)
        else:
            self._schedule(self.gap_ms, self._advance)

    def _hide(self) -> None:
        self._task = None
        self.machine.apply(showing_digit=False)
        self.step()

    def _advance(self) -> None:
        self._task = None
        self.machine.apply(reveal_index=self.machine.state.reveal_index + 1, showing_digit=True)
        self.step()
