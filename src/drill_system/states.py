"""
Phase state classes for the session machine
"""

from abc import ABC
from typing import Dict, FrozenSet, Type, TYPE_CHECKING

from input_system.commands import CommandType
from .session_state import Phase

if TYPE_CHECKING:
    from drill_system.session_machine import SessionStateMachine


class PhaseState(ABC):
    """
    Base class for one phase of a drill session.

    Each phase declares:
    - Which commands it accepts (everything else is ignored)
    - Which timers it arms on enter and drops on exit

    The machine creates a fresh instance on every transition and calls
    on_exit() on the old one before on_enter() on the new one.
    """

    phase: Phase
    accepted_commands: FrozenSet[CommandType] = frozenset()

    def __init__(self, machine: 'SessionStateMachine'):
        self.machine: 'SessionStateMachine' = machine

    def accepts(self, command_type: CommandType) -> bool:
        return command_type in self.accepted_commands

    def on_enter(self) -> None:
        self.custom_on_enter()

    def on_exit(self) -> None:
        self.custom_on_exit()

    def custom_on_enter(self) -> None:
        """Custom enter logic (override in subclasses)"""
        pass

    def custom_on_exit(self) -> None:
        """Custom exit logic (override in subclasses)"""
        pass


class SetupState(PhaseState):
    """
    Title screen - choose start level, session length and sound.

    Transitions:
    - start → CountdownState
    - show rules → RulesState
    """
    phase = Phase.SETUP
    accepted_commands = frozenset({
        CommandType.START,
        CommandType.SHOW_RULES,
        CommandType.SET_LEVEL,
        CommandType.STEP_LEVEL,
        CommandType.SET_DURATION,
        CommandType.CYCLE_DURATION,
        CommandType.TOGGLE_SOUND,
        CommandType.BACK_TO_SETUP,
    })


class RulesState(PhaseState):
    """Rules overlay; closing it returns to setup"""
    phase = Phase.RULES
    accepted_commands = frozenset({
        CommandType.CLOSE_RULES,
        CommandType.TOGGLE_SOUND,
    })


class CountdownState(PhaseState):
    """
    Pre-round countdown.

    Transitions:
    - countdown reaches 0 → DisplayState
    - session time up / quit → SummaryState
    """
    phase = Phase.COUNTDOWN
    accepted_commands = frozenset({CommandType.TOGGLE_SOUND, CommandType.QUIT})

    def custom_on_enter(self) -> None:
        self.machine.countdown.step()

    def custom_on_exit(self) -> None:
        self.machine.countdown.cancel()


class DisplayState(PhaseState):
    """
    Digits are revealed one at a time.

    Transitions:
    - all digits shown → InputState
    - session time up / quit → SummaryState
    """
    phase = Phase.DISPLAY
    accepted_commands = frozenset({CommandType.TOGGLE_SOUND, CommandType.QUIT})

    def custom_on_enter(self) -> None:
        self.machine.reveal.reset()
        self.machine.reveal.step()

    def custom_on_exit(self) -> None:
        self.machine.reveal.cancel()
        self.machine.reveal.reset()


class InputState(PhaseState):
    """
    Player types the sequence in reverse.

    Transitions:
    - submit (non-empty) → FeedbackState
    - session time up / quit → SummaryState
    """
    phase = Phase.INPUT
    accepted_commands = frozenset({
        CommandType.ENTER_DIGIT,
        CommandType.DELETE,
        CommandType.SUBMIT,
        CommandType.TOGGLE_SOUND,
        CommandType.QUIT,
    })


class FeedbackState(PhaseState):
    """
    Round result is shown; the session clock is paused.

    Transitions:
    - next round → CountdownState (or SummaryState when no time is left)
    - back to setup → SetupState
    """
    phase = Phase.FEEDBACK
    accepted_commands = frozenset({
        CommandType.NEXT_ROUND,
        CommandType.BACK_TO_SETUP,
        CommandType.TOGGLE_SOUND,
        CommandType.QUIT,
    })


class SummaryState(PhaseState):
    """End-of-session statistics"""
    phase = Phase.SUMMARY
    accepted_commands = frozenset({CommandType.BACK_TO_SETUP, CommandType.TOGGLE_SOUND})


STATE_CLASSES: Dict[Phase, Type[PhaseState]] = {
    cls.phase: cls
    for cls in (SetupState, RulesState, CountdownState, DisplayState,
                InputState, FeedbackState, SummaryState)
}
