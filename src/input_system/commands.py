"""
Command vocabulary accepted by the session machine
"""

import enum
from dataclasses import dataclass
from typing import Optional


class CommandType(enum.Enum):
    START = "start"
    SHOW_RULES = "show_rules"
    CLOSE_RULES = "close_rules"
    SET_LEVEL = "set_level"            # value: tier
    STEP_LEVEL = "step_level"          # value: +1 / -1
    SET_DURATION = "set_duration"      # value: seconds
    CYCLE_DURATION = "cycle_duration"
    TOGGLE_SOUND = "toggle_sound"
    ENTER_DIGIT = "enter_digit"        # value: 0-9
    DELETE = "delete"
    SUBMIT = "submit"
    NEXT_ROUND = "next_round"
    QUIT = "quit"
    BACK_TO_SETUP = "back_to_setup"


@dataclass(frozen=True)
class Command:
    """One user intent, already translated from a raw input event"""
    type: CommandType
    value: Optional[int] = None

    def __str__(self) -> str:
        if self.value is None:
            return self.type.value
        return f"{self.type.value}({self.value})"
