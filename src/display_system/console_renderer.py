"""
Console renderer - prints one status line per visible change of the session
"""

import sys
from typing import Optional, TextIO

from drill_system.scoring import Outcome
from drill_system.session_state import Phase, SessionSnapshot, digits_to_str
from .formatting import format_marks, format_percent, format_time


RULES_TEXT = (
    "Memorize the digits, then type them in REVERSE order. "
    "Perfect answer: level up. Low accuracy: level down. "
    "Enter submits, Backspace deletes. [c] close"
)


class ConsoleRenderer:
    """
    Snapshot listener writing to a terminal stream.

    Lines end with CRLF because the keyboard reader keeps the terminal in raw
    mode. A line is only written when it differs from the previous one.
    """

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream or sys.stdout
        self._last_line: Optional[str] = None

    def __call__(self, snapshot: SessionSnapshot) -> None:
        self.render(snapshot)

    def render(self, snapshot: SessionSnapshot) -> None:
        line = self.describe(snapshot)
        if line == self._last_line:
            return
        self._last_line = line
        self.stream.write(line + "\r\n")
        self.stream.flush()

    def describe(self, s: SessionSnapshot) -> str:
        """Text of the screen for one snapshot"""
        header = f"[{format_time(s.time_left_seconds)}] Level {s.digit_count}"

        if s.phase is Phase.SETUP:
            return (f"Start level {s.digit_count} | Time {format_time(s.session_duration_seconds)} | "
                    f"Sound {'ON' if s.sound_enabled else 'OFF'} | "
                    f"[s]tart [+/-] level [t]ime [m]ute [r]ules")

        if s.phase is Phase.RULES:
            return RULES_TEXT

        if s.phase is Phase.COUNTDOWN:
            return f"{header}  Get ready... {s.countdown_value}"

        if s.phase is Phase.DISPLAY:
            digit = s.current_digit
            return f"{header}  Memorize: {digit if digit is not None else '_'}"

        if s.phase is Phase.INPUT:
            entered = digits_to_str(s.user_input) or "(type digits)"
            return f"{header}  Reverse: {entered}"

        if s.phase is Phase.FEEDBACK:
            result = s.last_result
            next_info = f" Next: {s.next_level} digits." if result.outcome is not Outcome.STAY else ""
            return (f"{header}  {result.message}{next_info} "
                    f"Accuracy {format_percent(result.accuracy)} | "
                    f"Answer {result.correct_answer} | You "
                    f"{format_marks(result.user_answer, result.position_matches)} | [n]ext")

        stats = s.stats
        return (f"Done! Max level {stats.max_level_reached} | Perfect {stats.perfect_clears} | "
                f"Best streak {stats.best_streak_this_run} | "
                f"Mean accuracy {format_percent(stats.mean_accuracy)} | [b]ack")
