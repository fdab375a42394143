"""
Formatting helpers for drill screens
"""

from typing import Optional, Sequence


def format_time(seconds: int) -> str:
    """Seconds as m:ss, e.g. 65 -> '1:05'"""
    seconds = max(0, int(seconds))
    return f"{seconds // 60}:{seconds % 60:02d}"


def format_percent(value: float) -> str:
    """Fraction as a rounded percentage clamped to 0-100%"""
    value = min(1.0, max(0.0, value))
    return f"{round(value * 100)}%"


def format_marks(user_answer: str, marks: Sequence[Optional[bool]]) -> str:
    """
    Entered digits annotated per position: 'd' when right, '[d]' when wrong,
    '-' where nothing was entered.
    """
    parts = []
    for i, mark in enumerate(marks):
        if mark is None:
            parts.append("-")
        elif mark:
            parts.append(user_answer[i])
        else:
            parts.append(f"[{user_answer[i]}]")
    return " ".join(parts)
