"""
Display System Package - text rendering of session snapshots
"""

from .console_renderer import ConsoleRenderer
from .formatting import format_time, format_percent, format_marks

__all__ = [
    "ConsoleRenderer",
    "format_time",
    "format_percent",
    "format_marks"
]
