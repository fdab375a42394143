"""
Input System Package

Translates raw input events into the drill's command vocabulary.
"""

from .commands import Command, CommandType
from .interfaces import ICommandReader
from .keyboard_command_reader import KeyboardCommandReader
from .scripted_command_reader import ScriptedCommandReader

__all__ = [
    "Command",
    "CommandType",
    "ICommandReader",
    "KeyboardCommandReader",
    "ScriptedCommandReader"
]
