"""
Terminal keyboard command reader
"""

import sys
import select
import termios
import tty
from typing import List, Optional

from .commands import Command, CommandType
from .interfaces import ICommandReader


# Single-key commands
KEY_COMMANDS = {
    's': Command(CommandType.START),
    'n': Command(CommandType.NEXT_ROUND),
    'r': Command(CommandType.SHOW_RULES),
    'c': Command(CommandType.CLOSE_RULES),
    '+': Command(CommandType.STEP_LEVEL, 1),
    '=': Command(CommandType.STEP_LEVEL, 1),
    '-': Command(CommandType.STEP_LEVEL, -1),
    't': Command(CommandType.CYCLE_DURATION),
    'm': Command(CommandType.TOGGLE_SOUND),
    'b': Command(CommandType.BACK_TO_SETUP),
    '\r': Command(CommandType.SUBMIT),
    '\n': Command(CommandType.SUBMIT),
    '\x7f': Command(CommandType.DELETE),  # Backspace (DEL)
    '\x08': Command(CommandType.DELETE),  # Backspace (BS)
}

QUIT_KEY = 'q'
CONFIRM_KEY = 'y'
EXIT_KEYS = ('x', '\x03')  # 'x' or Ctrl+C in raw mode


class KeyboardCommandReader(ICommandReader):
    """
    Reads single key presses from a raw-mode terminal.

    Works over SSH using stdin (non-blocking select). Digits enter answer
    digits, Enter submits, Backspace deletes. Quitting a session needs
    confirmation: 'q' asks, 'y' confirms, any other key cancels.

    Example:
        reader = KeyboardCommandReader(logger=logger)
        reader.setup()
        for command in reader.read_commands():
            machine.dispatch(command)
    """

    def __init__(self, logger, stdin=None):
        """
        Args:
            logger: ClassLogger instance for logging
            stdin: Input stream (defaults to sys.stdin)
        """
        self._logger = logger
        self._stdin = stdin or sys.stdin
        self._stdin_available = False
        self._original_terminal_settings = None
        self._raw_mode_enabled = False
        self._quit_pending = False
        self._exit_requested = False

    @property
    def exit_requested(self) -> bool:
        return self._exit_requested

    @property
    def quit_pending(self) -> bool:
        return self._quit_pending

    def _check_stdin_available(self) -> bool:
        """Check if stdin is an interactive terminal"""
        try:
            if not self._stdin.isatty():
                return False
            select.select([self._stdin], [], [], 0)
            return True
        except (OSError, ValueError):
            return False

    def _enable_raw_mode(self) -> bool:
        """
        Enable raw terminal mode for immediate key capture.

        Returns:
            True if raw mode enabled successfully, False otherwise
        """
        try:
            self._original_terminal_settings = termios.tcgetattr(self._stdin)
            tty.setraw(self._stdin.fileno())
            self._raw_mode_enabled = True
            return True
        except termios.error as e:
            self._logger.warning(f"Could not enable raw terminal mode: {e}")
            return False

    def _disable_raw_mode(self) -> None:
        """Restore original terminal settings"""
        if self._raw_mode_enabled and self._original_terminal_settings:
            termios.tcsetattr(
                self._stdin.fileno(),
                termios.TCSADRAIN,
                self._original_terminal_settings
            )
            self._raw_mode_enabled = False

    def setup(self) -> None:
        """
        Raises:
            RuntimeError: If stdin is not an interactive terminal
        """
        self._stdin_available = self._check_stdin_available()

        if not self._stdin_available:
            self._logger.error("Keyboard input not available (stdin not accessible or not a TTY)")
            raise RuntimeError("Keyboard input not available")

        if not self._enable_raw_mode():
            self._logger.error("Could not enable raw terminal mode")
            raise RuntimeError("Failed to enable raw terminal mode")

        self._logger.info("Keyboard reader initialized")
        self._logger.info("   0-9 answer | Enter submit | Backspace delete | s start | n next")
        self._logger.info("   +/- level | t time | m sound | r/c rules | b back | q quit | x exit")

    def translate_key(self, key: str) -> Optional[Command]:
        """
        Translate one key press into a command.

        Handles the quit confirmation and exit keys as side effects.

        Args:
            key: Single character read from the terminal

        Returns:
            Command for the key, or None if the key produces no command
        """
        if key in EXIT_KEYS:
            self._exit_requested = True
            return None

        if self._quit_pending:
            self._quit_pending = False
            if key.lower() == CONFIRM_KEY:
                return Command(CommandType.QUIT)
            self._logger.info("Quit cancelled")
            return None

        if key.lower() == QUIT_KEY:
            self._quit_pending = True
            self._logger.info("Quit session? press 'y' to confirm")
            return None

        if len(key) == 1 and key in "0123456789":
            return Command(CommandType.ENTER_DIGIT, int(key))

        return KEY_COMMANDS.get(key.lower())

    def read_commands(self) -> List[Command]:
        """Non-blocking read of every pending key press"""
        commands: List[Command] = []
        if not self._stdin_available:
            return commands

        while select.select([self._stdin], [], [], 0) == ([self._stdin], [], []):
            key = self._stdin.read(1)
            if not key:
                break
            command = self.translate_key(key)
            if command is not None:
                commands.append(command)
        return commands

    def cleanup(self) -> None:
        """Restore the terminal"""
        self._disable_raw_mode()
        self._quit_pending = False
        self._logger.info("Keyboard reader cleaned up")
