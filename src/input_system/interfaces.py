"""
Abstract interfaces for command input
"""

from abc import ABC, abstractmethod
from typing import List

from .commands import Command


class ICommandReader(ABC):
    """
    Abstract interface for turning raw input events into drill commands.

    Implementations can read a terminal, a scripted list, a GUI toolkit or a
    network socket; the session machine only ever sees Command objects.
    """

    @abstractmethod
    def setup(self) -> None:
        """Initialize the input device/resources"""
        pass

    @abstractmethod
    def read_commands(self) -> List[Command]:
        """
        Collect every command produced since the previous call (non-blocking).

        Returns:
            Commands in the order they were produced
        """
        pass

    @property
    @abstractmethod
    def exit_requested(self) -> bool:
        """True once the user asked to leave the program"""
        pass

    @abstractmethod
    def cleanup(self) -> None:
        """Release input resources"""
        pass
