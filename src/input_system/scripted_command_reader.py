"""
Scripted command reader for demos and headless runs
"""

from typing import Iterable, List

from .commands import Command
from .interfaces import ICommandReader


class ScriptedCommandReader(ICommandReader):
    """
    Replays a fixed list of command batches, one batch per read.

    Once every batch has been handed out, exit is requested if exit_when_done
    is set; otherwise empty batches are returned forever.
    """

    def __init__(self, batches: Iterable[Iterable[Command]], exit_when_done: bool = True):
        self._batches: List[List[Command]] = [list(batch) for batch in batches]
        self._exit_when_done = exit_when_done
        self._exit_requested = False

    @property
    def exit_requested(self) -> bool:
        return self._exit_requested

    def setup(self) -> None:
        pass

    def read_commands(self) -> List[Command]:
        if self._batches:
            return self._batches.pop(0)
        if self._exit_when_done:
            self._exit_requested = True
        return []

    def cleanup(self) -> None:
        self._batches.clear()
