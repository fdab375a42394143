"""
Timing utility for throttling execution in the drill loop
"""

import time
from typing import Callable, Optional


class OnceInMs:
    """
    Timer for throttling code execution to at most once per interval.

    The drill loop runs every frame (e.g. 20ms); use this for work that only
    needs to happen occasionally, such as resource usage logging.

    Example:
        self._memory_monitor = OnceInMs(60000)  # Once per minute

        if self._memory_monitor.should_execute():
            self._log_memory_usage()
    """

    def __init__(self, interval_ms: int, clock: Optional[Callable[[], float]] = None):
        """
        Args:
            interval_ms: Minimum milliseconds between executions
            clock: Seconds clock, defaults to time.time
        """
        self.interval = interval_ms / 1000.0
        self._clock = clock or time.time
        self.last_execution = 0.0

    def should_execute(self) -> bool:
        """
        Check if enough time has passed and update timer if so.

        Returns:
            True if interval has passed (and timer is updated), False otherwise
        """
        current = self._clock()
        if current - self.last_execution >= self.interval:
            self.last_execution = current
            return True
        return False
