"""
Timing utility for throttling execution in game loops
"""

import time
from typing import Callable


class OnceInMs:
    """
    Timer for throttling code execution to at most once per interval.

    The game loop ticks every frame (e.g. 20ms); wrap slow housekeeping
    such as resource logging with this so it only runs occasionally.

    Example:
        self._memory_monitor = OnceInMs(60000)  # Once per minute

        # In update loop:
        if self._memory_monitor.should_execute():
            self._log_memory_usage()
    """

    def __init__(self, interval_ms: int, clock: Callable[[], float] = time.time):
        """
        Args:
            interval_ms: Minimum milliseconds between executions
            clock: Time source in seconds
        """
        self.interval_ms = interval_ms
        self._clock = clock
        self.last_execution = None

    def should_execute(self) -> bool:
        """Return True (and restart the interval) if the interval has passed"""
        now = self._clock()
        if self.last_execution is None or (now - self.last_execution) * 1000 >= self.interval_ms:
            self.last_execution = now
            return True
        return False
