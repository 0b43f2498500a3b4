"""
Utilities package - Common utilities for the SimonPi game system
"""

from .hybrid_logger import HybridLogger, ClassLogger, ColoredFormatter
from .once_in_ms import OnceInMs
from .timer_queue import TimerQueue, ScheduledTimer

__all__ = [
    'HybridLogger',
    'ClassLogger',
    'ColoredFormatter',
    'OnceInMs',
    'TimerQueue',
    'ScheduledTimer'
]
