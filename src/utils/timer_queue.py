"""
Cooperative one-shot timers for the single-threaded game loop
"""

import heapq
import itertools
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Tuple


@dataclass
class ScheduledTimer:
    """A callback due at an absolute time, stamped with the session generation it belongs to"""
    due_ms: float
    generation: int
    callback: Callable[[], Any] = field(repr=False)
    name: str = "timer"


class TimerQueue:
    """
    Min-heap of ScheduledTimers, drained by the owner once per frame.

    Nothing here runs on its own: the game loop asks for due timers with
    pop_next_due(now_ms) and decides what to do with them. Timers with the
    same due time come out in scheduling order.

    Example:
        timers = TimerQueue()
        timers.schedule_at(1300.0, generation=3, callback=on_done, name="blink-off")

        timer = timers.pop_next_due(now_ms)
        while timer is not None:
            if timer.generation == current_generation:
                timer.callback()
            timer = timers.pop_next_due(now_ms)
    """

    def __init__(self):
        self._heap: List[Tuple[float, int, ScheduledTimer]] = []
        self._counter = itertools.count()

    def schedule_at(self, due_ms: float, generation: int,
                    callback: Callable[[], Any], name: str = "timer") -> ScheduledTimer:
        """
        Schedule a callback at an absolute time.

        Args:
            due_ms: Absolute due time in milliseconds (same clock as pop_next_due)
            generation: Session generation the callback belongs to
            callback: Function to run when due
            name: Label for logging

        Returns:
            The ScheduledTimer
        """
        timer = ScheduledTimer(due_ms=due_ms, generation=generation, callback=callback, name=name)
        heapq.heappush(self._heap, (due_ms, next(self._counter), timer))
        return timer

    def pop_next_due(self, now_ms: float) -> Optional[ScheduledTimer]:
        """Remove and return the earliest timer due at or before now_ms"""
        if self._heap and self._heap[0][0] <= now_ms:
            return heapq.heappop(self._heap)[2]
        return None

    def clear(self) -> None:
        self._heap.clear()

    def __len__(self) -> int:
        return len(self._heap)
