"""
Playback timing for the sequence the player has to repeat
"""

from dataclasses import dataclass
from typing import Iterator, Sequence

from .config import TimingConfig


@dataclass(frozen=True)
class PlaybackEvent:
    """One lit signal during playback"""
    position: int
    signal_index: int
    start_at_ms: float
    duration_ms: int

    @property
    def end_at_ms(self) -> float:
        return self.start_at_ms + self.duration_ms


class PlaybackScheduler:
    """
    Lays out a sequence on the timeline.

    Each signal is lit for the score-dependent duration, followed by a
    fixed gap before the next one starts. The events are produced lazily
    so the caller (PlayingState) can consume them one timer at a time.

    Example:
        scheduler = PlaybackScheduler(TimingConfig())
        list(scheduler.events((2, 0), start_at_ms=0, score=1))
        # [PlaybackEvent(0, 2, 0, 290), PlaybackEvent(1, 0, 340, 290)]
    """

    def __init__(self, timing: TimingConfig):
        self.timing = timing

    def events(self, sequence: Sequence[int], start_at_ms: float, score: int) -> Iterator[PlaybackEvent]:
        start = start_at_ms
        for position, signal_index in enumerate(sequence):
            duration = self.timing.signal_duration_ms(score)
            yield PlaybackEvent(position, signal_index, start, duration)
            start += duration + self.timing.inter_signal_gap_ms

    def total_duration_ms(self, length: int, score: int) -> int:
        """Time from the first highlight to the end of the last one"""
        if length <= 0:
            return 0
        duration = self.timing.signal_duration_ms(score)
        return length * duration + (length - 1) * self.timing.inter_signal_gap_ms
