"""
Animation base class and the Simon panel animations
"""

import math
import time
from abc import ABC, abstractmethod
from typing import Callable, List, Sequence, Tuple, TYPE_CHECKING

from led_system.pixel import Pixel

if TYPE_CHECKING:
    from led_system.interfaces import LedStrip
    from .config import SignalConfig


class Animation(ABC):
    """
    Abstract base class for time-based animations.

    Provides non-blocking, time-based animation updates with configurable speed.
    Each animation operates on a single LED strip.
    """

    def __init__(self, strip: 'LedStrip', speed_ms: int, clock: Callable[[], float] = time.time):
        """
        Args:
            strip: LED strip to operate on
            speed_ms: Update interval in milliseconds
            clock: Time source in seconds
        """
        self.strip: 'LedStrip' = strip
        self.speed_ms: int = speed_ms
        self._clock = clock
        self.last_update: float = 0.0

    def get_name(self) -> str:
        return self.__class__.__name__

    def update_if_needed(self) -> bool:
        """
        Update animation buffer if enough time has passed.

        Does NOT call strip.show() - the caller is responsible for calling
        show() on strips that were updated.

        Returns:
            True if strip buffer was modified, False if skipped
        """
        now = self._clock()
        if (now - self.last_update) * 1000 >= self.speed_ms:
            self.advance()
            self.last_update = now
            return True
        return False

    @abstractmethod
    def advance(self) -> None:
        """Advance animation by one frame (update pixels, no show())"""
        pass


def segment_bounds(num_pixels: int, segment_count: int) -> List[Tuple[int, int]]:
    """
    Split a strip into equal (start, end) pixel ranges, one per signal.

    Leftover pixels at the end of the strip stay unused.
    """
    per_segment = num_pixels // segment_count
    return [(i * per_segment, (i + 1) * per_segment) for i in range(segment_count)]


class SignalPanelAnimation(Animation):
    """
    The in-game panel: every signal owns a segment of the strip, lit at full
    color while its highlight flag is set and glowing dimly otherwise.

    Only redraws when the flags actually change.
    """

    def __init__(self, strip: 'LedStrip', signals: Sequence['SignalConfig'], speed_ms: int = 10,
                 dim_factor: float = 0.08, clock: Callable[[], float] = time.time):
        """
        Args:
            strip: LED strip to operate on
            signals: Signal configs in index order
            speed_ms: Minimum time between redraws
            dim_factor: Brightness of unlit segments (0.0 = off)
            clock: Time source in seconds
        """
        super().__init__(strip, speed_ms, clock)
        self.colors: List[Pixel] = [Pixel.from_rgb(signal.color) for signal in signals]
        self.dim_factor = dim_factor
        self.segments = segment_bounds(strip.num_pixels(), len(self.colors))
        self.highlights: Tuple[bool, ...] = (False,) * len(self.colors)
        self._drawn = None

    def set_highlights(self, highlights: Sequence[bool]) -> None:
        self.highlights = tuple(highlights)

    def update_if_needed(self) -> bool:
        if self._drawn == self.highlights:
            return False
        return super().update_if_needed()

    def advance(self) -> None:
        for (start, end), color, lit in zip(self.segments, self.colors, self.highlights):
            self.strip[start:end] = color if lit else color.scaled(self.dim_factor)
        self._drawn = self.highlights

    def invalidate(self) -> None:
        """Force a redraw on the next update (after another animation used the strip)"""
        self._drawn = None


class AttractAnimation(Animation):
    """
    Idle "press any color to start" animation: all segments breathe
    together in their own colors.
    """

    def __init__(self, strip: 'LedStrip', signals: Sequence['SignalConfig'], speed_ms: int = 40,
                 brightness_range: Tuple[float, float] = (0.05, 0.6), period_ms: int = 2400,
                 clock: Callable[[], float] = time.time):
        """
        Args:
            strip: LED strip to operate on
            signals: Signal configs in index order
            speed_ms: Animation update interval
            brightness_range: (min_brightness, max_brightness) tuple
            period_ms: Length of one full breath
            clock: Time source in seconds
        """
        super().__init__(strip, speed_ms, clock)
        self.colors: List[Pixel] = [Pixel.from_rgb(signal.color) for signal in signals]
        self.segments = segment_bounds(strip.num_pixels(), len(self.colors))
        self.brightness_range = brightness_range
        self.period_ms = period_ms

    def current_brightness(self) -> float:
        """Brightness on a sine wave derived from the clock"""
        phase = (self._clock() * 1000 % self.period_ms) / self.period_ms * 2 * math.pi
        low, high = self.brightness_range
        return low + (high - low) * (0.5 + 0.5 * math.sin(phase))

    def advance(self) -> None:
        brightness = self.current_brightness()
        for (start, end), color in zip(self.segments, self.colors):
            self.strip[start:end] = color.scaled(brightness)
