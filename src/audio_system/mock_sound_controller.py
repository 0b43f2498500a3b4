"""
Mock Sound Controller - No-op implementation for running without audio hardware
"""

import time
from typing import Callable, Dict, List, Optional, Tuple

from .interfaces import GameSounds, ICueHandle, IToneAndCuePlayer


class TimedCueHandle(ICueHandle):
    """Cue that counts as finished once a simulated duration has elapsed"""

    def __init__(self, clock: Callable[[], float], duration_ms: float):
        self._clock = clock
        self._ends_at_ms = self._now_ms() + duration_ms

    def _now_ms(self) -> float:
        return round(self._clock() * 1000, 3)

    def is_done(self) -> bool:
        return self._now_ms() >= self._ends_at_ms


class MockSoundController(IToneAndCuePlayer):
    """
    Mock implementation of SoundController that performs no audio operations.

    Keeps a record of every tone and cue so tests and headless runs can see
    what would have been played. Cues finish after a simulated duration
    measured on the injected clock (0 = finished immediately).
    """

    def __init__(self, logger, clock: Callable[[], float] = time.time,
                 cue_durations_ms: Optional[Dict[GameSounds, float]] = None):
        """
        Initialize mock sound controller.

        Args:
            logger: ClassLogger instance for logging
            clock: Time source in seconds (same one the engine uses)
            cue_durations_ms: Simulated length per cue, missing cues take 0ms
        """
        self.logger = logger
        self._clock = clock
        self.cue_durations_ms: Dict[GameSounds, float] = dict(cue_durations_ms or {})

        self.tones_played: List[Tuple[float, int]] = []
        self.sounds_played: List[GameSounds] = []

        self.logger.info("🔇 MockSoundController initialized (audio disabled)")

    def play_tone(self, frequency_hz: float, duration_ms: int) -> None:
        """Mock: record the tone"""
        self.tones_played.append((frequency_hz, duration_ms))
        self.logger.debug(f"Mock: Tone {frequency_hz:.0f}Hz for {duration_ms}ms")

    def play_sound(self, sound: GameSounds) -> ICueHandle:
        """Mock: record the cue and return a handle that finishes after its simulated duration"""
        self.sounds_played.append(sound)
        duration = self.cue_durations_ms.get(sound, 0)
        self.logger.debug(f"Mock: Playing sound {sound.name} ({duration:.0f}ms)")
        return TimedCueHandle(self._clock, duration)

    def cleanup(self) -> None:
        self.logger.debug("Mock: Sound controller cleaned up")
