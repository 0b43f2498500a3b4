"""
Abstract interfaces for tone and cue playback
"""

import enum
from abc import ABC, abstractmethod


SOUNDS_FOLDER = "sounds"


class GameSounds(enum.Enum):
    """Game cue files, relative to the sounds folder"""
    LEVEL_UP = "levelup.mp3"
    GAME_OVER = "gameover.mp3"

    def get_sound_path(self, sounds_folder: str = SOUNDS_FOLDER) -> str:
        """Get the full path to the sound file"""
        return f"{sounds_folder.rstrip('/')}/{self.value}"


class ICueHandle(ABC):
    """Completion signal for a playing cue, polled once per frame"""

    @abstractmethod
    def is_done(self) -> bool:
        """True once the cue has finished (or could not be played)"""
        pass


class IToneAndCuePlayer(ABC):
    """
    Audio output used by the game engine.

    Tones are fire-and-forget; the engine never waits for them. Cues
    (level up, game over) return a handle the engine polls before moving on.
    """

    @abstractmethod
    def play_tone(self, frequency_hz: float, duration_ms: int) -> None:
        """
        Start a tone without blocking.

        Args:
            frequency_hz: Tone frequency
            duration_ms: Tone length in milliseconds
        """
        pass

    @abstractmethod
    def play_sound(self, sound: GameSounds) -> ICueHandle:
        """
        Start a cue sound.

        Args:
            sound: GameSounds value to play

        Returns:
            ICueHandle to poll for completion
        """
        pass

    @abstractmethod
    def cleanup(self) -> None:
        """Release the audio device"""
        pass
