"""
Sound Controller - Plays signal tones and game cues through pygame
"""

import os
from typing import Dict, Optional, Tuple

import pygame

from .interfaces import GameSounds, ICueHandle, IToneAndCuePlayer
from .tones import synthesize_tone


class ChannelCueHandle(ICueHandle):
    """Wraps the pygame channel a cue is playing on"""

    def __init__(self, channel: Optional[pygame.mixer.Channel]):
        self._channel = channel

    def is_done(self) -> bool:
        # play() returns None when no channel was free - nothing to wait for
        return self._channel is None or not self._channel.get_busy()


class SoundController(IToneAndCuePlayer):
    """
    Controls all audio playback for the game.

    Signal tones are synthesised on demand and cached per
    (frequency, duration) pair, since the duration only changes once per
    round. Cue files are loaded and validated up front.
    """

    def __init__(self, logger, sounds_folder: str = "sounds", sample_rate: int = 44100,
                 tone_volume: float = 0.5, cue_volume: float = 0.8):
        """
        Initialize sound controller with pygame mixer and validate sound files.

        Args:
            logger: ClassLogger instance for logging
            sounds_folder: Folder containing the GameSounds files
            sample_rate: Mixer sample rate
            tone_volume: Signal tone volume (0.0 to 1.0)
            cue_volume: Cue volume (0.0 to 1.0)

        Raises:
            FileNotFoundError: If any required sound files are missing
            pygame.error: If the mixer or a sound file fails to load
        """
        self.logger = logger
        self.sounds_folder = sounds_folder
        self.tone_volume = tone_volume
        self.cue_volume = cue_volume

        self.mixer = pygame.mixer
        self.mixer.init(frequency=sample_rate, size=-16, channels=1)
        self._sample_rate, _, self._channels = self.mixer.get_init()

        self._tone_cache: Dict[Tuple[float, int], pygame.mixer.Sound] = {}
        self._sound_objects: Dict[GameSounds, pygame.mixer.Sound] = {}
        self._load_and_validate_sounds()

        self.logger.info(
            f"SoundController initialized: {self._sample_rate}Hz, {self._channels} channel(s), "
            f"{len(self._sound_objects)} cues"
        )

    def _load_and_validate_sounds(self) -> None:
        """
        Load all cue files, failing fast if any is missing or unreadable.

        Raises:
            FileNotFoundError: If any sound files are missing
            pygame.error: If sound files fail to load
        """
        missing_files = []
        for sound in GameSounds:
            sound_path = sound.get_sound_path(self.sounds_folder)
            if not os.path.exists(sound_path):
                missing_files.append(sound_path)

        if missing_files:
            raise FileNotFoundError(f"Required sound files not found: {missing_files}")

        for sound in GameSounds:
            sound_path = sound.get_sound_path(self.sounds_folder)
            try:
                sound_obj = pygame.mixer.Sound(sound_path)
            except pygame.error as e:
                raise pygame.error(f"Failed to load sound {sound.name} from {sound_path}: {e}")
            sound_obj.set_volume(self.cue_volume)
            self._sound_objects[sound] = sound_obj

    def _get_tone(self, frequency_hz: float, duration_ms: int) -> pygame.mixer.Sound:
        key = (frequency_hz, duration_ms)
        tone = self._tone_cache.get(key)
        if tone is None:
            samples = synthesize_tone(
                frequency_hz,
                duration_ms,
                sample_rate=self._sample_rate,
                channels=self._channels,
                volume=self.tone_volume
            )
            tone = pygame.mixer.Sound(buffer=samples.tobytes())
            self._tone_cache[key] = tone
            self.logger.debug(f"Synthesised tone {frequency_hz:.0f}Hz/{duration_ms}ms")
        return tone

    def play_tone(self, frequency_hz: float, duration_ms: int) -> None:
        """Play a signal tone (fire-and-forget)"""
        self._get_tone(frequency_hz, duration_ms).play()

    def play_sound(self, sound: GameSounds) -> ICueHandle:
        """Play a cue and return a handle tracking its channel"""
        channel = self._sound_objects[sound].play()
        if channel is None:
            self.logger.warning(f"No free mixer channel for {sound.name}")
        return ChannelCueHandle(channel)

    def cleanup(self) -> None:
        """Stop everything and close the audio device"""
        if self.mixer.get_init():
            self.mixer.stop()
            self.mixer.quit()
            self.logger.info("SoundController cleaned up")
        self._tone_cache.clear()
