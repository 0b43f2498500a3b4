"""
Audio System Module

Tone synthesis and cue playback for the SimonPi game. The pygame backed
SoundController is imported from its own module so the rest of the
package can be used without an audio device.
"""

from .interfaces import GameSounds, ICueHandle, IToneAndCuePlayer, SOUNDS_FOLDER
from .mock_sound_controller import MockSoundController, TimedCueHandle
from .tones import synthesize_tone

__all__ = [
    'GameSounds',
    'ICueHandle',
    'IToneAndCuePlayer',
    'SOUNDS_FOLDER',
    'MockSoundController',
    'TimedCueHandle',
    'synthesize_tone'
]
