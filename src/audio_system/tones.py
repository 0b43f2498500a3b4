"""
Tone synthesis - 16-bit PCM sine waves for the signal tones
"""

import numpy as np


MAX_AMPLITUDE = 32767


def synthesize_tone(frequency_hz: float, duration_ms: int, sample_rate: int = 44100,
                    channels: int = 1, volume: float = 0.5, fade_ms: int = 5) -> np.ndarray:
    """
    Build a sine tone as signed 16-bit samples, one column per channel.

    A short linear fade in/out keeps the speaker from clicking at the
    start and end of each blink.

    Args:
        frequency_hz: Tone frequency
        duration_ms: Tone length in milliseconds
        sample_rate: Samples per second
        channels: Channel count (mixer layout)
        volume: Peak amplitude 0.0-1.0
        fade_ms: Fade in/out length in milliseconds

    Returns:
        C-contiguous int16 array of shape (frames, channels), ready for
        pygame.sndarray.make_sound()
    """
    if frequency_hz <= 0:
        raise ValueError(f"Frequency must be positive, got {frequency_hz}")
    if channels < 1:
        raise ValueError(f"Channel count must be positive, got {channels}")

    frame_count = int(sample_rate * duration_ms / 1000)
    fade_frames = min(int(sample_rate * fade_ms / 1000), frame_count // 2)
    amplitude = MAX_AMPLITUDE * max(0.0, min(volume, 1.0))

    t = np.arange(frame_count) / sample_rate
    wave = np.sin(2 * np.pi * frequency_hz * t)

    if fade_frames:
        envelope = np.ones(frame_count)
        ramp = np.arange(fade_frames) / fade_frames
        envelope[:fade_frames] = ramp
        envelope[frame_count - fade_frames:] = ramp[::-1]
        wave *= envelope

    samples = (amplitude * wave).astype(np.int16)
    return np.ascontiguousarray(np.repeat(samples[:, None], channels, axis=1))
