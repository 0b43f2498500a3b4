"""
Game system configuration
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple


PULL_MODES = ("off", "up", "down")


@dataclass(frozen=True)
class SignalConfig:
    """One colored button/tone the player can choose"""
    name: str
    tone_hz: float
    color: Tuple[int, int, int]


def default_signals() -> Tuple[SignalConfig, ...]:
    """The classic four Simon signals (index order matches button order)"""
    return (
        SignalConfig("green", 192.0, (0, 255, 0)),    # G3
        SignalConfig("red", 262.0, (255, 0, 0)),      # C4
        SignalConfig("yellow", 330.0, (255, 200, 0)), # E4
        SignalConfig("blue", 392.0, (0, 0, 255)),     # G4
    )


@dataclass
class TimingConfig:
    """Playback and round pacing, all in milliseconds"""
    max_signal_duration_ms: int = 300
    min_signal_duration_ms: int = 100
    duration_step_ms: int = 10
    inter_signal_gap_ms: int = 50
    startup_delay_ms: int = 300
    settle_delay_ms: int = 200

    def signal_duration_ms(self, score: int) -> int:
        """
        Highlight/tone length for one signal at the given score.

        Shrinks by duration_step_ms per point until it hits the floor.
        """
        return max(self.min_signal_duration_ms,
                   self.max_signal_duration_ms - score * self.duration_step_ms)


@dataclass
class LedStripConfig:
    """Configuration for a single LED strip"""
    gpio_pin: int
    led_count: int
    freq_hz: int = 800000
    dma: int = 10
    invert: bool = False
    brightness: int = 26  # 0-255
    channel: int = 0


@dataclass
class ButtonConfig:
    """Button hardware configuration (pins in signal order)"""
    pins: List[int] = field(default_factory=list)
    pull_mode: str = "off"
    sample_rate_hz: int = 200


@dataclass
class AudioConfig:
    """Audio output settings"""
    sounds_folder: str = "sounds"
    sample_rate: int = 44100
    tone_volume: float = 0.5
    cue_volume: float = 0.8


@dataclass
class ReportingConfig:
    """Where finished games and live snapshots are written (None disables)"""
    scores_csv_path: Optional[str] = "simon_scores.csv"
    state_json_path: Optional[str] = None


@dataclass
class GameConfig:
    """Main game system configuration"""

    signals: Tuple[SignalConfig, ...] = field(default_factory=default_signals)
    button_config: ButtonConfig = field(default_factory=ButtonConfig)
    led_strips: List[LedStripConfig] = field(default_factory=list)
    timing: TimingConfig = field(default_factory=TimingConfig)
    audio: AudioConfig = field(default_factory=AudioConfig)
    reporting: ReportingConfig = field(default_factory=ReportingConfig)

    frame_duration_ms: float = 20.0  # 50 FPS

    def __post_init__(self):
        self.signals = tuple(self.signals)

    @property
    def signal_count(self) -> int:
        return len(self.signals)

    @property
    def signal_names(self) -> List[str]:
        return [signal.name for signal in self.signals]

    @property
    def target_fps(self) -> float:
        return 1000.0 / self.frame_duration_ms

    def validate(self) -> None:
        """Basic validation of configuration, raises ValueError on the first problem"""
        if len(self.signals) < 2:
            raise ValueError("At least two signals must be configured")

        names = self.signal_names
        if len(set(names)) != len(names):
            raise ValueError(f"Signal names must be unique: {names}")

        for signal in self.signals:
            if signal.tone_hz <= 0:
                raise ValueError(f"Signal '{signal.name}' tone must be positive, got {signal.tone_hz}")
            if len(signal.color) != 3 or not all(0 <= c <= 255 for c in signal.color):
                raise ValueError(f"Signal '{signal.name}' color must be an RGB triple 0-255, got {signal.color}")

        if self.frame_duration_ms <= 0:
            raise ValueError("Frame duration must be positive")

        timing = self.timing
        if timing.min_signal_duration_ms <= 0:
            raise ValueError("Minimum signal duration must be positive")
        if timing.min_signal_duration_ms > timing.max_signal_duration_ms:
            raise ValueError(
                f"Minimum signal duration ({timing.min_signal_duration_ms}ms) exceeds "
                f"maximum ({timing.max_signal_duration_ms}ms)"
            )
        for name in ("duration_step_ms", "inter_signal_gap_ms", "startup_delay_ms", "settle_delay_ms"):
            if getattr(timing, name) < 0:
                raise ValueError(f"Timing value {name} must not be negative")

        # Button pins are optional (keyboard input), but when given there is one per signal
        pins = self.button_config.pins
        if pins and len(pins) != len(self.signals):
            raise ValueError(f"Expected {len(self.signals)} button pins, got {len(pins)}")
        if self.button_config.pull_mode not in PULL_MODES:
            raise ValueError(f"Unknown pull mode '{self.button_config.pull_mode}', use one of {PULL_MODES}")

        led_pins = set(strip.gpio_pin for strip in self.led_strips)
        if set(pins) & led_pins:
            raise ValueError(f"GPIO pin conflict between buttons and LEDs: {set(pins) & led_pins}")

        for pin in pins:
            if not (2 <= pin <= 27):  # Valid RPi GPIO range
                raise ValueError(f"Button GPIO pin {pin} out of valid range (2-27)")

        for strip in self.led_strips:
            if not (2 <= strip.gpio_pin <= 27):
                raise ValueError(f"LED strip GPIO pin {strip.gpio_pin} out of valid range (2-27)")
            if strip.led_count < len(self.signals):
                raise ValueError(f"LED strip needs at least one LED per signal, got {strip.led_count}")
            if not (0 <= strip.brightness <= 255):
                raise ValueError(f"LED brightness must be 0-255, got {strip.brightness}")

        if not (0.0 <= self.audio.tone_volume <= 1.0) or not (0.0 <= self.audio.cue_volume <= 1.0):
            raise ValueError("Audio volumes must be between 0.0 and 1.0")
