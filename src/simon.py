#!/usr/bin/env python3
"""
Simon Interactive Game System

Main application for the Simon sequence-memory cabinet: colored buttons,
LED panels, synthesised tones, and a score log for the scoreboard.
"""

import sys
import os

# Configure SDL audio before pygame imports (ALSA on the Pi, overridable from the shell)
os.environ.setdefault('SDL_AUDIODRIVER', 'alsa')

import argparse
import atexit
import logging
import signal
from pathlib import Path
from typing import List, Optional

# Global logger reference for signal handlers
_global_logger = None


def emergency_flush_and_log(sig=None, frame=None):
    """Emergency handler - flush logs before exit"""
    if _global_logger:
        if sig:
            _global_logger.critical(f"⚠️  SIGNAL RECEIVED: {sig} - Process terminating")
        _global_logger.flush()

    if sig == signal.SIGINT:
        # CTRL+C - exit cleanly
        sys.exit(0)
    elif sig:
        sys.exit(1)


# Add src to path for imports when run as a script
sys.path.insert(0, str(Path(__file__).parent))

from audio_system import GameSounds, MockSoundController, SOUNDS_FOLDER  # noqa: E402
from button_system import ButtonReader, GPIOSampler, KeyboardSampler  # noqa: E402
from led_system import PixelStripAdapter  # noqa: E402
from score_system import CsvScoreSink, JsonStateMirror  # noqa: E402
from simon_system import SimonEngine, SimonGameManager, SequenceGenerator  # noqa: E402
from simon_system.config import (  # noqa: E402
    GameConfig, ButtonConfig, LedStripConfig, AudioConfig, ReportingConfig, TimingConfig, default_signals
)
from utils import HybridLogger  # noqa: E402


def create_simon_config() -> GameConfig:
    """Default configuration for the cabinet"""

    button_config = ButtonConfig(
        pins=[
            5,   # green
            6,   # red
            22,  # yellow
            17,  # blue
        ],
        pull_mode="off",
        sample_rate_hz=200
    )

    led_strips = [
        # One strip around the panel, split into a segment per signal
        LedStripConfig(
            gpio_pin=18,
            led_count=120,
            dma=10,
            brightness=64,
            channel=0
        )
    ]

    return GameConfig(
        signals=default_signals(),
        button_config=button_config,
        led_strips=led_strips,
        timing=TimingConfig(),
        audio=AudioConfig(sounds_folder=SOUNDS_FOLDER),
        reporting=ReportingConfig(scores_csv_path="simon_scores.csv", state_json_path=None),
        frame_duration_ms=20  # 50 FPS
    )


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Simon sequence-memory game")
    cue_files = ", ".join(sound.value for sound in GameSounds)
    parser.add_argument("--mock-audio", action="store_true",
                        help=f"run without audio hardware or cue files (real audio needs {cue_files})")
    parser.add_argument("--sounds", metavar="DIR", help=f"folder holding {cue_files} (default from config)")
    parser.add_argument("--keyboard", action="store_true",
                        help="use terminal keys instead of GPIO buttons (digits, or the first letter of each color)")
    parser.add_argument("--no-leds", action="store_true", help="run without LED strips")
    parser.add_argument("--scores", metavar="CSV", help="score log path (default from config)")
    parser.add_argument("--state-file", metavar="JSON", help="mirror the live game state to this file")
    parser.add_argument("--seed", type=int, help="seed the sequence generator (repeatable games)")
    parser.add_argument("--log-dir", default="logs", help="directory for log files")
    parser.add_argument("--debug", action="store_true", help="log at DEBUG level")
    return parser.parse_args(argv)


def keyboard_key_map(config: GameConfig):
    """First letter of each signal name, when those letters are unique"""
    letters = [signal.name[0].lower() for signal in config.signals]
    if len(set(letters)) != len(letters) or 'q' in letters:
        return None
    return {letter: i for i, letter in enumerate(letters)}


def create_game_system(config: GameConfig, simon_logger, args: argparse.Namespace) -> SimonGameManager:
    """
    Create and configure the complete game system using provided config.

    Args:
        config: GameConfig instance with all system configuration
        simon_logger: ClassLogger instance for logging initialization steps
        args: Parsed command line flags

    Returns:
        SimonGameManager: Configured game manager ready to run
    """
    config.validate()

    level = logging.DEBUG if args.debug else logging.INFO
    manager_logger = simon_logger.create_class_logger("SimonGameManager", level)
    engine_logger = simon_logger.create_class_logger("SimonEngine", level)
    button_reader_logger = simon_logger.create_class_logger("ButtonReader", level)
    sound_controller_logger = simon_logger.create_class_logger("SoundController", level)
    score_logger = simon_logger.create_class_logger("ScoreSystem", level)

    try:
        # Button input
        quit_requested = None
        if args.keyboard:
            button_sampler = KeyboardSampler(
                num_buttons=config.signal_count,
                logger=button_reader_logger,
                key_map=keyboard_key_map(config)
            )
            quit_requested = lambda: button_sampler.quit_requested  # noqa: E731
        else:
            button_sampler = GPIOSampler(
                button_pins=config.button_config.pins,
                pull_mode=config.button_config.pull_mode,
                logger=button_reader_logger
            )
        button_reader = ButtonReader(sampler=button_sampler, logger=button_reader_logger)

        # Audio
        if args.mock_audio:
            simon_logger.info("🔇 Using MockSoundController (audio hardware disabled)")
            sound_controller = MockSoundController(logger=sound_controller_logger)
        else:
            from audio_system.sound_controller import SoundController
            sounds_folder = args.sounds or config.audio.sounds_folder
            try:
                sound_controller = SoundController(
                    logger=sound_controller_logger,
                    sounds_folder=sounds_folder,
                    sample_rate=config.audio.sample_rate,
                    tone_volume=config.audio.tone_volume,
                    cue_volume=config.audio.cue_volume
                )
            except FileNotFoundError:
                simon_logger.error(
                    f"Cue files missing from '{sounds_folder}': put "
                    f"{', '.join(sound.value for sound in GameSounds)} there, "
                    f"point --sounds at them, or run with --mock-audio"
                )
                raise

        # Score log and state mirror
        scores_path = args.scores or config.reporting.scores_csv_path
        score_sink = CsvScoreSink(scores_path, score_logger) if scores_path else None
        state_path = args.state_file or config.reporting.state_json_path
        state_sink = JsonStateMirror(state_path, score_logger) if state_path else None

        if score_sink is not None:
            best = score_sink.best_score()
            if best is not None:
                simon_logger.info(f"🏆 Best score so far: {best.score} ({best.color})")

        # LED strips
        led_strips = []
        if not args.no_leds:
            led_strips = [PixelStripAdapter.from_config(strip_config) for strip_config in config.led_strips]

        for strip in led_strips:
            strip.clear()

        engine = SimonEngine(
            config=config,
            sound_controller=sound_controller,
            score_sink=score_sink,
            state_sink=state_sink,
            logger=engine_logger,
            generator=SequenceGenerator(config.signal_count, seed=args.seed)
        )

        game_manager = SimonGameManager(
            button_reader=button_reader,
            engine=engine,
            led_strips=led_strips,
            sound_controller=sound_controller,
            logger=manager_logger,
            frame_duration_ms=config.frame_duration_ms,
            quit_requested=quit_requested
        )

        simon_logger.info("Simon system initialized successfully")
        simon_logger.info(
            f"Hardware: {button_reader.get_button_count()} buttons, {len(led_strips)} LED strips, "
            f"{config.frame_duration_ms}ms frame duration"
        )
        return game_manager

    except Exception as e:
        simon_logger.error(f"Failed to initialize Simon system: {e}", exception=e)
        raise


def main(argv: Optional[List[str]] = None):
    """
    Main function - sets up and runs the Simon system.
    """
    args = parse_args(argv)

    main_logger = HybridLogger("SimonSystem", log_dir=args.log_dir)
    simon_logger = main_logger.get_class_logger("Simon", logging.DEBUG if args.debug else logging.INFO)

    global _global_logger
    _global_logger = simon_logger

    signal.signal(signal.SIGTERM, emergency_flush_and_log)
    signal.signal(signal.SIGHUP, emergency_flush_and_log)
    atexit.register(main_logger.flush)

    simon_logger.info("🎮 SIMON INTERACTIVE SYSTEM")

    config = create_simon_config()

    simon_logger.info(f"Signals: {', '.join(f'{s.name} ({s.tone_hz:.0f}Hz)' for s in config.signals)}")
    if args.keyboard:
        simon_logger.info("Button configuration: terminal keyboard")
    else:
        simon_logger.info(f"Button configuration: GPIO {config.button_config.pins}")
    simon_logger.info(f"LED configuration: {0 if args.no_leds else len(config.led_strips)} strips")
    simon_logger.info(f"Game settings: {config.frame_duration_ms}ms frame duration ({config.target_fps:.1f} FPS)")
    timing = config.timing
    simon_logger.info(
        f"Timing: {timing.max_signal_duration_ms}→{timing.min_signal_duration_ms}ms per signal "
        f"(-{timing.duration_step_ms}ms per point), {timing.inter_signal_gap_ms}ms gap"
    )

    try:
        game_manager = create_game_system(config, simon_logger, args)

        simon_logger.info("✅ System initialized successfully!")
        simon_logger.info("🚀 Starting Simon system... press any color to play")

        game_manager.run_game_loop()

    except KeyboardInterrupt:
        simon_logger.info("⏹️  Simon stopped by user")
        simon_logger.flush()
    except Exception as e:
        simon_logger.error(f"Simon system error: {e}", exception=e)
        simon_logger.flush()
        raise
    finally:
        # Hardware cleanup is handled by SimonGameManager.stop()
        simon_logger.info("✅ Simon system shut down")
        main_logger.cleanup()


if __name__ == "__main__":
    main()
