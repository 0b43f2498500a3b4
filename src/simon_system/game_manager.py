"""
Main game manager - connects buttons, the Simon engine and the LED panels
"""

import time
from typing import Callable, List, Optional, TYPE_CHECKING

import psutil

from led_system.pixel import BLACK
from utils import OnceInMs
from .animations import Animation, AttractAnimation, SignalPanelAnimation
from .session import Phase

if TYPE_CHECKING:
    from audio_system.interfaces import IToneAndCuePlayer
    from button_system.button_state import ButtonState
    from button_system.interfaces import IButtonReader
    from led_system.interfaces import LedStrip
    from utils import ClassLogger
    from .engine import SimonEngine


class SimonGameManager:
    """
    Frame loop around a SimonEngine.

    Responsibilities:
    - Turn button presses into start()/submit() calls
    - Tick the engine once per frame
    - Render the attract animation while idle and the signal panel otherwise
    - Maintain consistent frame timing
    """

    def __init__(self,
                 button_reader: 'IButtonReader',
                 engine: 'SimonEngine',
                 led_strips: List['LedStrip'],
                 sound_controller: 'IToneAndCuePlayer',
                 logger: 'ClassLogger',
                 frame_duration_ms: float = 20.0,
                 quit_requested: Optional[Callable[[], bool]] = None,
                 clock: Callable[[], float] = time.time):
        """
        Initialize the game manager.

        Args:
            button_reader: Interface for reading button states (one button per signal)
            engine: The Simon engine to drive
            led_strips: LED strips that mirror the signal panel (may be empty)
            sound_controller: Cleaned up when the game stops
            logger: Logger for debugging and monitoring
            frame_duration_ms: Target frame duration in milliseconds
            quit_requested: Polled every frame, the loop ends when it returns True
            clock: Time source in seconds (shared with the animations)
        """
        if button_reader.get_button_count() != len(engine.signals):
            raise ValueError(
                f"Button count ({button_reader.get_button_count()}) does not match "
                f"signal count ({len(engine.signals)})"
            )

        self.button_reader = button_reader
        self.engine = engine
        self.led_strips = led_strips
        self.sound_controller = sound_controller
        self.logger = logger
        self.target_frame_duration = frame_duration_ms / 1000.0
        self.running = True
        self._stopped = False
        self._quit_requested = quit_requested
        self._clock = clock

        self.panels = [SignalPanelAnimation(strip, engine.signals, clock=clock) for strip in led_strips]
        self.attract = [AttractAnimation(strip, engine.signals, clock=clock) for strip in led_strips]
        self._attract_mode: Optional[bool] = None

        self._memory_monitor = OnceInMs(60000, clock=clock)
        self._process = psutil.Process()

        self.logger.info(
            f"SimonGameManager initialized: {frame_duration_ms}ms frame duration, {len(led_strips)} LED strips"
        )

    def run_game_loop(self) -> None:
        """
        Run the game loop with automatic frame duration limiting.

        Call this from your main() function for automatic frame management.
        """
        self.logger.info(f"Starting game loop with {int(self.target_frame_duration * 1000)}ms frame duration")

        try:
            while self.running:
                frame_start = time.time()

                self.update()

                if self._quit_requested is not None and self._quit_requested():
                    self.logger.info("Quit requested")
                    break

                frame_duration = time.time() - frame_start
                sleep_time = self.target_frame_duration - frame_duration
                if sleep_time > 0:
                    time.sleep(sleep_time)

        except KeyboardInterrupt:
            self.logger.info("Game stopped by user (Ctrl+C)")
            self.logger.flush()
        except Exception as e:
            self.logger.error(f"Game loop error: {e}", exception=e)
            self.logger.flush()
            raise
        finally:
            self.stop()

    def update(self) -> None:
        """
        One frame: input, engine tick, LED output.
        """
        if self._memory_monitor.should_execute():
            self._log_memory_usage()

        button_state = self.button_reader.read_buttons()
        self.handle_buttons(button_state)

        self.engine.update()

        self.render()

    def handle_buttons(self, button_state: 'ButtonState') -> None:
        """
        A press while idle starts a game chosen by that color; every other
        press is a pick.
        """
        for index in button_state.newly_pressed:
            if self.engine.phase is Phase.IDLE:
                self.engine.start(self.engine.signals[index].name)
            else:
                self.engine.submit(index)

    def render(self) -> None:
        """Update the LED buffers and show() the strips that changed"""
        attract_mode = self.engine.phase is Phase.IDLE
        if attract_mode != self._attract_mode:
            self._attract_mode = attract_mode
            for panel in self.panels:
                panel.invalidate()
            self.logger.debug(f"LED mode: {'attract' if attract_mode else 'panel'}")

        highlights = self.engine.highlights
        for strip, panel, attract in zip(self.led_strips, self.panels, self.attract):
            animation: Animation
            if attract_mode:
                animation = attract
            else:
                panel.set_highlights(highlights)
                animation = panel
            if animation.update_if_needed():
                strip.show()

    def stop(self) -> None:
        """Stop the game and clean up resources."""
        if self._stopped:
            return
        self._stopped = True
        self.running = False

        if self.engine.is_playing:
            self.engine.abort()

        # Audio device is released before the LEDs
        if self.sound_controller:
            self.sound_controller.cleanup()

        self.button_reader.cleanup()

        for strip in self.led_strips:
            strip[:] = BLACK
            strip.show()

        self.logger.info("Game stopped")

    def _log_memory_usage(self) -> None:
        """Log current memory and CPU usage (process and system)"""
        try:
            mem_info = self._process.memory_info()
            process_mb = mem_info.rss / 1024 / 1024
            process_cpu_percent = self._process.cpu_percent(interval=None)

            sys_mem = psutil.virtual_memory()
            sys_total_mb = sys_mem.total / 1024 / 1024
            sys_used_mb = sys_mem.used / 1024 / 1024
            sys_cpu_percent = psutil.cpu_percent(interval=None)

            self.logger.info(
                f"💾 Memory - Process: {process_mb:.1f}MB | "
                f"System: {sys_used_mb:.0f}/{sys_total_mb:.0f}MB ({sys_mem.percent:.1f}%) | "
                f"⚙️  CPU - Process: {process_cpu_percent:.1f}% | System: {sys_cpu_percent:.1f}%"
            )
        except psutil.Error as e:
            self.logger.warning(f"Failed to log system usage: {e}")
