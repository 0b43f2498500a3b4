"""
Keyboard sampler for playing without GPIO hardware
"""

import select
import sys
import termios
import tty
from typing import Dict, List, Optional

from .interfaces import IButtonSampler


class KeyboardSampler(IButtonSampler):
    """
    Terminal keyboard sampler for development machines and SSH sessions.

    Every key press is a tap: the mapped button reads as pressed for exactly
    one read cycle, which gives the reader one rising edge per key press.
    Digit keys 0-9 map to buttons 0-9 unless a key_map is given.

    Example:
        sampler = KeyboardSampler(
            num_buttons=4,
            logger=logger,
            key_map={"g": 0, "r": 1, "y": 2, "b": 3}
        )
        # 'q' sets quit_requested for the game loop to pick up
    """

    def __init__(self, num_buttons: int, logger, key_map: Optional[Dict[str, int]] = None, stream=None):
        """
        Initialize keyboard sampler.

        Args:
            num_buttons: Number of virtual buttons
            logger: ClassLogger instance for logging
            key_map: Key → button index, defaults to digit keys
            stream: Input stream (defaults to sys.stdin)
        """
        if key_map is None:
            if num_buttons > 10:
                raise ValueError("KeyboardSampler supports max 10 buttons with digit keys 0-9")
            key_map = {str(i): i for i in range(num_buttons)}
        for key, index in key_map.items():
            if not 0 <= index < num_buttons:
                raise ValueError(f"Key '{key}' maps to button {index}, only 0-{num_buttons - 1} exist")

        self._button_count = num_buttons
        self._logger = logger
        self._key_map = {key.lower(): index for key, index in key_map.items()}
        self._stream = stream if stream is not None else sys.stdin
        self._tapped: List[bool] = [False] * num_buttons
        self._original_terminal_settings = None
        self.quit_requested = False

    def get_button_count(self) -> int:
        return self._button_count

    def setup(self) -> None:
        """Switch the terminal to raw mode for immediate key capture"""
        if not self._stream.isatty():
            self._logger.error("❌ Keyboard input not available (stdin is not a TTY)")
            raise RuntimeError("Keyboard input not available")

        try:
            self._original_terminal_settings = termios.tcgetattr(self._stream)
            tty.setcbreak(self._stream.fileno())
        except termios.error as e:
            self._logger.error(f"❌ Could not enable raw terminal mode: {e}")
            raise RuntimeError("Failed to enable raw terminal mode") from e

        keys = ", ".join(f"'{key}'→{index}" for key, index in sorted(self._key_map.items(), key=lambda kv: kv[1]))
        self._logger.info(f"🎮 Keyboard sampler initialized (NO GPIO): {keys}, 'q' to quit")

    def poll(self) -> None:
        """Drain pending key presses (non-blocking) into this cycle's taps"""
        self._tapped = [False] * self._button_count
        while select.select([self._stream], [], [], 0)[0]:
            key = self._stream.read(1)
            if not key:
                break
            self.handle_key(key)

    def handle_key(self, key: str) -> None:
        """Apply one key press"""
        key = key.lower()
        if key == 'q':
            self._logger.info("Keyboard: 'q' pressed (quit key)")
            self.quit_requested = True
            return

        index = self._key_map.get(key)
        if index is None:
            self._logger.debug(f"Keyboard: unmapped key {key!r}")
            return
        self._tapped[index] = True

    def read_button(self, button_index: int) -> bool:
        return self._tapped[button_index]

    def cleanup(self) -> None:
        """Restore original terminal settings"""
        if self._original_terminal_settings is not None:
            termios.tcsetattr(self._stream.fileno(), termios.TCSADRAIN, self._original_terminal_settings)
            self._original_terminal_settings = None
            self._logger.info("Keyboard sampler cleaned up")
