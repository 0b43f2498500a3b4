"""
GPIO-based button sampler implementation using RPi.GPIO
"""

from typing import List

from .interfaces import IButtonSampler


class GPIOSampler(IButtonSampler):
    """
    GPIO button sampling for the real cabinet.

    RPi.GPIO is imported in setup(), so this module can be imported on any
    machine; creating the hardware connection requires a Raspberry Pi.
    """

    def __init__(self, button_pins: List[int], pull_mode: str, logger):
        """
        Initialize GPIO sampler.

        Args:
            button_pins: List of GPIO pin numbers (BCM mode), one per signal
            pull_mode: "off", "up" or "down"
            logger: ClassLogger instance for logging
        """
        self._button_pins = list(button_pins)
        self._pull_mode = pull_mode
        self._logger = logger
        self._gpio = None

    def get_button_count(self) -> int:
        return len(self._button_pins)

    def setup(self) -> None:
        """Initialize GPIO pins for input"""
        import RPi.GPIO as GPIO

        pull = {
            "off": GPIO.PUD_OFF,
            "up": GPIO.PUD_UP,
            "down": GPIO.PUD_DOWN
        }[self._pull_mode]

        try:
            GPIO.setmode(GPIO.BCM)
            for pin in self._button_pins:
                GPIO.setup(pin, GPIO.IN, pull_up_down=pull)
        except Exception as e:
            self._logger.error(f"GPIO sampler setup failed: {e}", exception=e)
            raise

        self._gpio = GPIO
        pin_mapping = ", ".join(f"Btn{i}=GPIO{pin}" for i, pin in enumerate(self._button_pins))
        self._logger.info(f"GPIO sampler initialized: {len(self._button_pins)} pins (pull {self._pull_mode})")
        self._logger.info(f"Pin mapping: {pin_mapping}")

    def read_button(self, button_index: int) -> bool:
        """
        Returns:
            True if GPIO pin is HIGH (button pressed); pull-up wiring reads LOW when pressed
        """
        level = self._gpio.input(self._button_pins[button_index])
        if self._pull_mode == "up":
            return level == self._gpio.LOW
        return level == self._gpio.HIGH

    def cleanup(self) -> None:
        if self._gpio is not None:
            self._gpio.cleanup(self._button_pins)
            self._gpio = None
            self._logger.info("GPIO sampler cleaned up")
