"""
Button reader implementation with state management and edge detection
"""

from typing import List

from .interfaces import IButtonReader, IButtonSampler
from .button_state import ButtonState

class ButtonReader(IButtonReader):
    """
    Button reader with previous-state tracking and edge detection.

    Uses IButtonSampler for hardware abstraction (GPIO, keyboard, test double).

    Example:
        sampler = GPIOSampler([4, 22, 23, 24], "off", logger)
        reader = ButtonReader(sampler, logger)

        while True:
            state = reader.read_buttons()
            for index in state.newly_pressed:
                engine.submit(index)
    """

    def __init__(self, sampler: IButtonSampler, logger):
        """
        Initialize button reader with injected sampler.

        Args:
            sampler: IButtonSampler instance for reading button hardware
            logger: ClassLogger instance
        """
        self._sampler = sampler
        self._logger = logger
        self._previous_state: List[bool] = [False] * sampler.get_button_count()
        self._cleaned_up = False

        self._sampler.setup()

        self._logger.info(f"ButtonReader initialized with {sampler.get_button_count()} buttons")

    def read_buttons(self) -> ButtonState:
        """
        Sample every button once and compare with the previous frame.

        Returns:
            ButtonState with current/previous values and edge detection
        """
        self._sampler.poll()
        current_state = [bool(self._sampler.read_button(i)) for i in range(self._sampler.get_button_count())]

        state = ButtonState(
            for_button=current_state,
            previous_state_of=self._previous_state
        )
        self._previous_state = current_state

        for i in state.newly_pressed:
            self._logger.info(f"Button {i} pressed")

        return state

    def get_button_count(self) -> int:
        return self._sampler.get_button_count()

    def cleanup(self) -> None:
        if self._cleaned_up:
            return
        self._cleaned_up = True
        self._sampler.cleanup()
        self._logger.info("ButtonReader cleaned up")
