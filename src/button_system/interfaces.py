"""
Input interfaces for the Simon panel: one physical button per signal
"""

from abc import ABC, abstractmethod
from .button_state import ButtonState

class IButtonSampler(ABC):
    """
    Raw input source, index i is the button for signal i.

    A sampler only answers "is this signal's button held right now".
    Turning that into presses is the reader's job, so GPIO buttons, the
    terminal keyboard and test doubles all feed the same game code.
    """

    @abstractmethod
    def read_button(self, button_index: int) -> bool:
        """True while the button for signal `button_index` is held down"""
        pass

    @abstractmethod
    def get_button_count(self) -> int:
        pass

    @abstractmethod
    def setup(self) -> None:
        """Claim the input device (GPIO pins, raw terminal)"""
        pass

    @abstractmethod
    def cleanup(self) -> None:
        """Hand the input device back"""
        pass

    def poll(self) -> None:
        """Hook run once per frame before any read_button() call"""
        pass


class IButtonReader(ABC):
    """
    What the game manager sees: one ButtonState per frame.

    newly_pressed on that state becomes start(color) while idle and
    submit(signal) during a game.
    """

    @abstractmethod
    def read_buttons(self) -> ButtonState:
        """Sample every signal button and report which were pressed since the last frame"""
        pass

    @abstractmethod
    def get_button_count(self) -> int:
        """Must equal the number of configured signals"""
        pass

    @abstractmethod
    def cleanup(self) -> None:
        pass
