"""
ButtonState - Button snapshot data with calculated edge fields
"""

from dataclasses import dataclass, field
from typing import List

@dataclass
class ButtonState:
    """
    Snapshot of button states with automatic edge detection.

    Usage:
        state = ButtonState([True, False], [False, False])
        state.newly_pressed   # [0]
    """
    for_button: List[bool]           # Current state: [button0, button1, ...]
    previous_state_of: List[bool]    # Previous state: [button0_prev, button1_prev, ...]

    # Calculated fields
    was_changed: List[bool] = field(init=False)      # Per-button edge detection
    newly_pressed: List[int] = field(init=False)     # Rising edges, in index order
    total_buttons_pressed: int = field(init=False)
    any_changed: bool = field(init=False)

    def __post_init__(self):
        if len(self.for_button) != len(self.previous_state_of):
            raise ValueError(
                f"State lists must have same length: "
                f"for_button={len(self.for_button)}, previous_state_of={len(self.previous_state_of)}"
            )
        if not all(isinstance(x, bool) for x in self.for_button + self.previous_state_of):
            raise TypeError("All button states must be bool")

        self.was_changed = [prev != cur for prev, cur in zip(self.previous_state_of, self.for_button)]
        self.newly_pressed = [
            i for i, (changed, pressed) in enumerate(zip(self.was_changed, self.for_button))
            if changed and pressed
        ]
        self.total_buttons_pressed = sum(self.for_button)
        self.any_changed = any(self.was_changed)

    def get_button_count(self) -> int:
        return len(self.for_button)

    def __str__(self) -> str:
        pressed_buttons = [i for i, pressed in enumerate(self.for_button) if pressed]
        return (
            f"ButtonState("
            f"pressed={pressed_buttons}, "
            f"newly_pressed={self.newly_pressed}, "
            f"total_pressed={self.total_buttons_pressed}"
            f")"
        )
