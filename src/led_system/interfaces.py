#!/usr/bin/env python3
"""
LED Strip Interface - Abstract base class for LED strip control
"""
from abc import ABC, abstractmethod
from typing import Iterator, List, Tuple, Union
from .pixel import Pixel


def expand_assignment(pos: Union[int, slice], color: Union[Pixel, List[Pixel]],
                      length: int) -> Iterator[Tuple[int, Pixel]]:
    """Turn `strip[pos] = color` into (index, Pixel) pairs for a strip of `length` pixels

    Raises:
        TypeError: If a list is assigned to a single position
        ValueError: If the list length doesn't match the slice length
    """
    if not isinstance(pos, slice):
        if isinstance(color, list):
            raise TypeError("Cannot assign list of colors to single position")
        yield pos, Pixel(color)
        return

    indices = range(*pos.indices(length))
    if isinstance(color, list):
        if len(color) != len(indices):
            raise ValueError(f"Color list length ({len(color)}) must match slice length ({len(indices)})")
        yield from zip(indices, (Pixel(pixel) for pixel in color))
    else:
        pixel = Pixel(color)
        for i in indices:
            yield i, pixel


class LedStrip(ABC):
    """Abstract interface for LED strip control using Python slice notation

    The game splits each strip into one segment per signal:
        strip[0:30] = Pixel(0, 255, 0)                 # green segment
        strip[30:60] = [dim_red] * 30                  # slice to a list of colors
        strip[:] = BLACK                               # clear all
        strip.show()

    Invalid Operations:
        strip[5] = [pixel1, pixel2]                    # Position + list (TypeError)
    """

    @abstractmethod
    def __getitem__(self, pos: Union[int, slice]) -> Union[Pixel, List[Pixel]]:
        """Get a single Pixel, or a list of Pixels for a slice"""
        pass

    @abstractmethod
    def __setitem__(self, pos: Union[int, slice], color: Union[Pixel, List[Pixel]]) -> None:
        """Set pixel(s) to color(s), see expand_assignment() for the rules"""
        pass

    @abstractmethod
    def show(self) -> None:
        """Push the current buffer to the physical strip"""
        pass

    @abstractmethod
    def num_pixels(self) -> int:
        pass

    def clear(self) -> None:
        """Set every pixel to black and show it"""
        self[:] = Pixel(0, 0, 0)
        self.show()
