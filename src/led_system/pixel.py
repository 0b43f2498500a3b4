#!/usr/bin/env python3
"""
Pixel class - Library independent color representation
"""
from typing import Optional, Tuple


class Pixel(int):
    """RGB color packed into an int, usable directly by LED strip libraries

    Usage:
        pixel = Pixel(255, 0, 0)          # Red pixel
        pixel = Pixel(0xFF0000)           # Red pixel from int
        pixel.scaled(0.1)                 # Dimmed red
        Pixel.from_rgb((0, 0, 255))       # From a config tuple
    """

    def __new__(cls, r: int, g: Optional[int] = None, b: Optional[int] = None) -> 'Pixel':
        if g is None and b is None:
            return int.__new__(cls, r)
        elif g is None or b is None:
            raise ValueError("Must provide either just int value or all three RGB values")
        return int.__new__(cls, ((r & 0xFF) << 16) | ((g & 0xFF) << 8) | (b & 0xFF))

    @classmethod
    def from_rgb(cls, rgb: Tuple[int, int, int]) -> 'Pixel':
        r, g, b = rgb
        return cls(r, g, b)

    @property
    def r(self) -> int:
        return (self >> 16) & 0xFF

    @property
    def g(self) -> int:
        return (self >> 8) & 0xFF

    @property
    def b(self) -> int:
        return self & 0xFF

    def scaled(self, factor: float) -> 'Pixel':
        """Same hue at a fraction of the brightness (factor clamped to 0.0-1.0)"""
        factor = max(0.0, min(factor, 1.0))
        return Pixel(int(self.r * factor), int(self.g * factor), int(self.b * factor))

    def __repr__(self) -> str:
        return f"Pixel(r={self.r}, g={self.g}, b={self.b})"

    def __str__(self) -> str:
        return f"Pixel({self.r}, {self.g}, {self.b})"


BLACK = Pixel(0, 0, 0)
