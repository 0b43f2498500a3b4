#!/usr/bin/env python3
"""
Memory LED strip - LedStrip kept entirely in a Python list

Used when no strip hardware is attached (development over SSH, tests).
"""
from typing import List, Union

from .interfaces import LedStrip, expand_assignment
from .pixel import Pixel


class MemoryLedStrip(LedStrip):
    """LedStrip backed by a list; show() just counts frames"""

    def __init__(self, led_count: int):
        if led_count <= 0:
            raise ValueError(f"LED count must be positive, got {led_count}")
        self._pixels: List[Pixel] = [Pixel(0, 0, 0)] * led_count
        self.show_count = 0

    def __getitem__(self, pos: Union[int, slice]) -> Union[Pixel, List[Pixel]]:
        return self._pixels[pos]

    def __setitem__(self, pos: Union[int, slice], color: Union[Pixel, List[Pixel]]) -> None:
        for i, pixel in expand_assignment(pos, color, len(self._pixels)):
            self._pixels[i] = pixel

    def show(self) -> None:
        self.show_count += 1

    def num_pixels(self) -> int:
        return len(self._pixels)
