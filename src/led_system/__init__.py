#!/usr/bin/env python3
"""
LED System - Library independent LED strip control

- Pixel: Zero-overhead color class that extends int
- LedStrip: Abstract interface for LED strip control
- PixelStripAdapter: rpi_ws281x implementation of LedStrip
- MemoryLedStrip: In-memory LedStrip for headless runs

Usage:
    from led_system import PixelStripAdapter, Pixel

    strip = PixelStripAdapter(led_count=60, gpio_pin=18)
    strip[0:15] = Pixel(0, 255, 0)
    strip.show()
"""

from .pixel import Pixel, BLACK
from .interfaces import LedStrip
from .pixel_strip_adapter import PixelStripAdapter
from .memory_strip import MemoryLedStrip

__all__ = ['Pixel', 'BLACK', 'LedStrip', 'PixelStripAdapter', 'MemoryLedStrip']
