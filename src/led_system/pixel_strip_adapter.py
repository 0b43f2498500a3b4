#!/usr/bin/env python3
"""
PixelStrip Adapter - rpi_ws281x wrapper implementing LedStrip interface

This is the only file that depends on rpi_ws281x; the library is imported
when a strip is created so the rest of the game runs without it.
"""
from typing import List, Union, TYPE_CHECKING

from .interfaces import LedStrip, expand_assignment
from .pixel import Pixel

if TYPE_CHECKING:
    from simon_system.config import LedStripConfig


class PixelStripAdapter(LedStrip):
    """WS281x strip on a Raspberry Pi PWM/PCM pin

    Pixel IS an int, so colors go to the driver buffer without conversion.

    Example:
        strip = PixelStripAdapter.from_config(LedStripConfig(gpio_pin=18, led_count=120))
        strip[0:30] = Pixel(0, 255, 0)
        strip.show()
    """

    def __init__(self, led_count: int, gpio_pin: int, freq_hz: int = 800000,
                 dma: int = 10, invert: bool = False, brightness: int = 255,
                 channel: int = 0) -> None:
        """
        Args:
            led_count: Number of LEDs in the strip
            gpio_pin: GPIO pin connected to the strip data line
            freq_hz: Signal frequency in hertz
            dma: DMA channel
            invert: Invert the signal (inverting level shifter)
            brightness: Global brightness 0-255
            channel: PWM channel (1 for GPIO 13/19)

        Raises:
            ImportError: If rpi_ws281x is not installed
            RuntimeError: If the driver fails to start (usually missing root)
        """
        from rpi_ws281x import PixelStrip

        self._led_count = led_count
        self._strip = PixelStrip(led_count, gpio_pin, freq_hz, dma, invert, brightness, channel)
        self._strip.begin()

    @classmethod
    def from_config(cls, config: 'LedStripConfig') -> 'PixelStripAdapter':
        return cls(
            led_count=config.led_count,
            gpio_pin=config.gpio_pin,
            freq_hz=config.freq_hz,
            dma=config.dma,
            invert=config.invert,
            brightness=config.brightness,
            channel=config.channel
        )

    def __getitem__(self, pos: Union[int, slice]) -> Union[Pixel, List[Pixel]]:
        if isinstance(pos, slice):
            return [Pixel(self._strip.getPixelColor(i)) for i in range(*pos.indices(self._led_count))]
        return Pixel(self._strip.getPixelColor(pos))

    def __setitem__(self, pos: Union[int, slice], color: Union[Pixel, List[Pixel]]) -> None:
        for i, pixel in expand_assignment(pos, color, self._led_count):
            self._strip.setPixelColor(i, pixel)

    def show(self) -> None:
        """Render the buffer (~4ms per 120 LEDs)"""
        self._strip.show()

    def num_pixels(self) -> int:
        return self._led_count
