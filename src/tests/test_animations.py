import pytest

from led_system import BLACK, MemoryLedStrip, Pixel
from simon_system import AttractAnimation, SignalPanelAnimation, default_signals
from simon_system.animations import segment_bounds

from conftest import FakeClock


def test_pixel_packing_and_scaling():
    pixel = Pixel.from_rgb((255, 200, 0))

    assert (pixel.r, pixel.g, pixel.b) == (255, 200, 0)
    assert pixel == 0xFFC800
    assert pixel.scaled(0.5) == Pixel(127, 100, 0)
    assert pixel.scaled(2.0) == pixel
    with pytest.raises(ValueError):
        Pixel(1, 2)


def test_memory_strip_slices():
    strip = MemoryLedStrip(6)

    strip[0:3] = Pixel(255, 0, 0)
    strip[3:5] = [Pixel(0, 255, 0), Pixel(0, 0, 255)]

    assert strip[0:6] == [Pixel(255, 0, 0)] * 3 + [Pixel(0, 255, 0), Pixel(0, 0, 255), BLACK]
    with pytest.raises(ValueError):
        strip[0:2] = [Pixel(1, 1, 1)]
    with pytest.raises(TypeError):
        strip[0] = [Pixel(1, 1, 1)]

    strip.clear()
    assert strip[:] == [BLACK] * 6
    assert strip.show_count == 1


def test_segment_bounds_split_evenly():
    assert segment_bounds(10, 4) == [(0, 2), (2, 4), (4, 6), (6, 8)]
    assert segment_bounds(120, 4)[-1] == (90, 120)


def test_panel_lights_highlighted_segment():
    clock = FakeClock()
    strip = MemoryLedStrip(8)
    panel = SignalPanelAnimation(strip, default_signals(), dim_factor=0.0, clock=clock)

    panel.set_highlights((False, True, False, False))
    assert panel.update_if_needed()

    assert strip[0:2] == [BLACK, BLACK]
    assert strip[2:4] == [Pixel(255, 0, 0)] * 2
    assert strip[4:8] == [BLACK] * 4


def test_panel_redraws_only_on_change():
    clock = FakeClock()
    panel = SignalPanelAnimation(MemoryLedStrip(8), default_signals(), clock=clock)
    panel.set_highlights((True, False, False, False))

    assert panel.update_if_needed()
    clock.advance(100)
    assert not panel.update_if_needed()

    panel.set_highlights((False, False, False, False))
    assert panel.update_if_needed()

    clock.advance(100)
    panel.invalidate()
    assert panel.update_if_needed()


def test_panel_dims_unlit_segments():
    strip = MemoryLedStrip(4)
    panel = SignalPanelAnimation(strip, default_signals(), dim_factor=0.1, clock=FakeClock())

    panel.update_if_needed()

    assert strip[3] == Pixel(0, 0, 25)


def test_attract_animation_breathes_within_range():
    clock = FakeClock(start_ms=0)
    strip = MemoryLedStrip(8)
    attract = AttractAnimation(strip, default_signals(), brightness_range=(0.1, 0.5), period_ms=2000, clock=clock)

    levels = []
    for _ in range(40):
        clock.advance(50)
        levels.append(attract.current_brightness())

    assert min(levels) >= 0.1 - 1e-9
    assert max(levels) <= 0.5 + 1e-9
    assert max(levels) - min(levels) > 0.3


def test_attract_animation_respects_speed():
    clock = FakeClock()
    strip = MemoryLedStrip(8)
    attract = AttractAnimation(strip, default_signals(), speed_ms=40, clock=clock)

    assert attract.update_if_needed()
    clock.advance(20)
    assert not attract.update_if_needed()
    clock.advance(25)
    assert attract.update_if_needed()
    assert strip[0].g > 0
