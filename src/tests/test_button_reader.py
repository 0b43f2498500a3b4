import io

import pytest

from button_system import ButtonReader, ButtonState, IButtonSampler, KeyboardSampler


class ScriptedSampler(IButtonSampler):
    """Plays back one list of button levels per read cycle"""

    def __init__(self, frames):
        self.frames = list(frames)
        self.current = [False] * len(self.frames[0])
        self.setup_calls = 0
        self.cleanup_calls = 0
        self.polls = 0

    def get_button_count(self) -> int:
        return len(self.current)

    def setup(self) -> None:
        self.setup_calls += 1

    def poll(self) -> None:
        self.polls += 1
        if self.frames:
            self.current = self.frames.pop(0)

    def read_button(self, button_index: int) -> bool:
        return self.current[button_index]

    def cleanup(self) -> None:
        self.cleanup_calls += 1


def test_button_state_edges():
    state = ButtonState([True, False, True], [False, False, True])

    assert state.was_changed == [True, False, False]
    assert state.newly_pressed == [0]
    assert state.total_buttons_pressed == 2
    assert state.any_changed


def test_button_state_validates_input():
    with pytest.raises(ValueError):
        ButtonState([True], [True, False])
    with pytest.raises(TypeError):
        ButtonState([1, 0], [False, False])


def test_reader_reports_rising_edges_once(logger):
    sampler = ScriptedSampler([
        [False, True, False, False],
        [False, True, False, False],
        [False, False, False, False],
        [True, True, False, False],
    ])
    reader = ButtonReader(sampler, logger)

    presses = [reader.read_buttons().newly_pressed for _ in range(4)]

    assert presses == [[1], [], [], [0, 1]]
    assert sampler.setup_calls == 1
    assert sampler.polls == 4


def test_reader_cleanup_is_idempotent(logger):
    sampler = ScriptedSampler([[False, False]])
    reader = ButtonReader(sampler, logger)

    reader.cleanup()
    reader.cleanup()

    assert sampler.cleanup_calls == 1


def test_keyboard_key_is_a_single_tap(logger):
    sampler = KeyboardSampler(4, logger, stream=io.StringIO())

    sampler.handle_key("2")

    assert [sampler.read_button(i) for i in range(4)] == [False, False, True, False]


def test_keyboard_custom_key_map(logger):
    sampler = KeyboardSampler(4, logger, key_map={"g": 0, "r": 1, "y": 2, "b": 3}, stream=io.StringIO())

    sampler.handle_key("B")
    sampler.handle_key("x")

    assert sampler.read_button(3)
    assert not sampler.quit_requested


def test_keyboard_quit_key(logger):
    sampler = KeyboardSampler(4, logger, stream=io.StringIO())

    sampler.handle_key("q")

    assert sampler.quit_requested
    assert not any(sampler.read_button(i) for i in range(4))


def test_keyboard_rejects_bad_mapping(logger):
    with pytest.raises(ValueError):
        KeyboardSampler(2, logger, key_map={"a": 0, "b": 2}, stream=io.StringIO())
    with pytest.raises(ValueError):
        KeyboardSampler(11, logger, stream=io.StringIO())


def test_keyboard_needs_a_terminal(logger):
    sampler = KeyboardSampler(4, logger, stream=io.StringIO())

    with pytest.raises(RuntimeError):
        sampler.setup()
