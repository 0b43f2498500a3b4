"""
Shared fixtures: fake clock, scripted generator, recording sinks and an
engine factory wired to the mock sound controller.
"""

import itertools
import logging
from typing import Callable, List, Optional

import pytest

from audio_system import MockSoundController
from score_system.interfaces import IGameStateSink, IScoreSink
from simon_system import GameConfig, Phase, SimonEngine
from utils import HybridLogger


class FakeClock:
    """Manually advanced clock; keeps whole milliseconds to avoid float drift"""

    def __init__(self, start_ms: int = 1_000_000):
        self.ms = start_ms

    def __call__(self) -> float:
        return self.ms / 1000

    def advance(self, ms: int) -> None:
        self.ms += ms


class ScriptedSequenceGenerator:
    """Returns a fixed list of signals, repeating it when exhausted"""

    def __init__(self, script: List[int]):
        self.script = list(script)
        self._values = itertools.cycle(self.script)

    def next_signal(self) -> int:
        return next(self._values)


class RecordingScoreSink(IScoreSink):
    def __init__(self):
        self.results = []

    def publish_score(self, result) -> None:
        self.results.append(result)


class RecordingStateSink(IGameStateSink):
    def __init__(self):
        self.snapshots = []

    def update_game(self, snapshot) -> None:
        self.snapshots.append(snapshot)


class FailingScoreSink(IScoreSink):
    def __init__(self):
        self.calls = 0

    def publish_score(self, result) -> None:
        self.calls += 1
        raise RuntimeError("scoreboard offline")


class FailingStateSink(IGameStateSink):
    def update_game(self, snapshot) -> None:
        raise OSError("disk full")


@pytest.fixture
def hybrid_logger(tmp_path):
    main_logger = HybridLogger(f"test_{tmp_path.name}", log_dir=str(tmp_path / "logs"), console=False)
    yield main_logger
    main_logger.cleanup()


@pytest.fixture
def logger(hybrid_logger):
    return hybrid_logger.get_class_logger("Test", logging.DEBUG)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def score_sink():
    return RecordingScoreSink()


@pytest.fixture
def state_sink():
    return RecordingStateSink()


@pytest.fixture
def make_engine(logger, clock, score_sink, state_sink):
    """Factory: make_engine(script=[2, 0], **overrides) -> SimonEngine"""

    def factory(script: Optional[List[int]] = None, config: Optional[GameConfig] = None, **overrides) -> SimonEngine:
        config = config or GameConfig()
        kwargs = dict(
            config=config,
            sound_controller=MockSoundController(logger, clock=clock),
            score_sink=score_sink,
            state_sink=state_sink,
            logger=logger,
            generator=ScriptedSequenceGenerator(script or [0]),
            clock=clock,
        )
        kwargs.update(overrides)
        return SimonEngine(**kwargs)

    return factory


def run_until(engine: SimonEngine, clock: FakeClock, condition: Callable[[], bool],
              step_ms: int = 10, limit_ms: int = 120_000) -> None:
    """Tick the engine in fixed steps until condition() holds"""
    elapsed = 0
    while not condition():
        if elapsed >= limit_ms:
            raise AssertionError(f"Condition not reached within {limit_ms}ms (phase {engine.phase.name})")
        clock.advance(step_ms)
        engine.update()
        elapsed += step_ms


def run_until_phase(engine: SimonEngine, clock: FakeClock, phase: Phase, **kwargs) -> None:
    run_until(engine, clock, lambda: engine.phase is phase, **kwargs)


def play_correct_round(engine: SimonEngine, clock: FakeClock) -> None:
    """Wait for the player's turn, repeat the sequence, and wait for the next round to be generated"""
    run_until_phase(engine, clock, Phase.AWAITING_INPUT)
    for signal_index in engine.sequence:
        run_until(engine, clock, lambda: not any(engine.highlights))
        engine.submit(signal_index)
    run_until_phase(engine, clock, Phase.GENERATING)
