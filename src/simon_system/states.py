"""
Game state base class and concrete implementations
"""

from abc import ABC
from typing import Optional, TYPE_CHECKING

from audio_system.interfaces import GameSounds
from .playback_scheduler import PlaybackEvent
from .session import GameSession, Phase

if TYPE_CHECKING:
    from audio_system.interfaces import ICueHandle
    from .engine import SimonEngine


class GameState(ABC):
    """
    Abstract base class for all game states.

    Each state represents one phase of a Simon game with its own:
    - Input handling (start / submit)
    - Timers scheduled through the engine
    - Transition conditions

    Architecture:
    - handle_start / handle_submit return the next state or None
    - Timer callbacks scheduled via engine.schedule() may return the next state
    - state_update() is polled once per frame for conditions that are not
      timer based (cue playback finishing)
    """

    phase: Phase

    def __init__(self, engine: 'SimonEngine'):
        self.engine: 'SimonEngine' = engine
        self.logger = engine.logger.create_class_logger(self.__class__.__name__)

    def state_update(self, now_ms: float) -> Optional['GameState']:
        """
        Per-frame polling hook (override if needed).

        Args:
            now_ms: Current engine time in milliseconds

        Returns:
            New GameState instance if transition needed, None to stay
        """
        return None

    def handle_start(self, color: str) -> Optional['GameState']:
        """Start request; only IdleState accepts it"""
        return None

    def handle_submit(self, signal_index: int) -> Optional['GameState']:
        """Player pick; only AwaitingInputState accepts it"""
        self.logger.debug(f"Ignoring signal {signal_index} during {self.phase.name}")
        return None

    def on_enter(self) -> None:
        self.custom_on_enter()

    def on_exit(self) -> None:
        self.custom_on_exit()

    def custom_on_enter(self) -> None:
        """Custom enter logic (override in subclasses)"""
        pass

    def custom_on_exit(self) -> None:
        """Custom exit logic (override in subclasses)"""
        pass


class IdleState(GameState):
    """
    No game running, waiting for the first button press.

    Transitions:
    - start(color) → GeneratingState (after the startup delay)
    """

    phase = Phase.IDLE

    def custom_on_enter(self) -> None:
        self.engine.clear_highlights()

    def handle_start(self, color: str) -> Optional[GameState]:
        engine = self.engine
        engine.session = GameSession.begin(engine.session, color, engine.now())
        self.logger.info(f"New game started by {color} (session {engine.session.generation})")
        engine.publish_state()
        return GeneratingState(engine, delay_ms=engine.timing.startup_delay_ms)


class GeneratingState(GameState):
    """
    Waits for a short delay, then grows the sequence by one signal.

    Used both for the startup delay before round 1 and for the settle delay
    after a completed round.

    Transitions:
    - Delay elapsed → PlayingState
    """

    phase = Phase.GENERATING

    def __init__(self, engine: 'SimonEngine', delay_ms: int):
        super().__init__(engine)
        self.delay_ms = delay_ms

    def custom_on_enter(self) -> None:
        self.engine.schedule(self.delay_ms, self._append_signal, "append-signal")

    def _append_signal(self) -> GameState:
        engine = self.engine
        signal_index = engine.generator.next_signal()
        engine.session = engine.session.with_signal(signal_index)

        self.logger.info(f"Round {len(engine.session.sequence)}: added {engine.signals[signal_index].name}")
        self.logger.debug(f"Sequence: {engine.describe_sequence()}")
        engine.publish_state()
        return PlayingState(engine)


class PlayingState(GameState):
    """
    Plays the sequence back: each signal lights up with its tone, then a
    short gap before the next one.

    Player input is ignored while the sequence is playing.

    Transitions:
    - Last signal finished → AwaitingInputState
    """

    phase = Phase.PLAYING

    def __init__(self, engine: 'SimonEngine'):
        super().__init__(engine)
        self._events = None

    def custom_on_enter(self) -> None:
        engine = self.engine
        engine.session = engine.session.rewind()
        sequence, score = engine.session.sequence, engine.session.score
        total_ms = engine.playback.total_duration_ms(len(sequence), score)
        self.logger.info(f"Playing {len(sequence)} signals ({total_ms}ms)")
        self._events = engine.playback.events(sequence, engine.now_ms(), score)
        self._schedule_next()

    def custom_on_exit(self) -> None:
        self._events = None

    def _schedule_next(self) -> Optional[GameState]:
        event = next(self._events, None)
        if event is None:
            self.logger.debug("Playback finished, waiting for the player")
            return AwaitingInputState(self.engine)

        self.engine.schedule_at(event.start_at_ms, lambda: self._show(event), f"playback-on-{event.position}")
        return None

    def _show(self, event: PlaybackEvent) -> None:
        engine = self.engine
        engine.session = engine.session.with_cursor(event.position)
        engine.light_signal(event.signal_index, event.duration_ms)
        engine.schedule_at(event.end_at_ms, lambda: self._hide(event), f"playback-off-{event.position}")

    def _hide(self, event: PlaybackEvent) -> Optional[GameState]:
        engine = self.engine
        engine.dim_signal(event.signal_index)
        engine.session = engine.session.with_cursor(event.position + 1)
        return self._schedule_next()


class AwaitingInputState(GameState):
    """
    Validates the player's picks one at a time.

    A correct pick lights its signal for one pulse; picks arriving while
    that pulse is still lit are ignored so a bouncing button can't register
    twice.

    Transitions:
    - Wrong pick → GameOverState
    - Whole sequence repeated → RoundCompleteState (when the last pulse ends)
    """

    phase = Phase.AWAITING_INPUT

    def __init__(self, engine: 'SimonEngine'):
        super().__init__(engine)
        self._feedback_signal: Optional[int] = None

    def custom_on_enter(self) -> None:
        self.engine.session = self.engine.session.rewind()

    def custom_on_exit(self) -> None:
        if self._feedback_signal is not None:
            self.engine.dim_signal(self._feedback_signal)
            self._feedback_signal = None

    def handle_submit(self, signal_index: int) -> Optional[GameState]:
        if self._feedback_signal is not None:
            self.logger.debug(f"Ignoring signal {signal_index} while {self._feedback_signal} is still lit")
            return None

        engine = self.engine
        signal = engine.signals[signal_index]
        session = engine.session.with_user_signal(signal.name)
        expected = session.expected_signal

        if signal_index != expected:
            engine.session = session
            self.logger.info(
                f"Wrong signal at position {session.cursor + 1}: "
                f"got {signal.name}, expected {engine.signals[expected].name}"
            )
            return GameOverState(engine)

        engine.session = session.advance_cursor()
        engine.publish_state()

        duration = engine.timing.signal_duration_ms(session.score)
        engine.light_signal(signal_index, duration)
        self._feedback_signal = signal_index
        engine.schedule(duration, self._end_feedback, "feedback-off")
        return None

    def _end_feedback(self) -> Optional[GameState]:
        engine = self.engine
        engine.dim_signal(self._feedback_signal)
        self._feedback_signal = None

        if engine.session.round_answered:
            return RoundCompleteState(engine)
        return None


class RoundCompleteState(GameState):
    """
    Scores the round and plays the level-up cue.

    Transitions:
    - Cue finished → GeneratingState (settle delay, then next round)
    """

    phase = Phase.ROUND_COMPLETE

    def __init__(self, engine: 'SimonEngine'):
        super().__init__(engine)
        self._cue: Optional['ICueHandle'] = None

    def custom_on_enter(self) -> None:
        engine = self.engine
        engine.session = engine.session.level_up()
        self.logger.info(f"Round complete! Score: {engine.session.score} 🎉")
        engine.publish_state()
        self._cue = engine.play_cue(GameSounds.LEVEL_UP)

    def custom_on_exit(self) -> None:
        self._cue = None

    def state_update(self, now_ms: float) -> Optional[GameState]:
        if self._cue.is_done():
            return GeneratingState(self.engine, delay_ms=self.engine.timing.settle_delay_ms)
        return None


class GameOverState(GameState):
    """
    Reports the finished game and plays the game-over cue.

    Transitions:
    - Cue finished → IdleState (session reset: empty sequence, score 0)
    """

    phase = Phase.GAME_OVER

    def __init__(self, engine: 'SimonEngine'):
        super().__init__(engine)
        self._cue: Optional['ICueHandle'] = None

    def custom_on_enter(self) -> None:
        engine = self.engine
        session = engine.session
        result = session.result(engine.now())

        self.logger.info(
            f"Game Over! Score {result.score}, color {result.color}, "
            f"played {result.playing_time_seconds:.1f}s"
        )
        engine.clear_highlights()
        engine.report_score(result)
        engine.publish_state(game_over=True)
        self._cue = engine.play_cue(GameSounds.GAME_OVER)

    def custom_on_exit(self) -> None:
        self._cue = None

    def state_update(self, now_ms: float) -> Optional[GameState]:
        if self._cue.is_done():
            engine = self.engine
            engine.session = engine.session.reset()
            engine.publish_state()
            return IdleState(engine)
        return None
