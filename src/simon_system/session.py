"""
Game session value objects: phase enum, the per-game session, and the
records handed to external sinks.
"""

import enum
from dataclasses import dataclass, replace
from typing import Any, Dict, Optional, Tuple


class Phase(enum.Enum):
    """Where the engine is in the game state machine"""
    IDLE = "idle"
    GENERATING = "generating"
    PLAYING = "playing"
    AWAITING_INPUT = "awaiting_input"
    ROUND_COMPLETE = "round_complete"
    GAME_OVER = "game_over"


@dataclass(frozen=True)
class ScoreResult:
    """Final result of one game, published once on game over"""
    score: int
    color: Optional[str]
    playing_time_seconds: float

    def as_dict(self) -> Dict[str, Any]:
        return {
            "score": self.score,
            "color": self.color,
            "playing_time_seconds": self.playing_time_seconds,
        }


@dataclass(frozen=True)
class GameSnapshot:
    """Mirror of the live game, sent to the state sink after every change"""
    score: int
    playing: bool
    chosen_color: Optional[str]
    last_user_signal: Optional[str]
    cursor: int
    game_over: bool = False

    def as_dict(self) -> Dict[str, Any]:
        return {
            "score": self.score,
            "playing": self.playing,
            "chosen_color": self.chosen_color,
            "last_user_signal": self.last_user_signal,
            "cursor": self.cursor,
            "game_over": self.game_over,
        }


@dataclass(frozen=True)
class GameSession:
    """
    Immutable state of the one live game.

    Every transition returns a new session; the engine keeps the only
    reference. `generation` changes whenever a game starts or is reset, and
    timers stamped with an older generation are discarded when they fire.
    """
    generation: int = 0
    active: bool = False
    score: int = 0
    sequence: Tuple[int, ...] = ()
    cursor: int = 0
    chosen_color: Optional[str] = None
    last_user_signal: Optional[str] = None
    start_time: Optional[float] = None

    @classmethod
    def begin(cls, previous: 'GameSession', color: str, start_time: float) -> 'GameSession':
        """New active session following `previous` (bumps the generation)"""
        return cls(
            generation=previous.generation + 1,
            active=True,
            chosen_color=color,
            last_user_signal=color,
            start_time=start_time,
        )

    @property
    def expected_signal(self) -> Optional[int]:
        """Signal index the player has to press next, None once the round is answered"""
        if self.cursor < len(self.sequence):
            return self.sequence[self.cursor]
        return None

    @property
    def round_answered(self) -> bool:
        return bool(self.sequence) and self.cursor == len(self.sequence)

    def with_signal(self, signal_index: int) -> 'GameSession':
        """Append one signal for the next round and rewind the cursor"""
        return replace(self, sequence=self.sequence + (signal_index,), cursor=0)

    def rewind(self) -> 'GameSession':
        return replace(self, cursor=0)

    def with_cursor(self, cursor: int) -> 'GameSession':
        if not 0 <= cursor <= len(self.sequence):
            raise ValueError(f"Cursor {cursor} outside sequence of length {len(self.sequence)}")
        return replace(self, cursor=cursor)

    def advance_cursor(self) -> 'GameSession':
        return self.with_cursor(self.cursor + 1)

    def with_user_signal(self, signal_name: str) -> 'GameSession':
        return replace(self, last_user_signal=signal_name)

    def level_up(self) -> 'GameSession':
        return replace(self, score=self.score + 1)

    def reset(self) -> 'GameSession':
        """
        End the game: empty sequence, zero score, new generation.

        The colors are kept so the mirrored state still shows the last game.
        """
        return GameSession(
            generation=self.generation + 1,
            chosen_color=self.chosen_color,
            last_user_signal=self.last_user_signal,
        )

    def result(self, now: float) -> ScoreResult:
        elapsed = now - self.start_time if self.start_time is not None else 0.0
        return ScoreResult(score=self.score, color=self.chosen_color, playing_time_seconds=elapsed)

    def snapshot(self, game_over: bool = False) -> GameSnapshot:
        return GameSnapshot(
            score=self.score,
            playing=self.active,
            chosen_color=self.chosen_color,
            last_user_signal=self.last_user_signal,
            cursor=self.cursor,
            game_over=game_over,
        )
