"""
Simon engine - owns the game session, the state machine and its timers
"""

import time
from typing import Callable, Any, List, Optional, Tuple, TYPE_CHECKING, Union

from utils import TimerQueue
from .config import GameConfig, SignalConfig
from .playback_scheduler import PlaybackScheduler
from .sequence_generator import SequenceGenerator
from .session import GameSession, GameSnapshot, Phase, ScoreResult
from .states import GameState, IdleState

if TYPE_CHECKING:
    from audio_system.interfaces import GameSounds, ICueHandle, IToneAndCuePlayer
    from score_system.interfaces import IGameStateSink, IScoreSink
    from utils import ClassLogger, ScheduledTimer


class SimonEngine:
    """
    Sequence-memory game engine.

    Responsibilities:
    - Own the single live GameSession and replace it on every transition
    - Run the state machine (Idle → Generating → Playing → AwaitingInput →
      RoundComplete / GameOver)
    - Drive timers cooperatively from update(), discarding timers that
      belong to an older session generation
    - Light signals, play tones/cues and notify the score and state sinks

    Nothing here blocks or sleeps; call update() once per frame.

    Example:
        engine = SimonEngine(config, sound_controller, score_sink, state_sink, logger)
        engine.start("red")
        while True:
            engine.update()
            ...
            engine.submit(2)  # when the player presses signal 2
    """

    def __init__(self,
                 config: GameConfig,
                 sound_controller: 'IToneAndCuePlayer',
                 score_sink: Optional['IScoreSink'],
                 state_sink: Optional['IGameStateSink'],
                 logger: 'ClassLogger',
                 generator: Optional[SequenceGenerator] = None,
                 clock: Callable[[], float] = time.time):
        """
        Initialize the engine in IdleState.

        Args:
            config: Validated GameConfig (signals and timing are used)
            sound_controller: Tone and cue player
            score_sink: Receives the result of every finished game (optional)
            state_sink: Receives a snapshot after every change (optional)
            logger: ClassLogger for the engine; states create their own from it
            generator: Signal generator, defaults to an unseeded SequenceGenerator
            clock: Time source in seconds
        """
        self.config = config
        self.signals: Tuple[SignalConfig, ...] = config.signals
        self.timing = config.timing
        self.sound_controller = sound_controller
        self.score_sink = score_sink
        self.state_sink = state_sink
        self.logger = logger
        self.generator = generator if generator is not None else SequenceGenerator(len(self.signals))
        self.playback = PlaybackScheduler(config.timing)
        self.timers = TimerQueue()
        self._clock = clock

        self.session = GameSession()
        self._highlights: List[bool] = [False] * len(self.signals)

        self.current_state: GameState = IdleState(self)
        self.current_state.on_enter()

        self.logger.info(f"SimonEngine initialized: {len(self.signals)} signals ({', '.join(config.signal_names)})")

    # ------------------------------------------------------------------
    # Observable state
    # ------------------------------------------------------------------

    @property
    def phase(self) -> Phase:
        return self.current_state.phase

    @property
    def highlights(self) -> Tuple[bool, ...]:
        """Per-signal lit flag, True only while that signal's pulse is showing"""
        return tuple(self._highlights)

    @property
    def score(self) -> int:
        return self.session.score

    @property
    def is_playing(self) -> bool:
        return self.session.active

    @property
    def sequence(self) -> Tuple[int, ...]:
        return self.session.sequence

    @property
    def cursor(self) -> int:
        return self.session.cursor

    @property
    def score_label(self) -> Union[int, str]:
        """What a score display shows: the score during a game, 'PLAY' otherwise"""
        return self.session.score if self.session.active else "PLAY"

    def snapshot(self) -> GameSnapshot:
        return self.session.snapshot(game_over=self.phase is Phase.GAME_OVER)

    def get_current_state_name(self) -> str:
        return self.current_state.__class__.__name__

    def describe_sequence(self) -> str:
        return " ".join(self.signals[i].name for i in self.session.sequence)

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def start(self, color: str) -> None:
        """
        Start a new game chosen by `color`.

        Ignored unless the engine is idle, so repeated clicks during the
        startup delay don't restart the game.
        """
        new_state = self.current_state.handle_start(color)
        if new_state is None:
            self.logger.debug(f"Ignoring start({color}) during {self.phase.name}")
            return
        self._transition_to_state(new_state)

    def submit(self, signal_index: int) -> None:
        """
        Register the player's pick.

        Out-of-range indexes are logged and ignored; picks outside the
        player's turn are ignored by the current state.
        """
        if isinstance(signal_index, bool) or not isinstance(signal_index, int) \
                or not 0 <= signal_index < len(self.signals):
            self.logger.warning(f"Ignoring invalid signal index {signal_index!r}")
            return

        new_state = self.current_state.handle_submit(signal_index)
        if new_state:
            self._transition_to_state(new_state)

    def abort(self) -> None:
        """
        Drop the running game without reporting a score.

        Timers still pending for the old game are dropped, and the session is
        replaced so nothing scheduled for it can fire later.
        """
        if self.phase is Phase.IDLE and not self.session.active:
            return

        self.logger.warning(
            f"Game aborted during {self.phase.name} (score {self.session.score}, "
            f"{len(self.timers)} pending timers dropped)"
        )
        self.timers.clear()
        self.session = self.session.reset()
        self.clear_highlights()
        self.publish_state()
        self._transition_to_state(IdleState(self))

    def update(self) -> None:
        """
        One cooperative tick: fire due timers, then poll the current state.

        Timers scheduled while firing are picked up in the same tick if they
        are already due.
        """
        now_ms = self.now_ms()

        timer = self.timers.pop_next_due(now_ms)
        while timer is not None:
            self._fire_timer(timer)
            timer = self.timers.pop_next_due(now_ms)

        new_state = self.current_state.state_update(now_ms)
        if new_state:
            self._transition_to_state(new_state)

    # ------------------------------------------------------------------
    # Services used by the states
    # ------------------------------------------------------------------

    def now(self) -> float:
        """Current time in seconds"""
        return self._clock()

    def now_ms(self) -> float:
        # Rounded to microseconds; timers compare against this value
        return round(self._clock() * 1000, 3)

    def schedule(self, delay_ms: float, callback: Callable[[], Any], name: str = "timer") -> 'ScheduledTimer':
        """Schedule a callback delay_ms from now for the current session"""
        return self.schedule_at(self.now_ms() + delay_ms, callback, name)

    def schedule_at(self, due_ms: float, callback: Callable[[], Any], name: str = "timer") -> 'ScheduledTimer':
        """Schedule a callback at an absolute engine time for the current session"""
        return self.timers.schedule_at(due_ms, self.session.generation, callback, name)

    def light_signal(self, signal_index: int, duration_ms: int) -> None:
        """Turn a signal's highlight on and play its tone"""
        signal = self.signals[signal_index]
        self._highlights[signal_index] = True
        self.sound_controller.play_tone(signal.tone_hz, duration_ms)
        self.logger.debug(f"{signal.name} on ({duration_ms}ms)")

    def dim_signal(self, signal_index: int) -> None:
        self._highlights[signal_index] = False

    def clear_highlights(self) -> None:
        self._highlights = [False] * len(self.signals)

    def play_cue(self, sound: 'GameSounds') -> 'ICueHandle':
        return self.sound_controller.play_sound(sound)

    def publish_state(self, game_over: bool = False) -> None:
        """Send the current snapshot to the state sink; failures are logged, never raised"""
        if self.state_sink is None:
            return
        try:
            self.state_sink.update_game(self.session.snapshot(game_over=game_over))
        except Exception as e:
            self.logger.warning(f"Failed to mirror game state: {e}")

    def report_score(self, result: ScoreResult) -> None:
        """Hand a finished game to the score sink; failures are logged, never raised"""
        if self.score_sink is None:
            return
        try:
            self.score_sink.publish_score(result)
        except Exception as e:
            self.logger.warning(f"Failed to publish score {result.score} ({type(e).__name__}): {e}")

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _fire_timer(self, timer: 'ScheduledTimer') -> None:
        if timer.generation != self.session.generation:
            self.logger.debug(
                f"Discarding stale timer '{timer.name}' "
                f"(session {timer.generation}, current {self.session.generation})"
            )
            return

        new_state = timer.callback()
        if new_state:
            self._transition_to_state(new_state)

    def _transition_to_state(self, new_state: GameState) -> None:
        """
        Handle transition to a new game state.

        Args:
            new_state: The new state to transition to
        """
        self.current_state.on_exit()

        old_state_name = self.current_state.__class__.__name__
        new_state_name = new_state.__class__.__name__
        self.logger.info(f"State transition: {old_state_name} → {new_state_name}")

        self.current_state = new_state
        self.current_state.on_enter()
