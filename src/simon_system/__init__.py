"""
Simon System - State machine based sequence-memory game

This module provides the game engine (session, states, timers), its
configuration, and the frame loop that connects it to buttons and LEDs.
"""

from .session import Phase, GameSession, GameSnapshot, ScoreResult
from .config import (
    GameConfig, SignalConfig, TimingConfig, ButtonConfig, LedStripConfig,
    AudioConfig, ReportingConfig, default_signals
)
from .sequence_generator import SequenceGenerator
from .playback_scheduler import PlaybackEvent, PlaybackScheduler
from .states import (
    GameState, IdleState, GeneratingState, PlayingState,
    AwaitingInputState, RoundCompleteState, GameOverState
)
from .engine import SimonEngine
from .animations import Animation, SignalPanelAnimation, AttractAnimation
from .game_manager import SimonGameManager

__all__ = [
    # Session
    "Phase",
    "GameSession",
    "GameSnapshot",
    "ScoreResult",
    # Engine
    "SequenceGenerator",
    "PlaybackEvent",
    "PlaybackScheduler",
    "SimonEngine",
    "SimonGameManager",
    # States
    "GameState",
    "IdleState",
    "GeneratingState",
    "PlayingState",
    "AwaitingInputState",
    "RoundCompleteState",
    "GameOverState",
    # Animations
    "Animation",
    "SignalPanelAnimation",
    "AttractAnimation",
    # Configuration
    "GameConfig",
    "SignalConfig",
    "TimingConfig",
    "ButtonConfig",
    "LedStripConfig",
    "AudioConfig",
    "ReportingConfig",
    "default_signals"
]
