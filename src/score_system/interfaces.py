"""
Abstract interfaces for publishing game results and mirroring live state
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from simon_system.session import GameSnapshot, ScoreResult


class IScoreSink(ABC):
    """Receives the final result of every finished game"""

    @abstractmethod
    def publish_score(self, result: 'ScoreResult') -> None:
        """
        Persist or broadcast a finished game.

        The engine does not use the outcome; implementations may raise and
        the engine will log and carry on.
        """
        pass


class IGameStateSink(ABC):
    """Receives a snapshot after every state-affecting engine operation"""

    @abstractmethod
    def update_game(self, snapshot: 'GameSnapshot') -> None:
        """Mirror the live game state somewhere else"""
        pass
