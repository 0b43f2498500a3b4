"""
Score System Package

Sinks for finished games and live state snapshots.
"""

from .interfaces import IScoreSink, IGameStateSink
from .csv_score_sink import CsvScoreSink
from .json_state_mirror import JsonStateMirror

__all__ = [
    "IScoreSink",
    "IGameStateSink",
    "CsvScoreSink",
    "JsonStateMirror"
]
