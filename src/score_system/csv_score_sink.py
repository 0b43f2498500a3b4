"""
CSV score log - appends every finished game and reads back a leaderboard
"""

import csv
import os
from datetime import datetime
from pathlib import Path
from typing import Callable, List, Optional, TYPE_CHECKING

from .interfaces import IScoreSink
from simon_system.session import ScoreResult

if TYPE_CHECKING:
    from utils import ClassLogger


CSV_HEADER = ["timestamp", "score", "color", "playing_time_seconds"]


class CsvScoreSink(IScoreSink):
    """
    Score sink writing one CSV row per game.

    Example:
        sink = CsvScoreSink("simon_scores.csv", logger)
        sink.publish_score(ScoreResult(score=7, color="red", playing_time_seconds=41.2))
        sink.top_scores(3)  # best three games so far
    """

    def __init__(self, csv_path: str, logger: 'ClassLogger',
                 now: Callable[[], datetime] = datetime.now):
        """
        Args:
            csv_path: File to append to (created with a header on first write)
            logger: ClassLogger instance for logging
            now: Timestamp source for the rows
        """
        self.csv_path = Path(csv_path)
        self.logger = logger
        self._now = now

    def publish_score(self, result: ScoreResult) -> None:
        is_new_file = not self.csv_path.exists() or os.path.getsize(self.csv_path) == 0
        if self.csv_path.parent:
            self.csv_path.parent.mkdir(parents=True, exist_ok=True)

        with open(self.csv_path, "a", newline="", encoding="utf-8") as csv_file:
            writer = csv.writer(csv_file)
            if is_new_file:
                writer.writerow(CSV_HEADER)
            writer.writerow([
                self._now().isoformat(timespec="seconds"),
                result.score,
                result.color or "",
                f"{result.playing_time_seconds:.3f}"
            ])

        self.logger.info(
            f"Score saved: {result.score} ({result.color}, {result.playing_time_seconds:.1f}s) → {self.csv_path}"
        )

    def read_scores(self) -> List[ScoreResult]:
        """All games in the log, oldest first (malformed rows are skipped)"""
        if not self.csv_path.exists():
            return []

        results = []
        with open(self.csv_path, newline="", encoding="utf-8") as csv_file:
            for row in csv.DictReader(csv_file):
                try:
                    results.append(ScoreResult(
                        score=int(row["score"]),
                        color=row["color"] or None,
                        playing_time_seconds=float(row["playing_time_seconds"])
                    ))
                except (KeyError, TypeError, ValueError):
                    self.logger.warning(f"Skipping malformed score row: {row}")
        return results

    def top_scores(self, limit: int = 10) -> List[ScoreResult]:
        """Best games: highest score first, faster games win ties"""
        ranked = sorted(self.read_scores(), key=lambda r: (-r.score, r.playing_time_seconds))
        return ranked[:limit]

    def best_score(self) -> Optional[ScoreResult]:
        top = self.top_scores(1)
        return top[0] if top else None
