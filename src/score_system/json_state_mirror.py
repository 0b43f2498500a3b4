"""
JSON game-state mirror - keeps a file with the latest snapshot for
external displays (scoreboard screen, remote sync job)
"""

import json
import os
import tempfile
from datetime import datetime
from pathlib import Path
from typing import Callable, TYPE_CHECKING

from .interfaces import IGameStateSink
from simon_system.session import GameSnapshot

if TYPE_CHECKING:
    from utils import ClassLogger


class JsonStateMirror(IGameStateSink):
    """
    Rewrites a JSON file with every snapshot.

    The file is written to a temp file next to the target and renamed into
    place, so readers never see a half-written document.
    """

    def __init__(self, json_path: str, logger: 'ClassLogger',
                 now: Callable[[], datetime] = datetime.now):
        self.json_path = Path(json_path)
        self.logger = logger
        self._now = now

    def update_game(self, snapshot: GameSnapshot) -> None:
        document = snapshot.as_dict()
        document["updated_at"] = self._now().isoformat(timespec="milliseconds")

        self.json_path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=self.json_path.parent, prefix=".simon_state_", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as tmp_file:
                json.dump(document, tmp_file, indent=2)
            os.replace(tmp_path, self.json_path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise

        self.logger.debug(f"State mirrored: {document}")
