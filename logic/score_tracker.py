"""
Score tracking for TicTacToe.
Counts wins and ties across games and keeps them in a score store.
"""

import json
import os
from dataclasses import dataclass
from typing import Dict, Optional
from .config import GameConfig
from .game_state import Player


@dataclass
class ScoreRecord:
    """Win/tie counts, stored as {"X": n, "O": n, "TIE": n}."""
    x: int = 0
    o: int = 0
    tie: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {"X": self.x, "O": self.o, "TIE": self.tie}

    @classmethod
    def from_dict(cls, data) -> "ScoreRecord":
        """
        Build a record from stored data.

        Missing keys count as zero and unknown keys are ignored.

        Raises:
            ValueError: If data is not a mapping of non-negative integers.
        """
        if not isinstance(data, dict):
            raise ValueError(f"Expected a mapping, got {type(data).__name__}")

        counts = {}
        for key in ("X", "O", "TIE"):
            value = data.get(key, 0)
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ValueError(f"Bad count for {key}: {value!r}")
            counts[key] = value

        return cls(x=counts["X"], o=counts["O"], tie=counts["TIE"])

    def copy(self) -> "ScoreRecord":
        return ScoreRecord(self.x, self.o, self.tie)


class ScoreStore:
    """Where score records live between runs."""

    def read(self) -> Optional[dict]:
        """Return the stored mapping, or None if nothing was stored."""
        raise NotImplementedError

    def write(self, data: dict) -> None:
        raise NotImplementedError


class MemoryScoreStore(ScoreStore):
    """Keeps scores for the lifetime of the process only."""

    def __init__(self, data: Optional[dict] = None):
        self.data = data

    def read(self) -> Optional[dict]:
        return self.data

    def write(self, data: dict) -> None:
        self.data = dict(data)


class JsonFileScoreStore(ScoreStore):
    """
    Scores in a JSON file, under a fixed key.

    File layout: {"ttt_scores": {"X": 3, "O": 1, "TIE": 5}}
    Other top-level keys in the file are preserved on write.
    """

    def __init__(self, path: Optional[str] = None, key: Optional[str] = None):
        self.path = path or GameConfig.SCORE_FILE
        self.key = key or GameConfig.SCORE_KEY

    def _read_file(self) -> dict:
        if not os.path.exists(self.path):
            return {}
        with open(self.path, "r", encoding="utf-8") as f:
            content = json.load(f)
        if not isinstance(content, dict):
            raise ValueError(f"{self.path} does not hold a JSON object")
        return content

    def read(self) -> Optional[dict]:
        return self._read_file().get(self.key)

    def write(self, data: dict) -> None:
        try:
            content = self._read_file()
        except (ValueError, RecursionError):
            content = {}
        content[self.key] = data

        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        tmp_path = self.path + ".tmp"
        try:
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(content, f, indent=2)
            os.replace(tmp_path, self.path)
        finally:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)


class ScoreTracker:
    """
    Keeps the running score.

    Storage problems never reach the game: a failed read gives a zero
    record, a failed write keeps the counts in memory.
    """

    def __init__(self, store: Optional[ScoreStore] = None):
        self.store = store if store is not None else MemoryScoreStore()
        self.record = self.load()

    def load(self) -> ScoreRecord:
        """Read the stored record, zeros if missing or unreadable."""
        try:
            data = self.store.read()
            if data is None:
                return ScoreRecord()
            return ScoreRecord.from_dict(data)
        except (OSError, ValueError, RecursionError) as e:
            print(f"Warning: could not load scores ({e}), starting from zero")
            return ScoreRecord()

    def increment(self, winner: Optional[Player]) -> ScoreRecord:
        """
        Count a finished game.

        Args:
            winner: The winning player, or None for a tie.
        """
        if winner == Player.X:
            self.record.x += 1
        elif winner == Player.O:
            self.record.o += 1
        else:
            self.record.tie += 1
        return self.record

    def save(self, record: Optional[ScoreRecord] = None) -> bool:
        """
        Write a record to the store.

        Returns:
            True if the store accepted it.
        """
        if record is not None:
            self.record = record
        try:
            self.store.write(self.record.to_dict())
            return True
        except (OSError, TypeError, ValueError, RecursionError) as e:
            print(f"Warning: could not save scores ({e})")
            return False

    def reset(self) -> ScoreRecord:
        """Zero all counts and save."""
        self.record = ScoreRecord()
        self.save()
        return self.record
