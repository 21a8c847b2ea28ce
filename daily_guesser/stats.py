import json
import logging
import os
import tempfile
import threading
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Dict, Optional

from daily_guesser.game import NUM_GUESSES_ALLOWED, DailyGame

logger = logging.getLogger(__name__)

# Streamlit serves each session on its own thread; every read-modify-write of the file holds this
_store_lock = threading.Lock()


def _empty_distribution(num_guesses_allowed=NUM_GUESSES_ALLOWED):
    dist = {str(i): 0 for i in range(1, num_guesses_allowed + 1)}
    dist["X"] = 0
    return dist


@dataclass
class StatsData:
    num_completed: int = 0
    guess_distribution: Dict[str, int] = field(default_factory=_empty_distribution)
    num_bonus_correct: int = 0
    current_streak: int = 0
    max_streak: int = 0
    last_completed_puzzle: Optional[int] = None

    def record(self, puzzle_number, correct, num_guesses, bonus_correct):
        """Fold one finished puzzle into the totals. Returns False if it was already counted."""
        if self.last_completed_puzzle is not None and puzzle_number <= self.last_completed_puzzle:
            return False

        self.num_completed += 1
        key = str(num_guesses) if correct else "X"
        self.guess_distribution[key] = self.guess_distribution.get(key, 0) + 1
        if bonus_correct:
            self.num_bonus_correct += 1

        if correct:
            continues = self.last_completed_puzzle == puzzle_number - 1
            self.current_streak = self.current_streak + 1 if continues else 1
            self.max_streak = max(self.max_streak, self.current_streak)
        else:
            self.current_streak = 0

        self.last_completed_puzzle = puzzle_number
        return True

    @property
    def num_won(self):
        return sum(v for k, v in self.guess_distribution.items() if k != "X")

    @property
    def win_pct(self):
        if self.num_completed == 0:
            return 0
        return round(self.num_won / self.num_completed * 100)

    @property
    def bonus_pct(self):
        if self.num_completed == 0:
            return 0
        return round(self.num_bonus_correct / self.num_completed * 100)

    @classmethod
    def from_dict(cls, data):
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})


# ==================== Storage ====================
class StatsStore:
    """Per-player stats and in-progress game, kept in one JSON file."""

    def __init__(self, path):
        self.path = Path(path)

    def _load(self):
        if not self.path.exists():
            return {}
        with self.path.open("r", encoding="utf-8") as f:
            return json.load(f)

    def _save(self, data):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            "w", encoding="utf-8", dir=self.path.parent, prefix=self.path.name, suffix=".tmp", delete=False,
        ) as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
        os.replace(f.name, self.path)

    def load_stats(self, player) -> StatsData:
        with _store_lock:
            data = self._load()
        entry = data.get(player) or {}
        return StatsData.from_dict(entry.get("stats") or {})

    def load_game(self, player, selection) -> Optional[DailyGame]:
        """The stored game, if it is for today's puzzle; stale games are ignored."""
        with _store_lock:
            data = self._load()
        stored = (data.get(player) or {}).get("today")
        if not stored:
            return None
        today = (selection.target_code, selection.puzzle_number)
        if (stored.get("target_code"), stored.get("puzzle_number")) != today:
            logger.info("Discarding stored game for %s: it belongs to an earlier puzzle", player)
            return None
        return DailyGame.from_dict(stored)

    def save_game(self, player, game: DailyGame):
        with _store_lock:
            data = self._load()
            data.setdefault(player, {})["today"] = game.to_dict()
            self._save(data)

    def record_result(self, player, game: DailyGame) -> StatsData:
        with _store_lock:
            data = self._load()
            entry = data.setdefault(player, {})
            stats = StatsData.from_dict(entry.get("stats") or {})
            if stats.record(game.puzzle_number, game.correct, game.num_guesses, game.bonus_correct):
                logger.info(
                    "Recorded puzzle #%d for %s: correct=%s guesses=%d bonus=%s",
                    game.puzzle_number, player, game.correct, game.num_guesses, game.bonus_correct,
                )
            entry["stats"] = asdict(stats)
            entry["today"] = game.to_dict()
            self._save(data)
        return stats
