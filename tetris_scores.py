"""Local high-score table stored as JSON"""
import json
import logging
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import List

from tetris_config import SCORES_PATH

log = logging.getLogger(__name__)

MAX_ENTRIES = 10


@dataclass
class ScoreEntry:
    name: str
    score: int
    date: str


def _read(path: Path) -> List[ScoreEntry]:
    try:
        with open(path, encoding="utf-8") as f:
            raw = json.load(f)
    except FileNotFoundError:
        return []
    except (OSError, json.JSONDecodeError) as e:
        log.warning("could not read high scores from %s: %s", path, e)
        return []
    if not isinstance(raw, list):
        log.warning("ignoring high score file %s: expected a list", path)
        return []
    out = []
    for item in raw:
        try:
            out.append(ScoreEntry(str(item["name"]), int(item["score"]), str(item.get("date", ""))))
        except (KeyError, TypeError, ValueError):
            log.warning("skipping malformed high score entry %r", item)
    return out


def load_scores(path: Path = SCORES_PATH, limit: int = MAX_ENTRIES) -> List[ScoreEntry]:
    """Best scores first, at most ``limit`` of them."""
    entries = _read(path)
    entries.sort(key=lambda e: e.score, reverse=True)
    return entries[:limit]


def save_score(name: str, score: int, path: Path = SCORES_PATH,
               max_entries: int = MAX_ENTRIES) -> List[ScoreEntry]:
    entries = _read(path)
    entries.append(ScoreEntry(name.strip() or "Anonymous", max(0, int(score)),
                              datetime.now(timezone.utc).isoformat()))
    entries.sort(key=lambda e: e.score, reverse=True)
    entries = entries[:max_entries]
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump([asdict(e) for e in entries], f, indent=2)
    except OSError as e:
        log.warning("could not write high scores to %s: %s", path, e)
    return entries


class HighScores:
    """Observer that records the final score once per finished game."""

    def __init__(self, path: Path = SCORES_PATH, player: str = "Anonymous"):
        self.path = path
        self.player = player
        self.entries = load_scores(path)
        self._recorded = False

    def handle(self, event):
        if not event.game_over:
            self._recorded = False
            return
        if self._recorded:
            return
        self._recorded = True
        self.entries = save_score(self.player, event.score, self.path)
        log.info("recorded score %d for %s", event.score, self.player)
