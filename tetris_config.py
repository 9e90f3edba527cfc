"""Game options and front-end settings (persisted as JSON under ~/.tetris)"""
import json
import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Optional

from tetris_rng import kinds_for

log = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".tetris"
SETTINGS_PATH = CONFIG_DIR / "config.json"
SCORES_PATH = CONFIG_DIR / "highscores.json"

DEFAULTS = {
    "CELL_SIZE": 24,
    "DAS_MS": 170,
    "ARR_MS": 50,
    "SOFT_DROP_REPEAT_MS": 120,
    "EXTRA_SHAPES": False,
    "DOT_PROBABILITY": 0.05,
    "MUSIC_ENABLED": True,
    "MUSIC_TRACK": 0,
    "SFX_ENABLED": True,
    "PLAYER_NAME": "Anonymous",
    "LOG_LEVEL": "INFO",
    "SEED": None,
}

MUSIC_TRACKS = ("Ambient", "Rhythm", "Sequence")


def _coerce(name: str, value):
    """Check a loaded value against the type of its default. JSON floats like 30.0 pass as ints."""
    default = DEFAULTS[name]
    if value is None and default is None:
        return None
    if isinstance(default, bool):
        if not isinstance(value, bool):
            raise TypeError(f"{name} must be true or false, got {value!r}")
        return value
    if isinstance(value, bool):
        raise TypeError(f"{name} must be a number, got {value!r}")
    if isinstance(default, int) or name == "SEED":
        if isinstance(value, float) and value.is_integer():
            value = int(value)
        if not isinstance(value, int):
            raise TypeError(f"{name} must be an integer, got {value!r}")
        return value
    if isinstance(default, float):
        if not isinstance(value, (int, float)):
            raise TypeError(f"{name} must be a number, got {value!r}")
        return float(value)
    if not isinstance(value, str):
        raise TypeError(f"{name} must be a string, got {value!r}")
    return value


@dataclass(frozen=True)
class GameOptions:
    """What the session deals: extended shapes on/off and the DOT injection rate."""
    extra_shapes: bool = False
    dot_probability: float = 0.05

    def __post_init__(self):
        if not 0.0 <= self.dot_probability <= 1.0:
            raise ValueError(f"dot_probability must be in [0, 1], got {self.dot_probability!r}")

    @property
    def kinds(self):
        return kinds_for(self.extra_shapes)


@dataclass
class Settings:
    CELL_SIZE: int = DEFAULTS["CELL_SIZE"]
    DAS_MS: int = DEFAULTS["DAS_MS"]
    ARR_MS: int = DEFAULTS["ARR_MS"]
    SOFT_DROP_REPEAT_MS: int = DEFAULTS["SOFT_DROP_REPEAT_MS"]
    EXTRA_SHAPES: bool = DEFAULTS["EXTRA_SHAPES"]
    DOT_PROBABILITY: float = DEFAULTS["DOT_PROBABILITY"]
    MUSIC_ENABLED: bool = DEFAULTS["MUSIC_ENABLED"]
    MUSIC_TRACK: int = DEFAULTS["MUSIC_TRACK"]
    SFX_ENABLED: bool = DEFAULTS["SFX_ENABLED"]
    PLAYER_NAME: str = DEFAULTS["PLAYER_NAME"]
    LOG_LEVEL: str = DEFAULTS["LOG_LEVEL"]
    SEED: Optional[int] = DEFAULTS["SEED"]

    def __post_init__(self):
        for f in fields(self):
            setattr(self, f.name, _coerce(f.name, getattr(self, f.name)))
        if self.CELL_SIZE < 8:
            raise ValueError(f"CELL_SIZE too small: {self.CELL_SIZE}")
        for name in ("DAS_MS", "ARR_MS", "SOFT_DROP_REPEAT_MS"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must not be negative")
        if not 0 <= self.MUSIC_TRACK < len(MUSIC_TRACKS):
            raise ValueError(f"MUSIC_TRACK must be in [0, {len(MUSIC_TRACKS)}), got {self.MUSIC_TRACK}")
        self.game_options()

    @classmethod
    def from_dict(cls, data: dict) -> "Settings":
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})

    def to_dict(self) -> dict:
        return asdict(self)

    def game_options(self) -> GameOptions:
        return GameOptions(self.EXTRA_SHAPES, self.DOT_PROBABILITY)


def load_settings(path: Path = SETTINGS_PATH) -> Settings:
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        return Settings()
    except (OSError, json.JSONDecodeError) as e:
        log.warning("could not read settings from %s: %s", path, e)
        return Settings()
    if not isinstance(data, dict):
        log.warning("ignoring settings file %s: expected an object", path)
        return Settings()
    try:
        return Settings.from_dict(data)
    except (TypeError, ValueError) as e:
        log.warning("ignoring settings file %s: %s", path, e)
        return Settings()


def save_settings(settings: Settings, path: Path = SETTINGS_PATH):
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(settings.to_dict(), f, indent=2)
    except OSError as e:
        log.warning("could not write settings to %s: %s", path, e)
