import json

import pytest

from tetris_config import DEFAULTS, GameOptions, Settings, load_settings, save_settings
from tetris_piece import EXTRA_KINDS, STANDARD_KINDS


def test_options_defaults():
    o = GameOptions()
    assert o.extra_shapes is False
    assert o.dot_probability == 0.05
    assert o.kinds == STANDARD_KINDS


def test_extra_shapes_extend_kinds():
    assert GameOptions(extra_shapes=True).kinds == STANDARD_KINDS + EXTRA_KINDS


@pytest.mark.parametrize("p", [-0.01, 1.01])
def test_bad_probability_fails_at_construction(p):
    with pytest.raises(ValueError):
        GameOptions(dot_probability=p)


def test_settings_defaults_match_table():
    assert Settings().to_dict() == DEFAULTS


def test_settings_from_dict_ignores_unknown_keys():
    s = Settings.from_dict({"DAS_MS": 100, "BOGUS": 1})
    assert s.DAS_MS == 100
    assert not hasattr(s, "BOGUS")


def test_settings_game_options():
    s = Settings(EXTRA_SHAPES=True, DOT_PROBABILITY=0.2)
    assert s.game_options() == GameOptions(True, 0.2)


def test_load_missing_file_gives_defaults(tmp_path):
    assert load_settings(tmp_path / "none.json") == Settings()


@pytest.mark.parametrize("content", ["{not json", "[1, 2]"])
def test_load_bad_file_gives_defaults(tmp_path, content):
    path = tmp_path / "config.json"
    path.write_text(content)
    assert load_settings(path) == Settings()


def test_save_then_load(tmp_path):
    path = tmp_path / "sub" / "config.json"
    s = Settings(CELL_SIZE=30, PLAYER_NAME="ada", SEED=42)
    save_settings(s, path)
    assert json.loads(path.read_text())["CELL_SIZE"] == 30
    assert load_settings(path) == s


@pytest.mark.parametrize("data", [
    {"DOT_PROBABILITY": 1.5},
    {"DOT_PROBABILITY": "lots"},
    {"CELL_SIZE": "big"},
    {"CELL_SIZE": 2},
    {"EXTRA_SHAPES": "yes"},
    {"DAS_MS": -10},
    {"MUSIC_TRACK": 9},
    {"SEED": "abc"},
    {"PLAYER_NAME": 7},
])
def test_load_bad_values_gives_defaults(tmp_path, data):
    path = tmp_path / "config.json"
    path.write_text(json.dumps(data))
    s = load_settings(path)
    assert s == Settings()
    assert s.game_options() == GameOptions()


def test_load_coerces_numbers(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"CELL_SIZE": 30.0, "DOT_PROBABILITY": 0, "SEED": 5}))
    s = load_settings(path)
    assert s.CELL_SIZE == 30 and isinstance(s.CELL_SIZE, int)
    assert s.DOT_PROBABILITY == 0.0 and isinstance(s.DOT_PROBABILITY, float)
    assert s.SEED == 5


@pytest.mark.parametrize("kwargs", [{"DOT_PROBABILITY": 2.0}, {"CELL_SIZE": "x"}, {"MUSIC_ENABLED": 1}])
def test_settings_reject_bad_values(kwargs):
    with pytest.raises((TypeError, ValueError)):
        Settings(**kwargs)
