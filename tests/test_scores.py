import json
import random

from tetris_config import GameOptions
from tetris_game import Game, GameEvent, Observers
from tetris_piece import create_piece
from tetris_scores import HighScores, load_scores, save_score


def test_scores_are_sorted_and_trimmed(tmp_path):
    path = tmp_path / "scores.json"
    for i, score in enumerate([300, 100, 900, 500]):
        save_score(f"p{i}", score, path, max_entries=3)
    entries = load_scores(path)
    assert [e.score for e in entries] == [900, 500, 300]
    assert [e.name for e in entries] == ["p2", "p3", "p0"]
    assert all(e.date for e in entries)


def test_load_limit(tmp_path):
    path = tmp_path / "scores.json"
    for s in range(5):
        save_score("x", s, path)
    assert [e.score for e in load_scores(path, limit=2)] == [4, 3]


def test_blank_name_becomes_anonymous(tmp_path):
    entries = save_score("   ", 10, tmp_path / "s.json")
    assert entries[0].name == "Anonymous"


def test_missing_or_corrupt_file(tmp_path):
    assert load_scores(tmp_path / "nothing.json") == []
    bad = tmp_path / "bad.json"
    bad.write_text("{{{")
    assert load_scores(bad) == []
    bad.write_text(json.dumps({"name": "a"}))
    assert load_scores(bad) == []


def test_malformed_entries_are_skipped(tmp_path):
    path = tmp_path / "s.json"
    path.write_text(json.dumps([{"name": "a", "score": 5}, {"score": "x"}, 7]))
    entries = load_scores(path)
    assert [(e.name, e.score) for e in entries] == [("a", 5)]


def test_high_scores_records_once_per_game(tmp_path):
    path = tmp_path / "s.json"
    hs = HighScores(path, "ada")
    over = GameEvent(1200, 3, 25, paused=False, game_over=True)
    hs.handle(GameEvent(1000, 3, 25, paused=False, game_over=False))
    hs.handle(over)
    hs.handle(over)
    assert [(e.name, e.score) for e in load_scores(path)] == [("ada", 1200)]
    hs.handle(GameEvent(0, 1, 0, paused=False, game_over=False))
    hs.handle(GameEvent(50, 1, 0, paused=False, game_over=True))
    assert [e.score for e in hs.entries] == [1200, 50]


def test_score_saved_even_when_audio_observer_fails(tmp_path):
    def broken_audio(event):
        raise RuntimeError("no mixer")

    path = tmp_path / "s.json"
    hs = HighScores(path, "ada")
    g = Game(GameOptions(dot_probability=0.0), Observers(broken_audio, hs.handle), random.Random(1))
    g.start()
    for c in range(9):
        g.board.cells[0][c] = "Z"
    g.current = create_piece("O")
    g.current.x, g.current.y = 0, 18
    g.next = create_piece("T")
    g.hard_drop()
    assert g.game_over
    assert [(e.name, e.score) for e in load_scores(path)] == [("ada", g.score)]
