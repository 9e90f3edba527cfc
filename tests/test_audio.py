import numpy as np

from tetris_audio import (SAMPLE_RATE, TRACKS, SoundBoard, ambient_track, clear_jingle, noise,
                          rhythm_track, sequence, sequence_track, tone)
from tetris_config import MUSIC_TRACKS
from tetris_game import GameEvent


def test_tone_is_stereo_int16():
    a = tone(440, 0.1, "square", 0.1)
    assert a.shape == (int(SAMPLE_RATE * 0.1), 2)
    assert a.dtype == np.int16
    assert np.array_equal(a[:, 0], a[:, 1])
    assert np.abs(a).max() <= int(0.1 * 32767) + 1


def test_noise_is_reproducible_with_seed():
    assert np.array_equal(noise(0.05, seed=1), noise(0.05, seed=1))


def test_sequence_clips_notes_past_end():
    a = sequence([(0.0, 440, 0.5, "sine", 0.1), (0.9, 660, 0.5, "triangle", 0.1), (2.0, 1, 1, "sine", 1)], 1.0)
    assert a.shape == (SAMPLE_RATE, 2)


def test_clear_jingle():
    assert clear_jingle(0) is None
    assert clear_jingle(1).shape[1] == 2
    assert clear_jingle(7).shape == clear_jingle(4).shape


def test_ambient_track_length():
    assert ambient_track().shape == (SAMPLE_RATE * 24, 2)


class QuietBoard(SoundBoard):
    def __init__(self):
        super().__init__()
        self.played = []
        self.stopped = 0

    def play(self, name):
        self.played.append(name)

    def stop_music(self):
        self.stopped += 1


def test_sound_board_routes_events():
    b = QuietBoard()
    b.handle(GameEvent(0, 1, 0, False, False, placed=True, cleared=0))
    b.handle(GameEvent(100, 1, 2, False, False, cleared=2))
    b.handle(GameEvent(100, 1, 9, False, False, cleared=6))
    b.handle(GameEvent(100, 1, 9, True, False))
    b.handle(GameEvent(100, 1, 9, False, True, cleared=0))
    assert b.played == ["place", "clear2", "clear4", "gameover"]
    assert b.stopped == 2


def test_track_lengths():
    assert rhythm_track().shape == (SAMPLE_RATE * 22, 2)
    assert sequence_track().shape == (SAMPLE_RATE * 26, 2)


def test_one_track_per_setting_name():
    assert len(TRACKS) == len(MUSIC_TRACKS)
    assert TRACKS[0] is ambient_track


class Jukebox(SoundBoard):
    def __init__(self, track=0):
        super().__init__(track=track)
        self.started = []

    def start_music(self):
        self.started.append(self.track)
        self.playing = True


def test_select_track_while_silent_only_records_choice():
    b = Jukebox()
    b.select_track(2)
    assert b.track == 2
    assert b.music is None
    assert b.started == []


def test_select_track_restarts_playing_music():
    b = Jukebox()
    b.start_music()
    b.select_track(1)
    assert b.started == [0, 1]
    assert b.playing


def test_select_same_track_keeps_music():
    b = Jukebox(track=1)
    b.start_music()
    b.select_track(1)
    assert b.started == [1]
