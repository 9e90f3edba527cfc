"""Synthesized sound effects and background music (numpy + pygame.mixer, no files)"""
import logging
from typing import Dict, Iterable, Optional, Tuple

import numpy as np
import pygame

log = logging.getLogger(__name__)

SAMPLE_RATE = 44100


def _wave(kind: str, phase: np.ndarray) -> np.ndarray:
    if kind == "square":
        return np.sign(np.sin(2 * np.pi * phase))
    if kind == "sawtooth":
        return 2.0 * (phase - np.floor(phase + 0.5))
    if kind == "triangle":
        return 2.0 * np.abs(2.0 * (phase - np.floor(phase + 0.5))) - 1.0
    return np.sin(2 * np.pi * phase)


def _stereo(mono: np.ndarray) -> np.ndarray:
    mono = np.clip(mono, -1.0, 1.0)
    return (np.column_stack((mono, mono)) * 32767).astype(np.int16)


def tone_wave(freq, duration, kind="sine", volume=0.1, sample_rate=SAMPLE_RATE):
    """Mono float samples with a short fade in and out to avoid clicks."""
    n = int(sample_rate * duration)
    t = np.arange(n) / sample_rate
    w = _wave(kind, freq * t) * volume
    ramp = min(n // 2, int(sample_rate * 0.01))
    if ramp:
        env = np.ones(n)
        env[:ramp] = np.linspace(0.0, 1.0, ramp)
        env[-ramp:] = np.linspace(1.0, 0.0, ramp)
        w = w * env
    return w


def tone(freq, duration, kind="sine", volume=0.1, sample_rate=SAMPLE_RATE):
    return _stereo(tone_wave(freq, duration, kind, volume, sample_rate))


def noise(duration, volume=0.05, sample_rate=SAMPLE_RATE, seed=None):
    rng = np.random.default_rng(seed)
    return _stereo(rng.normal(0, volume, int(sample_rate * duration)))


def sequence(notes: Iterable[Tuple[float, float, float, str, float]], duration: float,
             sample_rate=SAMPLE_RATE) -> np.ndarray:
    """Mix (start, freq, dur, kind, volume) notes into one stereo buffer."""
    buf = np.zeros(int(sample_rate * duration))
    for start, freq, dur, kind, volume in notes:
        w = tone_wave(freq, dur, kind, volume, sample_rate)
        i = int(start * sample_rate)
        if i >= len(buf):
            continue
        w = w[:len(buf) - i]
        buf[i:i + len(w)] += w
    return _stereo(buf)


def ambient_track(root=220.0):
    notes = []
    duration = 24.0
    chords = [(0, 4, 7), (5, 9, 12), (7, 11, 14), (4, 7, 11)]
    for n, t in enumerate(np.arange(0, duration, 4.0)):
        for step in chords[n % len(chords)]:
            notes.append((t, root * 2 ** (step / 12), 4.0, "sine", 0.02))
    for t in np.arange(0, duration, 0.5):
        step = int(t * 2) % 6
        notes.append((t + 0.05, root * 2 ** (step * 2 / 12), 0.18, "triangle", 0.04))
    return sequence(notes, duration)


def rhythm_track(root=110.0):
    notes = []
    duration = 22.0
    for t in np.arange(0, duration, 0.5):
        notes.append((t, root, 0.16, "sawtooth", 0.06))
        notes.append((t + 0.08, root * 3.5, 0.28, "sine", 0.03))
    for t in np.arange(0.25, duration, 1.25):
        notes.append((t + 0.02, root * 2 ** ((int(t * 2) % 7) / 12), 0.22, "triangle", 0.035))
    return sequence(notes, duration)


def sequence_track(root=196.0):
    notes = []
    duration = 26.0
    for t in np.arange(0, duration, 6.0):
        for step in (0, 7, 12):
            notes.append((t, root * 2 ** (step / 12), 6.0, "sine", 0.018))
    for n, t in enumerate(np.arange(0, duration, 0.6)):
        step = n % 8
        notes.append((t + 0.05, root * 2 ** ((step * 3 % 12) / 12), 0.38, "sine", 0.04))
    return sequence(notes, duration)


# same order as tetris_config.MUSIC_TRACKS
TRACKS = (ambient_track, rhythm_track, sequence_track)


# clear count -> (delay s, freq, dur, kind)
CLEAR_JINGLES = {
    1: [(0.0, 440, 0.12, "triangle")],
    2: [(0.0, 520, 0.14, "sine"), (0.12, 660, 0.12, "triangle")],
    3: [(0.0, 660, 0.18, "sawtooth"), (0.12, 880, 0.14, "triangle"), (0.24, 1040, 0.10, "square")],
    4: [(0.0, 880, 0.12, "sawtooth"), (0.10, 1100, 0.12, "sine"), (0.22, 1320, 0.16, "triangle")],
}


def clear_jingle(count: int) -> Optional[np.ndarray]:
    if count <= 0:
        return None
    parts = CLEAR_JINGLES[min(count, 4)]
    duration = max(d + l for d, _, l, _ in parts)
    return sequence([(d, f, l, k, 0.08) for d, f, l, k in parts], duration)


class SoundBoard:
    """
    Plays effects for game events and loops the background track.

    Built lazily: nothing touches the mixer until the first sound is needed, and
    a mixer that fails to open just leaves the game silent.
    """

    def __init__(self, sfx_enabled: bool = True, music_enabled: bool = True, track: int = 0):
        self.sfx_enabled = sfx_enabled
        self.music_enabled = music_enabled
        self.sounds: Dict[str, pygame.mixer.Sound] = {}
        self.music: Optional[pygame.mixer.Sound] = None
        self.track = track
        self.playing = False
        self.available: Optional[bool] = None

    def _ready(self) -> bool:
        if self.available is None:
            try:
                if not pygame.mixer.get_init():
                    pygame.mixer.init(frequency=SAMPLE_RATE, size=-16, channels=2, buffer=512)
                self.available = True
            except pygame.error as e:
                log.warning("audio unavailable: %s", e)
                self.available = False
        return self.available

    def _sound(self, name: str, make):
        if name not in self.sounds:
            self.sounds[name] = pygame.sndarray.make_sound(make())
        return self.sounds[name]

    def play(self, name: str):
        if not self.sfx_enabled or not self._ready():
            return
        makers = {
            "start": lambda: tone(660, 0.1, "square", 0.08),
            "place": lambda: tone(220, 0.06, "square", 0.06),
            "gameover": lambda: noise(0.5),
        }
        if name.startswith("clear"):
            count = int(name[5:])
            self._sound(name, lambda: clear_jingle(count)).play()
        else:
            self._sound(name, makers[name]).play()

    def start_music(self):
        if not self.music_enabled or not self._ready():
            return
        if self.music is None:
            self.music = pygame.sndarray.make_sound(TRACKS[self.track]())
        self.music.stop()
        self.music.play(loops=-1)
        self.playing = True

    def stop_music(self):
        self.playing = False
        if self.music is not None:
            self.music.stop()

    def select_track(self, track: int):
        if track == self.track:
            return
        was_playing = self.playing
        self.stop_music()
        self.track = track
        self.music = None
        if was_playing:
            self.start_music()

    def toggle_music(self):
        self.music_enabled = not self.music_enabled
        if self.music_enabled:
            self.start_music()
        else:
            self.stop_music()

    def handle(self, event):
        if event.placed:
            self.play("place")
        if event.cleared:
            self.play(f"clear{min(event.cleared, 4)}")
        if event.game_over:
            self.stop_music()
            self.play("gameover")
        elif event.paused:
            self.stop_music()
