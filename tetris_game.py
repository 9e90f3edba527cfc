"""
Game session: current/next piece, score and level, drop timer, command surface.

The session owns one Board and a BagRandomizer. It never reaches into UI,
audio or storage. Collaborators subscribe with an ``on_update`` callback and
receive a GameEvent after every state-changing operation, and renderers read
``view()`` after each tick or command.

Timing is driven from outside: the caller's frame clock calls ``tick(dt)``.
When the accumulator passes the drop interval the piece drops exactly once and
the accumulator goes back to zero. Any excess is thrown away, so a late frame
does not cause a burst of drops.
"""
from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Tuple

from tetris_board import Board
from tetris_config import GameOptions
from tetris_piece import DOT, Piece, rotate_cw
from tetris_rng import BagRandomizer

log = logging.getLogger(__name__)

BASE_DROP_MS = 800
DROP_STEP_MS = 60
MIN_DROP_MS = 100
LINES_PER_LEVEL = 10
HARD_DROP_PER_CELL = 2
SCORE_TABLE = {0: 0, 1: 100, 2: 300, 3: 500, 4: 800}


def drop_interval_ms(level: int) -> int:
    return max(MIN_DROP_MS, BASE_DROP_MS - (level - 1) * DROP_STEP_MS)


def line_clear_points(count: int) -> int:
    # counts past the table score nothing
    return SCORE_TABLE.get(count, 0)


class GameState(Enum):
    READY = "ready"
    RUNNING = "running"
    PAUSED = "paused"
    GAME_OVER = "game_over"


@dataclass(frozen=True)
class GameEvent:
    score: int
    level: int
    lines: int
    paused: bool
    game_over: bool
    placed: bool = False
    cleared: Optional[int] = None


@dataclass(frozen=True)
class PieceView:
    kind: str
    matrix: Tuple[Tuple[int, ...], ...]
    x: int
    y: int

    @classmethod
    def of(cls, p: Piece) -> "PieceView":
        return cls(p.kind, tuple(tuple(r) for r in p.matrix), p.x, p.y)

    def cells(self):
        """Absolute (col, row) of every set cell, including rows above the top."""
        return [(self.x + c, self.y + r)
                for r, row in enumerate(self.matrix)
                for c, v in enumerate(row) if v]


@dataclass(frozen=True)
class GameView:
    cells: Tuple[Tuple[Optional[str], ...], ...]
    current: PieceView
    next: PieceView
    state: GameState
    score: int
    level: int
    lines: int


Observer = Callable[[GameEvent], None]


class Observers:
    """Fan one game event out to several collaborators in order.

    A handler that raises is logged and skipped; the ones after it still run.
    """

    def __init__(self, *handlers: Observer):
        self.handlers = list(handlers)

    def __call__(self, event: GameEvent):
        for h in self.handlers:
            try:
                h(event)
            except Exception:
                log.exception("observer %r failed", h)


class Game:
    def __init__(self, options: Optional[GameOptions] = None,
                 on_update: Optional[Observer] = None,
                 rng: Optional[random.Random] = None):
        self.options = options or GameOptions()
        self.on_update = on_update
        self.rng = rng if rng is not None else random.Random()
        self.randomizer = self._make_randomizer(self.options)
        self.board = Board()
        self.reset()

    def _make_randomizer(self, options: GameOptions) -> BagRandomizer:
        return BagRandomizer(options.kinds, options.dot_probability, self.rng)

    # ---------- state ----------
    @property
    def paused(self) -> bool:
        return self.state is GameState.PAUSED

    @property
    def game_over(self) -> bool:
        return self.state is GameState.GAME_OVER

    @property
    def running(self) -> bool:
        return self.state is GameState.RUNNING

    def snapshot(self, placed: bool = False, cleared: Optional[int] = None) -> GameEvent:
        return GameEvent(self.score, self.level, self.lines, self.paused, self.game_over,
                         placed, cleared)

    def view(self) -> GameView:
        return GameView(self.board.rows_view(), PieceView.of(self.current), PieceView.of(self.next),
                        self.state, self.score, self.level, self.lines)

    def _notify(self, placed: bool = False, cleared: Optional[int] = None):
        if self.on_update is None:
            return
        try:
            self.on_update(self.snapshot(placed, cleared))
        except Exception:
            log.exception("observer failed; game state kept")

    # ---------- lifecycle ----------
    def configure(self, options: GameOptions, rebuild: bool = False):
        """Swap in new options. The pieces already dealt stay unless ``rebuild``."""
        self.options = options
        self.randomizer = self._make_randomizer(options)
        log.info("options changed: extra_shapes=%s dot_probability=%.2f",
                 options.extra_shapes, options.dot_probability)
        if rebuild:
            self.reset()

    def reset(self):
        self.board.clear()
        self.score = 0
        self.level = 1
        self.lines = 0
        self.drop_interval = drop_interval_ms(1)
        self.acc = 0.0
        self.current = self.randomizer.next_piece()
        self.next = self.randomizer.next_piece()
        self.state = GameState.READY
        self._notify()

    def start(self):
        self.reset()
        self.state = GameState.RUNNING
        log.info("game started")
        self._notify()

    def pause(self):
        if self.state is GameState.RUNNING:
            self.state = GameState.PAUSED
        elif self.state is GameState.PAUSED:
            self.state = GameState.RUNNING
        else:
            return
        self._notify()

    def tick(self, delta_ms: float):
        if not self.running:
            return
        self.acc += delta_ms
        if self.acc > self.drop_interval:
            self.soft_drop()
            self.acc = 0.0

    # ---------- commands ----------
    def move(self, dx: int) -> bool:
        if not self.running:
            return False
        cur = self.current
        if self.board.collides(cur.matrix, cur.x + dx, cur.y):
            return False
        cur.x += dx
        self._notify()
        return True

    def rotate(self) -> bool:
        if not self.running:
            return False
        cur = self.current
        rotated = rotate_cw(cur.matrix)
        if self.board.collides(rotated, cur.x, cur.y):
            return False
        cur.matrix = rotated
        self._notify()
        return True

    def soft_drop(self) -> bool:
        """Move down one row, locking the piece if it cannot. True if it moved."""
        if not self.running:
            return False
        cur = self.current
        if not self.board.collides(cur.matrix, cur.x, cur.y + 1):
            cur.y += 1
            self._notify(cleared=0)
            return True
        self._lock()
        return False

    def hard_drop(self) -> int:
        if not self.running:
            return 0
        cur = self.current
        rows = 0
        while not self.board.collides(cur.matrix, cur.x, cur.y + 1):
            cur.y += 1
            rows += 1
            self.score += HARD_DROP_PER_CELL
        self.soft_drop()
        return rows

    # ---------- lock-in ----------
    def _place(self, p: Piece):
        if p.kind == DOT:
            col = p.x
            row = self.board.lowest_empty(col)
            if row is not None:
                self.board.fill(row, col, DOT)
                return
        self.board.merge(p.matrix, p.x, p.y, p.kind)

    def _lock(self):
        cur = self.current
        self._place(cur)
        self._notify(placed=True, cleared=0)

        cleared = self.board.sweep()
        self.score += line_clear_points(cleared)
        self.lines += cleared
        level = self.lines // LINES_PER_LEVEL + 1
        if level != self.level:
            self.level = level
            self.drop_interval = drop_interval_ms(level)
            log.info("level %d, drop interval %d ms", level, self.drop_interval)
        log.debug("locked %s at (%d,%d), cleared %d", cur.kind, cur.x, cur.y, cleared)

        self.current = self.next
        self.next = self.randomizer.next_piece()
        nxt = self.current
        if self.board.collides(nxt.matrix, nxt.x, nxt.y):
            self.state = GameState.GAME_OVER
            log.info("game over: score %d, lines %d", self.score, self.lines)
        self._notify(cleared=cleared)
