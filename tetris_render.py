"""
Rendering for the Tetris front end.

Reads a GameView and never touches the Game itself.

- Pre-render one cell sprite per kind and blit it.
- Pre-render the static background (grid, panel frame, preview frame).
- Cache a BOARD SURFACE holding only *locked* cells, rebuilt when the cells change.
- Cache HUD text surfaces and re-render them only when values change.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

import pygame

from tetris_game import GameState, GameView, PieceView
from tetris_layout import Dims, PREVIEW_CELLS
from tetris_piece import COLORS, COLS, DOT, ROWS

BLINK_MS = 250


def dot_visible(now_ms: int, period: int = BLINK_MS) -> bool:
    return (now_ms // period) % 2 == 0


@dataclass
class HudCache:
    values: Dict[str, int] = field(default_factory=dict)
    text: Dict[str, pygame.Surface] = field(default_factory=dict)
    next_piece: Optional[PieceView] = None
    preview: Optional[pygame.Surface] = None
    scores: Optional[Tuple[Tuple[str, int], ...]] = None
    score_lines: List[pygame.Surface] = field(default_factory=list)


class Renderer:
    def __init__(self, dims: Dims, font: pygame.font.Font, big_font: pygame.font.Font):
        self.dims = dims
        self.font = font
        self.big_font = big_font
        self._make_static()
        self._make_cells()
        self.hud = HudCache()
        self.board_surface = pygame.Surface((dims.board_w, dims.board_h), pygame.SRCALPHA)
        self._board_cells = None

    def _make_static(self):
        d = self.dims
        self.bg = pygame.Surface((d.total_w, d.total_h))
        self.bg.fill((10,13,34))
        grid_col = (40,50,90)
        for x in range(COLS+1):
            X = d.board_x + x*d.cell
            pygame.draw.line(self.bg, grid_col, (X, d.board_y), (X, d.board_y + d.board_h))
        for y in range(ROWS+1):
            Y = d.board_y + y*d.cell
            pygame.draw.line(self.bg, grid_col, (d.board_x, Y), (d.board_x + d.board_w, Y))
        panel = pygame.Rect(d.panel_x, d.panel_y, d.panel_w, d.board_h)
        pygame.draw.rect(self.bg, (21,25,53), panel)
        pygame.draw.rect(self.bg, (50,60,100), panel, 1)
        self.pv_cell = max(12, int(d.cell*0.75))
        frame = pygame.Rect(d.preview_x-6, d.preview_y-6,
                            self.pv_cell*PREVIEW_CELLS+12, self.pv_cell*PREVIEW_CELLS+12)
        pygame.draw.rect(self.bg, (15,18,40), frame)
        pygame.draw.rect(self.bg, (55,65,110), frame, 1)

    def _make_cells(self):
        self.cell_surf: Dict[str, pygame.Surface] = {}
        c = self.dims.cell
        for kind, col in COLORS.items():
            s = pygame.Surface((c-2, c-2))
            s.fill(col)
            pygame.draw.rect(s, (0,0,0), (0,0,c-2,c-2), 1)
            self.cell_surf[kind] = s

    # ---------- board ----------
    def _rebuild_board(self, cells):
        self.board_surface.fill((0,0,0,0))
        c = self.dims.cell
        for y, row in enumerate(cells):
            for x, kind in enumerate(row):
                if kind:
                    self.board_surface.blit(self.cell_surf[kind], (x*c + 1, y*c + 1))
        self._board_cells = cells

    def _draw_piece(self, screen, p: PieceView, now_ms: int):
        if p.kind == DOT and not dot_visible(now_ms):
            return
        d = self.dims
        for bx, by in p.cells():
            if by >= 0:
                screen.blit(self.cell_surf[p.kind], (d.board_x + bx*d.cell + 1, d.board_y + by*d.cell + 1))

    # ---------- HUD ----------
    def _label(self, key: str, value: int) -> pygame.Surface:
        if self.hud.values.get(key) != value:
            self.hud.values[key] = value
            self.hud.text[key] = self.font.render(f"{key.title()}: {value}", True, (200,210,240))
        return self.hud.text[key]

    def _preview(self, p: PieceView) -> pygame.Surface:
        if p != self.hud.next_piece:
            self.hud.next_piece = p
            n = PREVIEW_CELLS
            s = pygame.Surface((self.pv_cell*n, self.pv_cell*n), pygame.SRCALPHA)
            offx = (n - len(p.matrix[0])) // 2
            offy = max(0, (n - len(p.matrix)) // 2)
            for y, row in enumerate(p.matrix):
                for x, v in enumerate(row):
                    if v:
                        block = pygame.Surface((self.pv_cell-2, self.pv_cell-2))
                        block.fill(COLORS[p.kind])
                        s.blit(block, ((x+offx)*self.pv_cell + 1, (y+offy)*self.pv_cell + 1))
            self.hud.preview = s
        return self.hud.preview

    def _scores(self, scores):
        key = tuple((e.name, e.score) for e in scores)
        if key != self.hud.scores:
            self.hud.scores = key
            self.hud.score_lines = [self.font.render(f"{i+1}. {n[:10]}  {s}", True, (165,175,215))
                                    for i, (n, s) in enumerate(key[:5])]
        return self.hud.score_lines

    def _banner(self, screen, text, color, dy=0):
        d = self.dims
        msg = self.big_font.render(text, True, color)
        screen.blit(msg, msg.get_rect(center=(d.board_x + d.board_w//2, d.board_y + d.board_h//2 + dy)))

    def draw(self, screen: pygame.Surface, view: GameView, now_ms: int, scores=()):
        d = self.dims
        screen.blit(self.bg, (0,0))
        if view.cells != self._board_cells:
            self._rebuild_board(view.cells)
        screen.blit(self.board_surface, (d.board_x, d.board_y))
        if view.state is not GameState.READY:
            self._draw_piece(screen, view.current, now_ms)

        x = d.panel_x + 12
        screen.blit(self._label("score", view.score), (x, d.panel_y + 12))
        screen.blit(self._label("level", view.level), (x, d.panel_y + 36))
        screen.blit(self._label("lines", view.lines), (x, d.panel_y + 60))
        screen.blit(self.font.render("Next:", True, (200,210,240)), (x, d.panel_y + 112))
        screen.blit(self._preview(view.next), (d.preview_x, d.preview_y))
        y = d.preview_y + self.pv_cell*PREVIEW_CELLS + 24
        if scores:
            screen.blit(self.font.render("High scores:", True, (200,210,240)), (x, y)); y += 22
            for surf in self._scores(scores):
                screen.blit(surf, (x, y)); y += 20

        if view.state is GameState.READY:
            self._banner(screen, "ENTER to start", (220,240,255))
        elif view.state is GameState.PAUSED:
            self._banner(screen, "PAUSED", (220,240,255))
        elif view.state is GameState.GAME_OVER:
            self._banner(screen, "GAME OVER", (255,220,220), -20)
            self._banner(screen, f"{view.score}  (R / ENTER)", (255,220,220), 20)
