# tetris_layout.py
from dataclasses import dataclass

from tetris_piece import COLS, ROWS

PREVIEW_CELLS = 4


@dataclass
class Dims:
    cell: int
    margin: int
    panel_w: int
    board_w: int
    board_h: int
    total_w: int
    total_h: int
    board_x: int
    board_y: int
    panel_x: int
    panel_y: int
    preview_x: int
    preview_y: int


def compute_dims(cell: int) -> Dims:
    margin = 16
    panel_w = max(180, PREVIEW_CELLS * cell + 40)

    board_w = COLS * cell
    board_h = ROWS * cell
    board_x = board_y = margin
    panel_x = board_x + board_w + margin

    return Dims(
        cell=cell, margin=margin, panel_w=panel_w,
        board_w=board_w, board_h=board_h,
        total_w=panel_x + panel_w + margin,
        total_h=margin + board_h + margin,
        board_x=board_x, board_y=board_y,
        panel_x=panel_x, panel_y=margin,
        preview_x=panel_x + 12, preview_y=margin + 140,
    )
