"""Playfield grid: collide, merge, sweep"""
from typing import List, Optional, Sequence, Tuple

from tetris_piece import COLS, ROWS

Cells = List[List[Optional[str]]]


class Board:
    """ROWS x COLS grid; each cell is None or the kind that locked there."""

    def __init__(self, rows: int = ROWS, cols: int = COLS):
        self.rows, self.cols = rows, cols
        self.cells: Cells = [[None] * cols for _ in range(rows)]

    def clear(self):
        self.cells = [[None] * self.cols for _ in range(self.rows)]

    def collides(self, matrix: Sequence[Sequence[int]], x: int, y: int) -> bool:
        """True if any set cell is off the sides, below the floor, or on a locked cell.

        Rows above the top (negative) only count against the side walls.
        """
        for r, row in enumerate(matrix):
            for c, v in enumerate(row):
                if not v:
                    continue
                bx, by = x + c, y + r
                if bx < 0 or bx >= self.cols or by >= self.rows:
                    return True
                if by >= 0 and self.cells[by][bx]:
                    return True
        return False

    def merge(self, matrix: Sequence[Sequence[int]], x: int, y: int, kind: str):
        for r, row in enumerate(matrix):
            for c, v in enumerate(row):
                if v and y + r >= 0:
                    self.cells[y + r][x + c] = kind

    def fill(self, row: int, col: int, kind: str):
        self.cells[row][col] = kind

    def lowest_empty(self, col: int) -> Optional[int]:
        for y in range(self.rows - 1, -1, -1):
            if not self.cells[y][col]:
                return y
        return None

    def is_full(self, row: int) -> bool:
        return all(self.cells[row][x] for x in range(self.cols))

    def sweep(self) -> int:
        """Clear full rows and return how many went.

        After a removal everything above shifts down one, so the same index is
        checked again before moving up.
        """
        cleared = 0
        y = self.rows - 1
        while y >= 0:
            if self.is_full(y):
                del self.cells[y]
                self.cells.insert(0, [None] * self.cols)
                cleared += 1
            else:
                y -= 1
        return cleared

    def rows_view(self) -> Tuple[Tuple[Optional[str], ...], ...]:
        return tuple(tuple(r) for r in self.cells)
