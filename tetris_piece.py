"""Piece model, shape catalog, rotation"""
from dataclasses import dataclass
from math import ceil
from typing import Dict, List, Tuple

COLS, ROWS = 10, 20

Matrix = List[List[int]]

STANDARD_KINDS = ("I", "J", "L", "O", "S", "T", "Z")
EXTRA_KINDS = ("U", "P", "W", "V", "X", "Y")
DOT = "DOT"

# Catalog templates are tuples so nothing can rotate them in place
SHAPES: Dict[str, Tuple[Tuple[int, ...], ...]] = {
    "I": ((0,0,0,0),(1,1,1,1),(0,0,0,0),(0,0,0,0)),
    "J": ((1,0,0),(1,1,1),(0,0,0)),
    "L": ((0,0,1),(1,1,1),(0,0,0)),
    "O": ((1,1),(1,1)),
    "S": ((0,1,1),(1,1,0),(0,0,0)),
    "T": ((0,1,0),(1,1,1),(0,0,0)),
    "Z": ((1,1,0),(0,1,1),(0,0,0)),
    # extended set
    "U": ((1,0,1),(1,1,1),(0,0,0)),
    "P": ((1,1,0),(1,1,1),(0,0,0)),
    "W": ((1,0,0),(1,1,0),(0,1,1)),
    "V": ((1,0,0),(1,0,0),(1,1,0)),
    "X": ((0,1,0),(1,1,1),(0,1,0)),
    "Y": ((0,1,0,0),(1,1,1,1),(0,0,0,0),(0,0,0,0)),
    DOT: ((1,),),
}

COLORS: Dict[str, Tuple[int,int,int]] = {
    "I": (0,229,255),
    "J": (63,81,181),
    "L": (255,183,77),
    "O": (255,213,79),
    "S": (0,230,118),
    "T": (186,104,200),
    "Z": (255,82,82),
    "U": (77,208,225),
    "P": (139,195,74),
    "W": (255,138,101),
    "V": (255,209,128),
    "X": (120,144,156),
    "Y": (179,157,219),
    DOT: (255,255,255),
}


def rotate_cw(m): return [list(r) for r in zip(*m[::-1])]


@dataclass
class Piece:
    kind: str
    matrix: Matrix
    x: int
    y: int


def create_piece(kind: str) -> Piece:
    m = [list(r) for r in SHAPES[kind]]
    return Piece(kind, m, COLS // 2 - ceil(len(m[0]) / 2), -1)
