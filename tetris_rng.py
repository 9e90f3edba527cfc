"""Bag randomizer with an independently injected DOT piece"""
import logging
import random
from typing import Iterable, List, Optional

from tetris_piece import DOT, EXTRA_KINDS, STANDARD_KINDS, Piece, create_piece

log = logging.getLogger(__name__)


def kinds_for(extra_shapes: bool):
    return STANDARD_KINDS + EXTRA_KINDS if extra_shapes else STANDARD_KINDS


class BagRandomizer:
    """
    Deals every enabled kind exactly once per bag, in shuffled order.

    The DOT piece never enters the bag. Before each draw it gets its own roll
    against ``dot_probability``, so how often it shows up has no effect on bag
    fairness and a DOT draw leaves the bag as it was.
    """

    def __init__(self, kinds: Iterable[str], dot_probability: float = 0.0,
                 rng: Optional[random.Random] = None):
        self.kinds = tuple(k for k in kinds if k != DOT)
        if not self.kinds:
            raise ValueError("randomizer needs at least one non-DOT kind")
        if not 0.0 <= dot_probability <= 1.0:
            raise ValueError(f"dot_probability must be in [0, 1], got {dot_probability!r}")
        self.dot_probability = dot_probability
        self.rng = rng if rng is not None else random.Random()
        self.bag: List[str] = []

    @property
    def dot_enabled(self) -> bool:
        return self.dot_probability > 0.0

    def refill(self):
        self.bag = list(self.kinds)
        self.rng.shuffle(self.bag)
        log.debug("bag refilled: %s", " ".join(self.bag))

    def next_kind(self) -> str:
        if self.dot_enabled and self.rng.random() < self.dot_probability:
            return DOT
        if not self.bag:
            self.refill()
        return self.bag.pop(0)

    def next_piece(self) -> Piece:
        return create_piece(self.next_kind())
