from __future__ import annotations
from typing import Optional
import random

from .core import Combatant, Move


class RandomMovePolicy:
    """Picks uniformly among the combatant's moves."""

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def choose_move(self, combatant: Combatant) -> Move:
        return combatant.moves[self.rng.randrange(len(combatant.moves))]


__all__ = ["RandomMovePolicy"]
