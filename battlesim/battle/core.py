"""Battle core: move & combatant records plus the damage resolver.

The resolver owns the only random draws in a resolution step (variation and
critical hit), taken from an injected ``random.Random`` so callers can seed or
script them.
"""
from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Optional, Tuple
import math
import random

from battlesim.core.errors import ValidationError
from battlesim.core.types import MoveType
from .chart import effectiveness as chart_effectiveness

VARIATION_MIN = 0.85
VARIATION_SPAN = 0.2
CRIT_CHANCE = 0.10
CRIT_MULTIPLIER = 1.5
MIN_DAMAGE = 12
MAX_DAMAGE = 90
STARTING_ENERGY = 100

# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Move:
    name: str
    type: MoveType
    power: int
    # Stored for display; every move currently hits.
    accuracy: int = 100
    description: str = ""

    def __post_init__(self):
        if not self.name:
            raise ValidationError("Move name must be non-empty")
        if not isinstance(self.type, MoveType):
            raise ValidationError(f"Move {self.name!r} has unknown type {self.type!r}")
        if int(self.power) <= 0:
            raise ValidationError(f"Move {self.name!r} must have positive power, got {self.power}")
        if not 0 <= int(self.accuracy) <= 100:
            raise ValidationError(f"Move {self.name!r} accuracy {self.accuracy} outside 0-100")

@dataclass(frozen=True)
class Combatant:
    name: str
    max_hp: int
    types: Tuple[MoveType, ...]
    moves: Tuple[Move, ...]
    hp: Optional[int] = None  # None means full health
    energy: int = STARTING_ENERGY  # reserved for move costs
    flair: str = ""

    def __post_init__(self):
        if int(self.max_hp) <= 0:
            raise ValidationError(f"{self.name} must have positive max_hp, got {self.max_hp}")
        if not self.types:
            raise ValidationError(f"{self.name} needs at least one type")
        if not self.moves:
            raise ValidationError(f"{self.name} needs at least one move")
        names = [m.name for m in self.moves]
        if len(set(names)) != len(names):
            raise ValidationError(f"{self.name} has duplicate move names: {names}")
        if self.hp is None:
            object.__setattr__(self, "hp", int(self.max_hp))
        elif not 0 <= self.hp <= self.max_hp:
            raise ValidationError(f"{self.name} hp {self.hp} outside 0..{self.max_hp}")

    @property
    def fainted(self) -> bool:
        return self.hp <= 0

    def with_hp(self, hp: int) -> "Combatant":
        return replace(self, hp=max(0, min(self.max_hp, int(hp))))

    def fresh(self) -> "Combatant":
        """Copy of this template at full health and full energy."""
        return replace(self, hp=self.max_hp, energy=STARTING_ENERGY)

@dataclass(frozen=True)
class DamageRoll:
    damage: int
    effectiveness: float
    crit: bool = False

# ---------------------------------------------------------------------------
# Mechanics
# ---------------------------------------------------------------------------
def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))

def clamp(value: int, lo: int, hi: int) -> int:
    return max(lo, min(hi, value))

class DamageResolver:
    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def roll_variation(self) -> float:
        return VARIATION_MIN + self.rng.random() * VARIATION_SPAN

    def roll_crit(self) -> bool:
        return self.rng.random() < CRIT_CHANCE

    def get_effectiveness(self, move: Move, defender: Combatant) -> float:
        return chart_effectiveness(move.type, defender.types)

    def resolve(self, move: Move, defender: Combatant) -> DamageRoll:
        variation = self.roll_variation()
        crit = self.roll_crit()
        eff = self.get_effectiveness(move, defender)
        raw = round_half_up(move.power * variation * (CRIT_MULTIPLIER if crit else 1.0) * eff)
        return DamageRoll(damage=clamp(raw, MIN_DAMAGE, MAX_DAMAGE), effectiveness=eff, crit=crit)

__all__ = ["Move","Combatant","DamageRoll","DamageResolver","round_half_up","clamp",
           "MIN_DAMAGE","MAX_DAMAGE","CRIT_CHANCE"]
