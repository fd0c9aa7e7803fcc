# Ensure project root is on sys.path for tests
import sys, pathlib
root = pathlib.Path(__file__).resolve().parent
if str(root) not in sys.path:
    sys.path.insert(0, str(root))

import random
from typing import Iterable, List

import pytest

from battlesim.battle.core import Combatant, DamageResolver, DamageRoll, Move
from battlesim.battle.session import BattleSession, Timings
from battlesim.battle.state import Side
from battlesim.battle.timers import TimerQueue
from battlesim.core.types import MoveType


class ScriptedRandom(random.Random):
    """random() returns the scripted values first, then falls back to a seeded stream."""

    def __init__(self, values: Iterable[float] = (), seed: int = 0):
        super().__init__(seed)
        self.values: List[float] = list(values)

    def random(self):
        if self.values:
            return self.values.pop(0)
        return super().random()


class FixedResolver(DamageResolver):
    """Hands out pre-baked rolls in order; repeats the last one when exhausted."""

    def __init__(self, rolls: Iterable[DamageRoll]):
        super().__init__(random.Random(0))
        self.rolls = list(rolls)
        self.calls = []

    def resolve(self, move, defender):
        self.calls.append((move.name, defender.name))
        if len(self.rolls) > 1:
            return self.rolls.pop(0)
        return self.rolls[0]


def make_combatant(name: str, max_hp: int, types=(MoveType.FIRE,), moves=None) -> Combatant:
    moves = moves or (
        Move(name=f"{name} Strike", type=types[0], power=30, accuracy=100),
        Move(name=f"{name} Burst", type=MoveType.ROCK, power=20, accuracy=90),
    )
    return Combatant(name=name, max_hp=max_hp, types=tuple(types), moves=tuple(moves))


@pytest.fixture
def scripted_rng():
    return ScriptedRandom


@pytest.fixture
def fixed_resolver():
    return FixedResolver


@pytest.fixture
def combatant_factory():
    return make_combatant


@pytest.fixture
def timers():
    return TimerQueue()


@pytest.fixture
def session_factory(timers):
    def build(player=None, opponent=None, *, rolls=None, automated=(Side.OPPONENT,), timings=None, rng=None):
        player = player or make_combatant("Solaris", 260, (MoveType.FIRE, MoveType.GRASS))
        opponent = opponent or make_combatant("Tidal Vanguard", 270, (MoveType.WATER, MoveType.ELECTRIC))
        resolver = FixedResolver(rolls) if rolls else None
        return BattleSession(player, opponent, rng=rng or random.Random(1), resolver=resolver,
                             timers=timers, timings=timings or Timings(), automated=automated)
    return build
