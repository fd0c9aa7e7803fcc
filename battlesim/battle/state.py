"""Side labels and the immutable battle snapshot."""
from __future__ import annotations
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

from .core import Combatant


class Side(str, Enum):
    PLAYER = "player"
    OPPONENT = "opponent"

    @property
    def other(self) -> "Side":
        return Side.OPPONENT if self is Side.PLAYER else Side.PLAYER

    def __str__(self) -> str:
        return self.value


class Phase(str, Enum):
    IN_PROGRESS = "InProgress"
    CONCLUDED = "Concluded"


@dataclass(frozen=True)
class BattleState:
    player: Combatant
    opponent: Combatant
    turn: Side = Side.PLAYER
    victor: Optional[Side] = None

    @property
    def phase(self) -> Phase:
        return Phase.CONCLUDED if self.victor is not None else Phase.IN_PROGRESS

    def combatant(self, side: Side) -> Combatant:
        return self.player if side is Side.PLAYER else self.opponent

    def with_combatant(self, side: Side, combatant: Combatant) -> "BattleState":
        if side is Side.PLAYER:
            return replace(self, player=combatant)
        return replace(self, opponent=combatant)

    def with_turn(self, side: Side) -> "BattleState":
        return replace(self, turn=side)

    def with_victor(self, side: Side) -> "BattleState":
        return replace(self, victor=side)

    @classmethod
    def initial(cls, player: Combatant, opponent: Combatant, first: Side = Side.PLAYER) -> "BattleState":
        return cls(player=player.fresh(), opponent=opponent.fresh(), turn=first)


__all__ = ["Side", "Phase", "BattleState"]
