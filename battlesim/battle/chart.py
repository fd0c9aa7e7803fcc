"""Type effectiveness chart.

Entries missing from the chart are neutral (1.0). Multi-typed defenders take
the product of the per-type multipliers.
"""
from __future__ import annotations
from typing import Dict, Iterable

from battlesim.core.types import MoveType

_F, _W, _G, _E, _I, _P, _Y, _R = (
    MoveType.FIRE, MoveType.WATER, MoveType.GRASS, MoveType.ELECTRIC,
    MoveType.ICE, MoveType.PSYCHIC, MoveType.FAIRY, MoveType.ROCK,
)

TYPE_CHART: Dict[MoveType, Dict[MoveType, float]] = {
    _F: {_G: 2.0, _I: 2.0, _R: 0.5, _W: 0.5, _F: 0.5},
    _W: {_F: 2.0, _R: 2.0, _G: 0.5, _E: 0.5},
    _G: {_W: 2.0, _R: 2.0, _F: 0.5, _G: 0.5},
    _E: {_W: 2.0, _G: 0.5},
    _I: {_G: 2.0, _W: 0.5, _F: 0.5, _R: 1.0},
    _P: {_P: 0.5},
    _Y: {_P: 1.0, _F: 0.5},
    _R: {_F: 2.0, _E: 1.0, _G: 1.0, _W: 1.0},
}


def multiplier(attack_type: MoveType, defender_type: MoveType) -> float:
    return TYPE_CHART.get(attack_type, {}).get(defender_type, 1.0)


def effectiveness(attack_type: MoveType, defender_types: Iterable[MoveType]) -> float:
    mult = 1.0
    for t in defender_types:
        mult *= multiplier(attack_type, t)
    return mult


__all__ = ["TYPE_CHART", "multiplier", "effectiveness"]
