"""Runtime loader for combatant templates.

Templates live in ``battlesim/data/combatants.json`` keyed by side label. Each
entry is validated into :class:`~battlesim.battle.core.Combatant` records on
load, so malformed data fails here rather than mid-battle.
"""
from __future__ import annotations
import json
from functools import lru_cache
from pathlib import Path
from typing import Dict, Any, Tuple

from battlesim.battle.core import Combatant, Move
from battlesim.battle.state import Side
from battlesim.core.errors import DataLoadError, ValidationError
from battlesim.core.paths import COMBATANTS
from battlesim.core.types import MoveType

def _read(path: Path) -> Dict[str, Any]:
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise DataLoadError(str(path), str(e)) from e
    except json.JSONDecodeError as e:
        raise DataLoadError(str(path), f"invalid JSON: {e}") from e
    if not isinstance(raw, dict):
        raise DataLoadError(str(path), "top-level value must be an object")
    return raw

def _parse_type(raw: Any, owner: str) -> MoveType:
    try:
        return MoveType.parse(raw)
    except ValueError as e:
        raise ValidationError(f"{owner}: {e}") from e

def move_from_dict(d: Dict[str, Any]) -> Move:
    try:
        name = d["name"]
        return Move(
            name=name,
            type=_parse_type(d["type"], name),
            power=int(d["power"]),
            accuracy=int(d.get("accuracy", 100)),
            description=d.get("description", ""),
        )
    except KeyError as e:
        raise ValidationError(f"Move entry missing field {e}: {d}") from e

def combatant_from_dict(d: Dict[str, Any]) -> Combatant:
    try:
        name = d["name"]
        return Combatant(
            name=name,
            max_hp=int(d["max_hp"]),
            types=tuple(_parse_type(t, name) for t in d["types"]),
            moves=tuple(move_from_dict(m) for m in d["moves"]),
            flair=d.get("flair", ""),
        )
    except KeyError as e:
        raise ValidationError(f"Combatant entry missing field {e}") from e

def load_templates(path: Path = COMBATANTS) -> Tuple[Combatant, Combatant]:
    raw = _read(path)
    missing = [s.value for s in Side if s.value not in raw]
    if missing:
        raise ValidationError(f"{path}: missing templates for {missing}")
    return combatant_from_dict(raw[Side.PLAYER.value]), combatant_from_dict(raw[Side.OPPONENT.value])

@lru_cache(maxsize=None)
def default_templates() -> Tuple[Combatant, Combatant]:
    return load_templates(COMBATANTS)

__all__ = ["load_templates","default_templates","combatant_from_dict","move_from_dict"]
