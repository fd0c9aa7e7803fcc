"""Presentation notifications raised while a battle resolves.

These carry no decision authority: the engine never reads them back.
"""
from __future__ import annotations
from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Literal

from battlesim.core.types import MoveType
from .state import Side

EventKind = Literal["cast", "hit", "changed"]
KINDS = ("cast", "hit", "changed")

@dataclass(frozen=True)
class MoveCast:
    side: Side
    move_type: MoveType

@dataclass(frozen=True)
class HitReaction:
    side: Side  # the side that was struck

class BattleEvents:
    def __init__(self):
        self.listeners: Dict[str, List[Callable[[Any], None]]] = defaultdict(list)

    def subscribe(self, kind: EventKind, fn: Callable[[Any], None]):
        if kind not in KINDS:
            raise ValueError(f"Unknown battle event kind: {kind}")
        self.listeners[kind].append(fn)

    def unsubscribe(self, kind: EventKind, fn: Callable[[Any], None]):
        if fn in self.listeners.get(kind, []):
            self.listeners[kind].remove(fn)

    def emit(self, kind: EventKind, payload: Any = None):
        for fn in list(self.listeners.get(kind, [])):
            fn(payload)

__all__ = ["BattleEvents", "MoveCast", "HitReaction", "EventKind"]
