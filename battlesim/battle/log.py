"""Bounded battle timeline, newest lines first."""
from __future__ import annotations
from typing import Iterable, List, Optional

LOG_CAPACITY = 8

SUPER_EFFECTIVE = "It's super effective!"
NOT_VERY_EFFECTIVE = "It's not very effective…"
CRITICAL_HIT = "A critical hit!"


def effect_message(effectiveness: float) -> Optional[str]:
    if effectiveness > 1.5:
        return SUPER_EFFECTIVE
    if effectiveness < 1:
        return NOT_VERY_EFFECTIVE
    return None


def opening_line(player_name: str, opponent_name: str) -> str:
    return f"The arena hums to life as {player_name} faces the {opponent_name}."


class BattleLog:
    def __init__(self, initial: Iterable[str] = (), capacity: int = LOG_CAPACITY):
        self.capacity = capacity
        self._entries: List[str] = list(initial)[:capacity]

    @property
    def entries(self) -> List[str]:
        return list(self._entries)

    def push(self, messages: Iterable[str]):
        """Prepend one turn's messages, keeping their order, and evict the oldest."""
        batch = [m for m in messages if m]
        self._entries = (batch + self._entries)[: self.capacity]

    def clear(self, initial: Iterable[str] = ()):
        self._entries = list(initial)[: self.capacity]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self):
        return iter(list(self._entries))


__all__ = ["BattleLog", "LOG_CAPACITY", "effect_message", "opening_line",
           "SUPER_EFFECTIVE", "NOT_VERY_EFFECTIVE", "CRITICAL_HIT"]
