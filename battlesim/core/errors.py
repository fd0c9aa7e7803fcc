"""
Error classes for clearer exception sources.

Invalid move submissions are not errors; see :class:`battlesim.battle.session.Rejection`.
"""
from __future__ import annotations

class BattleSimError(Exception):
    pass

class DataLoadError(BattleSimError):
    def __init__(self, path: str, detail: str):
        super().__init__(f"Failed to load {path}: {detail}")
        self.path = path
        self.detail = detail

class ValidationError(BattleSimError):
    """Malformed static data (templates, moves) detected at construction time."""
