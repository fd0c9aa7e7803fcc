"""
Centralized path helpers.
"""
from __future__ import annotations
from pathlib import Path

# This file lives at battlesim/core/paths.py
PACKAGE = Path(__file__).resolve().parents[1]
DATA = PACKAGE / "data"
COMBATANTS = DATA / "combatants.json"
