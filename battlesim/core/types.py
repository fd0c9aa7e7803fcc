"""Global type metadata: the attack type enumeration plus colors, icons & abbreviations.

Provides:
  MoveType: the eight attack types known to the effectiveness chart
  TYPE_COLORS_HEX: mapping type -> hex color string (#RRGGBB)
  TYPE_ICONS: mapping type -> glyph shown beside the type name
  TYPE_ABBREVIATIONS: mapping type -> 3-letter abbreviation (upper)
  helper functions for colorized terminal output.
"""
from __future__ import annotations
from enum import Enum
from typing import Dict, Iterable, Tuple
import re

from colorama import Style


class MoveType(str, Enum):
    FIRE = "Fire"
    WATER = "Water"
    GRASS = "Grass"
    ELECTRIC = "Electric"
    ICE = "Ice"
    PSYCHIC = "Psychic"
    FAIRY = "Fairy"
    ROCK = "Rock"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, raw: str) -> "MoveType":
        """Case-insensitive lookup by display name ('fire', 'Fire', 'FIRE')."""
        for t in cls:
            if t.value.lower() == str(raw).strip().lower():
                return t
        raise ValueError(f"Unknown move type: {raw!r}")


TYPE_COLORS_HEX: Dict[MoveType, str] = {
    MoveType.FIRE: "#FB923C",
    MoveType.WATER: "#7DD3FC",
    MoveType.GRASS: "#6EE7B7",
    MoveType.ELECTRIC: "#FCD34D",
    MoveType.ICE: "#A5F3FC",
    MoveType.PSYCHIC: "#F0ABFC",
    MoveType.FAIRY: "#FBCFE8",
    MoveType.ROCK: "#FBBF24",
}

TYPE_ICONS: Dict[MoveType, str] = {
    MoveType.FIRE: "🔥",
    MoveType.WATER: "💧",
    MoveType.GRASS: "🍃",
    MoveType.ELECTRIC: "⚡️",
    MoveType.ICE: "❄️",
    MoveType.PSYCHIC: "✨",
    MoveType.FAIRY: "🌸",
    MoveType.ROCK: "🪨",
}

TYPE_ABBREVIATIONS: Dict[MoveType, str] = {
    MoveType.FIRE: "FIR",
    MoveType.WATER: "WTR",
    MoveType.GRASS: "GRS",
    MoveType.ELECTRIC: "ELE",
    MoveType.ICE: "ICE",
    MoveType.PSYCHIC: "PSY",
    MoveType.FAIRY: "FAI",
    MoveType.ROCK: "RCK",
}

RESET = Style.RESET_ALL

def _hex_to_rgb(h: str) -> Tuple[int,int,int]:
    h = h.lstrip('#')
    return int(h[0:2],16), int(h[2:4],16), int(h[4:6],16)

def color_code(move_type: MoveType) -> str:
    r, g, b = _hex_to_rgb(TYPE_COLORS_HEX[move_type])
    return f"\033[38;2;{r};{g};{b}m"

def colorize_type_text(move_type: MoveType, text: str) -> str:
    return f"{color_code(move_type)}{text}{RESET}"

def type_abbreviation(move_type: MoveType) -> str:
    return TYPE_ABBREVIATIONS[move_type]

def format_types(types: Iterable[MoveType]) -> str:
    parts = [colorize_type_text(t, type_abbreviation(t)) for t in types]
    return '/'.join(parts)

def format_hp(hp: int, max_hp: int) -> str:
    return f"{hp}/{max_hp}"

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;]*m")

def strip_ansi(s: str) -> str:
    return ANSI_ESCAPE_RE.sub('', s)

__all__ = [
    'MoveType','TYPE_COLORS_HEX','TYPE_ICONS','TYPE_ABBREVIATIONS',
    'colorize_type_text','type_abbreviation','format_types','format_hp','strip_ansi'
]
