"""Two-combatant turn-based battle resolver."""
__version__ = "0.1.0"
