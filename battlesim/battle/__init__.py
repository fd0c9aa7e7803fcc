"""
Battle system package.
- chart.py (type effectiveness)
- core.py (moves, combatants, damage resolver)
- state.py (sides, immutable battle snapshot)
- session.py (turn / victory state machine)
- ai.py (automated side move choice)
- log.py (bounded battle timeline)
- events.py (presentation notifications)
- timers.py (single-threaded pacing)
- service.py (session construction from settings & data)
"""
from .core import Move, Combatant, DamageResolver, DamageRoll
from .state import Side, Phase, BattleState
from .session import BattleSession, Submission, Rejection, Timings
__all__ = ["Move","Combatant","DamageResolver","DamageRoll","Side","Phase","BattleState",
           "BattleSession","Submission","Rejection","Timings"]
