"""Battle service: builds sessions from packaged templates and settings.

Also offers a headless auto-battle loop (both sides automated, virtual clock)
used by the CLI's ``--auto`` mode and by tests.
"""
from __future__ import annotations
from typing import Iterable, Literal, Optional, Tuple
import random

from battlesim.core.logging import logger
from battlesim.data.loader import default_templates
from battlesim.system.settings import Settings, SettingsData
from .core import Combatant
from .session import BattleSession, Timings
from .state import Side
from .timers import TimerQueue

Outcome = Literal["PLAYER_WIN", "PLAYER_LOSS", "ONGOING"]

def timings_from(data: SettingsData) -> Timings:
    return Timings(travel=data.travel_delay, recovery=data.recovery_delay, opponent=data.opponent_delay)

def outcome_of(session: BattleSession) -> Outcome:
    victor = session.state.victor
    if victor is None:
        return "ONGOING"
    return "PLAYER_WIN" if victor is Side.PLAYER else "PLAYER_LOSS"

class BattleService:
    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings

    def _data(self) -> SettingsData:
        if self.settings is None:
            self.settings = Settings.load()
        return self.settings.data

    def new_session(self, *, seed: Optional[int] = None, realtime: bool = False,
                    automated: Iterable[Side] = (Side.OPPONENT,),
                    templates: Optional[Tuple[Combatant, Combatant]] = None) -> BattleSession:
        data = self._data()
        seed = seed if seed is not None else data.seed
        player, opponent = templates or default_templates()
        logger.info("BattleStart", player=player.name, opponent=opponent.name, seed=seed)
        return BattleSession(
            player, opponent,
            rng=random.Random(seed),
            timers=TimerQueue(realtime=realtime),
            timings=timings_from(data),
            automated=automated,
        )

    def run_auto(self, *, seed: Optional[int] = None, max_callbacks: int = 10_000) -> BattleSession:
        """Play a full battle with both sides automated on a virtual clock."""
        session = self.new_session(seed=seed, automated=(Side.PLAYER, Side.OPPONENT))
        session.timers.run_until_idle(max_callbacks=max_callbacks)
        logger.info("BattleFinished", outcome=outcome_of(session))
        return session

battle_service = BattleService()

__all__ = ["BattleService", "battle_service", "outcome_of", "timings_from"]
