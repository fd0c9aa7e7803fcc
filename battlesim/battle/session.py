"""Battle session: the turn/victory state machine for a 1v1 battle.

A submitted move resolves in two phases on the session's :class:`TimerQueue`:

  submit  -> (travel delay)   -> apply damage, update turn/victor, log
          -> (recovery delay) -> accept submissions again

While either delay is pending the session is busy and further submissions are
rejected, not queued. ``reset`` cancels pending timers and advances the epoch
so nothing scheduled before it can touch the fresh state.
"""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional
import random

from battlesim.core.logging import logger
from .ai import RandomMovePolicy
from .core import Combatant, DamageResolver, Move
from .events import BattleEvents, HitReaction, MoveCast
from .log import BattleLog, CRITICAL_HIT, effect_message, opening_line
from .state import BattleState, Phase, Side
from .timers import TimerHandle, TimerQueue


class Rejection(str, Enum):
    BATTLE_CONCLUDED = "BattleConcluded"
    RESOLUTION_IN_FLIGHT = "ResolutionInFlight"
    ATTACKER_FAINTED = "AttackerFainted"
    WRONG_TURN = "WrongTurn"


@dataclass(frozen=True)
class Submission:
    accepted: bool
    reason: Optional[Rejection] = None

    def __bool__(self) -> bool:
        return self.accepted


ACCEPTED = Submission(True)


@dataclass(frozen=True)
class Timings:
    travel: float = 0.62      # submit -> outcome applied
    recovery: float = 0.30    # outcome applied -> next submission allowed
    opponent: float = 0.90    # automated side's turn begins -> it submits

    @classmethod
    def instant(cls) -> "Timings":
        return cls(0.0, 0.0, 0.0)


class BattleSession:
    def __init__(self, player: Combatant, opponent: Combatant, *,
                 rng: Optional[random.Random] = None,
                 resolver: Optional[DamageResolver] = None,
                 policy: Optional[RandomMovePolicy] = None,
                 timers: Optional[TimerQueue] = None,
                 timings: Optional[Timings] = None,
                 automated: Iterable[Side] = (Side.OPPONENT,),
                 first: Side = Side.PLAYER):
        self.rng = rng or random.Random()
        self.resolver = resolver or DamageResolver(self.rng)
        self.policy = policy or RandomMovePolicy(self.rng)
        self.timers = timers or TimerQueue()
        self.timings = timings or Timings()
        self.automated = frozenset(automated)
        self.first = first
        self.events = BattleEvents()
        self._templates = (player, opponent)
        self.state = BattleState.initial(player, opponent, first)
        self.log = BattleLog([opening_line(player.name, opponent.name)])
        self.busy = False
        self.epoch = 0
        self._auto_timer: Optional[TimerHandle] = None
        self._schedule_automated()

    # ------------------------------------------------------------------
    # Read model
    # ------------------------------------------------------------------
    @property
    def phase(self) -> Phase:
        return self.state.phase

    def is_over(self) -> bool:
        return self.state.victor is not None

    def victory_message(self) -> Optional[str]:
        victor = self.state.victor
        if victor is None:
            return None
        if victor is Side.PLAYER:
            return f"{self.state.player.name} claims a radiant victory!"
        return f"{self.state.opponent.name} prevails in the surge!"

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------
    def check_submission(self, side: Side) -> Submission:
        if self.state.victor is not None:
            return Submission(False, Rejection.BATTLE_CONCLUDED)
        if self.busy:
            return Submission(False, Rejection.RESOLUTION_IN_FLIGHT)
        if self.state.combatant(side).fainted:
            return Submission(False, Rejection.ATTACKER_FAINTED)
        if self.state.turn != side:
            return Submission(False, Rejection.WRONG_TURN)
        return ACCEPTED

    def submit_move(self, side: Side, move: Move) -> Submission:
        side = Side(side)
        verdict = self.check_submission(side)
        if not verdict:
            logger.debug("SubmissionRejected", side=side, move=move.name, reason=verdict.reason.value)
            return verdict
        self.busy = True
        self.state = self.state.with_turn(side)
        epoch = self.epoch
        logger.debug("MoveSubmitted", side=side, move=move.name, epoch=epoch)
        self.events.emit("cast", MoveCast(side, move.type))
        self.events.emit("changed", self.state)
        self.timers.call_later(self.timings.travel, lambda: self._apply(epoch, side, move), label="travel")
        return ACCEPTED

    def reset(self):
        self.timers.cancel_all()
        self._auto_timer = None
        self.epoch += 1
        player, opponent = self._templates
        self.state = BattleState.initial(player, opponent, self.first)
        self.log.clear([opening_line(player.name, opponent.name)])
        self.busy = False
        logger.info("BattleReset", epoch=self.epoch)
        self.events.emit("changed", self.state)
        self._schedule_automated()

    # ------------------------------------------------------------------
    # Resolution phases
    # ------------------------------------------------------------------
    def _apply(self, epoch: int, side: Side, move: Move):
        if epoch != self.epoch:
            logger.debug("ResolutionDiscarded", side=side, move=move.name, epoch=epoch)
            return
        state = self.state
        attacker = state.combatant(side)
        defender_side = side.other
        defender = state.combatant(defender_side)
        if attacker.fainted or state.victor is not None:
            self.busy = False
            self.events.emit("changed", self.state)
            return

        roll = self.resolver.resolve(move, defender)
        struck = defender.with_hp(defender.hp - roll.damage)
        updated = state.with_combatant(defender_side, struck)
        if struck.fainted:
            updated = updated.with_victor(side)
        else:
            updated = updated.with_turn(defender_side)
        self.state = updated

        messages: List[Optional[str]] = [
            f"{attacker.name} used {move.name}!",
            CRITICAL_HIT if roll.crit else None,
            effect_message(roll.effectiveness),
            f"{defender.name} fainted." if struck.fainted else None,
        ]
        self.log.push(m for m in messages if m)
        logger.debug("TurnResolved", side=side, move=move.name, damage=roll.damage,
                     effectiveness=roll.effectiveness, crit=roll.crit, hp=struck.hp)
        if struck.fainted:
            logger.info("BattleConcluded", victor=side, loser=defender.name)

        self.events.emit("hit", HitReaction(defender_side))
        self.events.emit("changed", self.state)
        self.timers.call_later(self.timings.recovery, lambda: self._release(epoch), label="recovery")

    def _release(self, epoch: int):
        if epoch != self.epoch:
            return
        self.busy = False
        self.events.emit("changed", self.state)
        self._schedule_automated()

    # ------------------------------------------------------------------
    # Automated side
    # ------------------------------------------------------------------
    def _schedule_automated(self):
        state = self.state
        if state.victor is not None or self.busy or state.turn not in self.automated:
            return
        if self._auto_timer is not None:
            self._auto_timer.cancel()
        epoch = self.epoch
        side = state.turn
        self._auto_timer = self.timers.call_later(
            self.timings.opponent, lambda: self._automated_turn(epoch, side), label="opponent")

    def _automated_turn(self, epoch: int, side: Side):
        self._auto_timer = None
        state = self.state
        if epoch != self.epoch or state.victor is not None or state.turn is not side or self.busy:
            return
        move = self.policy.choose_move(state.combatant(side))
        logger.debug("OpponentMoveChosen", side=side, move=move.name)
        self.submit_move(side, move)


__all__ = ["BattleSession", "Submission", "Rejection", "Timings"]
