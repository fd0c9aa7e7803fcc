import pytest

from battlesim.battle.core import DamageRoll
from battlesim.battle.events import HitReaction, MoveCast
from battlesim.battle.log import NOT_VERY_EFFECTIVE, SUPER_EFFECTIVE
from battlesim.battle.session import Rejection, Timings
from battlesim.battle.state import BattleState, Phase, Side
from battlesim.core.types import MoveType


def _first_move(session, side=Side.PLAYER):
    return session.state.combatant(side).moves[0]


def test_fresh_battle_state(session_factory):
    session = session_factory()
    assert session.phase is Phase.IN_PROGRESS
    assert session.state.turn is Side.PLAYER
    assert session.state.victor is None
    assert session.state.player.hp == 260
    assert session.state.opponent.hp == 270
    assert session.log.entries == ["The arena hums to life as Solaris faces the Tidal Vanguard."]
    assert not session.busy


def test_max_damage_hit_flips_turn(session_factory, combatant_factory, timers):
    defender = combatant_factory("Target", 260)
    session = session_factory(opponent=defender, rolls=[DamageRoll(90, 1.0, False)], automated=())
    assert session.submit_move(Side.PLAYER, _first_move(session))
    assert session.busy
    timers.advance(0.65)
    assert session.state.opponent.hp == 170
    assert session.state.turn is Side.OPPONENT
    assert session.phase is Phase.IN_PROGRESS
    assert session.state.victor is None


def test_minimum_damage_twice(session_factory, combatant_factory, timers):
    defender = combatant_factory("Pebble", 40)
    session = session_factory(opponent=defender, rolls=[DamageRoll(12, 1.0)], automated=())
    seen = [session.state.opponent.hp]
    for side in (Side.PLAYER, Side.OPPONENT, Side.PLAYER):
        assert session.submit_move(side, _first_move(session, side))
        timers.advance(1.0)
        seen.append(session.state.opponent.hp)
    assert seen == [40, 28, 28, 16]
    assert session.state.player.hp == 260 - 12


def test_knockout_sets_victor_and_concludes(session_factory, combatant_factory, timers):
    defender = combatant_factory("Glass", 30)
    session = session_factory(opponent=defender, rolls=[DamageRoll(90, 2.0, True)], automated=())
    move = _first_move(session)
    session.submit_move(Side.PLAYER, move)
    timers.advance(0.65)
    state = session.state
    assert state.opponent.hp == 0
    assert state.victor is Side.PLAYER
    assert session.phase is Phase.CONCLUDED
    assert session.log.entries[:4] == [
        f"Solaris used {move.name}!",
        "A critical hit!",
        SUPER_EFFECTIVE,
        "Glass fainted.",
    ]
    assert session.victory_message() == "Solaris claims a radiant victory!"


def test_opponent_victory_banner(session_factory, combatant_factory, timers):
    player = combatant_factory("Solaris", 20)
    session = session_factory(player=player, rolls=[DamageRoll(12, 1.0)], automated=())
    session.submit_move(Side.PLAYER, _first_move(session))
    timers.advance(1.0)
    session.submit_move(Side.OPPONENT, _first_move(session, Side.OPPONENT))
    timers.advance(1.0)
    session.submit_move(Side.PLAYER, _first_move(session))
    timers.advance(1.0)
    session.submit_move(Side.OPPONENT, _first_move(session, Side.OPPONENT))
    timers.advance(1.0)
    assert session.state.player.hp == 0
    assert session.state.victor is Side.OPPONENT
    assert session.victory_message() == "Tidal Vanguard prevails in the surge!"


def test_concluded_battle_ignores_submissions(session_factory, combatant_factory, timers):
    session = session_factory(opponent=combatant_factory("Glass", 10), rolls=[DamageRoll(50, 1.0)], automated=())
    session.submit_move(Side.PLAYER, _first_move(session))
    timers.advance(1.0)
    assert session.phase is Phase.CONCLUDED
    state_before = session.state
    log_before = session.log.entries
    for side in Side:
        verdict = session.submit_move(side, _first_move(session, side))
        assert not verdict
        assert verdict.reason is Rejection.BATTLE_CONCLUDED
    assert session.state is state_before
    assert session.log.entries == log_before
    assert timers.pending() == 0


def test_submission_in_flight_is_rejected(session_factory, timers):
    session = session_factory(rolls=[DamageRoll(20, 1.0)], automated=())
    move = _first_move(session)
    assert session.submit_move(Side.PLAYER, move)
    verdict = session.submit_move(Side.PLAYER, move)
    assert verdict.reason is Rejection.RESOLUTION_IN_FLIGHT
    timers.advance(0.65)
    # outcome applied, recovery still pending
    assert session.busy
    log_before = session.log.entries
    verdict = session.submit_move(Side.OPPONENT, _first_move(session, Side.OPPONENT))
    assert verdict.reason is Rejection.RESOLUTION_IN_FLIGHT
    assert session.log.entries == log_before
    timers.advance(0.35)
    assert not session.busy
    assert session.submit_move(Side.OPPONENT, _first_move(session, Side.OPPONENT))


def test_wrong_turn_is_rejected(session_factory):
    session = session_factory(automated=())
    verdict = session.submit_move(Side.OPPONENT, _first_move(session, Side.OPPONENT))
    assert verdict.reason is Rejection.WRONG_TURN
    assert not session.busy
    assert session.state.turn is Side.PLAYER


def test_fainted_attacker_is_rejected(session_factory):
    session = session_factory(automated=())
    state = session.state
    session.state = BattleState(state.player.with_hp(0), state.opponent, turn=Side.PLAYER)
    verdict = session.submit_move(Side.PLAYER, _first_move(session))
    assert verdict.reason is Rejection.ATTACKER_FAINTED


def test_string_side_labels_are_accepted(session_factory):
    session = session_factory(automated=())
    assert session.submit_move("player", _first_move(session))
    assert session.state.turn is Side.PLAYER


def test_health_never_exceeds_bounds(session_factory, combatant_factory, timers):
    session = session_factory(opponent=combatant_factory("Tiny", 15), rolls=[DamageRoll(90, 1.0)], automated=())
    session.submit_move(Side.PLAYER, _first_move(session))
    timers.advance(1.0)
    assert 0 <= session.state.opponent.hp <= session.state.opponent.max_hp
    assert session.state.opponent.hp == 0


@pytest.mark.parametrize("eff,expected", [
    (4.0, SUPER_EFFECTIVE),
    (2.0, SUPER_EFFECTIVE),
    (1.6, SUPER_EFFECTIVE),
    (1.5, None),
    (1.0, None),
    (0.99, NOT_VERY_EFFECTIVE),
    (0.5, NOT_VERY_EFFECTIVE),
    (0.25, NOT_VERY_EFFECTIVE),
])
def test_effectiveness_line(session_factory, timers, eff, expected):
    session = session_factory(rolls=[DamageRoll(20, eff)], automated=())
    session.submit_move(Side.PLAYER, _first_move(session))
    timers.advance(1.0)
    turn_lines = session.log.entries[:-1]  # drop the opening line
    effect_lines = [l for l in turn_lines if l in (SUPER_EFFECTIVE, NOT_VERY_EFFECTIVE)]
    if expected is None:
        assert effect_lines == []
        assert turn_lines == [f"Solaris used {_first_move(session).name}!"]
    else:
        assert effect_lines == [expected]


def test_reset_mid_travel_discards_resolution(session_factory, timers):
    session = session_factory(rolls=[DamageRoll(90, 2.0, True)])
    session.submit_move(Side.PLAYER, _first_move(session))
    timers.advance(0.3)
    session.reset()
    timers.advance(10.0)
    assert session.state.player.hp == 260
    assert session.state.opponent.hp == 270
    assert session.state.turn is Side.PLAYER
    assert session.log.entries == ["The arena hums to life as Solaris faces the Tidal Vanguard."]
    assert not session.busy


def test_reset_during_recovery_discards_stale_release(session_factory, timers):
    session = session_factory(rolls=[DamageRoll(30, 1.0)])
    session.submit_move(Side.PLAYER, _first_move(session))
    timers.advance(0.65)
    assert session.state.opponent.hp == 240
    session.reset()
    epoch = session.epoch
    timers.advance(10.0)
    assert session.epoch == epoch
    assert session.state.opponent.hp == 270
    assert session.state.turn is Side.PLAYER
    assert len(session.log) == 1


def test_reset_from_concluded(session_factory, combatant_factory, timers):
    session = session_factory(opponent=combatant_factory("Glass", 10), rolls=[DamageRoll(50, 1.0)])
    session.submit_move(Side.PLAYER, _first_move(session))
    timers.advance(1.0)
    assert session.is_over()
    session.reset()
    assert session.phase is Phase.IN_PROGRESS
    assert session.state.opponent.hp == 10
    assert session.submit_move(Side.PLAYER, _first_move(session))


def test_opponent_moves_after_its_delay(session_factory, timers):
    session = session_factory(rolls=[DamageRoll(25, 1.0)])
    session.submit_move(Side.PLAYER, _first_move(session))
    timers.advance(1.0)
    assert session.state.turn is Side.OPPONENT
    assert session.log.entries[0].startswith("Solaris used")
    timers.advance(0.5)
    assert not session.busy  # still thinking
    timers.advance(0.5)
    assert session.busy
    timers.advance(1.0)
    assert session.state.player.hp == 235
    assert session.log.entries[0].startswith("Tidal Vanguard used")
    assert session.state.turn is Side.PLAYER


def test_opponent_suppressed_after_reset(session_factory, timers):
    session = session_factory(rolls=[DamageRoll(25, 1.0)])
    session.submit_move(Side.PLAYER, _first_move(session))
    timers.advance(1.0)
    assert timers.pending() == 1  # opponent think timer
    session.reset()
    timers.advance(5.0)
    assert session.state.player.hp == 260
    assert session.state.turn is Side.PLAYER
    assert len(session.log) == 1


def test_opponent_timer_rechecks_turn(session_factory, timers):
    session = session_factory(rolls=[DamageRoll(25, 1.0)], automated=())
    session._automated_turn(session.epoch, Side.OPPONENT)
    assert not session.busy
    assert len(session.log) == 1


def test_opponent_not_scheduled_after_knockout(session_factory, combatant_factory, timers):
    session = session_factory(opponent=combatant_factory("Glass", 10), rolls=[DamageRoll(50, 1.0)])
    session.submit_move(Side.PLAYER, _first_move(session))
    timers.advance(1.0)
    assert timers.pending() == 0
    timers.advance(5.0)
    assert session.log.entries[1] == "Glass fainted."


def test_notifications(session_factory, timers):
    session = session_factory(rolls=[DamageRoll(20, 1.0)], automated=())
    casts, hits, changes = [], [], []
    session.events.subscribe("cast", casts.append)
    session.events.subscribe("hit", hits.append)
    session.events.subscribe("changed", changes.append)
    move = _first_move(session)
    session.submit_move(Side.PLAYER, move)
    assert casts == [MoveCast(Side.PLAYER, move.type)]
    assert hits == []
    timers.advance(1.0)
    assert hits == [HitReaction(Side.OPPONENT)]
    assert changes and changes[-1] is session.state


def test_unknown_event_kind():
    from battlesim.battle.events import BattleEvents
    with pytest.raises(ValueError):
        BattleEvents().subscribe("explode", print)


def test_instant_timings_resolve_on_idle(session_factory, timers):
    session = session_factory(rolls=[DamageRoll(20, 1.0)], timings=Timings.instant())
    session.submit_move(Side.PLAYER, _first_move(session))
    timers.run_until_idle()
    # player hit, then automated opponent answered
    assert session.state.opponent.hp == 250
    assert session.state.player.hp == 240
    assert session.state.turn is Side.PLAYER
    assert not session.busy
