from __future__ import annotations
import argparse
import sys
from typing import List, Optional

from battlesim.battle.service import BattleService, outcome_of
from battlesim.core.logging import logger, LEVELS
from battlesim.core.types import format_types, strip_ansi
from battlesim.system.settings import Settings


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="battlesim", description="Solaris vs. Tidal Vanguard turn-based battle")
    parser.add_argument("--seed", type=int, default=None, help="seed the battle's random source")
    parser.add_argument("--auto", action="store_true", help="let both sides play headlessly and print the result")
    parser.add_argument("--log-level", choices=LEVELS, default=None, help="override the configured log level")
    parser.add_argument("--save-settings", action="store_true", help="write the effective settings back to the settings file")
    return parser


def _echo(line: str):
    # Type colours only when a terminal will render them
    print(line if sys.stdout.isatty() else strip_ansi(line))


def run(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = Settings.load()
    if args.log_level:
        settings.data.log_level = args.log_level
    if args.seed is not None:
        settings.data.seed = args.seed
    settings.apply()
    if args.save_settings:
        settings.save()
    service = BattleService(settings)

    if args.auto:
        session = service.run_auto(seed=args.seed)
        p, o = session.state.player, session.state.opponent
        _echo(f"{p.name} [{format_types(p.types)}] vs. {o.name} [{format_types(o.types)}]")
        for line in reversed(session.log.entries):
            _echo(line)
        _echo(session.victory_message() or "The battle is still undecided.")
        return 0 if outcome_of(session) != "ONGOING" else 1

    from battlesim.ui.battle import run_battle
    session = service.new_session(seed=args.seed, realtime=True)
    try:
        run_battle(session, debug=settings.data.debug)
    except (KeyboardInterrupt, EOFError):
        logger.info("BattleAbandoned")
    return 0


if __name__ == "__main__":
    raise SystemExit(run())
