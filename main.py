#!/usr/bin/env python3
"""
Solaris vs. Tidal Vanguard - terminal battle

Thin wrapper around :mod:`battlesim.cli`. The battle engine lives in the
battlesim package:
- battle/ (type chart, damage resolver, turn/victory state machine, opponent AI)
- data/ (combatant templates)
- system/ (settings)
- ui/ (rich terminal presenter)

To run: python main.py [--seed N] [--auto]
"""

from battlesim.cli import run

if __name__ == "__main__":
    raise SystemExit(run())
