from battlesim.cli import run

raise SystemExit(run())
