"""Terminal battle UI built on rich.

Renders both combatants side by side, the move palette and the battle
timeline, then asks for the player's move. The automated side and all
pacing come from the session's timer queue; this module only reads the
session's state, log and notifications.
"""
from __future__ import annotations
from typing import Callable, Optional

from rich.align import Align
from rich.box import ROUNDED
from rich.columns import Columns
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table

from battlesim.battle.core import Combatant
from battlesim.battle.events import HitReaction, MoveCast
from battlesim.battle.session import BattleSession
from battlesim.battle.state import BattleState, Side
from battlesim.core.types import MoveType, TYPE_COLORS_HEX, TYPE_ICONS, format_hp

console = Console()

SIDE_CAPTIONS = {Side.PLAYER: "Trainer A", Side.OPPONENT: "Trainer B"}

def _rich_type(t: MoveType, text: Optional[str] = None) -> str:
    color = TYPE_COLORS_HEX[t]
    return f"[{color}]{text or t.value}[/{color}]"

def hp_bar(current: int, max_hp: int, width: int = 24) -> str:
    """HP bar whose color walks green -> yellow -> red as health drops."""
    if max_hp <= 0:
        return "[red]FAINTED[/red]"
    ratio = max(0.0, min(1.0, current / max_hp))
    filled = int(round(ratio * width))
    color = "green" if ratio > 0.5 else "yellow" if ratio > 0.2 else "red"
    return f"[{color}]{'█' * filled}[/{color}][grey37]{'░' * (width - filled)}[/grey37]"

def combatant_panel(c: Combatant, side: Side, active: bool) -> Panel:
    types = " ".join(_rich_type(t) for t in c.types)
    marker = " [bold yellow]◆[/bold yellow]" if active else ""
    flair = f"[italic]{c.flair}[/italic]\n" if c.flair else ""
    body = (
        f"[bold bright_white]{c.name}[/bold bright_white]{marker}\n"
        f"{flair}"
        f"{types}\n"
        f"HP {format_hp(c.hp, c.max_hp)}\n"
        f"{hp_bar(c.hp, c.max_hp)}"
    )
    return Panel(body, title=f"[bold]{SIDE_CAPTIONS[side]}[/bold]", box=ROUNDED, width=40, padding=(0, 1))

def move_table(c: Combatant, enabled: bool) -> Table:
    table = Table(title="Command Palette", box=ROUNDED, show_lines=False)
    table.add_column("#", justify="right")
    table.add_column("Move")
    table.add_column("Type")
    table.add_column("Power", justify="right")
    table.add_column("Acc", justify="right")
    style = None if enabled else "dim"
    for i, m in enumerate(c.moves, start=1):
        table.add_row(str(i), m.name, _rich_type(m.type, f"{TYPE_ICONS[m.type]} {m.type.value}"),
                      str(m.power), f"{m.accuracy}%", style=style)
    return table

def timeline_panel(session: BattleSession) -> Panel:
    lines = "\n".join(session.log.entries) or "[dim]Nothing yet.[/dim]"
    return Panel(lines, title="[bold]Battle Timeline[/bold]", box=ROUNDED, width=84)

def render(session: BattleSession, out: Console = console):
    state = session.state
    live = state.victor is None
    out.print(Align.center(f"[bold]{state.player.name} vs. {state.opponent.name}[/bold]"))
    columns = Columns([
        combatant_panel(state.player, Side.PLAYER, live and state.turn is Side.PLAYER),
        combatant_panel(state.opponent, Side.OPPONENT, live and state.turn is Side.OPPONENT),
    ], equal=True, padding=(0, 4))
    out.print(Align.center(columns))
    player_ready = session.check_submission(Side.PLAYER).accepted
    out.print(Align.center(move_table(state.player, player_ready)))
    out.print(Align.center(timeline_panel(session)))
    banner = session.victory_message()
    if banner:
        out.print(Align.center(Panel(f"[bold bright_yellow]{banner}[/bold bright_yellow]", box=ROUNDED)))

def attach_cues(session: BattleSession, out: Console = console, debug: bool = False) -> Callable[[], None]:
    """Print short cues for casts and hits, standing in for animations.

    With ``debug`` every state change is echoed as well. Returns a callable
    that detaches the cues again.
    """
    def on_cast(ev: MoveCast):
        out.print(f"  {_rich_type(ev.move_type, TYPE_ICONS[ev.move_type] * 4)} [dim]{SIDE_CAPTIONS[ev.side]} attacks[/dim]")
    def on_hit(ev: HitReaction):
        out.print(f"  [bold red]*shake*[/bold red] [dim]{SIDE_CAPTIONS[ev.side]} was struck[/dim]")
    def on_changed(state: BattleState):
        victor = state.victor.value if state.victor else "-"
        out.print(f"  [dim]state turn={state.turn.value} busy={session.busy} "
                  f"hp={format_hp(state.player.hp, state.player.max_hp)}|"
                  f"{format_hp(state.opponent.hp, state.opponent.max_hp)} victor={victor}[/dim]")
    handlers = [("cast", on_cast), ("hit", on_hit)]
    if debug:
        handlers.append(("changed", on_changed))
    for kind, fn in handlers:
        session.events.subscribe(kind, fn)

    def detach():
        for kind, fn in handlers:
            session.events.unsubscribe(kind, fn)
    return detach

def _settled(session: BattleSession) -> bool:
    return session.is_over() or (not session.busy and session.state.turn is Side.PLAYER)

def run_battle(session: BattleSession, out: Console = console, debug: bool = False) -> Optional[Side]:
    """Interactive loop: number picks a move, 'r' resets, 'q' quits."""
    detach = attach_cues(session, out, debug=debug)
    try:
        return _prompt_loop(session, out)
    finally:
        detach()

def _prompt_loop(session: BattleSession, out: Console) -> Optional[Side]:
    while True:
        session.timers.run_realtime(lambda: _settled(session))
        render(session, out)
        choices = [str(i) for i in range(1, len(session.state.player.moves) + 1)]
        if session.is_over():
            answer = Prompt.ask("Reset or quit?", choices=["r", "q"], default="q", console=out)
        else:
            answer = Prompt.ask("Choose a move", choices=choices + ["r", "q"], console=out)
        if answer == "q":
            return session.state.victor
        if answer == "r":
            session.reset()
            continue
        move = session.state.player.moves[int(answer) - 1]
        verdict = session.submit_move(Side.PLAYER, move)
        if not verdict:
            out.print(f"[yellow]Move ignored: {verdict.reason.value}[/yellow]")

__all__ = ["render", "run_battle", "attach_cues", "hp_bar"]
