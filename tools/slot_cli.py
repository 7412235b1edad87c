#!/usr/bin/env python3
"""
REELCORE — Slot CLI

Usage:
    python -m tools.slot_cli spin --spins 5 --bet 30
    python -m tools.slot_cli math --bet 51 --json
    python -m tools.slot_cli simulate --spins 200000 --seed 7
    python -m tools.slot_cli --dump-config
"""

import argparse
import json
import logging
import sys

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from config.settings import GameSettings
from slot_engine import InsufficientCredits, Ledger, SlotError, SymbolKind
from tools.slot_math import SlotMathEngine
from tools.slot_montecarlo import SlotMonteCarlo

logger = logging.getLogger("reelcore.cli")
console = Console()

KIND_STYLES = {
    SymbolKind.WILD: "bold magenta",
    SymbolKind.DRAGON: "bold red",
    SymbolKind.VIKING: "yellow",
    SymbolKind.CAKE: "yellow",
    SymbolKind.COFFEE: "yellow",
}


def board_table(ledger: Ledger) -> Table:
    """Render the board, marking cells that sit on a winning line."""
    winning = {c for seg in ledger.lines for c in seg}
    for win in ledger.last_wins:
        if win.line is not None:
            winning.update(win.line.coords)

    width, height = ledger.board.dimensions()
    table = Table(show_header=False, show_lines=True, padding=(0, 2))
    for _ in range(width):
        table.add_column(justify="center", min_width=6)
    for y in range(height):
        row = []
        for x in range(width):
            kind = ledger.board.kind_at(x, y)
            style = KIND_STYLES.get(kind, "white")
            if (x, y) in winning:
                style += " reverse"
            row.append(f"[{style}]{kind.label}[/{style}]")
        table.add_row(*row)
    return table


def cmd_spin(args, config) -> int:
    ledger = Ledger(config=config)
    console.print(Panel(
        f"[bold]🎰 Slot Session[/bold]\n\n"
        f"Board: {config.width}x{config.height}  Paylines: {len(ledger.paylines)}\n"
        f"Bet: {ledger.bet} credits  Denom: {ledger.denom}¢\n"
        f"Balance: {ledger.credits:,.2f} credits (${ledger.money:,.2f})",
        title="Session Starting", border_style="cyan",
    ))

    for i in range(args.spins):
        try:
            money = ledger.spin()
        except InsufficientCredits as e:
            console.print(f"[red]❌ {e}[/red]")
            return 0
        console.print(f"\n[bold cyan]Spin {i + 1}[/bold cyan]  "
                      f"(balance after wager: ${money:,.2f})")
        console.print(board_table(ledger))
        if ledger.last_wins:
            for win in ledger.last_wins:
                name = win.line.name if win.line else "?"
                console.print(f"  [green]✅ {name}: {win.kind.label} "
                              f"+{ledger.line_payout(win.kind)}[/green]")
        else:
            console.print("  [dim]no win[/dim]")
        console.print(f"  Credits: {ledger.credits:,.2f}  Money: ${ledger.money:,.2f}")
    return 0


def cmd_math(args, config) -> int:
    model = SlotMathEngine().model_for_config(config, bet=args.bet)
    if args.json:
        print(model.to_json())
        return 0
    table = Table(title=f"Line outcomes ({model.paylines} paylines, bet {model.bet})")
    table.add_column("Symbol")
    table.add_column("Len", justify="right")
    table.add_column("P(line)", justify="right")
    table.add_column("Value", justify="right")
    table.add_column("P×Value", justify="right")
    for e in model.paytable:
        table.add_row(e.kind.label, str(e.line_length), f"{e.probability:.3e}",
                      str(e.line_value), f"{e.contribution:.5f}")
    console.print(table)
    console.print(f"Expected payout: {model.expected_payout:.4f} credits/spin "
                  f"(×{model.line_multiplier} per line)")
    console.print(f"Theoretical RTP: [bold]{model.theoretical_rtp*100:.3f}%[/bold]")
    return 0


def cmd_simulate(args, config) -> int:
    seed = config.seed if config.seed is not None else 42
    mc = SlotMonteCarlo(config, seed=seed, tolerance=args.tolerance)
    n = GameSettings.SIM_ROUNDS if args.spins is None else args.spins
    with console.status(f"Simulating {n:,} spins..."):
        result = mc.run(n_spins=n, bet=args.bet, chi_draws=args.chi_draws)
    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        console.print(result.summary())
    return 0 if result.rtp_pass else 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="reelcore", description="Slot game engine tools")
    parser.add_argument("--width", type=int, help="Reels on the board")
    parser.add_argument("--height", type=int, help="Rows on the board")
    parser.add_argument("--credits", type=float, help="Starting credits")
    parser.add_argument("--denom", type=int, help="Cents per credit")
    parser.add_argument("--seed", type=int, help="RNG seed")
    parser.add_argument("--log-level", type=str, default=None)
    parser.add_argument("--dump-config", action="store_true")

    sub = parser.add_subparsers(dest="command")

    p_spin = sub.add_parser("spin", help="Play spins and show the board")
    p_spin.add_argument("--spins", type=int, default=1)
    p_spin.add_argument("--bet", type=int)

    p_math = sub.add_parser("math", help="Exact paytable and RTP")
    p_math.add_argument("--bet", type=int)
    p_math.add_argument("--json", action="store_true")

    p_sim = sub.add_parser("simulate", help="Monte Carlo RTP check")
    p_sim.add_argument("--spins", type=int, default=None)
    p_sim.add_argument("--bet", type=int)
    p_sim.add_argument("--tolerance", type=float, default=0.02)
    p_sim.add_argument("--chi-draws", type=int, default=100_000)
    p_sim.add_argument("--json", action="store_true")
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    GameSettings.configure_logging(args.log_level)

    try:
        config = GameSettings.slot_config(
            width=args.width, height=args.height, starting_credits=args.credits,
            denom=args.denom, seed=args.seed, bet=getattr(args, "bet", None),
        )
    except ValueError as e:
        # pydantic.ValidationError is a ValueError
        console.print(f"[red]❌ Invalid configuration:[/red] {e}")
        return 2

    if args.dump_config:
        print(config.model_dump_json(indent=2))
        return 0

    handlers = {"spin": cmd_spin, "math": cmd_math, "simulate": cmd_simulate}
    handler = handlers.get(args.command)
    if handler is None:
        parser.print_help()
        return 2
    try:
        return handler(args, config)
    except (SlotError, ValueError) as e:
        logger.error(f"{args.command} failed: {e}")
        console.print(f"[red]❌ {e}[/red]")
        return 2


if __name__ == "__main__":
    sys.exit(main())
