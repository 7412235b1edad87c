"""
REELCORE — Slot Game Engine

Game logic for a weighted-reel slot machine: symbol sampling, board state,
payline matching and credit accounting. Rendering and input live outside.

Usage:
    from slot_engine import new_game
    game = new_game(3, 3)
    money_before_payout = game.spin()
    for (a, b) in game.lines:
        ...  # highlight segment a -> b
"""

from typing import Optional

from slot_engine.board import Board, Cell
from slot_engine.errors import InsufficientCredits, InvalidBet, InvalidDenomination, SlotError
from slot_engine.ledger import Ledger
from slot_engine.paylines import Matched, MatchResult, NoMatch, Payline, default_paylines, evaluate
from slot_engine.sampler import WeightedSampler
from slot_engine.schema import SlotConfig
from slot_engine.symbols import DEFAULT_WEIGHTS, SYMBOL_ORDER, SymbolKind

__all__ = [
    "Board", "Cell", "DEFAULT_WEIGHTS", "InsufficientCredits", "InvalidBet",
    "InvalidDenomination", "Ledger", "MatchResult", "Matched", "NoMatch", "Payline",
    "SYMBOL_ORDER", "SlotConfig", "SlotError", "SymbolKind", "WeightedSampler",
    "default_paylines", "evaluate", "new_game",
]


def new_game(width: int = 3, height: int = 3, seed: Optional[int] = None, **overrides) -> Ledger:
    """Build a Ledger with a default config, optionally seeded."""
    config = SlotConfig(width=width, height=height, seed=seed, **overrides)
    return Ledger(config=config)
