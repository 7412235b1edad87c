"""
REELCORE — Game Ledger

Owns the board, the wager/denomination state and the credit balance, and
runs each spin: charge the bet, refresh the board, evaluate every payline,
credit the winners.

Units:
    credits   internal balance, counted in credits at the current denom
    denom     cents per credit
    bet       credits wagered per spin
    money     credits / (denom * 100), the balance in whole currency
"""

from __future__ import annotations

import logging
import math
import random
from typing import Optional

from slot_engine.board import Board
from slot_engine.errors import InsufficientCredits, InvalidBet, InvalidDenomination
from slot_engine.paylines import (
    Matched, Payline, Segment, default_paylines, evaluate, paylines_from_coords,
)
from slot_engine.sampler import WeightedSampler
from slot_engine.schema import SlotConfig
from slot_engine.symbols import SymbolKind

logger = logging.getLogger("reelcore.ledger")

LINE_BET_DIVISOR = 3


def _positive_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


class Ledger:
    """Single-owner game session. Not thread-safe; one Ledger per player."""

    def __init__(self, width: Optional[int] = None, height: Optional[int] = None,
                 config: Optional[SlotConfig] = None,
                 rng: Optional[random.Random] = None):
        if config is None:
            config = SlotConfig(width=3 if width is None else width,
                                height=3 if height is None else height)
        elif width is not None or height is not None:
            data = config.model_dump(exclude={"config_hash"})
            data["width"] = config.width if width is None else width
            data["height"] = config.height if height is None else height
            config = SlotConfig.model_validate(data)
        self._config = config

        if rng is None:
            rng = random.Random(config.seed)
        sampler = WeightedSampler(config.kinds(), config.weight_vector(), rng)
        self._board = Board(config.width, config.height, sampler)

        if config.paylines is None:
            self._paylines = default_paylines(config.width, config.height)
        else:
            self._paylines = paylines_from_coords(config.paylines)

        self._credits = float(config.starting_credits)
        self._denom = config.denom
        self._bet = config.bet

        self.lines: list[Segment] = []
        self.last_wins: list[Matched] = []
        self.last_line_payouts: list[int] = []
        self.last_payout = 0.0
        self.spins = 0

    # ── Accessors ─────────────────────────────────────────────

    @property
    def config(self) -> SlotConfig:
        return self._config

    @property
    def board(self) -> Board:
        return self._board

    @property
    def paylines(self) -> list[Payline]:
        return list(self._paylines)

    @property
    def credits(self) -> float:
        return self._credits

    @property
    def money(self) -> float:
        return self._credits / (self._denom * 100)

    @property
    def denom(self) -> int:
        return self._denom

    @denom.setter
    def denom(self, n: int) -> None:
        self.set_denom(n)

    @property
    def bet(self) -> int:
        return self._bet

    @bet.setter
    def bet(self, n: int) -> None:
        self.set_bet(n)

    def set_denom(self, n: int) -> None:
        """Change cents-per-credit, rescaling credits so credits * denom is unchanged."""
        if not _positive_int(n):
            logger.warning(f"Rejected denomination {n!r}")
            raise InvalidDenomination(n)
        old = self._denom
        self._credits *= old / n
        self._denom = n
        logger.debug(f"Denom {old} -> {n}: credits={self._credits:g}")

    def set_bet(self, n: int) -> None:
        if not _positive_int(n):
            logger.warning(f"Rejected bet {n!r}")
            raise InvalidBet(n)
        self._bet = n

    def add_credits(self, amount: float) -> None:
        """Top up the balance from outside the game."""
        if isinstance(amount, bool) or not math.isfinite(amount) or amount <= 0:
            raise ValueError(f"Credit top-up must be positive, got {amount!r}")
        self._credits += amount

    # ── Spin ──────────────────────────────────────────────────

    def spin(self) -> float:
        """Charge the bet, spin, pay. Returns the money balance after the
        wager but *before* any payout is credited.

        Raises InsufficientCredits (with nothing changed) when the balance
        cannot cover the bet.
        """
        if self._credits < self._bet:
            logger.info(f"Spin rejected: credits={self._credits:g} bet={self._bet}")
            raise InsufficientCredits(self._credits, self._bet)

        self._credits -= self._bet
        money = self.money
        self._board.refresh()
        self._pay()
        self.spins += 1

        logger.debug(
            f"Spin #{self.spins}: bet={self._bet} won={self.last_payout:g} "
            f"lines={len(self.last_wins)} credits={self._credits:g} money={self.money:.2f}")
        return money

    def line_payout(self, kind: SymbolKind) -> int:
        """Credits one matched line of `kind` pays at the current bet."""
        return kind.payout * (self._bet // LINE_BET_DIVISOR)

    def _pay(self) -> None:
        self.lines.clear()
        self.last_wins = []
        self.last_line_payouts = []
        self.last_payout = 0.0

        for payline in self._paylines:
            result = evaluate(payline, self._board)
            if isinstance(result, Matched):
                self.last_wins.append(result)

        for win in self.last_wins:
            amount = self.line_payout(win.kind)
            self.last_line_payouts.append(amount)
            self._credits += amount
            self.last_payout += amount
            self.lines.extend(win.segments)

    def snapshot(self) -> dict:
        """JSON-serializable view of the session for a front end."""
        return {
            "credits": round(self._credits, 6),
            "money": round(self.money, 2),
            "denom": self._denom,
            "bet": self._bet,
            "spins": self.spins,
            "board": [[k.value for k in row] for row in self._board.rows()],
            "last_payout": self.last_payout,
            "last_wins": [
                {"line": w.line.name if w.line else "", "kind": w.kind.value,
                 "paid": paid}
                for w, paid in zip(self.last_wins, self.last_line_payouts)
            ],
            "lines": [[list(a), list(b)] for a, b in self.lines],
        }
