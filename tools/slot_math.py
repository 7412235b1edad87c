"""
REELCORE — Slot Math Model

Exact paytable and RTP for a SlotConfig. Cells are drawn independently,
so for a payline of n cells with per-cell probabilities p_k and wild
probability p_w:

    P(line resolves to k)    = (p_k + p_w)^n - p_w^n     for k != WILD
    P(line resolves to WILD) = p_w^n

(all-wild runs resolve to WILD, which is why p_w^n is removed from every
other kind). Expected credits per spin at bet b is
Σ_lines Σ_k P(k) × value(k) × (b // 3), and RTP is that over b.

Usage:
    from tools.slot_math import SlotMathEngine
    model = SlotMathEngine().model_for_config(SlotConfig(), bet=51)
    print(model.to_json())
"""

from __future__ import annotations

import hashlib
import json
from dataclasses import dataclass, field
from datetime import datetime, timezone

from slot_engine.ledger import LINE_BET_DIVISOR
from slot_engine.paylines import Payline, default_paylines, paylines_from_coords
from slot_engine.schema import SlotConfig
from slot_engine.symbols import SymbolKind


# ═══════════════════════════════════════════════════════════════
# Data Structures
# ═══════════════════════════════════════════════════════════════

@dataclass
class PaytableEntry:
    kind: SymbolKind
    line_length: int
    probability: float          # P(one line of this length resolves to kind)
    line_value: int             # Credits per line before bet scaling
    contribution: float = 0

    def __post_init__(self):
        self.contribution = round(self.probability * self.line_value, 12)


@dataclass
class SlotMathModel:
    bet: int
    line_multiplier: int                      # bet // 3
    paylines: int
    paytable: list[PaytableEntry] = field(default_factory=list)
    expected_line_value: float = 0.0          # Σ over lines of E[value]
    expected_payout: float = 0.0              # Credits per spin
    theoretical_rtp: float = 0.0
    line_hit_frequency: float = 0.0           # Mean P(a given line pays)
    parameters: dict = field(default_factory=dict)
    model_hash: str = ""
    generated_at: str = ""

    def __post_init__(self):
        self.generated_at = datetime.now(timezone.utc).isoformat()
        data = json.dumps(
            [(e.kind.value, e.line_length, e.probability, e.line_value) for e in self.paytable],
            sort_keys=True,
        )
        self.model_hash = hashlib.sha256(data.encode()).hexdigest()[:16]

    def rtp_proof(self) -> dict:
        return {
            "model_hash": self.model_hash,
            "bet": self.bet,
            "line_multiplier": self.line_multiplier,
            "paylines": self.paylines,
            "expected_line_value": round(self.expected_line_value, 8),
            "expected_payout": round(self.expected_payout, 6),
            "theoretical_rtp": round(self.theoretical_rtp, 8),
            "theoretical_rtp_pct": round(self.theoretical_rtp * 100, 4),
            "line_hit_frequency_pct": round(self.line_hit_frequency * 100, 4),
            "entries": [
                {
                    "kind": e.kind.value,
                    "line_length": e.line_length,
                    "P": round(e.probability, 12),
                    "value": e.line_value,
                    "P×value": e.contribution,
                }
                for e in self.paytable
            ],
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps({
            "report_type": "Slot Math Model",
            "generated_at": self.generated_at,
            "parameters": self.parameters,
            "rtp_proof": self.rtp_proof(),
        }, indent=indent, default=str)


# ═══════════════════════════════════════════════════════════════
# Math Engine
# ═══════════════════════════════════════════════════════════════

def line_outcome_probabilities(probs: dict[SymbolKind, float], length: int) -> dict[SymbolKind, float]:
    """P(a line of `length` independent cells resolves to each kind)."""
    p_wild = probs.get(SymbolKind.WILD, 0.0)
    all_wild = p_wild ** length
    out: dict[SymbolKind, float] = {}
    for kind, p in probs.items():
        if kind is SymbolKind.WILD:
            out[kind] = all_wild
        else:
            out[kind] = (p + p_wild) ** length - all_wild
    return out


class SlotMathEngine:
    """Analytic model of the line game."""

    def model_for_config(self, config: SlotConfig, bet: int | None = None) -> SlotMathModel:
        bet = config.bet if bet is None else bet
        if config.paylines is None:
            lines = default_paylines(config.width, config.height)
        else:
            lines = paylines_from_coords(config.paylines)
        total = sum(config.weights.values())
        probs = {k: w / total for k, w in config.weights.items()}
        return self.model(probs, lines, bet, parameters={
            "config_hash": config.config_hash,
            "board": f"{config.width}x{config.height}",
            "weights": {k.value: w for k, w in config.weights.items()},
        })

    def model(self, probs: dict[SymbolKind, float], lines: list[Payline], bet: int,
              parameters: dict | None = None) -> SlotMathModel:
        multiplier = bet // LINE_BET_DIVISOR

        paytable: list[PaytableEntry] = []
        by_length: dict[int, list[PaytableEntry]] = {}
        for length in sorted({len(line) for line in lines}):
            entries = [
                PaytableEntry(kind, length, p, kind.payout)
                for kind, p in line_outcome_probabilities(probs, length).items()
            ]
            by_length[length] = entries
            paytable.extend(entries)

        expected_line_value = 0.0
        hit = 0.0
        for line in lines:
            entries = by_length[len(line)]
            expected_line_value += sum(e.contribution for e in entries)
            hit += sum(e.probability for e in entries)

        expected_payout = expected_line_value * multiplier
        return SlotMathModel(
            bet=bet,
            line_multiplier=multiplier,
            paylines=len(lines),
            paytable=paytable,
            expected_line_value=expected_line_value,
            expected_payout=expected_payout,
            theoretical_rtp=expected_payout / bet if bet > 0 else 0.0,
            line_hit_frequency=hit / len(lines) if lines else 0.0,
            parameters=parameters or {},
        )
