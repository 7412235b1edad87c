"""
REELCORE — Game Configuration Schema

Pydantic model for everything a game session is built from: board size,
starting balance, wager defaults, the symbol weight table and the payline
set. The model is frozen; a session receives it once at construction.

Usage:
    from slot_engine.schema import SlotConfig
    config = SlotConfig(bet=30, seed=7)
    json_str = config.model_dump_json(indent=2)
"""

from __future__ import annotations

import hashlib
import json
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from slot_engine.symbols import DEFAULT_WEIGHTS, SYMBOL_ORDER, SymbolKind


class SlotConfig(BaseModel):
    """Complete configuration for one slot session."""
    model_config = ConfigDict(frozen=True)

    version: str = "1.0.0"
    width: int = Field(3, ge=1)
    height: int = Field(3, ge=1)
    starting_credits: float = Field(10_000.0, ge=0)   # In credits at `denom`
    denom: int = Field(1, gt=0)                       # Cents per credit
    bet: int = Field(50, gt=0)                        # Credits per spin
    weights: dict[SymbolKind, float] = Field(default_factory=lambda: dict(DEFAULT_WEIGHTS))
    paylines: Optional[list[list[tuple[int, int]]]] = None   # Generated if None
    seed: Optional[int] = None                        # Reproducible random source
    config_hash: str = ""                             # SHA-256 of the math fields, for audit

    @field_validator("weights")
    @classmethod
    def check_weights(cls, v: dict[SymbolKind, float]) -> dict[SymbolKind, float]:
        negative = {k.value: w for k, w in v.items() if w < 0}
        if negative:
            raise ValueError(f"Symbol weights must be non-negative: {negative}")
        if sum(v.values()) <= 0:
            raise ValueError("Symbol weights must sum to > 0")
        # Keep reel order regardless of input order.
        return {k: float(v[k]) for k in SYMBOL_ORDER if k in v}

    @model_validator(mode="after")
    def check_paylines(self):
        for i, line in enumerate(self.paylines or []):
            if not line:
                raise ValueError(f"Payline {i} is empty")
            for x, y in line:
                if not (0 <= x < self.width and 0 <= y < self.height):
                    raise ValueError(
                        f"Payline {i} coordinate ({x}, {y}) outside "
                        f"{self.width}x{self.height} board")
        return self

    def model_post_init(self, __context):
        """Compute config hash after init."""
        math_json = json.dumps({
            "width": self.width,
            "height": self.height,
            "weights": {k.value: w for k, w in self.weights.items()},
            "paylines": self.paylines,
        }, sort_keys=True)
        # Frozen model: bypass the immutability guard for the derived field.
        object.__setattr__(self, "config_hash", hashlib.sha256(math_json.encode()).hexdigest()[:16])

    def kinds(self) -> list[SymbolKind]:
        return list(self.weights.keys())

    def weight_vector(self) -> list[float]:
        return list(self.weights.values())
