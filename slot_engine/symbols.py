"""
REELCORE — Symbol Kinds

The closed set of reel symbols, their display labels, line values and
default draw weights.

A cell showing WILD matches any other kind. Two non-wild kinds match only
when they are identical.
"""

from __future__ import annotations

from enum import Enum


class SymbolKind(str, Enum):
    NINE   = "nine"
    TEN    = "ten"
    JACK   = "jack"
    QUEEN  = "queen"
    KING   = "king"
    ACE    = "ace"
    COFFEE = "coffee"
    CAKE   = "cake"
    VIKING = "viking"
    DRAGON = "dragon"
    WILD   = "wild"

    @property
    def label(self) -> str:
        """Text drawn on the reel for this kind."""
        return SYMBOL_LABELS[self]

    @property
    def payout(self) -> int:
        """Credits paid per matched line, before the bet scaling.

        Named `payout` because `value` is the enum's own string tag.
        """
        return SYMBOL_VALUES[self]

    @property
    def is_wild(self) -> bool:
        return self is SymbolKind.WILD

    def matches(self, other: SymbolKind) -> bool:
        """True if `other` can stand in a line resolved to this kind."""
        return self is other or other is SymbolKind.WILD

    def __str__(self) -> str:
        return self.label


# Reel order; also the index order of the sampler's weight vector.
SYMBOL_ORDER: tuple[SymbolKind, ...] = tuple(SymbolKind)

SYMBOL_LABELS: dict[SymbolKind, str] = {
    SymbolKind.NINE:   "9",
    SymbolKind.TEN:    "10",
    SymbolKind.JACK:   "J",
    SymbolKind.QUEEN:  "Q",
    SymbolKind.KING:   "K",
    SymbolKind.ACE:    "A",
    SymbolKind.COFFEE: "Coffee",
    SymbolKind.CAKE:   "Cake",
    SymbolKind.VIKING: "Viking",
    SymbolKind.DRAGON: "Dragon",
    SymbolKind.WILD:   "Wild",
}

SYMBOL_VALUES: dict[SymbolKind, int] = {
    SymbolKind.NINE:   5,
    SymbolKind.TEN:    7,
    SymbolKind.JACK:   10,
    SymbolKind.QUEEN:  15,
    SymbolKind.KING:   20,
    SymbolKind.ACE:    25,
    SymbolKind.COFFEE: 30,
    SymbolKind.CAKE:   40,
    SymbolKind.VIKING: 50,
    SymbolKind.DRAGON: 100,
    SymbolKind.WILD:   125,
}

# Unnormalized relative weights (total 129.75).
DEFAULT_WEIGHTS: dict[SymbolKind, float] = {
    SymbolKind.NINE:   30.0,
    SymbolKind.TEN:    30.0,
    SymbolKind.JACK:   20.0,
    SymbolKind.QUEEN:  15.0,
    SymbolKind.KING:   10.0,
    SymbolKind.ACE:    8.0,
    SymbolKind.COFFEE: 7.0,
    SymbolKind.CAKE:   5.0,
    SymbolKind.VIKING: 3.0,
    SymbolKind.DRAGON: 1.0,
    SymbolKind.WILD:   0.75,
}


def kind_from_label(label: str) -> SymbolKind:
    """Look up a kind by its reel label ("9", "J", "Dragon") or its name."""
    text = (label or "").strip()
    for kind, lbl in SYMBOL_LABELS.items():
        if text == lbl or text.lower() == kind.value:
            return kind
    raise ValueError(f"Unknown symbol: {label!r}. Available: {list(SYMBOL_LABELS.values())}")
