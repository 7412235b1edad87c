"""
REELCORE — Payline Evaluation

A payline is an ordered run of board coordinates. It pays when every cell
on it resolves to one kind under wild matching:

    resolved = first symbol
    for each later symbol:
        if resolved is WILD: resolved = symbol
        symbol must equal resolved or be WILD

A line made only of wilds stays resolved to WILD and pays the wild value.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence, Union

from slot_engine.board import Board
from slot_engine.symbols import SymbolKind

Coord = tuple[int, int]
Segment = tuple[Coord, Coord]


@dataclass(frozen=True)
class Payline:
    coords: tuple[Coord, ...]
    name: str = ""

    def __post_init__(self):
        if not self.coords:
            raise ValueError("Payline needs at least one coordinate")

    def __len__(self) -> int:
        return len(self.coords)

    def segments(self) -> list[Segment]:
        """Adjacent coordinate pairs along the line (N-1 for N coords)."""
        return [(self.coords[i - 1], self.coords[i]) for i in range(1, len(self.coords))]

    def symbols(self, board: Board) -> list[SymbolKind]:
        return [board.kind_at(x, y) for x, y in self.coords]


@dataclass(frozen=True)
class Matched:
    kind: SymbolKind
    segments: list[Segment] = field(default_factory=list)
    line: Payline | None = None


@dataclass(frozen=True)
class NoMatch:
    line: Payline | None = None


MatchResult = Union[Matched, NoMatch]


def resolve_kind(symbols: Sequence[SymbolKind]) -> SymbolKind | None:
    """Kind a symbol run resolves to, or None when it breaks."""
    resolved = symbols[0]
    for symbol in symbols[1:]:
        if resolved is SymbolKind.WILD:
            resolved = symbol
        if not resolved.matches(symbol):
            return None
    return resolved


def evaluate(line: Payline, board: Board) -> MatchResult:
    resolved = resolve_kind(line.symbols(board))
    if resolved is None:
        return NoMatch(line=line)
    return Matched(kind=resolved, segments=line.segments(), line=line)


def default_paylines(width: int, height: int) -> list[Payline]:
    """Verticals per reel, horizontals per row, plus both diagonals on a square board.

    On 3x3 this is the classic 8-line set, in order: 3 verticals,
    3 horizontals, top-left to bottom-right, bottom-left to top-right.
    """
    lines: list[Payline] = []
    for x in range(width):
        lines.append(Payline(tuple((x, y) for y in range(height)), name=f"reel_{x}"))
    for y in range(height):
        lines.append(Payline(tuple((x, y) for x in range(width)), name=f"row_{y}"))
    if width == height and width >= 2:
        n = width
        lines.append(Payline(tuple((i, i) for i in range(n)), name="diag_down"))
        lines.append(Payline(tuple((i, n - 1 - i) for i in range(n)), name="diag_up"))
    return lines


def paylines_from_coords(lines: Sequence[Sequence[Sequence[int]]]) -> list[Payline]:
    """Build paylines from plain coordinate lists (e.g. JSON config)."""
    return [
        Payline(tuple((int(x), int(y)) for x, y in coords), name=f"line_{i}")
        for i, coords in enumerate(lines)
    ]
