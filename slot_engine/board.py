"""
REELCORE — Board

Rectangular grid of symbol cells, indexed `cell(x, y)` with x the reel
(column) and y the row. Regenerates every unlocked cell on refresh.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator

from slot_engine.sampler import WeightedSampler
from slot_engine.symbols import SymbolKind

logger = logging.getLogger("reelcore.board")


@dataclass
class Cell:
    """One board position. Locked cells keep their kind across refreshes."""
    kind: SymbolKind
    locked: bool = False


class Board:
    def __init__(self, width: int, height: int, sampler: WeightedSampler[SymbolKind]):
        if width < 1 or height < 1:
            raise ValueError(f"Board dimensions must be positive: {width}x{height}")
        self.width = width
        self.height = height
        self.sampler = sampler
        # Column-major: one list per reel.
        self._cells: list[list[Cell]] = [
            [Cell(kind=sampler.draw()) for _ in range(height)]
            for _ in range(width)
        ]

    def draw_sample(self) -> SymbolKind:
        """Draw a kind without touching the board (animation pre-roll)."""
        return self.sampler.draw()

    def refresh(self) -> None:
        """Redraw every unlocked cell."""
        held = 0
        for column in self._cells:
            for cell in column:
                if cell.locked:
                    held += 1
                    continue
                cell.kind = self.sampler.draw()
        if held:
            logger.debug(f"Refresh kept {held} locked cell(s)")

    def dimensions(self) -> tuple[int, int]:
        return self.width, self.height

    def cell(self, x: int, y: int) -> Cell:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Cell ({x}, {y}) outside {self.width}x{self.height} board")
        return self._cells[x][y]

    def kind_at(self, x: int, y: int) -> SymbolKind:
        return self.cell(x, y).kind

    def rows(self) -> list[list[SymbolKind]]:
        """Kinds row by row, top first."""
        return [[self._cells[x][y].kind for x in range(self.width)]
                for y in range(self.height)]

    def __iter__(self) -> Iterator[tuple[int, int, Cell]]:
        for x, column in enumerate(self._cells):
            for y, cell in enumerate(column):
                yield x, y, cell

    def __repr__(self) -> str:
        body = " / ".join(" ".join(k.label for k in row) for row in self.rows())
        return f"Board({self.width}x{self.height}: {body})"
