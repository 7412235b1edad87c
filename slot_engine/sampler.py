"""
REELCORE — Weighted Symbol Sampler

Draws items from a fixed discrete distribution in O(1) per draw using a
Walker alias table (Vose's construction). The table is built once from the
weight vector; each draw costs one bucket pick and one coin flip.
"""

from __future__ import annotations

import random
from typing import Generic, Optional, Sequence, TypeVar

T = TypeVar("T")


def build_alias_table(weights: Sequence[float]) -> tuple[list[float], list[int]]:
    """Return (prob, alias) for Vose's alias method.

    `prob[i]` is the chance of keeping bucket i once it is picked,
    `alias[i]` the bucket taken otherwise.
    """
    n = len(weights)
    if n == 0:
        raise ValueError("Weight vector is empty")
    if any(w < 0 for w in weights):
        raise ValueError(f"Weights must be non-negative: {list(weights)}")
    total = float(sum(weights))
    if total <= 0:
        raise ValueError("Weights must sum to > 0")

    scaled = [w * n / total for w in weights]
    prob = [0.0] * n
    alias = list(range(n))

    small = [i for i, s in enumerate(scaled) if s < 1.0]
    large = [i for i, s in enumerate(scaled) if s >= 1.0]

    while small and large:
        s = small.pop()
        l = large.pop()
        prob[s] = scaled[s]
        alias[s] = l
        scaled[l] = (scaled[l] + scaled[s]) - 1.0
        if scaled[l] < 1.0:
            small.append(l)
        else:
            large.append(l)

    # Leftovers are 1.0 up to float error.
    for i in large + small:
        prob[i] = 1.0

    return prob, alias


class WeightedSampler(Generic[T]):
    """Samples `items` proportionally to `weights`.

    The random source is mutated on every draw and is not thread-safe;
    give each game session its own sampler.
    """

    def __init__(self, items: Sequence[T], weights: Sequence[float],
                 rng: Optional[random.Random] = None):
        if len(items) != len(weights):
            raise ValueError(
                f"items/weights length mismatch: {len(items)} != {len(weights)}")
        self.items: tuple[T, ...] = tuple(items)
        self.weights: tuple[float, ...] = tuple(float(w) for w in weights)
        self.rng = rng or random.Random()
        self._prob, self._alias = build_alias_table(self.weights)

    @property
    def total_weight(self) -> float:
        return sum(self.weights)

    def probabilities(self) -> dict[T, float]:
        """Normalized probability of each item."""
        total = self.total_weight
        return {item: w / total for item, w in zip(self.items, self.weights)}

    def draw(self) -> T:
        i = self.rng.randrange(len(self.items))
        if self.rng.random() < self._prob[i]:
            return self.items[i]
        return self.items[self._alias[i]]

    def draw_many(self, n: int) -> list[T]:
        return [self.draw() for _ in range(n)]

    def __repr__(self) -> str:
        return f"WeightedSampler(n={len(self.items)}, total_weight={self.total_weight:g})"
