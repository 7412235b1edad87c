#!/usr/bin/env python3
"""
Statistical tests for the symbol sampler and the line game.

Validates:
1. Default weight table passes a chi-squared goodness-of-fit test
2. Sampled shares converge to weight proportions for several weight vectors
3. Zero-weight items are never drawn
4. Monte Carlo RTP lands near the analytic RTP
5. SimulationResult serializes to JSON
6. The spin-returned money is always the pre-payout balance
"""

import json
import random
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))

from slot_engine import Ledger, SlotConfig, SymbolKind, WeightedSampler
from slot_engine.symbols import DEFAULT_WEIGHTS, SYMBOL_ORDER
from tools.slot_math import SlotMathEngine
from tools.slot_montecarlo import SlotMonteCarlo, sampler_chi_squared


def _default_sampler(seed: int) -> WeightedSampler:
    return WeightedSampler(SYMBOL_ORDER, [DEFAULT_WEIGHTS[k] for k in SYMBOL_ORDER],
                           random.Random(seed))


def test_default_weights_chi_squared():
    """200k draws of the reel table fit the weights at α = 0.001."""
    result = sampler_chi_squared(_default_sampler(2024), n_draws=200_000)
    assert result.degrees_of_freedom == 10
    assert result.passed, f"χ²={result.statistic:.3f} ≥ {result.critical_value}"
    print(f"✅ χ²={result.statistic:.3f} (df={result.degrees_of_freedom})")


def test_shares_converge_to_weights():
    """Observed share of each item is within 0.01 of its weight share."""
    for weights in ([1, 2, 3, 4], [30, 30, 20, 15, 10, 8, 7, 5, 3, 1, 0.75], [0.2, 0.8]):
        items = list(range(len(weights)))
        sampler = WeightedSampler(items, weights, random.Random(77))
        result = sampler_chi_squared(sampler, n_draws=100_000)
        for item in items:
            diff = abs(result.observed[item] - result.expected[item])
            assert diff < 0.01, f"{weights}: item {item} off by {diff:.4f}"
    print("✅ sampled shares converge for 3 weight vectors")


def test_zero_weight_excluded_from_statistic():
    sampler = WeightedSampler(["a", "b", "c"], [5, 0, 5], random.Random(1))
    result = sampler_chi_squared(sampler, n_draws=20_000)
    assert result.observed["b"] == 0
    assert result.degrees_of_freedom == 1
    assert result.passed


def test_wild_frequency():
    """Wild shows up about 0.75 / 129.75 of the time."""
    result = sampler_chi_squared(_default_sampler(5), n_draws=200_000)
    expected = 0.75 / 129.75
    assert abs(result.observed[SymbolKind.WILD] - expected) < 0.0008


def test_montecarlo_matches_analytic_rtp():
    """20k simulated spins land within 15% (relative) of the exact RTP."""
    config = SlotConfig()
    model = SlotMathEngine().model_for_config(config, bet=51)
    result = SlotMonteCarlo(config, seed=7, tolerance=0.05).run(n_spins=20_000, bet=51)

    assert result.theoretical_rtp == model.theoretical_rtp
    rel = abs(result.measured_rtp - model.theoretical_rtp) / model.theoretical_rtp
    assert rel < 0.15, f"measured {result.measured_rtp:.4f} vs {model.theoretical_rtp:.4f}"
    assert 0 < result.measured_hit_frequency < 1
    assert result.total_wagered == 20_000 * 51
    print(result.summary())


def test_simulation_result_json():
    result = SlotMonteCarlo(SlotConfig(), seed=3).run(n_spins=300, chi_draws=5_000)
    data = json.loads(json.dumps(result.to_dict()))
    assert data["n_spins"] == 300
    assert data["bet"] == 50
    assert data["sampler"]["df"] == 10
    assert abs(sum(data["distribution"].values()) - 100) < 0.5


def test_simulation_tops_up_credits():
    """The validator never stops on an empty balance."""
    config = SlotConfig(starting_credits=0)
    result = SlotMonteCarlo(config, seed=9).run(n_spins=200)
    assert result.n_spins == 200


def test_spin_returns_pre_payout_money():
    """Returned money always equals the balance right after the wager."""
    game = Ledger(config=SlotConfig(seed=12, bet=60))
    for _ in range(500):
        before = game.credits
        money = game.spin()
        assert money == (before - 60) / (game.denom * 100)
        assert game.credits == before - 60 + game.last_payout


if __name__ == "__main__":
    for name, fn in list(globals().items()):
        if name.startswith("test_") and callable(fn):
            fn()
    print("\nAll statistical tests passed")
