"""
REELCORE — Monte Carlo Validator

Plays a real Ledger for N spins and checks the measured return against the
analytic model in tools.slot_math, plus a chi-squared goodness-of-fit test
of the symbol sampler against its weight table.

Usage:
    from tools.slot_montecarlo import SlotMonteCarlo
    mc = SlotMonteCarlo(SlotConfig(), seed=42)
    result = mc.run(n_spins=100_000)
    print(result.summary())
"""

from __future__ import annotations

import logging
import random
import statistics
import time
from dataclasses import dataclass, field
from typing import Optional

from slot_engine.ledger import Ledger
from slot_engine.sampler import WeightedSampler
from slot_engine.schema import SlotConfig
from tools.slot_math import SlotMathEngine

logger = logging.getLogger("reelcore.montecarlo")

# Chi-squared critical values at α = 0.001, indexed by degrees of freedom.
CHI2_CRITICAL_001 = {
    1: 10.828, 2: 13.816, 3: 16.266, 4: 18.467, 5: 20.515,
    6: 22.458, 7: 24.322, 8: 26.124, 9: 27.877, 10: 29.588,
    11: 31.264, 12: 32.909, 13: 34.528, 14: 36.123, 15: 37.697,
}


# ═══════════════════════════════════════════════════════════════
# Data Structures
# ═══════════════════════════════════════════════════════════════

@dataclass
class ChiSquaredResult:
    n_draws: int
    statistic: float
    degrees_of_freedom: int
    critical_value: float
    passed: bool
    observed: dict = field(default_factory=dict)      # kind -> observed share
    expected: dict = field(default_factory=dict)      # kind -> expected share

    def to_dict(self) -> dict:
        return {
            "n_draws": self.n_draws,
            "chi_squared": round(self.statistic, 4),
            "df": self.degrees_of_freedom,
            "critical_value": self.critical_value,
            "pass": self.passed,
            "observed": {str(k): round(v, 6) for k, v in self.observed.items()},
            "expected": {str(k): round(v, 6) for k, v in self.expected.items()},
        }


@dataclass
class SimulationResult:
    """Results from a Monte Carlo run against one config and bet."""
    n_spins: int
    bet: int
    theoretical_rtp: float
    measured_rtp: float
    rtp_delta: float                 # |measured - theoretical|
    rtp_pass: bool
    tolerance: float = 0.02

    measured_std_dev: float = 0.0    # Per-spin return, in bets
    measured_hit_frequency: float = 0.0
    measured_max_win: float = 0.0    # In bets
    total_wagered: float = 0.0
    total_returned: float = 0.0

    win_distribution: dict = field(default_factory=dict)
    streak_analysis: dict = field(default_factory=dict)
    sampler_check: Optional[ChiSquaredResult] = None

    duration_seconds: float = 0.0
    spins_per_second: float = 0.0
    seed: int = 0
    config_hash: str = ""

    def summary(self) -> str:
        status = "✅ PASS" if self.rtp_pass else "❌ FAIL"
        lines = [
            f"═══ Monte Carlo: {self.n_spins:,} spins @ bet {self.bet} ═══",
            f"  Theoretical: {self.theoretical_rtp*100:.4f}%",
            f"  Measured:    {self.measured_rtp*100:.4f}%",
            f"  Delta:       {self.rtp_delta*100:.4f}%  (±{self.tolerance*100:.1f}%)",
            f"  RTP Check:   {status}",
            f"  Std Dev:     {self.measured_std_dev:.4f}",
            f"  Hit Freq:    {self.measured_hit_frequency*100:.2f}%",
            f"  Max Win:     {self.measured_max_win:.2f}x",
            f"  Speed:       {self.spins_per_second:,.0f} spins/sec",
        ]
        if self.streak_analysis:
            lines.append(f"  Max Loss Streak: {self.streak_analysis.get('max_loss_streak', 'N/A')}")
        if self.sampler_check:
            chi = self.sampler_check
            lines.append(f"  Sampler χ²:  {chi.statistic:.3f} (crit {chi.critical_value}) "
                         f"{'PASS' if chi.passed else 'FAIL'}")
        return "\n".join(lines)

    def to_dict(self) -> dict:
        return {
            "n_spins": self.n_spins,
            "bet": self.bet,
            "seed": self.seed,
            "config_hash": self.config_hash,
            "theoretical_rtp_pct": round(self.theoretical_rtp * 100, 4),
            "measured_rtp_pct": round(self.measured_rtp * 100, 4),
            "rtp_delta_pct": round(self.rtp_delta * 100, 4),
            "rtp_pass": self.rtp_pass,
            "tolerance_pct": self.tolerance * 100,
            "volatility": {
                "std_dev": round(self.measured_std_dev, 4),
                "hit_frequency_pct": round(self.measured_hit_frequency * 100, 2),
                "max_win_mult": round(self.measured_max_win, 2),
            },
            "totals": {
                "wagered": round(self.total_wagered, 2),
                "returned": round(self.total_returned, 2),
            },
            "distribution": self.win_distribution,
            "streak_analysis": self.streak_analysis,
            "sampler": self.sampler_check.to_dict() if self.sampler_check else None,
            "performance": {
                "duration_s": round(self.duration_seconds, 3),
                "spins_per_sec": round(self.spins_per_second),
            },
        }


# ═══════════════════════════════════════════════════════════════
# Statistics
# ═══════════════════════════════════════════════════════════════

def sampler_chi_squared(sampler: WeightedSampler, n_draws: int = 100_000) -> ChiSquaredResult:
    """Goodness-of-fit of sampled frequencies to the sampler's weights.

    Zero-weight items are left out of the statistic (expected count 0);
    drawing one at all fails the test.
    """
    counts = {item: 0 for item in sampler.items}
    for _ in range(n_draws):
        counts[sampler.draw()] += 1

    expected = sampler.probabilities()
    chi2 = 0.0
    bins = 0
    impossible_hit = False
    for item, p in expected.items():
        if p <= 0:
            impossible_hit = impossible_hit or counts[item] > 0
            continue
        exp_count = p * n_draws
        chi2 += (counts[item] - exp_count) ** 2 / exp_count
        bins += 1

    df = max(1, bins - 1)
    critical = CHI2_CRITICAL_001.get(df, df + 3.09 * (2 * df) ** 0.5)
    return ChiSquaredResult(
        n_draws=n_draws,
        statistic=chi2,
        degrees_of_freedom=df,
        critical_value=critical,
        passed=chi2 < critical and not impossible_hit,
        observed={k: v / n_draws for k, v in counts.items()},
        expected=expected,
    )


def _analyze_streaks(outcomes: list[float]) -> dict:
    max_win = max_loss = cur_win = cur_loss = 0
    for o in outcomes:
        if o > 0:
            cur_win += 1
            cur_loss = 0
            max_win = max(max_win, cur_win)
        else:
            cur_loss += 1
            cur_win = 0
            max_loss = max(max_loss, cur_loss)
    return {"max_win_streak": max_win, "max_loss_streak": max_loss}


def _win_distribution(outcomes: list[float]) -> dict:
    """Share of spins by return multiple of the bet, in percent."""
    buckets = {"0x": 0, "0-1x": 0, "1-2x": 0, "2-5x": 0,
               "5-10x": 0, "10-50x": 0, "50x+": 0}
    for o in outcomes:
        if o == 0:
            buckets["0x"] += 1
        elif o < 1:
            buckets["0-1x"] += 1
        elif o < 2:
            buckets["1-2x"] += 1
        elif o < 5:
            buckets["2-5x"] += 1
        elif o < 10:
            buckets["5-10x"] += 1
        elif o < 50:
            buckets["10-50x"] += 1
        else:
            buckets["50x+"] += 1
    n = len(outcomes) or 1
    return {k: round(v / n * 100, 2) for k, v in buckets.items()}


# ═══════════════════════════════════════════════════════════════
# Validator
# ═══════════════════════════════════════════════════════════════

class SlotMonteCarlo:
    """Validates a SlotConfig's return by simulation."""

    def __init__(self, config: Optional[SlotConfig] = None, seed: int = 42,
                 tolerance: float = 0.02):
        """
        Args:
            config: Game config; defaults to SlotConfig()
            seed: Seed for the simulated session's random source
            tolerance: Allowed |measured - theoretical| RTP (0.02 = ±2%)
        """
        self.config = config or SlotConfig()
        self.seed = seed
        self.tolerance = tolerance

    def run(self, n_spins: int = 100_000, bet: Optional[int] = None,
            chi_draws: int = 0) -> SimulationResult:
        if n_spins <= 0:
            raise ValueError(f"n_spins must be positive, got {n_spins}")
        ledger = Ledger(config=self.config, rng=random.Random(self.seed))
        if bet is not None:
            ledger.bet = bet
        bet = ledger.bet
        model = SlotMathEngine().model_for_config(self.config, bet=bet)

        logger.info(f"Monte Carlo: {n_spins:,} spins @ bet {bet} (seed={self.seed})")
        t0 = time.time()
        outcomes: list[float] = []
        for _ in range(n_spins):
            if ledger.credits < bet:
                ledger.add_credits(bet * 1000)
            ledger.spin()
            outcomes.append(ledger.last_payout / bet)
        duration = time.time() - t0

        total_returned = sum(outcomes) * bet
        total_wagered = float(n_spins * bet)
        measured = total_returned / total_wagered
        delta = abs(measured - model.theoretical_rtp)

        chi = None
        if chi_draws > 0:
            sampler = WeightedSampler(self.config.kinds(), self.config.weight_vector(),
                                      random.Random(self.seed + 1))
            chi = sampler_chi_squared(sampler, chi_draws)

        result = SimulationResult(
            n_spins=n_spins,
            bet=bet,
            theoretical_rtp=model.theoretical_rtp,
            measured_rtp=measured,
            rtp_delta=delta,
            rtp_pass=delta <= self.tolerance,
            tolerance=self.tolerance,
            measured_std_dev=statistics.pstdev(outcomes) if len(outcomes) > 1 else 0.0,
            measured_hit_frequency=sum(1 for o in outcomes if o > 0) / n_spins,
            measured_max_win=max(outcomes),
            total_wagered=total_wagered,
            total_returned=total_returned,
            win_distribution=_win_distribution(outcomes),
            streak_analysis=_analyze_streaks(outcomes),
            sampler_check=chi,
            duration_seconds=duration,
            spins_per_second=n_spins / duration if duration > 0 else 0,
            seed=self.seed,
            config_hash=self.config.config_hash,
        )
        if not result.rtp_pass:
            logger.warning(f"RTP outside tolerance: measured={measured:.4f} "
                           f"theoretical={model.theoretical_rtp:.4f}")
        return result
