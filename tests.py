#!/usr/bin/env python3
"""
REELCORE — Unit & Integration Test Suite

Run: python tests.py
     python tests.py -v          # verbose
     python tests.py TestLedger  # run specific class

Test categories:
  TestSymbols      — labels, line values, wild matching
  TestSampler      — alias table construction, weight validation
  TestBoard        — bounds, refresh vs locked cells, pre-roll draws
  TestPaylines     — wild resolution, segments, default line set
  TestSchema       — SlotConfig validation and audit hash
  TestLedger       — wager/payout accounting, denomination, errors
  TestSettings     — environment settings and logging setup
  TestSlotMath     — analytic line probabilities and RTP
  TestCli          — command-line entry points
"""

import json
import logging
import random
import sys
import unittest
from pathlib import Path
from unittest import mock

# ── Ensure project root is on sys.path ──
PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))

from pydantic import ValidationError

from slot_engine import (
    Board, InsufficientCredits, InvalidBet, InvalidDenomination, Ledger, Matched,
    NoMatch, Payline, SlotConfig, SlotError, SymbolKind, WeightedSampler,
    default_paylines, evaluate, new_game,
)
from slot_engine.sampler import build_alias_table
from slot_engine.symbols import DEFAULT_WEIGHTS, SYMBOL_ORDER, kind_from_label

K = SymbolKind

NO_WIN_3X3 = [
    [K.NINE, K.TEN, K.JACK],
    [K.QUEEN, K.KING, K.ACE],
    [K.COFFEE, K.CAKE, K.VIKING],
]


def fixed_sampler(kind=K.NINE, seed=0):
    """Sampler that can only produce `kind`."""
    return WeightedSampler([kind], [1.0], random.Random(seed))


def make_board(rows):
    """Board whose cells are set from `rows` (row-major, top row first)."""
    height, width = len(rows), len(rows[0])
    board = Board(width, height, fixed_sampler())
    for y, row in enumerate(rows):
        for x, kind in enumerate(row):
            board.cell(x, y).kind = kind
    return board


def pin_board(ledger, rows):
    """Set and lock every cell so spins leave the board as given."""
    for y, row in enumerate(rows):
        for x, kind in enumerate(row):
            cell = ledger.board.cell(x, y)
            cell.kind = kind
            cell.locked = True


def alias_distribution(weights):
    """Exact per-item probability implied by an alias table."""
    prob, alias = build_alias_table(weights)
    n = len(weights)
    out = [0.0] * n
    for i in range(n):
        out[i] += prob[i] / n
        out[alias[i]] += (1.0 - prob[i]) / n
    return out


# ============================================================
# Symbol Tests
# ============================================================

class TestSymbols(unittest.TestCase):

    def test_eleven_kinds_in_reel_order(self):
        self.assertEqual(len(SYMBOL_ORDER), 11)
        self.assertEqual(SYMBOL_ORDER[0], K.NINE)
        self.assertEqual(SYMBOL_ORDER[-1], K.WILD)

    def test_line_values(self):
        """Payout table matches the published values."""
        expected = {
            K.NINE: 5, K.TEN: 7, K.JACK: 10, K.QUEEN: 15, K.KING: 20, K.ACE: 25,
            K.COFFEE: 30, K.CAKE: 40, K.VIKING: 50, K.DRAGON: 100, K.WILD: 125,
        }
        for kind, value in expected.items():
            self.assertEqual(kind.payout, value, kind)

    def test_labels(self):
        self.assertEqual(K.NINE.label, "9")
        self.assertEqual(K.JACK.label, "J")
        self.assertEqual(K.DRAGON.label, "Dragon")
        self.assertEqual(str(K.WILD), "Wild")

    def test_wild_matching(self):
        self.assertTrue(K.NINE.matches(K.NINE))
        self.assertTrue(K.NINE.matches(K.WILD))
        self.assertFalse(K.NINE.matches(K.TEN))
        self.assertTrue(K.WILD.matches(K.WILD))
        # Matching is directional: a resolved WILD only accepts WILD.
        self.assertFalse(K.WILD.matches(K.NINE))

    def test_default_weights_total(self):
        self.assertAlmostEqual(sum(DEFAULT_WEIGHTS.values()), 129.75)

    def test_kind_from_label(self):
        self.assertIs(kind_from_label("10"), K.TEN)
        self.assertIs(kind_from_label("viking"), K.VIKING)
        with self.assertRaises(ValueError):
            kind_from_label("cherry")


# ============================================================
# Sampler Tests
# ============================================================

class TestSampler(unittest.TestCase):

    def test_alias_table_reproduces_default_weights(self):
        """Alias table encodes exactly the normalized weight vector."""
        weights = [DEFAULT_WEIGHTS[k] for k in SYMBOL_ORDER]
        total = sum(weights)
        for got, w in zip(alias_distribution(weights), weights):
            self.assertAlmostEqual(got, w / total, places=12)

    def test_alias_table_arbitrary_weights(self):
        for weights in ([1, 2, 3, 4], [0.5, 0.5], [10, 0, 1], [7]):
            total = sum(weights)
            for got, w in zip(alias_distribution(weights), weights):
                self.assertAlmostEqual(got, w / total, places=12)

    def test_zero_weight_never_drawn(self):
        sampler = WeightedSampler(["a", "b", "c"], [1.0, 0.0, 1.0], random.Random(3))
        draws = set(sampler.draw_many(5000))
        self.assertNotIn("b", draws)
        self.assertEqual(draws, {"a", "c"})

    def test_single_item(self):
        sampler = WeightedSampler([K.DRAGON], [2.5], random.Random(1))
        self.assertEqual(set(sampler.draw_many(100)), {K.DRAGON})

    def test_invalid_weights(self):
        with self.assertRaises(ValueError):
            WeightedSampler([], [])
        with self.assertRaises(ValueError):
            WeightedSampler(["a", "b"], [1.0])
        with self.assertRaises(ValueError):
            WeightedSampler(["a", "b"], [1.0, -1.0])
        with self.assertRaises(ValueError):
            WeightedSampler(["a", "b"], [0.0, 0.0])

    def test_seeded_draws_repeat(self):
        a = WeightedSampler(SYMBOL_ORDER, [DEFAULT_WEIGHTS[k] for k in SYMBOL_ORDER], random.Random(9))
        b = WeightedSampler(SYMBOL_ORDER, [DEFAULT_WEIGHTS[k] for k in SYMBOL_ORDER], random.Random(9))
        self.assertEqual(a.draw_many(200), b.draw_many(200))

    def test_probabilities(self):
        sampler = WeightedSampler(["x", "y"], [1.0, 3.0])
        self.assertEqual(sampler.probabilities(), {"x": 0.25, "y": 0.75})


# ============================================================
# Board Tests
# ============================================================

class TestBoard(unittest.TestCase):

    def test_dimensions_and_fill(self):
        board = Board(4, 2, fixed_sampler(K.ACE))
        self.assertEqual(board.dimensions(), (4, 2))
        for _x, _y, cell in board:
            self.assertIs(cell.kind, K.ACE)
            self.assertFalse(cell.locked)
        self.assertEqual(len(list(board)), 8)

    def test_cell_bounds_fail_fast(self):
        board = Board(3, 3, fixed_sampler())
        for x, y in [(3, 0), (0, 3), (-1, 0), (0, -1)]:
            with self.assertRaises(IndexError):
                board.cell(x, y)

    def test_invalid_dimensions(self):
        with self.assertRaises(ValueError):
            Board(0, 3, fixed_sampler())

    def test_refresh_skips_locked_cells(self):
        board = Board(3, 3, fixed_sampler(K.NINE))
        board.cell(0, 0).locked = True
        board.cell(2, 1).locked = True
        board.sampler = fixed_sampler(K.TEN)
        board.refresh()
        for x, y, cell in board:
            if (x, y) in {(0, 0), (2, 1)}:
                self.assertIs(cell.kind, K.NINE)
            else:
                self.assertIs(cell.kind, K.TEN)

    def test_draw_sample_leaves_board(self):
        board = make_board(NO_WIN_3X3)
        before = board.rows()
        board.sampler = fixed_sampler(K.WILD)
        self.assertIs(board.draw_sample(), K.WILD)
        self.assertEqual(board.rows(), before)

    def test_rows_are_row_major(self):
        board = make_board(NO_WIN_3X3)
        self.assertEqual(board.rows(), NO_WIN_3X3)
        self.assertIs(board.kind_at(2, 0), K.JACK)
        self.assertIs(board.kind_at(0, 2), K.COFFEE)


# ============================================================
# Payline Tests
# ============================================================

class TestPaylines(unittest.TestCase):

    LINE = Payline(((0, 0), (1, 0), (2, 0)), name="row_0")

    def _eval_row(self, kinds):
        rows = [list(kinds), [K.TEN] * 3, [K.JACK] * 3]
        return evaluate(self.LINE, make_board(rows))

    def test_wild_in_middle(self):
        result = self._eval_row([K.NINE, K.WILD, K.NINE])
        self.assertIsInstance(result, Matched)
        self.assertIs(result.kind, K.NINE)

    def test_mismatch(self):
        self.assertIsInstance(self._eval_row([K.NINE, K.TEN, K.NINE]), NoMatch)

    def test_all_wild_pays_as_wild(self):
        result = self._eval_row([K.WILD, K.WILD, K.WILD])
        self.assertIsInstance(result, Matched)
        self.assertIs(result.kind, K.WILD)

    def test_leading_wild_resolves_to_first_non_wild(self):
        self.assertIsInstance(self._eval_row([K.WILD, K.TEN, K.NINE]), NoMatch)
        result = self._eval_row([K.WILD, K.WILD, K.DRAGON])
        self.assertIsInstance(result, Matched)
        self.assertIs(result.kind, K.DRAGON)

    def test_trailing_wild(self):
        result = self._eval_row([K.KING, K.KING, K.WILD])
        self.assertIs(result.kind, K.KING)

    def test_segments(self):
        result = self._eval_row([K.ACE, K.ACE, K.ACE])
        self.assertEqual(result.segments, [((0, 0), (1, 0)), ((1, 0), (2, 0))])
        self.assertIs(result.line, self.LINE)

    def test_single_cell_line_matches_without_segments(self):
        line = Payline(((1, 1),))
        result = evaluate(line, make_board(NO_WIN_3X3))
        self.assertIsInstance(result, Matched)
        self.assertIs(result.kind, K.KING)
        self.assertEqual(result.segments, [])

    def test_empty_payline_rejected(self):
        with self.assertRaises(ValueError):
            Payline(())

    def test_out_of_bounds_line_fails_fast(self):
        line = Payline(((0, 0), (3, 0)))
        with self.assertRaises(IndexError):
            evaluate(line, make_board(NO_WIN_3X3))

    def test_default_3x3_set(self):
        """Three verticals, three horizontals, then both diagonals."""
        coords = [line.coords for line in default_paylines(3, 3)]
        self.assertEqual(coords, [
            ((0, 0), (0, 1), (0, 2)),
            ((1, 0), (1, 1), (1, 2)),
            ((2, 0), (2, 1), (2, 2)),
            ((0, 0), (1, 0), (2, 0)),
            ((0, 1), (1, 1), (2, 1)),
            ((0, 2), (1, 2), (2, 2)),
            ((0, 0), (1, 1), (2, 2)),
            ((0, 2), (1, 1), (2, 0)),
        ])

    def test_non_square_board_has_no_diagonals(self):
        lines = default_paylines(5, 3)
        self.assertEqual(len(lines), 5 + 3)
        self.assertTrue(all(len(l) in (3, 5) for l in lines))


# ============================================================
# Schema Tests
# ============================================================

class TestSchema(unittest.TestCase):

    def test_defaults(self):
        config = SlotConfig()
        self.assertEqual((config.width, config.height), (3, 3))
        self.assertEqual(config.starting_credits, 10_000.0)
        self.assertEqual(config.denom, 1)
        self.assertEqual(config.bet, 50)
        self.assertEqual(config.kinds(), list(SYMBOL_ORDER))
        self.assertEqual(len(config.config_hash), 16)

    def test_string_keys_coerced_and_ordered(self):
        config = SlotConfig(weights={"wild": 1.0, "nine": 2.0})
        self.assertEqual(config.kinds(), [K.NINE, K.WILD])
        self.assertEqual(config.weight_vector(), [2.0, 1.0])

    def test_bad_weights(self):
        with self.assertRaises(ValidationError):
            SlotConfig(weights={"nine": -1.0, "ten": 2.0})
        with self.assertRaises(ValidationError):
            SlotConfig(weights={"nine": 0.0})
        with self.assertRaises(ValidationError):
            SlotConfig(weights={"cherry": 1.0})

    def test_bad_scalars(self):
        for kwargs in ({"denom": 0}, {"bet": 0}, {"width": 0}, {"starting_credits": -1}):
            with self.assertRaises(ValidationError):
                SlotConfig(**kwargs)

    def test_payline_bounds(self):
        SlotConfig(paylines=[[(0, 0), (2, 2)]])
        with self.assertRaises(ValidationError):
            SlotConfig(paylines=[[(0, 0), (3, 0)]])
        with self.assertRaises(ValidationError):
            SlotConfig(paylines=[[]])

    def test_hash_tracks_math_fields(self):
        self.assertEqual(SlotConfig().config_hash, SlotConfig(bet=30).config_hash)
        self.assertNotEqual(SlotConfig().config_hash,
                            SlotConfig(weights={"nine": 1.0}).config_hash)

    def test_frozen(self):
        config = SlotConfig()
        with self.assertRaises(ValidationError):
            config.bet = 10


# ============================================================
# Ledger Tests
# ============================================================

class TestLedger(unittest.TestCase):

    def test_new_session_defaults(self):
        game = Ledger(3, 3)
        self.assertEqual(game.credits, 10_000.0)
        self.assertEqual(game.denom, 1)
        self.assertEqual(game.bet, 50)
        self.assertAlmostEqual(game.money, 100.0)
        self.assertEqual(game.board.dimensions(), (3, 3))
        self.assertEqual(len(game.paylines), 8)
        self.assertEqual(game.lines, [])

    def test_spin_exact_balance_returns_pre_payout_money(self):
        """credits == bet: spin succeeds and reports 0 before payout."""
        game = Ledger(config=SlotConfig(starting_credits=50, bet=50, seed=1))
        money = game.spin()
        self.assertEqual(money, 0.0)
        # Whatever was won is all that is left.
        self.assertEqual(game.credits, game.last_payout)

    def test_insufficient_credits_mutates_nothing(self):
        game = Ledger(config=SlotConfig(starting_credits=10, bet=50, seed=2))
        board_before = game.board.rows()
        with self.assertRaises(InsufficientCredits) as ctx:
            game.spin()
        self.assertIsInstance(ctx.exception, SlotError)
        self.assertEqual(ctx.exception.credits, 10)
        self.assertEqual(ctx.exception.bet, 50)
        self.assertEqual(game.credits, 10)
        self.assertEqual(game.board.rows(), board_before)
        self.assertEqual(game.spins, 0)

    def test_retry_after_top_up(self):
        game = Ledger(config=SlotConfig(starting_credits=10, bet=50, seed=2))
        with self.assertRaises(InsufficientCredits):
            game.spin()
        game.add_credits(40)
        self.assertEqual(game.spin(), 0.0)
        self.assertEqual(game.spins, 1)

    def test_retry_after_lowering_bet(self):
        game = Ledger(config=SlotConfig(starting_credits=10, bet=50, seed=2))
        with self.assertRaises(InsufficientCredits):
            game.spin()
        game.bet = 9
        self.assertAlmostEqual(game.spin(), 1 / 100)

    def test_add_credits_rejects_non_positive(self):
        game = Ledger(3, 3)
        with self.assertRaises(ValueError):
            game.add_credits(0)

    def test_add_credits_rejects_non_finite(self):
        game = Ledger(3, 3)
        for amount in (float("nan"), float("inf"), float("-inf")):
            with self.assertRaises(ValueError):
                game.add_credits(amount)
        self.assertEqual(game.credits, 10_000.0)

    def test_set_denom_rescales_credits(self):
        game = Ledger(3, 3)
        cents = game.credits * game.denom
        game.set_denom(2)
        self.assertEqual(game.credits, 5000.0)
        self.assertEqual(game.denom, 2)
        self.assertAlmostEqual(game.credits * game.denom, cents)
        game.denom = 5
        self.assertAlmostEqual(game.credits, 2000.0)
        self.assertAlmostEqual(game.credits * game.denom, cents)
        # money divides by denom, so it does not track the rescale.
        self.assertAlmostEqual(game.money, 2000.0 / 500)

    def test_invalid_denomination(self):
        game = Ledger(3, 3)
        for bad in (0, -1, 1.5, True, "2"):
            with self.assertRaises(InvalidDenomination):
                game.set_denom(bad)
        with self.assertRaises(ValueError):
            game.denom = 0
        self.assertEqual(game.denom, 1)
        self.assertEqual(game.credits, 10_000.0)

    def test_invalid_bet(self):
        game = Ledger(3, 3)
        for bad in (0, -5, 2.5, False):
            with self.assertRaises(InvalidBet):
                game.set_bet(bad)
        self.assertEqual(game.bet, 50)
        game.bet = 30
        self.assertEqual(game.bet, 30)

    def test_money_is_idempotent(self):
        game = Ledger(3, 3)
        game.set_denom(3)
        self.assertEqual(game.money, game.money)
        self.assertEqual(game.credits, game.credits)

    def test_fixed_board_payout(self):
        """bet=30 pays value(kind) * 10 per matched line."""
        game = Ledger(config=SlotConfig(bet=30, seed=5))
        rows = [
            [K.NINE, K.NINE, K.NINE],
            [K.TEN, K.WILD, K.JACK],
            [K.NINE, K.KING, K.NINE],
        ]
        pin_board(game, rows)
        expected = sum(
            r.kind.payout * 10
            for r in (evaluate(line, game.board) for line in game.paylines)
            if isinstance(r, Matched)
        )
        self.assertEqual(expected, 150)  # top row + both diagonals, all nines

        money = game.spin()
        self.assertAlmostEqual(money, (10_000 - 30) / 100)
        self.assertEqual(game.last_payout, 150)
        self.assertEqual(game.credits, 10_000 - 30 + 150)
        self.assertEqual([w.line.name for w in game.last_wins], ["row_0", "diag_down", "diag_up"])
        self.assertEqual(game.lines, [
            ((0, 0), (1, 0)), ((1, 0), (2, 0)),
            ((0, 0), (1, 1)), ((1, 1), (2, 2)),
            ((0, 2), (1, 1)), ((1, 1), (2, 0)),
        ])

    def test_all_wild_board(self):
        game = Ledger(3, 3)
        pin_board(game, [[K.WILD] * 3] * 3)
        game.spin()
        self.assertEqual(len(game.last_wins), 8)
        self.assertEqual(game.last_payout, 8 * 125 * (50 // 3))

    def test_bet_remainder_is_dropped(self):
        game = Ledger(3, 3)
        pin_board(game, [[K.NINE] * 3] * 3)
        game.bet = 31
        game.spin()
        self.assertEqual(game.last_payout, 8 * 5 * 10)
        game.bet = 2
        game.spin()
        self.assertEqual(len(game.last_wins), 8)
        self.assertEqual(game.last_payout, 0)

    def test_lines_cleared_each_spin(self):
        game = Ledger(3, 3)
        pin_board(game, [[K.CAKE] * 3] * 3)
        game.spin()
        self.assertEqual(len(game.lines), 16)
        pin_board(game, NO_WIN_3X3)
        game.spin()
        self.assertEqual(game.lines, [])
        self.assertEqual(game.last_wins, [])
        self.assertEqual(game.last_payout, 0)

    def test_seeded_sessions_repeat(self):
        a = new_game(seed=11)
        b = new_game(seed=11)
        for _ in range(20):
            self.assertEqual(a.spin(), b.spin())
            self.assertEqual(a.board.rows(), b.board.rows())
            self.assertEqual(a.lines, b.lines)
        self.assertEqual(a.credits, b.credits)

    def test_custom_dimensions(self):
        game = Ledger(4, 3)
        self.assertEqual(game.board.dimensions(), (4, 3))
        self.assertEqual(len(game.paylines), 7)
        game.spin()

    def test_dimension_override_on_config(self):
        game = Ledger(5, 5, config=SlotConfig(bet=60))
        self.assertEqual(game.board.dimensions(), (5, 5))
        self.assertEqual(game.bet, 60)
        self.assertEqual(len(game.paylines), 12)

    def test_invalid_dimensions(self):
        with self.assertRaises(ValueError):
            Ledger(0, 3)

    def test_custom_paylines(self):
        config = SlotConfig(paylines=[[(0, 1), (1, 1), (2, 1)]])
        game = Ledger(config=config)
        pin_board(game, [[K.NINE] * 3] * 3)
        game.spin()
        self.assertEqual(len(game.last_wins), 1)

    def test_snapshot_is_json(self):
        game = new_game(seed=3)
        game.spin()
        snap = game.snapshot()
        json.dumps(snap)
        self.assertEqual(snap["bet"], 50)
        self.assertEqual(len(snap["board"]), 3)
        self.assertEqual(snap["spins"], 1)

    def test_snapshot_keeps_charged_line_payouts_after_bet_change(self):
        game = Ledger(config=SlotConfig(bet=50, seed=1))
        pin_board(game, [[K.NINE] * 3] * 3)
        game.spin()
        self.assertEqual(game.last_payout, 640.0)
        game.bet = 300
        snap = game.snapshot()
        self.assertEqual([w["paid"] for w in snap["last_wins"]], [80] * 8)
        self.assertEqual(sum(w["paid"] for w in snap["last_wins"]), snap["last_payout"])
        self.assertEqual(game.last_line_payouts, [80] * 8)


# ============================================================
# Settings Tests
# ============================================================

class TestSettings(unittest.TestCase):

    def test_slot_config_overrides(self):
        from config.settings import GameSettings
        config = GameSettings.slot_config(bet=27, denom=5, width=4, height=4, seed=1)
        self.assertEqual(config.bet, 27)
        self.assertEqual(config.denom, 5)
        self.assertEqual((config.width, config.height), (4, 4))

    def test_none_overrides_ignored(self):
        from config.settings import GameSettings
        config = GameSettings.slot_config(bet=None, denom=None)
        self.assertEqual(config.bet, GameSettings.BET)
        self.assertEqual(config.denom, GameSettings.DENOM)

    def test_configure_logging_once(self):
        from config.settings import GameSettings
        logger = GameSettings.configure_logging("DEBUG")
        n = len(logger.handlers)
        GameSettings.configure_logging("INFO")
        self.assertEqual(len(logger.handlers), n)
        self.assertEqual(logger.level, logging.INFO)
        logger.setLevel(logging.WARNING)


# ============================================================
# Math Model Tests
# ============================================================

class TestSlotMath(unittest.TestCase):

    def test_line_probabilities(self):
        from tools.slot_math import line_outcome_probabilities
        probs = {K.NINE: 0.5, K.TEN: 0.25, K.WILD: 0.25}
        one = line_outcome_probabilities(probs, 1)
        self.assertAlmostEqual(sum(one.values()), 1.0)
        three = line_outcome_probabilities(probs, 3)
        self.assertAlmostEqual(three[K.WILD], 0.25 ** 3)
        self.assertAlmostEqual(three[K.NINE], 0.75 ** 3 - 0.25 ** 3)
        self.assertAlmostEqual(three[K.TEN], 0.5 ** 3 - 0.25 ** 3)

    def test_default_model(self):
        from tools.slot_math import SlotMathEngine
        model = SlotMathEngine().model_for_config(SlotConfig(), bet=51)
        self.assertEqual(model.paylines, 8)
        self.assertEqual(model.line_multiplier, 17)
        self.assertAlmostEqual(model.expected_payout, model.expected_line_value * 17)
        self.assertAlmostEqual(model.theoretical_rtp, model.expected_payout / 51)
        self.assertGreater(model.theoretical_rtp, 0)
        self.assertLess(model.theoretical_rtp, 1)
        proof = json.loads(model.to_json())["rtp_proof"]
        self.assertEqual(len(proof["entries"]), 11)

    def test_wild_only_config(self):
        from tools.slot_math import SlotMathEngine
        model = SlotMathEngine().model_for_config(SlotConfig(weights={"wild": 1.0}), bet=30)
        self.assertAlmostEqual(model.expected_payout, 8 * 125 * 10)
        self.assertAlmostEqual(model.line_hit_frequency, 1.0)


# ============================================================
# CLI Tests
# ============================================================

class TestCli(unittest.TestCase):

    def test_dump_config(self):
        from tools.slot_cli import main
        self.assertEqual(main(["--dump-config"]), 0)

    def test_spin(self):
        from tools.slot_cli import main
        self.assertEqual(main(["--seed", "3", "spin", "--spins", "3", "--bet", "30"]), 0)

    def test_spin_out_of_credits(self):
        from tools.slot_cli import main
        self.assertEqual(main(["--credits", "10", "spin"]), 0)

    def test_math_json(self):
        from tools.slot_cli import main
        self.assertEqual(main(["math", "--json"]), 0)

    def test_invalid_denom(self):
        from tools.slot_cli import main
        self.assertEqual(main(["--denom", "0", "spin"]), 2)

    def test_simulate_small_within_tolerance(self):
        from tools.slot_cli import main
        self.assertEqual(main(["--seed", "4", "simulate", "--spins", "500",
                               "--tolerance", "10", "--chi-draws", "0"]), 0)

    def test_simulate_small_outside_tolerance(self):
        from tools.slot_cli import main
        self.assertEqual(main(["--seed", "4", "simulate", "--spins", "500",
                               "--tolerance", "0", "--chi-draws", "0"]), 1)

    def test_simulate_rejects_non_positive_spins(self):
        from tools.slot_cli import main
        self.assertEqual(main(["simulate", "--spins", "0", "--chi-draws", "0"]), 2)
        self.assertEqual(main(["simulate", "--spins", "-1", "--chi-draws", "0"]), 2)

    def test_simulate_keeps_seed_zero(self):
        from tools.slot_cli import main
        from tools.slot_montecarlo import SlotMonteCarlo
        with mock.patch("tools.slot_cli.SlotMonteCarlo", wraps=SlotMonteCarlo) as mc:
            code = main(["--seed", "0", "simulate", "--spins", "50",
                         "--tolerance", "10", "--chi-draws", "0"])
        self.assertEqual(code, 0)
        self.assertEqual(mc.call_args.kwargs["seed"], 0)

    def test_no_command(self):
        from tools.slot_cli import main
        self.assertEqual(main([]), 2)


if __name__ == "__main__":
    unittest.main()
