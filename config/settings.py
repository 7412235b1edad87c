"""
REELCORE — Runtime Settings

Environment-driven defaults for game sessions, simulation runs and logging.
Values come from the process environment, with a `.env` file in the working
directory loaded first (python-dotenv). Nothing here is persisted.

    REELCORE_BOARD_WIDTH       reels on the board            (3)
    REELCORE_BOARD_HEIGHT      rows on the board             (3)
    REELCORE_STARTING_CREDITS  opening balance in credits    (10000)
    REELCORE_DENOM             cents per credit              (1)
    REELCORE_BET               credits per spin              (50)
    REELCORE_SEED              fixed RNG seed, unset = OS entropy
    REELCORE_LOG_LEVEL         logging level name            (WARNING)
    REELCORE_SIM_ROUNDS        default Monte Carlo spin count (100000)
"""

import logging
import os
from typing import Optional

from dotenv import load_dotenv

load_dotenv()


def _env_int(name: str, default: Optional[int]) -> Optional[int]:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        logging.getLogger("reelcore.settings").warning(
            f"{name}={raw!r} is not an integer, using {default}")
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        logging.getLogger("reelcore.settings").warning(
            f"{name}={raw!r} is not a number, using {default}")
        return default


class GameSettings:

    # --- Board ---
    BOARD_WIDTH  = _env_int("REELCORE_BOARD_WIDTH", 3)
    BOARD_HEIGHT = _env_int("REELCORE_BOARD_HEIGHT", 3)

    # --- Wallet ---
    STARTING_CREDITS = _env_float("REELCORE_STARTING_CREDITS", 10_000.0)
    DENOM            = _env_int("REELCORE_DENOM", 1)
    BET              = _env_int("REELCORE_BET", 50)

    # --- Randomness / simulation ---
    SEED       = _env_int("REELCORE_SEED", None)
    SIM_ROUNDS = _env_int("REELCORE_SIM_ROUNDS", 100_000)

    # --- Logging ---
    LOG_LEVEL  = os.getenv("REELCORE_LOG_LEVEL", "WARNING").strip().upper() or "WARNING"
    LOG_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"

    @classmethod
    def slot_config(cls, **overrides):
        """Build a SlotConfig from the environment, with keyword overrides.

        Overrides set to None are ignored so CLI flags can pass straight through.
        """
        from slot_engine.schema import SlotConfig

        data = {
            "width": cls.BOARD_WIDTH,
            "height": cls.BOARD_HEIGHT,
            "starting_credits": cls.STARTING_CREDITS,
            "denom": cls.DENOM,
            "bet": cls.BET,
            "seed": cls.SEED,
        }
        data.update({k: v for k, v in overrides.items() if v is not None})
        return SlotConfig(**data)

    @classmethod
    def configure_logging(cls, level: Optional[str] = None) -> logging.Logger:
        """Attach a stream handler to the `reelcore` logger (once)."""
        logger = logging.getLogger("reelcore")
        name = (level or cls.LOG_LEVEL).upper()
        logger.setLevel(getattr(logging, name, logging.WARNING))
        if not logger.handlers:
            _h = logging.StreamHandler()
            _h.setFormatter(logging.Formatter(cls.LOG_FORMAT, datefmt="%H:%M:%S"))
            logger.addHandler(_h)
        return logger
