"""Error types raised by the slot engine. None of them is fatal."""


class SlotError(Exception):
    """Base class for slot engine errors."""


class InsufficientCredits(SlotError):
    """The wager exceeds the balance. Nothing was mutated; safe to retry."""

    def __init__(self, credits: float, bet: int):
        self.credits = credits
        self.bet = bet
        super().__init__(f"Insufficient credits: balance {credits:g} < bet {bet}")


class InvalidDenomination(SlotError, ValueError):
    def __init__(self, value):
        self.value = value
        super().__init__(f"Denomination must be a positive integer, got {value!r}")


class InvalidBet(SlotError, ValueError):
    def __init__(self, value):
        self.value = value
        super().__init__(f"Bet must be a positive integer, got {value!r}")
