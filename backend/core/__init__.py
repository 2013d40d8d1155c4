"""Core mathematics and configuration for the dutching calculator.

This package contains pure building blocks:

- ``money``             — Decimal rounding, parsing and formatting of amounts
- ``odds_input``        — keypad-style odds normalisation
- ``dutching``          — equal-payout stake allocation across N bets
- ``limitation``        — two-bet return balancing
- ``calculator_config`` — environment-driven defaults

Nothing in this package imports from ``backend.services`` or ``dashboard``.
All calculator functions are side-effect-free and unit-testable in isolation.
"""

from backend.core.dutching import Bet, allocate_dutching
from backend.core.limitation import Editing, LimitationPair, balance_limitation
from backend.core.odds_input import normalize_odds

__all__ = [
    "Bet",
    "Editing",
    "LimitationPair",
    "allocate_dutching",
    "balance_limitation",
    "normalize_odds",
]
