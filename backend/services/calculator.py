"""
Calculator sessions — the stateful side of the dutching calculator.

The maths in ``backend.core`` is pure; these classes hold the current
inputs for one browser session and apply user edits.  Every mutating
action ends with an explicit full recompute:

    1. Dutching — re-run the allocator whenever the total stake, any odds
       value, or the row list changes.
    2. Limitation — re-run the balancer whenever either odds or either
       stake changes; a stake edit also moves the editing tag.

The row collections are replaced wholesale (tuples), never patched in
place, so a renderer reading ``session.bets`` always sees a consistent set.
"""

import logging
from decimal import Decimal
from typing import Optional, Tuple

from backend.core.calculator_config import CalculatorConfig
from backend.core.dutching import (
    Bet,
    DutchingSummary,
    allocate_dutching,
    implied_margin,
    summarize_dutching,
)
from backend.core.limitation import (
    Editing,
    LimitationPair,
    LimitationSummary,
    balance_limitation,
    summarize_limitation,
)
from backend.core.money import ZERO, parse_stake
from backend.core.odds_input import format_odds_input, normalize_odds

logger = logging.getLogger(__name__)


def _initial_bets(count: int) -> Tuple[Bet, ...]:
    return tuple(Bet() for _ in range(count))


# ---------------------------------------------------------------------------
# Dutching
# ---------------------------------------------------------------------------

class DutchingSession:
    """
    Holds the total stake and bet rows of one dutching calculator.

    Rows keep their insertion order; the last active row absorbs the
    rounding remainder.  The table never shrinks below ``config.min_bets``.
    """

    def __init__(self, config: Optional[CalculatorConfig] = None):
        self.config = config or CalculatorConfig.from_env()
        self.total_stake: Decimal = self.config.default_total_stake
        self.bets: Tuple[Bet, ...] = _initial_bets(self.config.min_bets)
        self._recompute()

    # ------------------------------------------------------------------
    # Edits
    # ------------------------------------------------------------------

    def set_total_stake(self, raw) -> Decimal:
        """Set the total stake from user text; bad input becomes 0."""
        self.total_stake = parse_stake(raw)
        self._recompute()
        return self.total_stake

    def set_odds(self, index: int, raw: Optional[str]) -> str:
        """Set the odds of row ``index`` and return the text to show in the field."""
        self._check_index(index)
        bets = list(self.bets)
        # Stake starts from zero; the allocator refills it when any row is active.
        bets[index] = Bet(odds=normalize_odds(raw))
        self.bets = tuple(bets)
        self._recompute()
        return format_odds_input(raw)

    def add_bet(self) -> None:
        self.bets = self.bets + (Bet(),)
        self._recompute()

    def remove_bet(self, index: int) -> bool:
        """Remove row ``index``.  Returns False (no-op) at the row floor."""
        if len(self.bets) <= self.config.min_bets:
            logger.debug("Refusing to remove row %d: %d rows is the minimum", index, len(self.bets))
            return False
        if not 0 <= index < len(self.bets):
            logger.warning("Ignoring removal of missing row %d (have %d)", index, len(self.bets))
            return False
        self.bets = self.bets[:index] + self.bets[index + 1:]
        self._recompute()
        return True

    def reset(self) -> None:
        """Back to two empty rows and a zero total."""
        self.total_stake = ZERO
        self.bets = _initial_bets(self.config.min_bets)
        self._recompute()

    # ------------------------------------------------------------------
    # Derived values
    # ------------------------------------------------------------------

    @property
    def can_remove(self) -> bool:
        return len(self.bets) > self.config.min_bets

    @property
    def summary(self) -> DutchingSummary:
        return summarize_dutching(self.total_stake, self.bets)

    @property
    def implied_margin(self) -> Decimal:
        return implied_margin(self.bets)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self.bets):
            raise ValueError(f"No bet at row {index!r} (have {len(self.bets)}).")

    def _recompute(self) -> None:
        self.bets = tuple(allocate_dutching(self.total_stake, self.bets))
        logger.debug(
            "Dutching recomputed: total=%s stakes=%s",
            self.total_stake,
            [str(bet.stake) for bet in self.bets],
        )


# ---------------------------------------------------------------------------
# Limitation
# ---------------------------------------------------------------------------

class LimitationSession:
    """
    Holds the two legs of a limitation calculation.

    The total stake is derived (sum of both legs) and cannot be set.
    """

    def __init__(self, config: Optional[CalculatorConfig] = None):
        self.config = config or CalculatorConfig.from_env()
        self.pair = LimitationPair()

    def set_odds(self, index: int, raw: Optional[str]) -> str:
        which = Editing.from_index(index)
        current = self.pair.bet(which)
        self.pair = self.pair.with_bet(which, Bet(odds=normalize_odds(raw), stake=current.stake))
        self._recompute()
        return format_odds_input(raw)

    def set_stake(self, index: int, raw) -> Decimal:
        """Set the stake of leg ``index`` and make it the editing leg."""
        which = Editing.from_index(index)
        current = self.pair.bet(which)
        stake = parse_stake(raw)
        self.pair = LimitationPair(
            first=self.pair.first,
            second=self.pair.second,
            editing=which,
        ).with_bet(which, Bet(odds=current.odds, stake=stake))
        self._recompute()
        return stake

    def reset(self) -> None:
        self.pair = LimitationPair()
        self._recompute()

    @property
    def bets(self) -> Tuple[Bet, Bet]:
        return self.pair.bets

    @property
    def total_stake(self) -> Decimal:
        return self.pair.total_stake

    @property
    def summary(self) -> LimitationSummary:
        return summarize_limitation(self.pair)

    def _recompute(self) -> None:
        self.pair = balance_limitation(self.pair)
        logger.debug(
            "Limitation recomputed: editing=%s stakes=%s",
            self.pair.editing.name if self.pair.editing else None,
            [str(bet.stake) for bet in self.pair.bets],
        )
