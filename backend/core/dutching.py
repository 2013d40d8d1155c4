"""Dutching stake allocation — equal payout whichever outcome wins.

All functions here are **pure**: no I/O, no logging, no side effects.
Callers hold the bet list; every call returns a fresh list and never
mutates its input.

Algorithm
---------
For active bets (odds > 0) the stake that equalises the return is::

    stake_i  =  S / (o_i · Σ_j 1/o_j)                          (1)

so every return ``o_i · stake_i`` equals ``S / Σ 1/o_j``.  Each stake is
rounded to the cent (:func:`~backend.core.money.round2`), which leaves a
small signed ``difference = S − Σ stake_i``.  The whole difference is added
to the **last** active bet in list order, so stakes always add back up to
``S`` exactly and earlier rows never change when a row is appended.

When the total is only a few cents spread over many rows the remainder can
be more negative than the last stake.  That stake stops at zero and the
leftover moves back to the previous active row, and so on, so stakes stay
non-negative and still sum to ``S``.

The sum ``Σ 1/o_j`` is also the book's implied margin: below 1.0 the dutch
guarantees a profit, above 1.0 it guarantees a loss.

Run tests with::

    pytest tests/test_dutching.py -v
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from decimal import Decimal
from typing import List, Sequence, Tuple

from backend.core.money import ZERO, Number, round2, to_money


@dataclass(frozen=True)
class Bet:
    """One row of the calculator.

    Attributes:
        odds: Decimal odds.  ``0`` marks the row inactive: it is kept and
            rendered but excluded from allocation.
        stake: Amount wagered on this row.
    """

    odds: Decimal = ZERO
    stake: Decimal = ZERO

    def __post_init__(self) -> None:
        odds = to_money(self.odds)
        stake = to_money(self.stake)
        if odds < 0:
            raise ValueError(f"odds must be ≥ 0, got {self.odds!r}.")
        if stake < 0:
            raise ValueError(f"stake must be ≥ 0, got {self.stake!r}.")
        object.__setattr__(self, "odds", odds)
        object.__setattr__(self, "stake", stake)

    @property
    def is_active(self) -> bool:
        return self.odds > 0

    @property
    def potential_return(self) -> Decimal:
        """Payout if this bet wins, rounded to the cent."""
        return round2(self.odds * self.stake)


@dataclass(frozen=True)
class DutchingSummary:
    """Headline figures shown above the bet table."""

    total_stake: Decimal
    returns: Tuple[Decimal, ...]
    total_return: Decimal
    profit: Decimal

    @property
    def is_profitable(self) -> bool:
        return self.profit >= 0


def implied_margin(bets: Sequence[Bet]) -> Decimal:
    """Sum of inverse odds over active bets (``0`` when none are active).

    Examples::

        implied_margin([Bet(2), Bet(3)])        → 0.8333…  (17% profit)
        implied_margin([Bet(1.5), Bet(2.5)])    → 1.0667…  (loss)
    """
    return sum((1 / bet.odds for bet in bets if bet.is_active), ZERO)


def allocate_dutching(total_stake: Number, bets: Sequence[Bet]) -> List[Bet]:
    """Split ``total_stake`` across ``bets`` so every active return is equal.

    Args:
        total_stake: Amount to distribute.  Expected to carry at most two
            decimals; the stakes add up to it exactly under that condition.
        bets: Ordered bet rows.  Order decides which row absorbs the
            rounding remainder (the last active one).

    Returns:
        A new list, same length and order, with ``stake`` recomputed.
        Inactive rows get stake ``0``.  When no row is active the input
        rows are returned untouched.
    """
    total = to_money(total_stake)
    sum_inverse = implied_margin(bets)
    if sum_inverse == 0:
        return list(bets)

    allocated = [
        replace(bet, stake=round2(total / (bet.odds * sum_inverse)))
        if bet.is_active
        else replace(bet, stake=ZERO)
        for bet in bets
    ]

    remainder = total - sum((bet.stake for bet in allocated), ZERO)
    for index in range(len(allocated) - 1, -1, -1):
        if remainder == 0:
            break
        bet = allocated[index]
        if not bet.is_active:
            continue
        stake = round2(bet.stake + remainder)
        # A stake cannot go below zero; the rest moves to the previous active row.
        remainder = min(stake, ZERO)
        allocated[index] = replace(bet, stake=max(stake, ZERO))

    return allocated


def summarize_dutching(total_stake: Number, bets: Sequence[Bet]) -> DutchingSummary:
    """Return, profit and per-row returns for an allocated bet list.

    Only rows with both odds and stake above zero count as returns.  The
    headline return is the first of them: after allocation they are equal
    up to rounding, and the first row only carries reconciliation in
    sub-cent edge cases.
    """
    total = to_money(total_stake)
    returns = tuple(
        bet.potential_return for bet in bets if bet.is_active and bet.stake > 0
    )
    total_return = returns[0] if returns else round2(ZERO)
    return DutchingSummary(
        total_stake=round2(total),
        returns=returns,
        total_return=total_return,
        profit=round2(total_return - total),
    )
