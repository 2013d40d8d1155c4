"""Two-bet balancing ("limitation" mode).

The user types the stake of one bet; the stake of the opposing bet is
derived so both legs return the same amount::

    other.stake  =  round2(edited.odds · edited.stake / other.odds)

Which leg is being edited is carried by a single :class:`Editing` tag on
the pair, so "both legs editing" cannot be represented.  ``None`` means no
stake has been typed yet and nothing is derived.

Every function here is **pure**; :class:`LimitationPair` is frozen and each
operation returns a new pair.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field, replace
from decimal import Decimal
from typing import Optional, Tuple

from backend.core.dutching import Bet
from backend.core.money import round2


class Editing(enum.Enum):
    """Which leg of the pair the user last edited."""

    FIRST = 0
    SECOND = 1

    @property
    def other(self) -> "Editing":
        return Editing.SECOND if self is Editing.FIRST else Editing.FIRST

    @classmethod
    def from_index(cls, index: int) -> "Editing":
        """Map a row index (0 or 1) to its tag."""
        try:
            return cls(index)
        except ValueError:
            raise ValueError(
                f"A limitation pair has exactly two bets; index {index!r} is out of range."
            ) from None


@dataclass(frozen=True)
class LimitationPair:
    first: Bet = field(default_factory=Bet)
    second: Bet = field(default_factory=Bet)
    editing: Optional[Editing] = None

    @property
    def bets(self) -> Tuple[Bet, Bet]:
        return (self.first, self.second)

    def bet(self, which: Editing) -> Bet:
        return self.first if which is Editing.FIRST else self.second

    def with_bet(self, which: Editing, bet: Bet) -> "LimitationPair":
        if which is Editing.FIRST:
            return replace(self, first=bet)
        return replace(self, second=bet)

    def is_editing(self, which: Editing) -> bool:
        return self.editing is which

    @property
    def total_stake(self) -> Decimal:
        """Derived total invested; never set directly in this mode."""
        return round2(self.first.stake + self.second.stake)


@dataclass(frozen=True)
class LimitationSummary:
    total_stake: Decimal
    returns: Tuple[Decimal, Decimal]
    total_return: Decimal
    profit: Decimal

    @property
    def is_profitable(self) -> bool:
        return self.profit >= 0


def balance_limitation(pair: LimitationPair) -> LimitationPair:
    """Derive the non-edited stake so both legs return the same amount.

    The pair is returned unchanged when nothing is being edited, when
    either leg has zero odds, or while the edited stake is still zero.

    Examples::

        pair = LimitationPair(Bet(2, 50), Bet(4), editing=Editing.FIRST)
        balance_limitation(pair).second.stake  → Decimal("25.00")
    """
    if pair.editing is None:
        return pair

    edited = pair.bet(pair.editing)
    other = pair.bet(pair.editing.other)
    if edited.odds == 0 or other.odds == 0 or edited.stake <= 0:
        return pair

    target_return = edited.odds * edited.stake
    balanced = replace(other, stake=round2(target_return / other.odds))
    return pair.with_bet(pair.editing.other, balanced)


def summarize_limitation(pair: LimitationPair) -> LimitationSummary:
    """Total stake, per-leg returns and profit for a (balanced) pair.

    The headline return is the edited leg's, since that is the figure the
    user fixed; the other leg matches it up to one cent.
    """
    returns = (pair.first.potential_return, pair.second.potential_return)
    headline = pair.editing or Editing.FIRST
    total_return = returns[headline.value]
    total_stake = pair.total_stake
    return LimitationSummary(
        total_stake=total_stake,
        returns=returns,
        total_return=total_return,
        profit=round2(total_return - total_stake),
    )
