"""Monetary arithmetic — the single rounding rule for every stake and return.

Every function here is **pure**: no I/O, no logging, no side effects.

Design decisions
----------------
* All money is :class:`decimal.Decimal`, never ``float``.  A stake of
  ``0.1 + 0.2`` must print as ``0.30``, and the reconciliation step in
  :func:`~backend.core.dutching.allocate_dutching` relies on exact sums.
* Rounding is ``ROUND_HALF_UP``, which for ``Decimal`` means
  round-half-away-from-zero (``0.125 → 0.13``, ``-0.125 → -0.13``).
  Banker's rounding is not used.
* Intermediate results keep the default 28-digit context precision; only
  values "at rest" (stakes, returns, profit) are quantized to 2 places.
  :func:`round2` widens the precision for values too large to quantize, so
  arbitrarily long odds never raise.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, getcontext, localcontext
from typing import Final, Union

#: Smallest representable money step (one cent).
MONEY_QUANTUM: Final[Decimal] = Decimal("0.01")

ZERO: Final[Decimal] = Decimal("0")

Number = Union[Decimal, int, float, str]


def to_money(value: Number) -> Decimal:
    """Coerce ``value`` into a ``Decimal`` without float artefacts.

    Floats are routed through ``str`` so ``2.1`` becomes ``Decimal("2.1")``
    rather than ``Decimal("2.100000000000000088817841970012523...")``.

    Raises:
        ValueError: If ``value`` cannot be read as a number.
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        value = str(value)
    try:
        return Decimal(value)
    except (InvalidOperation, TypeError) as exc:
        raise ValueError(f"Not a monetary amount: {value!r}") from exc


def round2(value: Number) -> Decimal:
    """Round to 2 decimal places, half away from zero.

    Examples::

        round2(Decimal("59.995"))  → Decimal("60.00")
        round2(Decimal("40.004"))  → Decimal("40.00")
        round2(5)                  → Decimal("5.00")
    """
    amount = to_money(value)
    with localcontext() as ctx:
        # quantize needs room for every integer digit, the cents and a carry.
        ctx.prec = max(ctx.prec, amount.adjusted() + 4)
        return amount.quantize(MONEY_QUANTUM, rounding=ROUND_HALF_UP)


def format_money(value: Number) -> str:
    """Two-decimal string used for display and the clipboard copy."""
    return f"{round2(value):.2f}"


def _overflows(amount: Decimal) -> bool:
    """True when the amount in cents no longer fits the working precision."""
    return amount.adjusted() + 3 > getcontext().prec


def parse_stake(raw: object) -> Decimal:
    """Parse a user-typed stake amount.

    Empty, unparseable, non-finite, negative or overflowing input yields
    ``0.00`` so the calculators always receive a usable total.  A comma is
    accepted as the decimal separator (``"12,50"`` → ``12.50``).
    """
    if raw is None:
        return round2(ZERO)
    if isinstance(raw, (Decimal, int, float)):
        text = str(raw)
    else:
        text = str(raw).strip().replace(",", ".")
    if not text:
        return round2(ZERO)
    try:
        amount = Decimal(text)
    except InvalidOperation:
        return round2(ZERO)
    if not amount.is_finite() or amount < 0 or _overflows(amount):
        return round2(ZERO)
    return round2(amount)
