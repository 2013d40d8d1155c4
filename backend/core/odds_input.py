"""Keypad-style odds entry.

Odds are typed the way a cashier types money on a numeric keypad: the
rightmost two digits are always the fractional part.  Typing ``2``, ``5``,
``0`` produces ``2``, ``25``, ``2.50`` as the field updates.  Any
separator the user types is discarded, so ``"2.50"``, ``"2,50"`` and
``"250"`` all mean the same odds.

Both functions are pure and never raise on user input.
"""

from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation
from typing import Final, Optional

#: Digits kept to the right of the inserted decimal point.
_FRACTION_DIGITS: Final[int] = 2

# ASCII only: ``\d`` would also accept Arabic-Indic and other Unicode digits.
_NON_DIGIT = re.compile(r"[^0-9]")


def format_odds_input(raw: Optional[str]) -> str:
    """Return the digit-shifted text shown back in the odds field.

    Examples::

        format_odds_input("5")      → "5"
        format_odds_input("12")     → "12"
        format_odds_input("250")    → "2.50"
        format_odds_input("1.234")  → "12.34"
        format_odds_input("abc")    → ""
    """
    digits = _NON_DIGIT.sub("", raw or "")
    if len(digits) <= _FRACTION_DIGITS:
        return digits
    return f"{digits[:-_FRACTION_DIGITS]}.{digits[-_FRACTION_DIGITS:]}"


def normalize_odds(raw: Optional[str]) -> Decimal:
    """Parse raw odds text into a decimal odds value.

    Args:
        raw: Whatever the user typed.  ``None`` is treated as empty.

    Returns:
        The odds as a ``Decimal``; ``Decimal(0)`` (an inactive bet) for
        empty or unparseable input.  Leading zeros survive the digit shift
        but not the numeric value: ``"005"`` → ``0.05``.
    """
    text = format_odds_input(raw)
    if not text:
        return Decimal(0)
    try:
        return Decimal(text)
    except InvalidOperation:
        return Decimal(0)
