"""Calculator configuration — every tunable default in one place.

:class:`CalculatorConfig` is a frozen dataclass.  :meth:`CalculatorConfig.from_env`
reads overrides from environment variables (a ``.env`` file is loaded by
the dashboard entry point via ``python-dotenv``).  Override a single field
in code with :func:`dataclasses.replace`::

    from dataclasses import replace
    cfg = replace(CalculatorConfig.from_env(), currency_symbol="€")

Environment variables
---------------------
``DUTCHING_DEFAULT_STAKE``  initial total stake of a new dutching session
``CURRENCY_SYMBOL``         prefix for displayed amounts
``DUTCHING_MIN_BETS``       rows that can never be removed (floor of 2)
``LOG_LEVEL``               root logging level for the dashboard
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Final

logger = logging.getLogger(__name__)

#: A dutch needs at least two outcomes; the floor cannot be configured lower.
MIN_BETS: Final[int] = 2

_DEFAULT_TOTAL_STAKE: Final[Decimal] = Decimal("100.00")
_DEFAULT_CURRENCY: Final[str] = "R$"
_DEFAULT_LOG_LEVEL: Final[str] = "INFO"


@dataclass(frozen=True)
class CalculatorConfig:
    """Immutable defaults for calculator sessions and the dashboard.

    Attributes:
        default_total_stake: Total stake a fresh dutching session starts
            with.  ``reset()`` clears to zero regardless.
        currency_symbol: Prefix shown before every amount.
        min_bets: Number of rows the dutching table never drops below.
        log_level: Name of the root logging level.
    """

    default_total_stake: Decimal = _DEFAULT_TOTAL_STAKE
    currency_symbol: str = _DEFAULT_CURRENCY
    min_bets: int = MIN_BETS
    log_level: str = _DEFAULT_LOG_LEVEL

    def __post_init__(self) -> None:
        if self.min_bets < MIN_BETS:
            raise ValueError(f"min_bets must be ≥ {MIN_BETS}, got {self.min_bets!r}.")
        if self.default_total_stake < 0:
            raise ValueError(
                f"default_total_stake must be ≥ 0, got {self.default_total_stake!r}."
            )

    @classmethod
    def from_env(cls) -> "CalculatorConfig":
        """Build a config from the environment, falling back per field."""
        stake_raw = os.getenv("DUTCHING_DEFAULT_STAKE", str(_DEFAULT_TOTAL_STAKE))
        try:
            default_total_stake = Decimal(stake_raw)
            if not default_total_stake.is_finite() or default_total_stake < 0:
                raise InvalidOperation
        except InvalidOperation:
            logger.warning(
                "Ignoring DUTCHING_DEFAULT_STAKE=%r; using %s", stake_raw, _DEFAULT_TOTAL_STAKE
            )
            default_total_stake = _DEFAULT_TOTAL_STAKE

        min_bets_raw = os.getenv("DUTCHING_MIN_BETS", str(MIN_BETS))
        try:
            min_bets = int(min_bets_raw)
        except ValueError:
            logger.warning("Ignoring DUTCHING_MIN_BETS=%r; using %d", min_bets_raw, MIN_BETS)
            min_bets = MIN_BETS
        if min_bets < MIN_BETS:
            logger.warning("DUTCHING_MIN_BETS=%d is below the floor; using %d", min_bets, MIN_BETS)
            min_bets = MIN_BETS

        log_level = os.getenv("LOG_LEVEL", _DEFAULT_LOG_LEVEL).upper()
        if not isinstance(logging.getLevelName(log_level), int):
            logger.warning("Ignoring LOG_LEVEL=%r; using %s", log_level, _DEFAULT_LOG_LEVEL)
            log_level = _DEFAULT_LOG_LEVEL

        return cls(
            default_total_stake=default_total_stake,
            currency_symbol=os.getenv("CURRENCY_SYMBOL", _DEFAULT_CURRENCY),
            min_bets=min_bets,
            log_level=log_level,
        )
