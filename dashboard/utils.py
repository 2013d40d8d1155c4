"""Shared helpers for the calculator dashboard."""

import logging

import pandas as pd
import plotly.graph_objects as go
import streamlit as st

from backend.core.calculator_config import CalculatorConfig
from backend.core.money import format_money
from backend.services.calculator import DutchingSession, LimitationSession

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(config: CalculatorConfig) -> None:
    logging.basicConfig(level=config.log_level, format=LOG_FORMAT)


def get_config() -> CalculatorConfig:
    if "calculator_config" not in st.session_state:
        st.session_state["calculator_config"] = CalculatorConfig.from_env()
    return st.session_state["calculator_config"]


def get_dutching_session() -> DutchingSession:
    if "dutching" not in st.session_state:
        st.session_state["dutching"] = DutchingSession(get_config())
    return st.session_state["dutching"]


def get_limitation_session() -> LimitationSession:
    if "limitation" not in st.session_state:
        st.session_state["limitation"] = LimitationSession(get_config())
    return st.session_state["limitation"]


def money(value, config: CalculatorConfig) -> str:
    return f"{config.currency_symbol} {format_money(value)}"


def odds_field_value(odds) -> str:
    """Text shown in an odds field; empty for an inactive row.

    Whole odds below 100 render without decimals so the keypad shift keeps
    working when the user types more digits (``5`` then ``0`` → ``50``).
    """
    if odds <= 0:
        return ""
    if odds == odds.to_integral_value() and odds < 100:
        return str(int(odds))
    return f"{odds:.2f}"


def clear_widget_keys(prefix: str) -> None:
    """Drop widget state so inputs re-render from the session values."""
    for key in [k for k in st.session_state.keys() if str(k).startswith(prefix)]:
        del st.session_state[key]


def bets_dataframe(bets, config: CalculatorConfig) -> pd.DataFrame:
    rows = [
        {
            "#": f"{i + 1}º",
            "Odds": f"{bet.odds:.2f}" if bet.is_active else "—",
            "Stake": money(bet.stake, config),
            "Return": money(bet.potential_return, config),
        }
        for i, bet in enumerate(bets)
    ]
    return pd.DataFrame(rows)


def returns_chart(bets, total_stake, config: CalculatorConfig) -> go.Figure:
    """Bar chart of per-row returns against the amount invested."""
    labels = [f"{i + 1}º" for i in range(len(bets))]
    returns = [float(bet.potential_return) for bet in bets]
    colors = [
        "green" if bet.is_active and bet.potential_return >= total_stake else "red"
        for bet in bets
    ]

    fig = go.Figure()
    fig.add_trace(go.Bar(x=labels, y=returns, marker_color=colors, name="Return"))
    fig.add_hline(
        y=float(total_stake),
        line_dash="dash",
        line_color="gray",
        annotation_text=f"Invested {money(total_stake, config)}",
    )
    fig.update_layout(
        xaxis_title="Bet", yaxis_title=f"Return ({config.currency_symbol})", height=300,
    )
    return fig
