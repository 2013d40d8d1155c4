"""
Streamlit Dashboard for the Dutching Calculator
Dutching and limitation stake calculators, recomputed on every edit
"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import streamlit as st
from dotenv import load_dotenv

from backend.core.money import format_money
from dashboard.utils import (
    bets_dataframe,
    clear_widget_keys,
    configure_logging,
    get_config,
    get_dutching_session,
    get_limitation_session,
    money,
    odds_field_value,
    returns_chart,
)

load_dotenv()

st.set_page_config(
    page_title="Dutching Calculator",
    page_icon="🧮",
    layout="centered",
)

config = get_config()
configure_logging(config)
dutching = get_dutching_session()
limitation = get_limitation_session()

st.markdown("""
    <style>
    .positive { color: #22c55e; font-weight: 600; }
    .negative { color: #ef4444; font-weight: 600; }
    </style>
""", unsafe_allow_html=True)


# ==============================================================================
# CALLBACKS
# ==============================================================================

def _on_total_stake_change():
    dutching.set_total_stake(st.session_state["dutch_total"])


def _on_dutch_odds_change(index: int):
    key = f"dutch_odds_{index}"
    st.session_state[key] = dutching.set_odds(index, st.session_state[key])


def _on_add_bet():
    dutching.add_bet()


def _on_remove_bet(index: int):
    if dutching.remove_bet(index):
        # Rows shifted; re-seed the odds fields from the session.
        clear_widget_keys("dutch_odds_")


def _on_dutch_reset():
    dutching.reset()
    clear_widget_keys("dutch_odds_")
    st.session_state["dutch_total"] = float(dutching.total_stake)


def _sync_limitation_stakes():
    for i, bet in enumerate(limitation.bets):
        st.session_state[f"limit_stake_{i}"] = float(bet.stake)


def _on_limit_odds_change(index: int):
    key = f"limit_odds_{index}"
    st.session_state[key] = limitation.set_odds(index, st.session_state[key])
    _sync_limitation_stakes()


def _on_limit_stake_change(index: int):
    limitation.set_stake(index, st.session_state[f"limit_stake_{index}"])
    _sync_limitation_stakes()


def _on_limit_reset():
    limitation.reset()
    clear_widget_keys("limit_odds_")
    _sync_limitation_stakes()


def _profit_html(profit) -> str:
    css = "positive" if profit >= 0 else "negative"
    return f"<span class='{css}'>{money(profit, config)}</span>"


# ==============================================================================
# LAYOUT
# ==============================================================================

st.title("🧮 Dutching Calculator")

tab_dutch, tab_limit = st.tabs(["Dutching", "Limitation"])

# ------------------------------------------------------------------------------
# TAB 1: DUTCHING
# ------------------------------------------------------------------------------
with tab_dutch:
    summary = dutching.summary

    col1, col2 = st.columns(2)
    with col1:
        st.session_state.setdefault("dutch_total", float(dutching.total_stake))
        st.number_input(
            f"Investment ({config.currency_symbol})",
            min_value=0.0,
            step=10.0,
            format="%.2f",
            key="dutch_total",
            on_change=_on_total_stake_change,
        )
    with col2:
        st.markdown(f"**Profit:** {_profit_html(summary.profit)}", unsafe_allow_html=True)
        st.markdown(f"**Return:** {money(summary.total_return, config)}")
        margin = dutching.implied_margin
        if margin > 0:
            st.caption(f"Book margin: {float(margin - 1):+.2%}")

    st.markdown("---")

    header = st.columns([1, 3, 4, 3, 1])
    for col, label in zip(header, ["", "Odds", "Stake", "Return", ""]):
        col.markdown(f"**{label}**")

    for i, bet in enumerate(dutching.bets):
        row = st.columns([1, 3, 4, 3, 1])
        row[0].write(f"{i + 1}º")

        key = f"dutch_odds_{i}"
        st.session_state.setdefault(key, odds_field_value(bet.odds))
        row[1].text_input(
            "Odds",
            key=key,
            placeholder="0.00",
            label_visibility="collapsed",
            on_change=_on_dutch_odds_change,
            args=(i,),
        )
        # st.code renders its own copy-to-clipboard button.
        row[2].code(format_money(bet.stake), language=None)
        row[3].write(money(bet.potential_return, config))
        if dutching.can_remove:
            row[4].button("🗑️", key=f"dutch_remove_{i}", on_click=_on_remove_bet, args=(i,))

    b1, b2 = st.columns(2)
    b1.button("➕ Add row", on_click=_on_add_bet, use_container_width=True)
    b2.button("🔄 Clear", key="dutch_clear", on_click=_on_dutch_reset, use_container_width=True)

    if summary.returns:
        st.plotly_chart(
            returns_chart(dutching.bets, dutching.total_stake, config),
            use_container_width=True,
        )
        with st.expander("Summary table"):
            st.dataframe(bets_dataframe(dutching.bets, config), use_container_width=True, hide_index=True)

# ------------------------------------------------------------------------------
# TAB 2: LIMITATION
# ------------------------------------------------------------------------------
with tab_limit:
    summary = limitation.summary

    col1, col2 = st.columns(2)
    with col1:
        st.metric(f"Investment ({config.currency_symbol})", format_money(limitation.total_stake))
        st.caption("Sum of both stakes; edit a stake below.")
    with col2:
        st.markdown(f"**Profit:** {_profit_html(summary.profit)}", unsafe_allow_html=True)
        st.markdown(f"**Return:** {money(summary.total_return, config)}")

    st.markdown("---")

    header = st.columns([1, 3, 4, 3])
    for col, label in zip(header, ["", "Odds", "Stake", "Return"]):
        col.markdown(f"**{label}**")

    for i, bet in enumerate(limitation.bets):
        row = st.columns([1, 3, 4, 3])
        row[0].write(f"{i + 1}º")

        odds_key = f"limit_odds_{i}"
        st.session_state.setdefault(odds_key, odds_field_value(bet.odds))
        row[1].text_input(
            "Odds",
            key=odds_key,
            placeholder="0.00",
            label_visibility="collapsed",
            on_change=_on_limit_odds_change,
            args=(i,),
        )

        stake_key = f"limit_stake_{i}"
        st.session_state.setdefault(stake_key, float(bet.stake))
        row[2].number_input(
            "Stake",
            key=stake_key,
            min_value=0.0,
            step=1.0,
            format="%.2f",
            label_visibility="collapsed",
            on_change=_on_limit_stake_change,
            args=(i,),
        )
        row[3].write(money(bet.potential_return, config))

    st.button("🔄 Clear", key="limit_clear", on_click=_on_limit_reset)


# Footer
st.markdown("---")
st.caption("Dutching Calculator | Built with Streamlit")
