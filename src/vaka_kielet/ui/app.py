"""
Streamlit page for the municipality lookup.

Streamlit only reports a text_input change on Enter or when the box loses
focus, so suggestions refresh per submitted query rather than per keystroke.
The derived view itself is recomputed from scratch on every rerun.
"""

from __future__ import annotations

from typing import Dict, Optional

import streamlit as st

from vaka_kielet.config import APP_NAME, APP_VERSION, BASELINE_AREA_NAME, DATASET_SOURCE
from vaka_kielet.core.comparison import ABOUT_EQUAL, ABOVE, BELOW
from vaka_kielet.core.data_loader import AreaRecord
from vaka_kielet.core.formatting import format_integer, format_percent
from vaka_kielet.core.state import (
    AppState,
    QueryChanged,
    SuggestionClicked,
    ViewModel,
    derive_view,
    run_load,
    transition,
)

STATE_KEY = "app_state"
QUERY_INPUT_KEY = "query_input"

COMPARISON_TEXT: Dict[str, str] = {
    ABOUT_EQUAL: "Osuus on samaa luokkaa kuin koko Suomessa.",
    ABOVE: "Osuus on suurempi kuin tyypillisesti koko maassa.",
    BELOW: "Osuus on pienempi kuin tyypillisesti koko maassa.",
}

MISSING_BASELINE_TEXT = (
    f"Huom: “{BASELINE_AREA_NAME}” -riviä ei löytynyt datasta (tarkista, että "
    f"alue-sarakkeessa lukee täsmälleen {BASELINE_AREA_NAME})."
)

SOURCE_NOTE = "Lähde: Tilastokeskus"


# ---------------------------------------------------------------------------
# State plumbing (Streamlit session_state <-> AppState)
# ---------------------------------------------------------------------------

def _get_state() -> AppState:
    state = st.session_state.get(STATE_KEY)
    if state is None:
        state = AppState()
        st.session_state[STATE_KEY] = state
    return state


def _set_state(state: AppState) -> None:
    st.session_state[STATE_KEY] = state


def _load(source: str) -> None:
    with st.spinner("Ladataan dataa..."):
        _set_state(run_load(_get_state(), source))


def _on_query_change() -> None:
    query = st.session_state.get(QUERY_INPUT_KEY, "")
    _set_state(transition(_get_state(), QueryChanged(query)))


def _on_suggestion_click(area_name: str) -> None:
    st.session_state[QUERY_INPUT_KEY] = area_name
    _set_state(transition(_get_state(), SuggestionClicked(area_name)))


def _on_reload() -> None:
    _load(DATASET_SOURCE)


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

def _render_suggestions(view: ViewModel) -> None:
    if not view.suggestions:
        return

    cols = st.columns(min(len(view.suggestions), 4))
    for i, rec in enumerate(view.suggestions):
        with cols[i % len(cols)]:
            st.button(
                rec.area_name,
                key=f"suggestion_{rec.key}_{i}",
                on_click=_on_suggestion_click,
                args=(rec.area_name,),
            )


def _render_baseline(baseline: AreaRecord) -> None:
    st.markdown(
        f"Koko Suomen päiväkodeissa vieraskielisten osuus on "
        f"**{format_percent(baseline.foreign_language_share)}**. "
        f"Varhaiskasvatuksessa on yhteensä **{format_integer(baseline.total_children)}** "
        f"lasta, joista vieraskielisiä on "
        f"**{format_integer(baseline.foreign_language_children)}**."
    )
    st.caption(f"*{SOURCE_NOTE}*")


def _render_result(view: ViewModel) -> None:
    with st.container(border=True):
        selected: Optional[AreaRecord] = view.selected
        if selected is None:
            st.write("Hae kuntaa ja näet tuloksen.")
            return

        st.header(selected.area_name)
        st.write("Vieraskielisten osuus kunnan varhaiskasvatuksessa on")
        st.subheader(format_percent(selected.foreign_language_share))
        st.markdown(
            f"Varhaiskasvatuksessa on yhteensä **{format_integer(selected.total_children)}** "
            f"lasta, joista vieraskielisiä on "
            f"**{format_integer(selected.foreign_language_children)}**."
        )

        if view.baseline is not None and view.comparison is not None:
            st.markdown(f"**{COMPARISON_TEXT[view.comparison]}**")

        if view.baseline is not None:
            _render_baseline(view.baseline)


def _render_status(view: ViewModel) -> None:
    if view.load_error:
        st.error(view.load_error)
    elif view.missing_baseline:
        st.warning(MISSING_BASELINE_TEXT)


def _render_developer_panel(state: AppState) -> None:
    with st.sidebar.expander("Data (developer view)", expanded=False):
        st.write(f"Lähde: `{state.dataset.source or DATASET_SOURCE}`")
        st.write(f"Rivejä: {len(state.dataset)}")
        if state.load_seconds is not None:
            st.write(f"Latausaika: {state.load_seconds:0.2f}s")
        if state.load_error_detail:
            st.code(state.load_error_detail)
        st.button("Lataa data uudelleen", on_click=_on_reload)
        if not state.dataset.is_empty:
            st.dataframe(state.dataset.to_frame(), use_container_width=True)


def run_app() -> None:
    st.set_page_config(page_title=APP_NAME, layout="centered")

    if _get_state().dataset_version == 0:
        _load(DATASET_SOURCE)

    state = _get_state()
    view = derive_view(state)

    st.title("Mikä on tilanne omassa kotikunnassasi?")
    st.write("Hae kuntaa ja vertaa vieraskielisten osuutta koko Suomeen.")

    st.text_input(
        "Hae kuntaa",
        key=QUERY_INPUT_KEY,
        placeholder="Esim. Helsinki",
        on_change=_on_query_change,
    )

    _render_suggestions(view)
    _render_result(view)
    _render_status(view)
    _render_developer_panel(state)

    st.caption(f"{APP_NAME} · versio {APP_VERSION}")
