# Project: weather-now
# Owner: GreenUnicorn
"""
app.py — Streamlit "Weather Now" page: city search, current conditions, map.

Run with: streamlit run app/app.py
Requires: pip install -e ".[ui]"
"""

import sys
from pathlib import Path

# Ensure the src/ package is importable when running from the project root
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import asyncio
import time
from html import escape

import streamlit as st

from weather_now.config import DEFAULT_CONFIG, load_config
from weather_now.lookup import LookupOrchestrator, normalize_query
from weather_now.map_view import MapView, TILE_ATTRIBUTION
from weather_now.panel import render_panel


# ─────────────────────────────────────────────────────────────
# Page config — must be first Streamlit call
# ─────────────────────────────────────────────────────────────

st.set_page_config(
    page_title="Weather Now",
    page_icon="🌍",
    layout="wide",
    initial_sidebar_state="collapsed",
)


# ─────────────────────────────────────────────────────────────
# CSS injection
# ─────────────────────────────────────────────────────────────

CUSTOM_CSS = """
<style>
  #MainMenu, footer, header { visibility: hidden; }
  .block-container { padding-top: 2rem; padding-bottom: 4rem; max-width: 960px; }

  html, body, [class*="css"] {
    font-family: -apple-system, BlinkMacSystemFont, "SF Pro Display",
                 "SF Pro Text", "Segoe UI", Roboto, sans-serif;
    background-color: #0a0a0a;
    color: #f5f5f7;
  }

  /* ── Info panel ── */
  .weatherinfo {
    background: #1c1c1e;
    border: 1px solid #2c2c2e;
    border-radius: 16px;
    padding: 20px 28px;
    margin: 1rem 0 1.5rem;
  }
  .weatherinfo h2 {
    font-size: 1.15rem;
    font-weight: 600;
    letter-spacing: -0.01em;
    margin: 0.25rem 0;
    color: #f5f5f7;
  }
  .weatherinfo .error { color: #ff453a; margin: 0; text-align: center; }

  /* ── Three-dot spinner ── */
  .spinner { display: flex; justify-content: center; gap: 8px; padding: 8px 0; }
  .spinner div {
    width: 10px; height: 10px; border-radius: 50%;
    background: #0a84ff;
    animation: wn-bounce 0.9s infinite ease-in-out;
  }
  .spinner div:nth-child(2) { animation-delay: 0.15s; }
  .spinner div:nth-child(3) { animation-delay: 0.3s; }
  @keyframes wn-bounce {
    0%, 80%, 100% { transform: scale(0.4); opacity: 0.5; }
    40% { transform: scale(1); opacity: 1; }
  }

  .location-resolved {
    color: #8e8e93;
    font-size: 0.85rem;
    text-align: center;
    margin-top: 0.5rem;
  }

  .wn-footer {
    text-align: center;
    color: #48484a;
    font-size: 0.8rem;
    padding: 2rem 0 1rem;
  }
</style>
"""

st.markdown(CUSTOM_CSS, unsafe_allow_html=True)


# ─────────────────────────────────────────────────────────────
# Session state initialisation
# ─────────────────────────────────────────────────────────────

if "config" not in st.session_state:
    try:
        st.session_state.config = load_config()
    except FileNotFoundError:
        st.session_state.config = DEFAULT_CONFIG
    except ValueError as e:
        st.error(f"Invalid config.toml: {e}")
        st.stop()

if "orchestrator" not in st.session_state:
    st.session_state.orchestrator = LookupOrchestrator.from_config(st.session_state.config)
if "map_view" not in st.session_state:
    st.session_state.map_view = MapView.from_config(st.session_state.config)

orchestrator: LookupOrchestrator = st.session_state.orchestrator
map_view: MapView = st.session_state.map_view


# ─────────────────────────────────────────────────────────────
# SECTION 1: Search
# ─────────────────────────────────────────────────────────────

st.markdown("<h1 style='text-align:center'>Weather Now</h1>", unsafe_allow_html=True)

col_l, col_c, col_r = st.columns([1, 2, 1])
with col_c:
    # A form submits on Enter as well as on the button
    with st.form("search", border=False):
        city_input = st.text_input(
            label="city",
            placeholder="Enter city name",
            label_visibility="collapsed",
        )
        submitted = st.form_submit_button("Get Weather", use_container_width=True)

    panel = st.empty()

    def _repaint(state, position) -> None:
        panel.markdown(render_panel(state), unsafe_allow_html=True)

    query = normalize_query(city_input) if submitted else None
    if query is not None:
        unsubscribe = orchestrator.subscribe(_repaint)
        try:
            asyncio.run(orchestrator.lookup(query))
        finally:
            unsubscribe()
    else:
        _repaint(orchestrator.state, orchestrator.position)

    result = orchestrator.result
    if result is not None:
        loc = result.location
        st.markdown(
            f'<div class="location-resolved">'
            f'📍 {escape(loc.display_name)} &nbsp;·&nbsp; '
            f'{loc.latitude:.4f}°, {loc.longitude:.4f}°'
            f'</div>',
            unsafe_allow_html=True,
        )


# ─────────────────────────────────────────────────────────────
# SECTION 2: Map
# ─────────────────────────────────────────────────────────────

map_slot = st.empty()
chart_config = {"displayModeBar": False, "scrollZoom": True}

# Fly: redraw the same slot with each eased viewport, then settle
if map_view.follow(orchestrator.position):
    for i, viewport in enumerate(map_view.flight()):
        map_slot.plotly_chart(
            map_view.figure(orchestrator.result, viewport=viewport, frame=i),
            use_container_width=True,
            config=chart_config,
            key=f"map-{map_view.revision}-frame-{i}",
        )
        time.sleep(map_view.frame_interval)

map_slot.plotly_chart(
    map_view.figure(orchestrator.result),
    use_container_width=True,
    config=chart_config,
    key=f"map-{map_view.revision}",
)


# ─────────────────────────────────────────────────────────────
# Footer
# ─────────────────────────────────────────────────────────────

st.markdown(
    '<div class="wn-footer">'
    'Weather by <a href="https://open-meteo.com" style="color:#0a84ff;text-decoration:none;">Open-Meteo</a>'
    f' &nbsp;·&nbsp; Map tiles {TILE_ATTRIBUTION}'
    '</div>',
    unsafe_allow_html=True,
)
