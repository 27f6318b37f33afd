# Project: weather-now
# Owner: GreenUnicorn
"""
panel.py — Turn a ViewState into the HTML for the info panel.

Pure functions only, so the Streamlit page stays a thin wrapper and the
rendering can be tested without a browser.
"""

from html import escape

from weather_now.models import Error, Idle, Loaded, Loading, LookupResult, ViewState
from weather_now.utils import fmt_value


SPINNER_HTML = '<div class="spinner"><div></div><div></div><div></div></div>'


def panel_lines(result: LookupResult) -> list[str]:
    """Plain-text lines for a loaded result, in display order."""
    loc = result.location
    cur = result.conditions
    return [
        f"City: {loc.display_name}",
        f"Temperature: {fmt_value(cur.temperature)} °C",
        f"Humidity: {fmt_value(cur.relative_humidity)} %",
        f"Precipitation: {fmt_value(cur.precipitation)} mm",
        f"Wind: {fmt_value(cur.wind_speed)} km/h",
    ]


def render_panel(state: ViewState) -> str:
    """Return the info panel HTML for state, or '' when nothing is shown.

    Idle -> nothing; Loading -> spinner; Error -> the message;
    Loaded -> one heading per line of panel_lines().
    """
    if isinstance(state, Idle):
        return ""
    if isinstance(state, Loading):
        body = SPINNER_HTML
    elif isinstance(state, Error):
        body = f'<p class="error">{escape(state.message)}</p>'
    elif isinstance(state, Loaded):
        body = "".join(f"<h2>{escape(line)}</h2>" for line in panel_lines(state.result))
    else:
        raise TypeError(f"Unknown view state: {state!r}")
    return f'<div class="weatherinfo">{body}</div>'
