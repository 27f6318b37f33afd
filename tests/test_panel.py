# Project: weather-now
# Owner: GreenUnicorn
"""Tests for panel.py — one rendering per ViewState."""

import pytest

from weather_now.models import (
    CurrentConditions,
    Error,
    Idle,
    Loaded,
    Loading,
    LookupResult,
    ResolvedLocation,
)
from weather_now.panel import SPINNER_HTML, panel_lines, render_panel


PARIS_RESULT = LookupResult(
    location=ResolvedLocation(name="Paris", country="France", latitude=48.8566, longitude=2.3522),
    conditions=CurrentConditions(temperature=18.0, relative_humidity=55, precipitation=0, wind_speed=10),
)


def test_panel_lines_for_paris_example():
    assert panel_lines(PARIS_RESULT) == [
        "City: Paris, France",
        "Temperature: 18 °C",
        "Humidity: 55 %",
        "Precipitation: 0 mm",
        "Wind: 10 km/h",
    ]


def test_panel_lines_keep_fractional_values():
    result = LookupResult(
        location=PARIS_RESULT.location,
        conditions=CurrentConditions(temperature=18.4, relative_humidity=55, precipitation=0.2, wind_speed=12.7),
    )
    lines = panel_lines(result)
    assert "Temperature: 18.4 °C" in lines
    assert "Precipitation: 0.2 mm" in lines
    assert "Wind: 12.7 km/h" in lines


def test_idle_renders_nothing():
    assert render_panel(Idle()) == ""


def test_loading_renders_spinner_only():
    html = render_panel(Loading("Paris"))
    assert SPINNER_HTML in html
    assert "error" not in html
    assert "City:" not in html


def test_error_renders_message():
    html = render_panel(Error("Failed to fetch weather data! Please enter a valid city name."))
    assert '<p class="error">Failed to fetch weather data! Please enter a valid city name.</p>' in html
    assert "spinner" not in html


def test_loaded_renders_every_line():
    html = render_panel(Loaded(PARIS_RESULT))
    for line in panel_lines(PARIS_RESULT):
        assert f"<h2>{line}</h2>" in html
    assert "spinner" not in html


def test_loaded_escapes_place_names():
    result = LookupResult(
        location=ResolvedLocation(name="<b>Evil</b>", country="A&B", latitude=0.0, longitude=0.0),
        conditions=PARIS_RESULT.conditions,
    )
    html = render_panel(Loaded(result))
    assert "<b>Evil</b>" not in html
    assert "&lt;b&gt;Evil&lt;/b&gt;, A&amp;B" in html


def test_unknown_state_is_rejected():
    with pytest.raises(TypeError):
        render_panel("loaded")
