# Project: weather-now
# Owner: GreenUnicorn
"""Tests for utils.py — fetch_json, log_error, fmt_value."""

import pytest
import requests

from weather_now.utils import TransportError, fetch_json, fmt_value, log_error


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

class FakeResponse:
    def __init__(self, payload=None, status=200, bad_json=False):
        self.payload = payload
        self.status = status
        self.bad_json = bad_json

    def raise_for_status(self):
        if self.status >= 400:
            raise requests.HTTPError(f"{self.status} Server Error")

    def json(self):
        if self.bad_json:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self.payload


# ---------------------------------------------------------------------------
# fetch_json
# ---------------------------------------------------------------------------

def test_fetch_json_returns_decoded_body(monkeypatch):
    monkeypatch.setattr(
        "weather_now.utils.requests.get",
        lambda url, params, timeout: FakeResponse({"ok": True}),
    )
    assert fetch_json("https://example.test", {}) == {"ok": True}


def test_fetch_json_passes_params_and_timeout(monkeypatch):
    seen = {}

    def fake_get(url, params, timeout):
        seen.update(url=url, params=params, timeout=timeout)
        return FakeResponse({})

    monkeypatch.setattr("weather_now.utils.requests.get", fake_get)
    fetch_json("https://example.test/search", {"name": "São Paulo"}, timeout=3)

    assert seen == {
        "url": "https://example.test/search",
        "params": {"name": "São Paulo"},
        "timeout": 3,
    }


def test_fetch_json_wraps_connection_errors(monkeypatch):
    def fake_get(url, params, timeout):
        raise requests.ConnectionError("Name or service not known")

    monkeypatch.setattr("weather_now.utils.requests.get", fake_get)
    with pytest.raises(TransportError, match="request failed") as excinfo:
        fetch_json("https://example.test", {}, label="Test API")
    assert isinstance(excinfo.value.__cause__, requests.ConnectionError)


def test_fetch_json_wraps_http_errors(monkeypatch):
    monkeypatch.setattr(
        "weather_now.utils.requests.get",
        lambda url, params, timeout: FakeResponse(status=502),
    )
    with pytest.raises(TransportError, match="502"):
        fetch_json("https://example.test", {})


def test_fetch_json_rejects_invalid_json(monkeypatch):
    monkeypatch.setattr(
        "weather_now.utils.requests.get",
        lambda url, params, timeout: FakeResponse(bad_json=True),
    )
    with pytest.raises(TransportError, match="not valid JSON"):
        fetch_json("https://example.test", {})


def test_fetch_json_rejects_non_object_body(monkeypatch):
    monkeypatch.setattr(
        "weather_now.utils.requests.get",
        lambda url, params, timeout: FakeResponse([1, 2, 3]),
    )
    with pytest.raises(TransportError, match="expected a JSON object"):
        fetch_json("https://example.test", {})


def test_transport_error_is_runtime_error():
    assert issubclass(TransportError, RuntimeError)


# ---------------------------------------------------------------------------
# log_error
# ---------------------------------------------------------------------------

def test_log_error_appends_timestamped_lines(tmp_path):
    log_path = tmp_path / "logs" / "weather_now.log"
    log_error("first", log_path=log_path)
    log_error("second", log_path=log_path)

    lines = log_path.read_text().splitlines()
    assert len(lines) == 2
    assert lines[0].endswith("[ERROR] first")
    assert lines[1].endswith("[ERROR] second")


def test_log_error_never_raises_on_unwritable_path(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("")
    # Parent "directory" is a regular file, so mkdir fails
    log_error("ignored", log_path=blocker / "sub" / "x.log")


# ---------------------------------------------------------------------------
# fmt_value
# ---------------------------------------------------------------------------

@pytest.mark.parametrize(
    "value, expected",
    [
        (18.0, "18"),
        (18.5, "18.5"),
        (55, "55"),
        (0, "0"),
        (0.0, "0"),
        (-3.0, "-3"),
    ],
)
def test_fmt_value(value, expected):
    assert fmt_value(value) == expected
