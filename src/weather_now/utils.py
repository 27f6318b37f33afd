# Project: weather-now
# Owner: GreenUnicorn
"""
utils.py — Shared utilities: HTTP JSON fetch, failure logging, number display.
"""

from datetime import datetime
from pathlib import Path
from typing import Any

import requests


DEFAULT_LOG_PATH = Path("logs/weather_now.log")
DEFAULT_TIMEOUT_SECONDS = 10


class TransportError(RuntimeError):
    """Network, HTTP or response-format failure talking to an upstream API."""


def fetch_json(
    url: str,
    params: dict[str, Any],
    label: str = "API call",
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> dict:
    """Issue a single GET request and return the decoded JSON object.

    No retries: a failure is reported to the caller straight away.

    Args:
        url: Endpoint URL.
        params: Query parameters; requests URL-encodes them.
        label: Human-readable name for the call, used in error messages.
        timeout: Socket timeout in seconds.

    Returns:
        The JSON body, which must be an object.

    Raises:
        TransportError: On connection errors, timeouts, non-2xx statuses,
            undecodable bodies, or a body that is not a JSON object.
    """
    try:
        r = requests.get(url, params=params, timeout=timeout)
        r.raise_for_status()
    except requests.RequestException as e:
        raise TransportError(f"{label} request failed: {e}") from e

    try:
        data = r.json()
    except ValueError as e:
        raise TransportError(f"{label} returned a body that is not valid JSON") from e

    if not isinstance(data, dict):
        raise TransportError(f"{label} returned {type(data).__name__}, expected a JSON object")
    return data


def log_error(message: str, log_path: Path = DEFAULT_LOG_PATH) -> None:
    """Append a timestamped ERROR line to the log file.

    Args:
        message: Error description to log.
        log_path: Destination log file path.
    """
    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        with open(log_path, "a") as f:
            f.write(f"{timestamp} [ERROR] {message}\n")
    except OSError:
        pass  # Never crash on logging failure


def fmt_value(value: Any) -> str:
    """Format a measurement the way it arrived in the JSON body.

    Integral floats lose their trailing '.0' (18.0 -> '18'); everything else
    is shown verbatim.
    """
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
