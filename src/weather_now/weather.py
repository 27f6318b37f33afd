# Project: weather-now
# Owner: GreenUnicorn
"""
weather.py — Fetch current conditions from Open-Meteo.

Open-Meteo is free and requires no API key. We ask for a fixed set of
"current" variables and hand them back untouched; Open-Meteo's default
units (°C, %, mm, cm, km/h) are what the UI labels with.

API docs: https://open-meteo.com/en/docs
"""

from weather_now.models import CurrentConditions
from weather_now.utils import DEFAULT_TIMEOUT_SECONDS, TransportError, fetch_json


OPEN_METEO_URL = "https://api.open-meteo.com/v1/forecast"

# Order matches the request the original widget sent
CURRENT_VARIABLES = [
    "temperature_2m",
    "precipitation",
    "rain",
    "snowfall",
    "relative_humidity_2m",
    "wind_speed_10m",
]

REQUIRED_VARIABLES = (
    "temperature_2m",
    "relative_humidity_2m",
    "precipitation",
    "wind_speed_10m",
)


def fetch_current(
    latitude: float,
    longitude: float,
    *,
    url: str = OPEN_METEO_URL,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> CurrentConditions:
    """Fetch current weather conditions for a coordinate pair.

    Args:
        latitude: Location latitude in decimal degrees.
        longitude: Location longitude in decimal degrees.
        url: Forecast endpoint.
        timeout: Request timeout in seconds.

    Returns:
        CurrentConditions with the values from the 'current' object.

    Raises:
        TransportError: On network/HTTP failure, or if 'current' or one of
            its required fields is missing.
    """
    params = {
        "latitude": latitude,
        "longitude": longitude,
        "current": ",".join(CURRENT_VARIABLES),
    }
    data = fetch_json(url, params, label="Open-Meteo current weather API", timeout=timeout)
    return _parse_current(data)


def _parse_current(data: dict) -> CurrentConditions:
    """Extract CurrentConditions from a raw Open-Meteo response.

    Raises:
        TransportError: If the 'current' object or a required field is absent.
    """
    current = data.get("current")
    if not isinstance(current, dict):
        raise TransportError("Unexpected API response structure: missing 'current'")

    missing = [key for key in REQUIRED_VARIABLES if current.get(key) is None]
    if missing:
        raise TransportError(
            f"Unexpected API response structure: 'current' lacks {', '.join(missing)}"
        )

    return CurrentConditions(
        temperature=current["temperature_2m"],
        relative_humidity=current["relative_humidity_2m"],
        precipitation=current["precipitation"],
        wind_speed=current["wind_speed_10m"],
        rain=current.get("rain"),
        snowfall=current.get("snowfall"),
        time=current.get("time"),
    )
