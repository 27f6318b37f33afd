# Project: weather-now
# Owner: GreenUnicorn
"""
geocode.py — Look up coordinates for a place name using Open-Meteo Geocoding API.

Free, no API key required.
API docs: https://open-meteo.com/en/docs/geocoding-api
"""

from weather_now.models import ResolvedLocation
from weather_now.utils import DEFAULT_TIMEOUT_SECONDS, TransportError, fetch_json

GEOCODING_URL = "https://geocoding-api.open-meteo.com/v1/search"


class LocationNotFoundError(ValueError):
    """The geocoding service returned no match for the place name."""


def resolve(
    name: str,
    *,
    url: str = GEOCODING_URL,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> ResolvedLocation:
    """Look up the single best match for a place name.

    Args:
        name: Non-empty place name, e.g. 'Paris'. The caller trims it.
        url: Geocoding search endpoint.
        timeout: Request timeout in seconds.

    Returns:
        ResolvedLocation built from the first result.

    Raises:
        LocationNotFoundError: If the service returned zero results.
        TransportError: On network/HTTP failure or a malformed response.
    """
    params = {"name": name, "count": 1}
    data = fetch_json(url, params, label=f"Geocoding API for '{name}'", timeout=timeout)

    # Open-Meteo omits 'results' entirely when nothing matches
    results = data.get("results", [])
    if not isinstance(results, list):
        raise TransportError("Unexpected API response structure: 'results' is not a list")
    if not results:
        raise LocationNotFoundError(f'Location "{name}" not found.')

    return _parse_result(results[0], fallback_name=name)


def _parse_result(result: dict, fallback_name: str) -> ResolvedLocation:
    """Build a ResolvedLocation from one entry of the 'results' array."""
    try:
        latitude = float(result["latitude"])
        longitude = float(result["longitude"])
    except (KeyError, TypeError, ValueError) as e:
        raise TransportError(
            f"Unexpected API response structure: bad coordinates in geocoding result ({e!r})"
        ) from e

    return ResolvedLocation(
        name=result.get("name") or fallback_name,
        # Some places (e.g. disputed territories) come back without a country
        country=result.get("country") or "",
        latitude=latitude,
        longitude=longitude,
    )
