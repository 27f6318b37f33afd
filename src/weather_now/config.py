# Project: weather-now
# Owner: GreenUnicorn
"""
config.py — Load and validate the optional TOML configuration file.

We use tomllib (Python 3.11+ stdlib) so no extra install is needed.
The config path defaults to "config.toml" in the current working directory,
but can be overridden for testing. Anything the file leaves out keeps the
value from DEFAULT_CONFIG.
"""

import copy
import tomllib
from pathlib import Path

from weather_now.geocode import GEOCODING_URL
from weather_now.map_view import FLY_DURATION_SECONDS, INITIAL_ZOOM, RESOLVED_ZOOM
from weather_now.models import DEFAULT_POSITION
from weather_now.utils import DEFAULT_LOG_PATH, DEFAULT_TIMEOUT_SECONDS
from weather_now.weather import OPEN_METEO_URL


DEFAULT_CONFIG_PATH = Path("config.toml")

DEFAULT_CONFIG: dict = {
    "api": {
        "geocoding_url": GEOCODING_URL,
        "forecast_url": OPEN_METEO_URL,
        "timeout": DEFAULT_TIMEOUT_SECONDS,
    },
    "map": {
        "default_latitude": DEFAULT_POSITION.latitude,
        "default_longitude": DEFAULT_POSITION.longitude,
        "initial_zoom": INITIAL_ZOOM,
        "resolved_zoom": RESOLVED_ZOOM,
        "fly_duration": FLY_DURATION_SECONDS,
    },
    "lookup": {
        "discard_stale": False,
    },
    "log": {
        "path": str(DEFAULT_LOG_PATH),
    },
}


def load_config(path: Path = DEFAULT_CONFIG_PATH) -> dict:
    """Load a TOML configuration file and merge it over the defaults.

    Args:
        path: Path to the TOML config file.

    Returns:
        Nested dict with every section and key of DEFAULT_CONFIG.

    Raises:
        FileNotFoundError: If the config file does not exist.
        ValueError: If a section or key is unknown, or a value is invalid.
    """
    if not path.exists():
        raise FileNotFoundError(
            f"Config file not found: {path}\n"
            "Copy config.toml.example to config.toml to customise the app."
        )

    with open(path, "rb") as f:
        overrides = tomllib.load(f)

    config = copy.deepcopy(DEFAULT_CONFIG)
    for section, values in overrides.items():
        if section not in config:
            raise ValueError(f"Unknown config section: [{section}]")
        if not isinstance(values, dict):
            raise ValueError(f"Config section [{section}] must be a table")
        for key, value in values.items():
            if key not in config[section]:
                raise ValueError(f"Unknown config key: [{section}].{key}")
            config[section][key] = value

    _validate(config)
    return config


def _validate(config: dict) -> None:
    """Check types and ranges of the merged configuration.

    Expected config schema::

        [api]
        geocoding_url = <str>
        forecast_url  = <str>
        timeout       = <float>  # seconds, > 0

        [map]
        default_latitude  = <float>  # -90 to 90
        default_longitude = <float>  # -180 to 180
        initial_zoom      = <float>  # 0-22, wide view before any lookup
        resolved_zoom     = <float>  # 0-22, after a city is found
        fly_duration      = <float>  # seconds, >= 0

        [lookup]
        discard_stale = <bool>   # ignore results of superseded lookups

        [log]
        path = <str>     # relative or absolute path to the log file

    Raises:
        ValueError: If any value has the wrong type or is out of range.
    """
    api = config["api"]
    for key in ("geocoding_url", "forecast_url"):
        if not isinstance(api[key], str) or not api[key].startswith(("http://", "https://")):
            raise ValueError(f"[api].{key} must be an http(s) URL")
    _require_number(api, "api", "timeout", low=0, low_inclusive=False)

    map_ = config["map"]
    _require_number(map_, "map", "default_latitude", low=-90, high=90)
    _require_number(map_, "map", "default_longitude", low=-180, high=180)
    _require_number(map_, "map", "initial_zoom", low=0, high=22)
    _require_number(map_, "map", "resolved_zoom", low=0, high=22)
    _require_number(map_, "map", "fly_duration", low=0)

    if not isinstance(config["lookup"]["discard_stale"], bool):
        raise ValueError("[lookup].discard_stale must be true or false")

    if not isinstance(config["log"]["path"], str) or not config["log"]["path"]:
        raise ValueError("[log].path must be a non-empty string")


def _require_number(
    section: dict,
    section_name: str,
    key: str,
    low: float | None = None,
    high: float | None = None,
    low_inclusive: bool = True,
) -> None:
    value = section[key]
    # bool is an int subclass; `zoom = true` is a typo, not a number
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"[{section_name}].{key} must be a number")
    if low is not None and (value < low if low_inclusive else value <= low):
        raise ValueError(f"[{section_name}].{key} is out of range: {value}")
    if high is not None and value > high:
        raise ValueError(f"[{section_name}].{key} is out of range: {value}")
