# Project: weather-now
# Owner: GreenUnicorn
"""
models.py — Value types shared by the clients, the orchestrator and the UI.

Everything here is immutable. ViewState is a union of four small classes
rather than a set of independent flags, so "loading and error at the same
time" cannot be represented.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ResolvedLocation:
    """Best geocoding match for a place name."""

    name: str
    country: str
    latitude: float
    longitude: float

    @property
    def display_name(self) -> str:
        return f"{self.name}, {self.country}" if self.country else self.name


@dataclass(frozen=True)
class CurrentConditions:
    """Current-conditions snapshot, values exactly as Open-Meteo sent them.

    temperature is °C, relative_humidity is %, precipitation/rain are mm,
    snowfall is cm and wind_speed is km/h (Open-Meteo defaults).
    """

    temperature: float
    relative_humidity: float
    precipitation: float
    wind_speed: float
    rain: float | None = None
    snowfall: float | None = None
    time: str | None = None


@dataclass(frozen=True)
class LookupResult:
    location: ResolvedLocation
    conditions: CurrentConditions


@dataclass(frozen=True)
class MapPosition:
    latitude: float
    longitude: float


# Wide world view shown before the first successful lookup.
DEFAULT_POSITION = MapPosition(51.505, -0.09)


# ---------------------------------------------------------------------------
# ViewState
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Loading:
    query: str = ""


@dataclass(frozen=True)
class Error:
    message: str


@dataclass(frozen=True)
class Loaded:
    result: LookupResult


ViewState = Idle | Loading | Error | Loaded
