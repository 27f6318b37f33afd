# Project: weather-now
# Owner: GreenUnicorn
"""
lookup.py — Sequence geocoding → current weather and own the view state.

LookupOrchestrator is the only thing that changes ViewState or MapPosition.
A lookup runs on the caller's event loop; the blocking HTTP clients are
pushed onto worker threads so the loop stays responsive while they wait.

Overlapping lookups are not coordinated: each runs to completion and the
last state update to land wins. Pass discard_stale=True to drop updates
from any lookup that has since been superseded.
"""

import asyncio
import inspect
from collections.abc import Callable
from functools import partial
from pathlib import Path
from typing import Any

from weather_now.geocode import LocationNotFoundError, resolve
from weather_now.models import (
    DEFAULT_POSITION,
    Error,
    Idle,
    Loaded,
    Loading,
    LookupResult,
    MapPosition,
    ViewState,
)
from weather_now.utils import DEFAULT_LOG_PATH, TransportError, log_error
from weather_now.weather import fetch_current


GENERIC_ERROR_MESSAGE = "Failed to fetch weather data! Please enter a valid city name."

Listener = Callable[[ViewState, MapPosition], None]


def normalize_query(raw: str | None) -> str | None:
    """Trim user input; return None when nothing is left to look up."""
    if raw is None:
        return None
    query = raw.strip()
    return query or None


class LookupOrchestrator:
    """Run lookups and expose the resulting ViewState and MapPosition.

    Args:
        resolver: Place name -> ResolvedLocation. Plain or async callable.
        fetcher: (latitude, longitude) -> CurrentConditions. Plain or async.
        position: Map position before the first successful lookup.
        discard_stale: Ignore results of lookups superseded by a newer one.
        log_path: Where failed lookups are recorded.
    """

    def __init__(
        self,
        resolver: Callable[..., Any] = resolve,
        fetcher: Callable[..., Any] = fetch_current,
        *,
        position: MapPosition = DEFAULT_POSITION,
        discard_stale: bool = False,
        log_path: Path = DEFAULT_LOG_PATH,
    ) -> None:
        self._resolver = resolver
        self._fetcher = fetcher
        self.discard_stale = discard_stale
        self.log_path = log_path
        self.state: ViewState = Idle()
        self.position = position
        self._generation = 0
        self._listeners: list[Listener] = []

    @classmethod
    def from_config(cls, config: dict) -> "LookupOrchestrator":
        """Wire the Open-Meteo clients with endpoints/timeouts from config."""
        api = config["api"]
        map_ = config["map"]
        return cls(
            resolver=partial(resolve, url=api["geocoding_url"], timeout=api["timeout"]),
            fetcher=partial(fetch_current, url=api["forecast_url"], timeout=api["timeout"]),
            position=MapPosition(map_["default_latitude"], map_["default_longitude"]),
            discard_stale=config["lookup"]["discard_stale"],
            log_path=Path(config["log"]["path"]),
        )

    @property
    def loading(self) -> bool:
        return isinstance(self.state, Loading)

    @property
    def result(self) -> LookupResult | None:
        return self.state.result if isinstance(self.state, Loaded) else None

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call listener(state, position) after every transition.

        Returns:
            A callable that removes the listener again.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def lookup(self, query: str) -> None:
        """Resolve query, fetch its current weather and publish the outcome.

        Blank queries are ignored without touching the state. Whatever
        happens, the state leaves Loading before this returns.
        """
        query = normalize_query(query)
        if query is None:
            return

        self._generation += 1
        generation = self._generation

        outcome: ViewState = Error(GENERIC_ERROR_MESSAGE)
        try:
            # Inside the try: a listener failing on Loading must not strand it
            self._publish(generation, Loading(query))
            location = await self._call(self._resolver, query)
            conditions = await self._call(self._fetcher, location.latitude, location.longitude)
            outcome = Loaded(LookupResult(location=location, conditions=conditions))
        except LocationNotFoundError as e:
            self._report(query, "NotFound", e)
        except TransportError as e:
            self._report(query, "TransportError", e)
        finally:
            position = None
            if isinstance(outcome, Loaded):
                loc = outcome.result.location
                position = MapPosition(loc.latitude, loc.longitude)
            self._publish(generation, outcome, position)

    # helpers ------------------------------------------------------------

    async def _call(self, fn: Callable[..., Any], *args: Any) -> Any:
        if inspect.iscoroutinefunction(fn):
            return await fn(*args)
        return await asyncio.to_thread(fn, *args)

    def _publish(
        self,
        generation: int,
        state: ViewState,
        position: MapPosition | None = None,
    ) -> None:
        if self.discard_stale and generation != self._generation:
            print(f"[lookup] Dropping {type(state).__name__} from superseded lookup #{generation}")
            return
        self.state = state
        if position is not None:
            self.position = position
        for listener in list(self._listeners):
            listener(self.state, self.position)

    def _report(self, query: str, kind: str, error: Exception) -> None:
        message = f"Lookup for {query!r} failed ({kind}): {error}"
        print(f"[lookup] {message}")
        log_error(message, log_path=self.log_path)
