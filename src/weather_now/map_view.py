# Project: weather-now
# Owner: GreenUnicorn
"""
map_view.py — OpenStreetMap basemap with a single marker, drawn with Plotly.

MapView remembers where it is pointing. follow() moves it only when the
orchestrator's position actually changed; feeding it the same coordinates
again is a no-op, so a rerun does not restart the fly or undo a user's
pan/zoom (Plotly keeps the viewport while uirevision is unchanged).

Plotly cannot tween the centre/zoom of a map subplot, so the fly is a
sequence of eased intermediate viewports (flight()) that the page draws
one after another over fly_duration seconds.
"""

import math
from dataclasses import dataclass

import plotly.graph_objects as go

from weather_now.models import DEFAULT_POSITION, LookupResult, MapPosition


TILE_URL = "https://tile.openstreetmap.org/{z}/{x}/{y}.png"
TILE_ATTRIBUTION = "© OpenStreetMap contributors"

PLACEHOLDER_POPUP = "Search for a city"
INITIAL_ZOOM = 3
RESOLVED_ZOOM = 10
FLY_DURATION_SECONDS = 2.0
FLIGHT_FRAMES_PER_SECOND = 10

MARKER_SIZE = 18
MARKER_COLOR = "#0a84ff"


@dataclass(frozen=True)
class Viewport:
    center: MapPosition
    zoom: float


def _ease_in_out(t: float) -> float:
    """Cubic ease-in-out on [0, 1]."""
    if t < 0.5:
        return 4 * t ** 3
    return 1 - (-2 * t + 2) ** 3 / 2


class MapView:
    def __init__(
        self,
        position: MapPosition = DEFAULT_POSITION,
        *,
        initial_zoom: float = INITIAL_ZOOM,
        resolved_zoom: float = RESOLVED_ZOOM,
        fly_duration: float = FLY_DURATION_SECONDS,
    ) -> None:
        self.position = position
        self.zoom = initial_zoom
        self.resolved_zoom = resolved_zoom
        self.fly_duration = fly_duration
        self.revision = 0
        self._departure: Viewport | None = None

    @classmethod
    def from_config(cls, config: dict) -> "MapView":
        map_ = config["map"]
        return cls(
            MapPosition(map_["default_latitude"], map_["default_longitude"]),
            initial_zoom=map_["initial_zoom"],
            resolved_zoom=map_["resolved_zoom"],
            fly_duration=map_["fly_duration"],
        )

    @property
    def viewport(self) -> Viewport:
        return Viewport(self.position, self.zoom)

    def follow(self, position: MapPosition) -> bool:
        """Fly to position if it differs from the current one.

        Returns:
            True when the viewport moved, False when position was unchanged.
        """
        if position == self.position:
            return False
        self._departure = self.viewport
        self.position = position
        self.zoom = self.resolved_zoom
        self.revision += 1
        return True

    @property
    def frame_interval(self) -> float:
        """Seconds to hold each flight frame so the fly lasts fly_duration."""
        return self.fly_duration / self._flight_steps()

    def _flight_steps(self) -> int:
        return max(1, math.ceil(self.fly_duration * FLIGHT_FRAMES_PER_SECOND))

    def flight(self) -> list[Viewport]:
        """Intermediate viewports of the last move, ending at the target.

        Empty when there is no pending move or fly_duration is 0. Consumes
        the pending move: a second call returns [] until follow() moves again.
        """
        start, self._departure = self._departure, None
        if start is None or self.fly_duration <= 0:
            return []

        steps = self._flight_steps()
        end = self.viewport
        frames = []
        for i in range(1, steps + 1):
            k = _ease_in_out(i / steps)
            frames.append(Viewport(
                MapPosition(
                    start.center.latitude + (end.center.latitude - start.center.latitude) * k,
                    start.center.longitude + (end.center.longitude - start.center.longitude) * k,
                ),
                start.zoom + (end.zoom - start.zoom) * k,
            ))
        # Land exactly on the target despite float rounding
        frames[-1] = end
        return frames

    @staticmethod
    def popup_text(result: LookupResult | None) -> str:
        if result is None:
            return PLACEHOLDER_POPUP
        return result.location.display_name

    def figure(
        self,
        result: LookupResult | None = None,
        *,
        viewport: Viewport | None = None,
        frame: int | None = None,
        height: int = 480,
    ) -> go.Figure:
        """Build the map figure with the marker at the current position.

        Args:
            result: Latest lookup result, used for the marker popup.
            viewport: Camera to use instead of the resting one (flight frames).
            frame: Index of the flight frame; gives each frame its own
                uirevision so Plotly applies its centre/zoom.
            height: Figure height in pixels.
        """
        view = viewport or self.viewport
        revision = f"position-{self.revision}"
        if frame is not None:
            revision += f"-frame-{frame}"

        fig = go.Figure(
            go.Scattermap(
                lat=[self.position.latitude],
                lon=[self.position.longitude],
                mode="markers",
                marker=dict(size=MARKER_SIZE, color=MARKER_COLOR),
                text=[self.popup_text(result)],
                hoverinfo="text",
                showlegend=False,
            )
        )
        fig.update_layout(
            map=dict(
                style="white-bg",
                center=dict(lat=view.center.latitude, lon=view.center.longitude),
                zoom=view.zoom,
                layers=[
                    dict(
                        sourcetype="raster",
                        source=[TILE_URL],
                        sourceattribution=TILE_ATTRIBUTION,
                        below="traces",
                    )
                ],
            ),
            margin=dict(l=0, r=0, t=0, b=0),
            height=height,
            uirevision=revision,
        )
        return fig
