"""
Map Viewport Module
===================

Bounded Context: Screen <-> geographic projection and camera control.

Design:
- MapSurface: the capability the geofencing core consumes (Protocol)
- MapHandle: component-owned slot, filled on mount, emptied on unmount
- MercatorViewport: spherical Web-Mercator implementation with bearing

Camera moves apply immediately; their animation duration is recorded in
`camera_history` for the host to animate.
"""

import math
import numpy as np
from dataclasses import dataclass
from typing import Callable, List, Optional, Protocol, Tuple

from scribble_zone.config import MapConfig
from scribble_zone.geometry.shapes import BoundingBox, GeoPoint, PixelPoint

MAX_MERCATOR_LAT = 85.051129

MoveListener = Callable[[], None]


class MapSurface(Protocol):
    """Projection and camera capability provided by the map."""

    width: int
    height: int

    def screen_to_geo(self, pixel: PixelPoint) -> GeoPoint:
        ...

    def geo_to_screen(self, geo: GeoPoint) -> PixelPoint:
        ...

    def fit_bounds(
        self,
        bbox: BoundingBox,
        padding: float,
        max_zoom: float,
        duration_ms: int,
    ) -> None:
        ...

    def fly_to(self, center: GeoPoint, zoom: float, speed: float = 1.2) -> None:
        ...

    def resize(self, width: int, height: int) -> None:
        ...

    def set_interactions_enabled(self, enabled: bool) -> None:
        ...

    def add_move_listener(self, listener: MoveListener) -> None:
        ...

    def remove_move_listener(self, listener: MoveListener) -> None:
        ...


class MapHandle:
    """
    Slot holding the map surface of one map view.

    Capture and projection receive the handle at construction and check
    `is_mounted` before touching the surface.
    """

    def __init__(self):
        self._surface: Optional[MapSurface] = None

    @property
    def surface(self) -> Optional[MapSurface]:
        return self._surface

    @property
    def is_mounted(self) -> bool:
        return self._surface is not None

    def mount(self, surface: MapSurface) -> None:
        if self._surface is not None and self._surface is not surface:
            raise ValueError("MapHandle already holds a different surface; dispose() first")
        self._surface = surface

    def dispose(self) -> None:
        self._surface = None

    def __repr__(self) -> str:
        return f"MapHandle(mounted={self.is_mounted})"


@dataclass(frozen=True)
class CameraMove:
    """A camera instruction applied to the viewport."""

    kind: str  # "fit", "fly", "jump"
    center: GeoPoint
    zoom: float
    duration_ms: int = 0


class MercatorViewport:
    """
    Web-Mercator map surface.

    Attributes:
        width, height: Viewport size in pixels
        center: Geographic centre of the viewport
        zoom: Zoom level (world is tile_size * 2**zoom pixels wide)
        bearing: Rotation in degrees, positive = clockwise on screen
    """

    def __init__(
        self,
        width: int,
        height: int,
        center: GeoPoint,
        zoom: float,
        bearing: float = 0.0,
        tile_size: int = 512,
        min_zoom: float = 0.0,
        max_zoom: float = 22.0,
    ):
        if width <= 0 or height <= 0:
            raise ValueError(f"Viewport must have positive dimensions, got {(width, height)}")
        if tile_size <= 0:
            raise ValueError(f"tile_size must be > 0, got {tile_size}")
        if min_zoom > max_zoom:
            raise ValueError(f"min_zoom {min_zoom} exceeds max_zoom {max_zoom}")

        self.width = int(width)
        self.height = int(height)
        self.tile_size = tile_size
        self.min_zoom = min_zoom
        self.max_zoom = max_zoom
        self.center = GeoPoint.coerce(center)
        self.zoom = self._clamp_zoom(zoom)
        self.bearing = float(bearing)
        self.interactions_enabled = True
        self.camera_history: List[CameraMove] = []
        self._move_listeners: List[MoveListener] = []

    @classmethod
    def from_config(cls, map_config: MapConfig) -> "MercatorViewport":
        """Viewport at the configured default camera."""
        width, height = map_config.viewport_wh
        return cls(
            width=width,
            height=height,
            center=GeoPoint.coerce(map_config.default_center),
            zoom=map_config.default_zoom,
            tile_size=map_config.tile_size,
        )

    # ------------------------------------------------------------------
    # Projection
    # ------------------------------------------------------------------

    def _world_size(self, zoom: Optional[float] = None) -> float:
        return self.tile_size * (2.0 ** (self.zoom if zoom is None else zoom))

    def _to_world(self, geo: GeoPoint, zoom: Optional[float] = None) -> np.ndarray:
        size = self._world_size(zoom)
        lat = max(-MAX_MERCATOR_LAT, min(MAX_MERCATOR_LAT, geo.lat))
        x = (180.0 + geo.lng) / 360.0 * size
        y = (180.0 - math.degrees(math.log(math.tan(math.pi / 4 + math.radians(lat) / 2)))) / 360.0 * size
        return np.array([x, y], dtype=np.float64)

    def _from_world(self, world: np.ndarray, zoom: Optional[float] = None) -> GeoPoint:
        size = self._world_size(zoom)
        lng = world[0] / size * 360.0 - 180.0
        y2 = 180.0 - world[1] / size * 360.0
        lat = 360.0 / math.pi * math.atan(math.exp(math.radians(y2))) - 90.0
        return GeoPoint(lng=float(lng), lat=float(lat))

    def _rotation(self, sign: float = 1.0) -> np.ndarray:
        theta = math.radians(self.bearing) * sign
        c, s = math.cos(theta), math.sin(theta)
        return np.array([[c, -s], [s, c]], dtype=np.float64)

    def geo_to_screen(self, geo: GeoPoint) -> PixelPoint:
        """Project a geographic point through the current camera."""
        offset = self._to_world(geo) - self._to_world(self.center)
        x, y = self._rotation() @ offset + np.array([self.width / 2, self.height / 2])
        return PixelPoint(x=float(x), y=float(y))

    def screen_to_geo(self, pixel: PixelPoint) -> GeoPoint:
        """Un-project a screen point through the current camera."""
        offset = np.array([pixel.x - self.width / 2, pixel.y - self.height / 2], dtype=np.float64)
        world = self._rotation(-1.0) @ offset + self._to_world(self.center)
        return self._from_world(world)

    # ------------------------------------------------------------------
    # Camera
    # ------------------------------------------------------------------

    def _clamp_zoom(self, zoom: float) -> float:
        return float(min(self.max_zoom, max(self.min_zoom, zoom)))

    def _apply(self, move: CameraMove) -> None:
        self.center = move.center
        self.zoom = move.zoom
        self.camera_history.append(move)
        self._notify()

    def camera_for_bounds(
        self,
        bbox: BoundingBox,
        padding: float,
        max_zoom: float,
    ) -> Tuple[GeoPoint, float]:
        """
        Centre and zoom at which `bbox` fits inside the padded viewport.

        The bbox corners are rotated by the current bearing before
        measuring, so the fit holds for rotated maps too.
        """
        corners = np.array([self._to_world(c, zoom=0) for c in bbox.corners()])
        mid_world = (corners.min(axis=0) + corners.max(axis=0)) / 2
        center = self._from_world(mid_world, zoom=0)

        rotated = corners @ self._rotation().T
        span_w, span_h = rotated.max(axis=0) - rotated.min(axis=0)
        avail_w = max(self.width - 2 * padding, 1.0)
        avail_h = max(self.height - 2 * padding, 1.0)

        scales = []
        if span_w > 0:
            scales.append(avail_w / span_w)
        if span_h > 0:
            scales.append(avail_h / span_h)
        zoom = math.log2(min(scales)) if scales else max_zoom

        return center, self._clamp_zoom(min(zoom, max_zoom))

    def fit_bounds(
        self,
        bbox: BoundingBox,
        padding: float = 0,
        max_zoom: float = 22.0,
        duration_ms: int = 0,
    ) -> None:
        """Centre and zoom the camera on bbox, capped at max_zoom."""
        center, zoom = self.camera_for_bounds(bbox, padding, max_zoom)
        self._apply(CameraMove(kind="fit", center=center, zoom=zoom, duration_ms=duration_ms))

    def fly_to(self, center: GeoPoint, zoom: float, speed: float = 1.2) -> None:
        """Move the camera to center/zoom (duration derived from speed)."""
        duration_ms = int(1000 / speed) if speed > 0 else 0
        self._apply(CameraMove(
            kind="fly",
            center=GeoPoint.coerce(center),
            zoom=self._clamp_zoom(zoom),
            duration_ms=duration_ms,
        ))

    def jump_to(self, center: GeoPoint, zoom: Optional[float] = None) -> None:
        self._apply(CameraMove(
            kind="jump",
            center=GeoPoint.coerce(center),
            zoom=self._clamp_zoom(self.zoom if zoom is None else zoom),
        ))

    def pan_by(self, dx: float, dy: float) -> None:
        """Shift the view so content moves by (dx, dy) screen pixels."""
        new_center = self.screen_to_geo(PixelPoint(self.width / 2 - dx, self.height / 2 - dy))
        self.jump_to(new_center)

    def zoom_to(self, zoom: float) -> None:
        self.jump_to(self.center, zoom)

    def rotate_to(self, bearing: float) -> None:
        self.bearing = float(bearing) % 360.0
        self._notify()

    def resize(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"Viewport must have positive dimensions, got {(width, height)}")
        self.width = int(width)
        self.height = int(height)
        self._notify()

    def set_interactions_enabled(self, enabled: bool) -> None:
        """Toggle user pan/zoom handlers (drawing mode disables them)."""
        self.interactions_enabled = bool(enabled)

    # ------------------------------------------------------------------
    # Move listeners
    # ------------------------------------------------------------------

    def add_move_listener(self, listener: MoveListener) -> None:
        if listener not in self._move_listeners:
            self._move_listeners.append(listener)

    def remove_move_listener(self, listener: MoveListener) -> None:
        if listener in self._move_listeners:
            self._move_listeners.remove(listener)

    def _notify(self) -> None:
        for listener in list(self._move_listeners):
            listener()

    def __repr__(self) -> str:
        return (
            f"MercatorViewport({self.width}x{self.height}, "
            f"center=({self.center.lng:.5f}, {self.center.lat:.5f}), "
            f"zoom={self.zoom:.2f}, bearing={self.bearing:.1f})"
        )
