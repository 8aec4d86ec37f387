"""
Draw State Module
=================

Stateful holder for one map view's drawing session.

Design:
- Mutable state (phase, in-progress paths, committed ring)
- Immutable snapshots (DrawSnapshot)
- Reset capability
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple

from scribble_zone.geometry.shapes import GeoPoint, GeoRing, PixelPoint


class DrawPhase(str, Enum):
    """Drawing lifecycle."""
    IDLE = "idle"
    DRAWING = "drawing"
    COMMITTED = "committed"


@dataclass(frozen=True)
class DrawSnapshot:
    """Read-only view of a DrawState."""

    phase: DrawPhase
    pixel_path: Tuple[PixelPoint, ...]
    geo_path: Tuple[GeoPoint, ...]
    committed_ring: GeoRing


class DrawState:
    """
    Drawing state owned by exactly one map view.

    State:
        phase: idle | drawing | committed
        pixel_path: Preview path in screen pixels (view-dependent)
        geo_path: Gesture samples in (lng, lat) (durable)
        committed_ring: Ring the spatial filter uses
    """

    def __init__(self):
        self.phase = DrawPhase.IDLE
        self._pixel_path: List[PixelPoint] = []
        self._geo_path: List[GeoPoint] = []
        self._committed_ring = GeoRing()

    @property
    def pixel_path(self) -> Tuple[PixelPoint, ...]:
        return tuple(self._pixel_path)

    @property
    def geo_path(self) -> Tuple[GeoPoint, ...]:
        return tuple(self._geo_path)

    @property
    def committed_ring(self) -> GeoRing:
        return self._committed_ring

    @property
    def last_pixel(self) -> PixelPoint | None:
        return self._pixel_path[-1] if self._pixel_path else None

    def start_path(self, pixel: PixelPoint, geo: GeoPoint) -> None:
        self._pixel_path = [pixel]
        self._geo_path = [geo]
        self.phase = DrawPhase.DRAWING

    def append(self, pixel: PixelPoint, geo: GeoPoint) -> None:
        self._pixel_path.append(pixel)
        self._geo_path.append(geo)

    def replace_pixel_path(self, pixels: List[PixelPoint]) -> None:
        """Swap in a freshly projected pixel path (whole path, never patched)."""
        self._pixel_path = list(pixels)

    def active_ring_points(self) -> Tuple[GeoPoint, ...]:
        """Geo points being shown: the gesture while drawing, else the committed ring."""
        if self.phase is DrawPhase.DRAWING:
            return tuple(self._geo_path)
        return self._committed_ring.points

    def pending_ring(self) -> GeoRing:
        """Gesture samples as a ring (closing duplicate dropped)."""
        return GeoRing(points=tuple(self._geo_path))

    def commit(self, ring: GeoRing | None = None) -> GeoRing:
        self._committed_ring = ring if ring is not None else self.pending_ring()
        self.phase = DrawPhase.COMMITTED
        return self._committed_ring

    def discard(self) -> None:
        """Drop the gesture and the committed ring; back to idle."""
        self.reset()

    def reset(self) -> None:
        self.phase = DrawPhase.IDLE
        self._pixel_path = []
        self._geo_path = []
        self._committed_ring = GeoRing()

    def snapshot(self) -> DrawSnapshot:
        return DrawSnapshot(
            phase=self.phase,
            pixel_path=self.pixel_path,
            geo_path=self.geo_path,
            committed_ring=self._committed_ring,
        )

    def __repr__(self) -> str:
        return (
            f"DrawState(phase={self.phase.value}, samples={len(self._geo_path)}, "
            f"committed={len(self._committed_ring)})"
        )
