"""
Geometric Shapes Module
========================

Pure geometric representations - NO state, NO side effects.

Design:
- Immutable shapes (frozen dataclass pattern)
- Geographic ring stored open (closing vertex implied)
- Vectorized containment with numpy (edge test + even-odd ray casting)
"""

import math
import numpy as np
from dataclasses import dataclass
from typing import Iterable, Sequence, Tuple, Union

# Cross-product magnitude under which a point counts as lying on an edge.
_EDGE_TOLERANCE = 1e-12

PointLike = Union["GeoPoint", Tuple[float, float], Sequence[float]]


@dataclass(frozen=True)
class GeoPoint:
    """
    Geographic coordinate in decimal degrees.

    Attributes:
        lng: Longitude
        lat: Latitude
    """

    lng: float
    lat: float

    def __post_init__(self):
        if not (math.isfinite(self.lng) and math.isfinite(self.lat)):
            raise ValueError(f"GeoPoint requires finite coordinates, got ({self.lng}, {self.lat})")

    @classmethod
    def coerce(cls, value: PointLike) -> "GeoPoint":
        """Build from a GeoPoint or a (lng, lat) pair."""
        if isinstance(value, GeoPoint):
            return value
        lng, lat = value
        return cls(lng=float(lng), lat=float(lat))

    def to_tuple(self) -> Tuple[float, float]:
        return (self.lng, self.lat)


@dataclass(frozen=True)
class PixelPoint:
    """
    Screen coordinate in device pixels, origin at the drawing surface's
    top-left corner. Only valid for the viewport it was computed under.
    """

    x: float
    y: float

    def distance_to(self, other: "PixelPoint") -> float:
        return math.hypot(self.x - other.x, self.y - other.y)

    def to_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned geographic bounds."""

    min_lng: float
    min_lat: float
    max_lng: float
    max_lat: float

    def __post_init__(self):
        if self.min_lng > self.max_lng or self.min_lat > self.max_lat:
            raise ValueError(f"Inverted bounding box: {self}")

    @classmethod
    def from_points(cls, points: Iterable[GeoPoint]) -> "BoundingBox":
        """
        Compute min/max longitude and latitude across points.

        Raises:
            ValueError: If points is empty
        """
        coords = np.array([p.to_tuple() for p in points], dtype=np.float64)
        if coords.size == 0:
            raise ValueError("Cannot compute bounds of an empty point set")
        min_lng, min_lat = coords.min(axis=0)
        max_lng, max_lat = coords.max(axis=0)
        return cls(
            min_lng=float(min_lng),
            min_lat=float(min_lat),
            max_lng=float(max_lng),
            max_lat=float(max_lat),
        )

    @property
    def center(self) -> GeoPoint:
        return GeoPoint(
            lng=(self.min_lng + self.max_lng) / 2,
            lat=(self.min_lat + self.max_lat) / 2,
        )

    def corners(self) -> Tuple[GeoPoint, GeoPoint, GeoPoint, GeoPoint]:
        return (
            GeoPoint(self.min_lng, self.min_lat),
            GeoPoint(self.max_lng, self.min_lat),
            GeoPoint(self.max_lng, self.max_lat),
            GeoPoint(self.min_lng, self.max_lat),
        )


@dataclass(frozen=True)
class GeoRing:
    """
    Immutable, implicitly closed ring of geographic points.

    Insertion order defines the boundary walk. A trailing point equal to
    the first is dropped so the closing vertex is never stored twice.
    Fewer than 3 points is not a polygon ("no active filter").

    Attributes:
        points: Ordered ring vertices
    """

    points: Tuple[GeoPoint, ...] = ()

    def __post_init__(self):
        points = tuple(GeoPoint.coerce(p) for p in self.points)
        if len(points) > 1 and points[-1] == points[0]:
            points = points[:-1]
        object.__setattr__(self, 'points', points)

    @classmethod
    def from_points(cls, points: Union["GeoRing", Iterable[PointLike], None]) -> "GeoRing":
        if points is None:
            return cls()
        if isinstance(points, GeoRing):
            return points
        return cls(points=tuple(points))

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self):
        return iter(self.points)

    @property
    def is_polygon(self) -> bool:
        return len(self.points) >= 3

    def reversed(self) -> "GeoRing":
        return GeoRing(points=tuple(reversed(self.points)))

    def bounding_box(self) -> BoundingBox:
        return BoundingBox.from_points(self.points)

    def closed_vertices(self) -> np.ndarray:
        """
        (N+1)x2 array of (lng, lat) with the first vertex repeated at the end.
        """
        if not self.points:
            return np.empty((0, 2), dtype=np.float64)
        coords = np.array([p.to_tuple() for p in self.points], dtype=np.float64)
        return np.vstack([coords, coords[:1]])

    def contains_point(self, point: PointLike) -> bool:
        """Inside-or-on-boundary test for a single (lng, lat) point."""
        p = GeoPoint.coerce(point)
        mask = self.contains_points(np.array([[p.lng, p.lat]], dtype=np.float64))
        return bool(mask[0])

    def contains_points(self, coords: np.ndarray) -> np.ndarray:
        """
        Vectorized containment for an Mx2 array of (lng, lat).

        Boundary points count as inside. Result does not depend on the
        ring's winding direction.

        Returns:
            Boolean mask of shape (M,)
        """
        coords = np.asarray(coords, dtype=np.float64).reshape(-1, 2)
        if not self.is_polygon or len(coords) == 0:
            return np.zeros(len(coords), dtype=bool)

        closed = self.closed_vertices()
        x1, y1 = closed[:-1, 0], closed[:-1, 1]
        x2, y2 = closed[1:, 0], closed[1:, 1]
        px = coords[:, 0:1]
        py = coords[:, 1:2]

        # On-edge: collinear with the segment and inside its extent
        cross = (x2 - x1) * (py - y1) - (y2 - y1) * (px - x1)
        within_x = (px >= np.minimum(x1, x2)) & (px <= np.maximum(x1, x2))
        within_y = (py >= np.minimum(y1, y2)) & (py <= np.maximum(y1, y2))
        on_edge = ((np.abs(cross) <= _EDGE_TOLERANCE) & within_x & within_y).any(axis=1)

        # Even-odd ray casting towards +lng
        straddles = (y1 > py) != (y2 > py)
        with np.errstate(divide='ignore', invalid='ignore'):
            intersect_x = (x2 - x1) * (py - y1) / (y2 - y1) + x1
        crossings = (straddles & (px < intersect_x)).sum(axis=1)
        inside = (crossings % 2) == 1

        return on_edge | inside
