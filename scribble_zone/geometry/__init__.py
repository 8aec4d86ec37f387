"""
Geometry Layer
==============

Bounded Context: Pure geometric shapes and spatial queries.

Responsibilities:
- Shape representation (immutable)
- Point-in-polygon tests in (lng, lat) space
- Restaurant filtering by ring
- NO state, NO projection, NO drawing
"""

from scribble_zone.geometry.shapes import GeoPoint, PixelPoint, BoundingBox, GeoRing
from scribble_zone.geometry.detector import SpatialFilter, filter_restaurants

__all__ = [
    "GeoPoint",
    "PixelPoint",
    "BoundingBox",
    "GeoRing",
    "SpatialFilter",
    "filter_restaurants",
]
