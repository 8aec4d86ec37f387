"""
Spatial Filter Module
=====================

Stateless filtering logic - applies a geographic ring to restaurants.

Design:
- Pure functions (no state)
- Coordinate validity checked before any geometry
- Output preserves input order (subset, never reordered)
- Fresh result on every call
"""

import numpy as np
from typing import Iterable, List, Optional, Sequence, Union

from scribble_data.schemas import Restaurant
from scribble_zone.geometry.shapes import GeoRing, PointLike

RingLike = Union[GeoRing, Sequence[PointLike], None]


class SpatialFilter:
    """
    Stateless point-in-polygon filter over restaurants.

    Usage:
        visible = SpatialFilter.filter(restaurants, ring)
        mask = SpatialFilter.detect(ring, restaurants)
    """

    @staticmethod
    def valid_coordinates_mask(restaurants: Sequence[Restaurant]) -> np.ndarray:
        """Boolean mask of restaurants with present, finite coordinates."""
        return np.array(
            [r.has_valid_coordinates for r in restaurants],
            dtype=bool,
        )

    @staticmethod
    def detect(ring: RingLike, restaurants: Sequence[Restaurant]) -> np.ndarray:
        """
        Decide which restaurants pass the filter.

        Args:
            ring: Active ring; fewer than 3 points, or a non-finite vertex,
                means no active filter
            restaurants: Candidate records

        Returns:
            Boolean mask of shape (N,) where True = kept
        """
        if len(restaurants) == 0:
            return np.array([], dtype=bool)

        mask = SpatialFilter.valid_coordinates_mask(restaurants)
        try:
            ring = GeoRing.from_points(ring)
        except (TypeError, ValueError):
            # Unusable vertices: no active filter
            return mask
        if not ring.is_polygon or not mask.any():
            return mask

        valid_idx = np.flatnonzero(mask)
        coords = np.array(
            [(restaurants[i].longitude, restaurants[i].latitude) for i in valid_idx],
            dtype=np.float64,
        )
        mask[valid_idx] = ring.contains_points(coords)
        return mask

    @staticmethod
    def filter(restaurants: Iterable[Restaurant], ring: RingLike) -> List[Restaurant]:
        """
        Return the restaurants inside (or on) the ring, in input order.

        Restaurants with missing or non-finite coordinates never pass.
        """
        candidates = list(restaurants)
        mask = SpatialFilter.detect(ring, candidates)
        return [r for r, keep in zip(candidates, mask) if keep]


def filter_restaurants(
    restaurants: Iterable[Restaurant],
    ring: Optional[RingLike] = None,
) -> List[Restaurant]:
    """Convenience wrapper around SpatialFilter.filter."""
    return SpatialFilter.filter(restaurants, ring)
