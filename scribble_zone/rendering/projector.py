"""
Ring Projector Module
=====================

Keeps the pixel preview of the ring anchored to the ground.

Design:
- Geographic points are the durable truth
- Pixel path is re-derived wholesale from the current map transform
  (rotation makes the transform nonlinear across the path)
- Rendering delegates to a DrawingSurface (no pixel logic here)
"""

import supervision as sv
from typing import List, Optional, Sequence, Tuple

from scribble_zone.capture.state import DrawState
from scribble_zone.config import OverlayStyle
from scribble_zone.geometry.shapes import GeoPoint, PixelPoint
from scribble_zone.logging import StructuredLogger, LogEvent, create_logger
from scribble_zone.maps.viewport import MapHandle
from scribble_zone.rendering.surface import DrawingSurface


class RingProjector:
    """
    Projects geo rings to screen space and paints them.

    Usage:
        projector = RingProjector(handle, FrameSurface(1280, 720))

        # Every viewport change
        projector.reproject_and_render(state)

        # Live preview during a gesture
        projector.render(state.pixel_path)
    """

    def __init__(
        self,
        handle: MapHandle,
        surface: DrawingSurface,
        style: Optional[OverlayStyle] = None,
        logger: Optional[StructuredLogger] = None,
    ):
        self.handle = handle
        self.surface = surface
        self.style = style or OverlayStyle()
        self.logger = logger or create_logger("projector")

        self._stroke_color = sv.Color.from_hex(self.style.stroke_color)
        self._fill_color = sv.Color.from_hex(self.style.fill_color)

    def project(self, geo_points: Sequence[GeoPoint]) -> Optional[List[PixelPoint]]:
        """
        Project geo points through the current map transform.

        Returns:
            Pixel points, or None when no map surface is mounted
        """
        surface = self.handle.surface
        if surface is None:
            self.logger.warning(
                event=LogEvent.PROJECTION_SKIPPED,
                message="Projection requested without a mounted map",
                metadata={'points': len(geo_points)}
            )
            return None
        return [surface.geo_to_screen(p) for p in geo_points]

    def reproject_and_render(
        self,
        state: DrawState,
        min_points: int = 3,
    ) -> Optional[Tuple[PixelPoint, ...]]:
        """
        Re-derive the pixel path from the active geo ring and repaint.

        The geo ring is never modified. Skipped when the ring has fewer
        than `min_points` points or the map is not mounted.

        Returns:
            The new pixel path, or None when skipped
        """
        geo_points = state.active_ring_points()
        if len(geo_points) < min_points:
            return None

        pixels = self.project(geo_points)
        if pixels is None:
            return None

        state.replace_pixel_path(pixels)
        self.render(pixels)
        return tuple(pixels)

    def render(self, pixel_path: Sequence[PixelPoint]) -> None:
        """
        Paint the preview: dashed outline, plus translucent fill once the
        path encloses an area. Fewer than 2 points leaves the surface blank.
        """
        self.surface.clear()
        if len(pixel_path) < 2:
            return

        self.surface.stroke_dashed_path(
            pixel_path,
            color=self._stroke_color,
            line_width=self.style.line_width,
            dash_pattern=self.style.dash_pattern,
            opacity=self.style.stroke_opacity,
        )

        if len(pixel_path) > 2:
            self.surface.fill_path(
                pixel_path,
                self.style.fill_opacity,
                color=self._fill_color,
            )
