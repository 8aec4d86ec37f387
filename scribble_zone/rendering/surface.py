"""
Drawing Surface Module
======================

Pixel buffer the ring overlay is painted on.

Design:
- DrawingSurface: minimal interface the projector depends on
- FrameSurface: numpy BGR frame painted with supervision draw utilities
- Dashes computed geometrically (dash_segments), then drawn as lines

Dependencies:
- supervision (Color, Point, draw_line, draw_filled_polygon)
- opencv (alpha blending of the stroke layer)
- numpy (frame)
"""

import math
import cv2
import numpy as np
import supervision as sv
from typing import List, Protocol, Sequence, Tuple

from scribble_zone.geometry.shapes import PixelPoint

Segment = Tuple[Tuple[float, float], Tuple[float, float]]


class DrawingSurface(Protocol):
    """Interface for the overlay's pixel buffer."""

    def clear(self) -> None:
        ...

    def stroke_dashed_path(
        self,
        points: Sequence[PixelPoint],
        *,
        color: sv.Color,
        line_width: int,
        dash_pattern: Tuple[int, int],
        opacity: float = 1.0,
    ) -> None:
        ...

    def fill_path(
        self,
        points: Sequence[PixelPoint],
        opacity: float,
        *,
        color: sv.Color,
    ) -> None:
        ...

    def resize(self, width: int, height: int) -> None:
        ...


def dash_segments(
    points: Sequence[PixelPoint],
    dash_on: float,
    dash_off: float,
) -> List[Segment]:
    """
    Split an open polyline into dash segments.

    The dash phase carries across vertices, so the pattern runs
    continuously along the whole path.

    Args:
        points: Polyline vertices
        dash_on: Painted length per period (pixels)
        dash_off: Gap length per period (pixels)

    Returns:
        List of ((x0, y0), (x1, y1)) painted segments
    """
    if dash_on <= 0 or dash_off < 0:
        raise ValueError(f"Invalid dash pattern ({dash_on}, {dash_off})")

    period = dash_on + dash_off
    segments: List[Segment] = []
    phase = 0.0

    for a, b in zip(points, points[1:]):
        dx, dy = b.x - a.x, b.y - a.y
        length = math.hypot(dx, dy)
        if length == 0:
            continue

        pos = 0.0
        while pos < length:
            in_dash = phase < dash_on
            remaining = (dash_on - phase) if in_dash else (period - phase)
            step = min(remaining, length - pos)
            if in_dash:
                t0, t1 = pos / length, (pos + step) / length
                segments.append((
                    (a.x + dx * t0, a.y + dy * t0),
                    (a.x + dx * t1, a.y + dy * t1),
                ))
            pos += step
            phase = (phase + step) % period

    return segments


class FrameSurface:
    """
    DrawingSurface backed by a (height, width, 3) uint8 BGR frame.

    Usage:
        surface = FrameSurface(width=1280, height=720)
        projector = RingProjector(handle, surface)
        ...
        cv2.imwrite("overlay.png", surface.frame)
    """

    def __init__(
        self,
        width: int,
        height: int,
        background: sv.Color = sv.Color(r=0, g=0, b=0),
    ):
        self.background = background
        self.frame = self._blank(width, height)

    def _blank(self, width: int, height: int) -> np.ndarray:
        if width <= 0 or height <= 0:
            raise ValueError(f"Surface must have positive dimensions, got {(width, height)}")
        frame = np.zeros((height, width, 3), dtype=np.uint8)
        frame[:] = self.background.as_bgr()
        return frame

    @property
    def width(self) -> int:
        return self.frame.shape[1]

    @property
    def height(self) -> int:
        return self.frame.shape[0]

    def clear(self) -> None:
        self.frame[:] = self.background.as_bgr()

    def resize(self, width: int, height: int) -> None:
        """Reallocate the buffer (contents are dropped)."""
        self.frame = self._blank(width, height)

    def stroke_dashed_path(
        self,
        points: Sequence[PixelPoint],
        *,
        color: sv.Color,
        line_width: int,
        dash_pattern: Tuple[int, int],
        opacity: float = 1.0,
    ) -> None:
        if len(points) < 2:
            return

        layer = self.frame.copy()
        for start, end in dash_segments(points, *dash_pattern):
            layer = sv.draw_line(
                scene=layer,
                start=sv.Point(x=start[0], y=start[1]),
                end=sv.Point(x=end[0], y=end[1]),
                color=color,
                thickness=line_width,
            )

        if opacity >= 1.0:
            self.frame = layer
        else:
            cv2.addWeighted(layer, opacity, self.frame, 1.0 - opacity, 0, dst=self.frame)

    def fill_path(
        self,
        points: Sequence[PixelPoint],
        opacity: float,
        *,
        color: sv.Color,
    ) -> None:
        if len(points) < 3:
            return

        polygon = np.array(
            [[round(p.x), round(p.y)] for p in points],
            dtype=np.int32,
        )
        self.frame = sv.draw_filled_polygon(
            scene=self.frame,
            polygon=polygon,
            color=color,
            opacity=opacity,
        )
