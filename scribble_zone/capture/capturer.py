"""
Gesture Capturer Module
=======================

Turns one continuous pointer drag into a geographic ring.

Design:
- State lives in an injected DrawState (one per map view)
- Map access only through the view's MapHandle
- Rendering injected as a callback (live preview per accepted sample)
- Commit-or-discard: fewer than 3 points never becomes a ring
"""

from typing import Callable, Optional, Sequence

from scribble_zone.capture.state import DrawPhase, DrawState
from scribble_zone.config import ScribbleConfig
from scribble_zone.geometry.shapes import GeoPoint, GeoRing, PixelPoint
from scribble_zone.logging import StructuredLogger, LogEvent, create_logger
from scribble_zone.maps.viewport import MapHandle

RenderCallback = Callable[[Sequence[PixelPoint]], None]


def _noop_render(points: Sequence[PixelPoint]) -> None:
    return None


class GestureCapturer:
    """
    Freehand ring capture over a map.

    Usage:
        capturer = GestureCapturer(handle, state, render=projector.render)
        capturer.set_drawing_mode(True)

        capturer.begin(PixelPoint(10, 10))
        capturer.extend(PixelPoint(80, 12))
        capturer.extend(PixelPoint(60, 90))
        ring = capturer.end()  # GeoRing, or None if discarded
    """

    def __init__(
        self,
        handle: MapHandle,
        state: DrawState,
        config: Optional[ScribbleConfig] = None,
        render: Optional[RenderCallback] = None,
        logger: Optional[StructuredLogger] = None,
    ):
        self.handle = handle
        self.state = state
        self.config = config or ScribbleConfig()
        self.render = render or _noop_render
        self.logger = logger or create_logger("capture")
        self._drawing_mode = False

    @property
    def drawing_mode(self) -> bool:
        return self._drawing_mode

    @property
    def is_drawing(self) -> bool:
        return self.state.phase is DrawPhase.DRAWING

    def set_drawing_mode(self, enabled: bool) -> Optional[GeoRing]:
        """
        Switch drawing mode. Turning it off mid-gesture ends the gesture
        (commit-or-discard).

        Returns:
            The committed ring when an interrupted gesture was committed
        """
        enabled = bool(enabled)
        if enabled == self._drawing_mode:
            return None

        self._drawing_mode = enabled
        self.logger.info(
            event=LogEvent.DRAWING_MODE_CHANGED,
            message=f"Drawing mode {'on' if enabled else 'off'}",
            metadata={'enabled': enabled}
        )

        if not enabled and self.is_drawing:
            return self.end()
        return None

    def begin(self, screen_point: PixelPoint) -> bool:
        """
        Start a gesture at screen_point.

        Returns:
            False (no-op) when drawing mode is off or no map is mounted
        """
        surface = self.handle.surface
        if not self._drawing_mode or surface is None:
            self.logger.debug(
                event=LogEvent.GESTURE_IGNORED,
                message="Pointer down ignored",
                metadata={'drawing_mode': self._drawing_mode, 'mounted': surface is not None}
            )
            return False

        geo = surface.screen_to_geo(screen_point)
        self.state.start_path(screen_point, geo)
        self.logger.info(
            event=LogEvent.GESTURE_STARTED,
            message="Gesture started",
            metadata={'x': screen_point.x, 'y': screen_point.y, 'lng': geo.lng, 'lat': geo.lat}
        )
        self.render(self.state.pixel_path)
        return True

    def extend(self, screen_point: PixelPoint) -> bool:
        """
        Add a sample to the gesture.

        Samples closer than `capture.min_sample_distance_px` to the last
        accepted one are dropped.

        Returns:
            True if the sample was appended
        """
        surface = self.handle.surface
        if not self.is_drawing or surface is None:
            return False

        last = self.state.last_pixel
        threshold = self.config.capture.min_sample_distance_px
        if last is not None and last.distance_to(screen_point) < threshold:
            return False

        self.state.append(screen_point, surface.screen_to_geo(screen_point))
        self.render(self.state.pixel_path)
        return True

    def end(self) -> Optional[GeoRing]:
        """
        Finish the gesture.

        Fewer than 3 ring points (a final sample on the start point only
        closes the ring): the attempt and any committed ring are dropped
        (state -> idle). Otherwise the ring is committed and the camera is
        fitted to its bounding box.

        Returns:
            The committed ring, or None
        """
        if not self.is_drawing:
            return None

        # One gesture per activation
        self._drawing_mode = False

        ring = self.state.pending_ring()
        if not ring.is_polygon:
            samples = len(ring)
            self.state.discard()
            self.render(())
            self.logger.info(
                event=LogEvent.RING_DISCARDED,
                message=f"Gesture discarded ({samples} points)",
                metadata={'points': samples}
            )
            return None

        self.state.commit(ring)
        bbox = ring.bounding_box()
        self.logger.info(
            event=LogEvent.RING_COMMITTED,
            message=f"Ring committed ({len(ring)} points)",
            metadata={
                'points': len(ring),
                'bbox': [bbox.min_lng, bbox.min_lat, bbox.max_lng, bbox.max_lat],
            }
        )

        surface = self.handle.surface
        if surface is not None:
            fit = self.config.camera_fit
            surface.fit_bounds(
                bbox,
                padding=fit.padding_px,
                max_zoom=fit.max_zoom,
                duration_ms=fit.duration_ms,
            )
            self.logger.info(
                event=LogEvent.CAMERA_FIT,
                message="Camera fitted to ring",
                metadata={'padding': fit.padding_px, 'max_zoom': fit.max_zoom}
            )
        return ring

    def clear(self) -> None:
        """Drop any ring and return the camera to its default position."""
        self.state.reset()
        self.render(())
        self.logger.info(
            event=LogEvent.RING_CLEARED,
            message="Ring cleared"
        )

        surface = self.handle.surface
        if surface is not None:
            map_cfg = self.config.map
            surface.fly_to(
                GeoPoint.coerce(map_cfg.default_center),
                zoom=map_cfg.default_zoom,
                speed=map_cfg.fly_speed,
            )
            self.logger.info(
                event=LogEvent.CAMERA_RESET,
                message="Camera reset to default",
                metadata={'center': list(map_cfg.default_center), 'zoom': map_cfg.default_zoom}
            )
