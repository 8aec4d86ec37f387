"""
Map View Module
===============

Bounded Context: Per-view orchestration of the geofencing core.

Design:
- Orchestrator: capture + projection + spatial filter + selection
- One DrawState and one MapHandle per view, created with the view
- Mount/unmount lifecycle for the map surface
- Filtered set recomputed as a fresh tuple on every ring/dataset change
- Builder pattern for construction
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Tuple, Union

from scribble_data.schemas import Restaurant
from scribble_zone.capture.capturer import GestureCapturer
from scribble_zone.capture.state import DrawPhase, DrawState
from scribble_zone.config import ScribbleConfig
from scribble_zone.geometry.detector import SpatialFilter
from scribble_zone.geometry.shapes import GeoPoint, GeoRing, PixelPoint
from scribble_zone.logging import StructuredLogger, LogEvent, create_logger
from scribble_zone.maps.geocoding import LocationProvider, LookupResult, PostalCodeGeocoder
from scribble_zone.maps.viewport import MapHandle, MapSurface
from scribble_zone.rendering.projector import RingProjector
from scribble_zone.rendering.surface import DrawingSurface, FrameSurface

FilterListener = Callable[[Tuple[Restaurant, ...]], None]
SelectionListener = Callable[[Optional[Restaurant]], None]


@dataclass(frozen=True)
class Marker:
    """Map marker for one visible restaurant."""

    restaurant_id: str
    longitude: float
    latitude: float
    selected: bool = False


class MapView:
    """
    One interactive restaurant map.

    Usage:
        view = (
            MapViewBuilder()
            .with_restaurants(load_restaurants("restaurants.csv"))
            .build()
        )
        view.mount(MercatorViewport.from_config(view.config.map))

        view.set_drawing_mode(True)
        view.pointer_down(100, 100)
        view.pointer_move(300, 110)
        view.pointer_move(250, 300)
        view.pointer_up()

        visible = view.filtered_restaurants
    """

    def __init__(
        self,
        config: ScribbleConfig,
        drawing_surface: DrawingSurface,
        logger: Optional[StructuredLogger] = None,
    ):
        self.config = config
        self.logger = logger or create_logger("view")
        self.surface = drawing_surface

        self.handle = MapHandle()
        self.state = DrawState()
        self.projector = RingProjector(self.handle, drawing_surface, config.style, self.logger)
        self.capturer = GestureCapturer(
            self.handle,
            self.state,
            config,
            render=self.projector.render,
            logger=self.logger,
        )

        self._restaurants: Tuple[Restaurant, ...] = ()
        self._filtered: Tuple[Restaurant, ...] = ()
        self._selected_id: Optional[str] = None
        self._filter_listeners: List[FilterListener] = []
        self._selection_listeners: List[SelectionListener] = []
        self.user_location: Optional[GeoPoint] = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def is_mounted(self) -> bool:
        return self.handle.is_mounted

    def mount(self, map_surface: MapSurface) -> "MapView":
        """Attach the map surface and size the overlay to it."""
        self.handle.mount(map_surface)
        map_surface.add_move_listener(self._on_viewport_change)
        self.surface.resize(map_surface.width, map_surface.height)
        self._sync_interactions()
        self.projector.reproject_and_render(self.state, min_points=2)
        self.logger.info(
            event=LogEvent.VIEWPORT_MOUNTED,
            message="Map surface mounted",
            metadata={'width': map_surface.width, 'height': map_surface.height}
        )
        return self

    def unmount(self) -> None:
        """Detach the map surface; drawing state goes back to idle."""
        map_surface = self.handle.surface
        if map_surface is None:
            return

        map_surface.remove_move_listener(self._on_viewport_change)
        self.state.reset()
        self.capturer.set_drawing_mode(False)
        self.projector.render(())
        self.handle.dispose()
        self.logger.info(
            event=LogEvent.VIEWPORT_UNMOUNTED,
            message="Map surface unmounted"
        )
        self._refresh()

    def resize(self, width: int, height: int) -> None:
        """Resize map and overlay, then re-anchor any ring of 2+ points."""
        self.surface.resize(width, height)
        map_surface = self.handle.surface
        if map_surface is not None:
            # Re-anchored once below, with the lower point threshold
            map_surface.remove_move_listener(self._on_viewport_change)
            try:
                map_surface.resize(width, height)
            finally:
                map_surface.add_move_listener(self._on_viewport_change)
        self.projector.reproject_and_render(self.state, min_points=2)
        self.logger.info(
            event=LogEvent.VIEWPORT_RESIZED,
            message=f"Resized to {width}x{height}",
            metadata={'width': width, 'height': height}
        )

    def _on_viewport_change(self) -> None:
        self.projector.reproject_and_render(self.state)

    # ------------------------------------------------------------------
    # Drawing
    # ------------------------------------------------------------------

    @property
    def drawing_mode(self) -> bool:
        return self.capturer.drawing_mode

    @property
    def phase(self) -> DrawPhase:
        return self.state.phase

    @property
    def committed_ring(self) -> GeoRing:
        return self.state.committed_ring

    def set_drawing_mode(self, enabled: bool) -> None:
        """Enable/disable drawing; disabling mid-gesture commits or discards it."""
        was_drawing = self.capturer.is_drawing
        self.capturer.set_drawing_mode(enabled)
        self._sync_interactions()
        if was_drawing and not self.capturer.is_drawing:
            self._refresh()

    def toggle_drawing_mode(self) -> None:
        self.set_drawing_mode(not self.capturer.drawing_mode)

    def pointer_down(self, x: float, y: float) -> bool:
        return self.capturer.begin(PixelPoint(x=x, y=y))

    def pointer_move(self, x: float, y: float) -> bool:
        return self.capturer.extend(PixelPoint(x=x, y=y))

    def pointer_up(self) -> Optional[GeoRing]:
        if not self.capturer.is_drawing:
            return None
        ring = self.capturer.end()
        self._sync_interactions()
        self._refresh()
        return ring

    def pointer_leave(self) -> Optional[GeoRing]:
        return self.pointer_up()

    def clear_ring(self) -> None:
        self.capturer.clear()
        self._refresh()

    def _sync_interactions(self) -> None:
        map_surface = self.handle.surface
        if map_surface is not None:
            map_surface.set_interactions_enabled(not self.capturer.drawing_mode)

    # ------------------------------------------------------------------
    # Restaurants, filter and selection
    # ------------------------------------------------------------------

    @property
    def restaurants(self) -> Tuple[Restaurant, ...]:
        return self._restaurants

    @property
    def filtered_restaurants(self) -> Tuple[Restaurant, ...]:
        return self._filtered

    @property
    def selected_restaurant(self) -> Optional[Restaurant]:
        if self._selected_id is None:
            return None
        return next((r for r in self._filtered if r.id == self._selected_id), None)

    @property
    def markers(self) -> List[Marker]:
        return [
            Marker(
                restaurant_id=r.id,
                longitude=r.longitude,
                latitude=r.latitude,
                selected=r.id == self._selected_id,
            )
            for r in self._filtered
        ]

    def set_restaurants(self, restaurants: Iterable[Restaurant]) -> None:
        self._restaurants = tuple(restaurants)
        self._refresh()

    def add_filter_listener(self, listener: FilterListener) -> None:
        self._filter_listeners.append(listener)

    def add_selection_listener(self, listener: SelectionListener) -> None:
        self._selection_listeners.append(listener)

    def select(self, restaurant_id: str) -> bool:
        """
        Select a visible restaurant.

        Returns:
            False when the id is not in the filtered set
        """
        restaurant = next((r for r in self._filtered if r.id == restaurant_id), None)
        if restaurant is None:
            return False
        self._selected_id = restaurant_id
        self._notify_selection(restaurant)
        return True

    def focus_on_restaurant(self, restaurant_id: str) -> bool:
        """Select a restaurant and fly the camera to it."""
        if not self.select(restaurant_id):
            return False

        restaurant = self.selected_restaurant
        map_surface = self.handle.surface
        if map_surface is not None and restaurant is not None:
            map_cfg = self.config.map
            map_surface.fly_to(
                GeoPoint(lng=restaurant.longitude, lat=restaurant.latitude),
                zoom=map_cfg.focus_zoom,
                speed=map_cfg.fly_speed,
            )
            self.logger.info(
                event=LogEvent.CAMERA_FLY,
                message=f"Focused on {restaurant.name}",
                metadata={'restaurant_id': restaurant.id}
            )
        return True

    def handle_map_click(self) -> None:
        """A click on empty map clears the selection."""
        if self._selected_id is not None:
            self._selected_id = None
            self._notify_selection(None)

    def _refresh(self) -> None:
        ring = self.state.committed_ring
        self._filtered = tuple(SpatialFilter.filter(self._restaurants, ring))
        self.logger.info(
            event=LogEvent.FILTER_APPLIED,
            message=f"Filtered {len(self._filtered)} of {len(self._restaurants)} restaurants",
            metadata={
                'visible': len(self._filtered),
                'total': len(self._restaurants),
                'ring_points': len(ring),
            }
        )
        for listener in list(self._filter_listeners):
            listener(self._filtered)
        self._invalidate_selection()

    def _invalidate_selection(self) -> None:
        if self._selected_id is None:
            return
        if any(r.id == self._selected_id for r in self._filtered):
            return

        self.logger.info(
            event=LogEvent.SELECTION_CLEARED,
            message="Selection outside filtered set cleared",
            metadata={'restaurant_id': self._selected_id}
        )
        self._selected_id = None
        self._notify_selection(None)

    def _notify_selection(self, restaurant: Optional[Restaurant]) -> None:
        for listener in list(self._selection_listeners):
            listener(restaurant)

    # ------------------------------------------------------------------
    # Camera helpers backed by external lookups
    # ------------------------------------------------------------------

    def reset_camera(self) -> None:
        map_surface = self.handle.surface
        if map_surface is None:
            return
        map_cfg = self.config.map
        map_surface.fly_to(
            GeoPoint.coerce(map_cfg.default_center),
            zoom=map_cfg.default_zoom,
            speed=map_cfg.fly_speed,
        )
        self.logger.info(event=LogEvent.CAMERA_RESET, message="Camera reset to default")

    def search_postal_code(self, postal_code: str, geocoder: PostalCodeGeocoder) -> LookupResult:
        """
        Centre the map on a postal code. An empty code resets the camera;
        a failed lookup leaves the camera where it is.
        """
        if not self.is_mounted:
            return LookupResult.failure("map not mounted")

        code = (postal_code or "").strip()
        if not code:
            self.reset_camera()
            return LookupResult.failure("empty postal code")

        result = geocoder.lookup(code)
        if result.ok:
            map_cfg = self.config.map
            self.handle.surface.fly_to(
                result.coordinates,
                zoom=map_cfg.postal_code_zoom,
                speed=map_cfg.fly_speed,
            )
            self.logger.info(
                event=LogEvent.CAMERA_FLY,
                message=f"Centered on postal code {code}",
                metadata={'postal_code': code}
            )
        return result

    def locate_user(self, provider: LocationProvider) -> LookupResult:
        """Centre the map on the device location, if available."""
        if not self.is_mounted:
            return LookupResult.failure("map not mounted")

        result = provider.locate()
        if not result.ok:
            self.logger.warning(
                event=LogEvent.GEOCODE_FAILED,
                message=f"Device location unavailable: {result.reason}"
            )
            return result

        self.user_location = result.coordinates
        self.handle.surface.fly_to(
            result.coordinates,
            zoom=self.config.map.user_location_zoom,
            speed=self.config.map.fly_speed,
        )
        return result


class MapViewBuilder:
    """
    Builder for MapView.

    Usage:
        view = (
            MapViewBuilder()
            .with_config_file("config/scribble.example.yaml")
            .with_restaurants(restaurants)
            .with_map(MercatorViewport(1280, 720, GeoPoint(-73.975, 40.752), 13))
            .build()
        )
    """

    def __init__(self):
        self._config: Optional[ScribbleConfig] = None
        self._surface: Optional[DrawingSurface] = None
        self._restaurants: Tuple[Restaurant, ...] = ()
        self._map_surface: Optional[MapSurface] = None
        self._logger: Optional[StructuredLogger] = None

    def with_config(self, config: ScribbleConfig) -> "MapViewBuilder":
        self._config = config
        return self

    def with_config_file(self, path: Union[str, Path]) -> "MapViewBuilder":
        self._config = ScribbleConfig.from_yaml(path)
        return self

    def with_surface(self, surface: DrawingSurface) -> "MapViewBuilder":
        """Set the overlay drawing surface (default: FrameSurface)."""
        self._surface = surface
        return self

    def with_restaurants(self, restaurants: Iterable[Restaurant]) -> "MapViewBuilder":
        self._restaurants = tuple(restaurants)
        return self

    def with_map(self, map_surface: MapSurface) -> "MapViewBuilder":
        """Mount this map surface at build time."""
        self._map_surface = map_surface
        return self

    def with_logger(self, logger: StructuredLogger) -> "MapViewBuilder":
        self._logger = logger
        return self

    def build(self) -> MapView:
        config = self._config or ScribbleConfig()
        surface = self._surface
        if surface is None:
            width, height = config.map.viewport_wh
            surface = FrameSurface(width=width, height=height)

        view = MapView(config, surface, logger=self._logger)
        view.set_restaurants(self._restaurants)
        if self._map_surface is not None:
            view.mount(self._map_surface)
        return view
