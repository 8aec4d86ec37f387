"""
Scribble Zone
=============

Bounded Context: Freehand geofencing over a restaurant map.

Design Philosophy:
- Separation of Concerns: Geometry, Capture, Rendering, Map separated
- Geographic coordinates are the truth; pixels are re-derived on demand
- Nothing fatal: bad input degrades to "no filter" or "no-op"

Architecture:

    scribble_zone/
    ├── geometry/          # Pure geometry (immutable, stateless)
    │   ├── shapes.py      # GeoPoint, PixelPoint, BoundingBox, GeoRing
    │   └── detector.py    # SpatialFilter (point-in-polygon over restaurants)
    │
    ├── capture/           # Gesture capture (stateful)
    │   ├── state.py       # DrawState, DrawPhase
    │   └── capturer.py    # GestureCapturer
    │
    ├── rendering/         # Overlay (projection + drawing)
    │   ├── surface.py     # DrawingSurface, FrameSurface
    │   └── projector.py   # RingProjector
    │
    ├── maps/              # Map surface + external lookups
    │   ├── viewport.py    # MapSurface, MapHandle, MercatorViewport
    │   └── geocoding.py   # LookupResult, PostalCodeGeocoder
    │
    ├── logging/           # Structured JSON logs
    ├── config.py          # ScribbleConfig (YAML)
    └── view.py            # MapView orchestration + builder

Usage:

    from scribble_zone import MapViewBuilder, MercatorViewport, filter_restaurants

    view = MapViewBuilder().with_restaurants(restaurants).build()
    view.mount(MercatorViewport.from_config(view.config.map))

    view.set_drawing_mode(True)
    view.pointer_down(100, 100)
    view.pointer_move(400, 120)
    view.pointer_move(300, 400)
    view.pointer_up()

    view.filtered_restaurants

    # Or filter directly (pure function)
    filter_restaurants(restaurants, [(-74, 40.7), (-73, 40.7), (-73, 41), (-74, 41)])
"""

# Geometry Layer (immutable, stateless)
from scribble_zone.geometry.shapes import GeoPoint, PixelPoint, BoundingBox, GeoRing
from scribble_zone.geometry.detector import SpatialFilter, filter_restaurants

# Map Layer
from scribble_zone.maps.viewport import MapSurface, MapHandle, MercatorViewport, CameraMove
from scribble_zone.maps.geocoding import LookupResult, PostalCodeGeocoder, StaticLocationProvider

# Capture Layer (stateful)
from scribble_zone.capture.state import DrawPhase, DrawState
from scribble_zone.capture.capturer import GestureCapturer

# Rendering Layer
from scribble_zone.rendering.surface import DrawingSurface, FrameSurface
from scribble_zone.rendering.projector import RingProjector

# Orchestration
from scribble_zone.config import ScribbleConfig
from scribble_zone.view import MapView, MapViewBuilder, Marker

__all__ = [
    # Geometry
    "GeoPoint",
    "PixelPoint",
    "BoundingBox",
    "GeoRing",
    "SpatialFilter",
    "filter_restaurants",
    # Map
    "MapSurface",
    "MapHandle",
    "MercatorViewport",
    "CameraMove",
    "LookupResult",
    "PostalCodeGeocoder",
    "StaticLocationProvider",
    # Capture
    "DrawPhase",
    "DrawState",
    "GestureCapturer",
    # Rendering
    "DrawingSurface",
    "FrameSurface",
    "RingProjector",
    # Orchestration
    "ScribbleConfig",
    "MapView",
    "MapViewBuilder",
    "Marker",
]

__version__ = "1.0.0"
