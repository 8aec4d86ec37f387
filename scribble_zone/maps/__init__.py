"""
Map Surface Layer
=================

Bounded Context: The map the geofencing core draws over.

Responsibilities:
- Screen <-> geographic projection (MapSurface, MercatorViewport)
- Camera instructions (fit, fly, jump)
- Component-owned mount slot (MapHandle)
- Best-effort external lookups (LookupResult, PostalCodeGeocoder)
"""

from scribble_zone.maps.viewport import MapSurface, MapHandle, MercatorViewport, CameraMove
from scribble_zone.maps.geocoding import (
    LookupResult,
    LocationProvider,
    StaticLocationProvider,
    PostalCodeGeocoder,
)

__all__ = [
    "MapSurface",
    "MapHandle",
    "MercatorViewport",
    "CameraMove",
    "LookupResult",
    "LocationProvider",
    "StaticLocationProvider",
    "PostalCodeGeocoder",
]
