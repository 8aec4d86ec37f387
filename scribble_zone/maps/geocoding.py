"""
External Lookups
================

Best-effort coordinate lookups: postal-code geocoding and device
location. Failures come back as LookupResult.failure(reason); callers
decide whether to ignore them.
"""

import math
from dataclasses import dataclass
from typing import Optional, Protocol

import httpx

from scribble_zone.config import GeocoderConfig
from scribble_zone.geometry.shapes import GeoPoint
from scribble_zone.logging import StructuredLogger, LogEvent, create_logger


@dataclass(frozen=True)
class LookupResult:
    """
    Outcome of an external lookup.

    Exactly one of `coordinates` / `reason` is set.

    Example:
        >>> LookupResult.success(GeoPoint(-74.45, 40.49)).ok
        True
        >>> LookupResult.failure("no match").reason
        'no match'
    """

    coordinates: Optional[GeoPoint] = None
    reason: Optional[str] = None

    def __post_init__(self):
        if (self.coordinates is None) == (self.reason is None):
            raise ValueError("LookupResult needs exactly one of coordinates or reason")

    @classmethod
    def success(cls, coordinates: GeoPoint) -> 'LookupResult':
        return cls(coordinates=coordinates)

    @classmethod
    def failure(cls, reason: str) -> 'LookupResult':
        return cls(reason=reason)

    @property
    def ok(self) -> bool:
        return self.coordinates is not None


class LocationProvider(Protocol):
    """Device location source (host platform geolocation)."""

    def locate(self) -> LookupResult:
        ...


class StaticLocationProvider:
    """Location provider returning a fixed position, or a fixed failure."""

    def __init__(self, position: Optional[GeoPoint] = None, reason: str = "location unavailable"):
        self._position = position
        self._reason = reason

    def locate(self) -> LookupResult:
        if self._position is None:
            return LookupResult.failure(self._reason)
        return LookupResult.success(self._position)


class PostalCodeGeocoder:
    """
    Postal code -> coordinates via a Nominatim-compatible search API.

    Usage:
        with PostalCodeGeocoder(GeocoderConfig()) as geocoder:
            result = geocoder.lookup("08901")
            if result.ok:
                viewport.fly_to(result.coordinates, zoom=13)
    """

    def __init__(
        self,
        config: Optional[GeocoderConfig] = None,
        client: Optional[httpx.Client] = None,
        logger: Optional[StructuredLogger] = None,
    ):
        self.config = config or GeocoderConfig()
        self.logger = logger or create_logger("geocoder")
        self._owns_client = client is None
        self._client = client or httpx.Client(
            timeout=self.config.timeout_s,
            headers={"User-Agent": self.config.user_agent, "Accept": "application/json"},
        )

    def lookup(self, postal_code: str) -> LookupResult:
        """Resolve a postal code to its first matching coordinates."""
        code = (postal_code or "").strip()
        if not code:
            return self._fail(code, "empty postal code")

        params = {
            "format": "json",
            "limit": 1,
            "countrycodes": self.config.country_codes,
            "postalcode": code,
        }
        try:
            response = self._client.get(self.config.base_url, params=params)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            return self._fail(code, f"request failed: {exc}")

        try:
            payload = response.json()
        except ValueError:
            return self._fail(code, "invalid JSON response")

        if not isinstance(payload, list) or not payload:
            return self._fail(code, "no match")

        first = payload[0] if isinstance(payload[0], dict) else {}
        try:
            lat = float(first.get("lat"))
            lng = float(first.get("lon"))
        except (TypeError, ValueError):
            return self._fail(code, "malformed coordinates")

        if not (math.isfinite(lat) and math.isfinite(lng)):
            return self._fail(code, "malformed coordinates")

        point = GeoPoint(lng=lng, lat=lat)
        self.logger.info(
            event=LogEvent.GEOCODE_SUCCESS,
            message=f"Resolved postal code {code}",
            metadata={'postal_code': code, 'lng': lng, 'lat': lat}
        )
        return LookupResult.success(point)

    def _fail(self, code: str, reason: str) -> LookupResult:
        self.logger.warning(
            event=LogEvent.GEOCODE_FAILED,
            message=f"Postal code lookup failed: {reason}",
            metadata={'postal_code': code}
        )
        return LookupResult.failure(reason)

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "PostalCodeGeocoder":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
