"""
Restaurant Schema
=================

Bounded Context: Restaurant Directory Records

Design Principles:
- Immutability: frozen=True, records never change after load
- Serialization: to_dict() / from_dict() for JSON export
- Tolerant coordinates: missing or non-numeric source values become None
"""

import math
from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional


def to_number(value: Any) -> Optional[float]:
    """
    Parse a finite float, or return None.

    Example:
        >>> to_number(" 40.75 ")
        40.75
        >>> to_number("n/a") is None
        True
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


@dataclass(frozen=True)
class Restaurant:
    """
    Immutable restaurant record.

    Only `id`, `longitude` and `latitude` matter to spatial filtering; the
    rest is presentation data carried through untouched.

    Attributes:
        id: Opaque identifier
        name: Display name
        longitude: Decimal degrees, None when unknown
        latitude: Decimal degrees, None when unknown
    """

    id: str
    name: str = "Unknown"
    longitude: Optional[float] = None
    latitude: Optional[float] = None
    address: str = ""
    cuisine: str = "Local"
    phone: str = ""
    website: str = "#"
    description: str = ""
    rating: Optional[float] = None
    review_count: Optional[int] = None

    def __post_init__(self):
        if not self.id:
            raise ValueError("Restaurant id cannot be empty")

    @property
    def has_valid_coordinates(self) -> bool:
        """True when both coordinates are present and finite."""
        return (
            isinstance(self.longitude, (int, float))
            and isinstance(self.latitude, (int, float))
            and math.isfinite(self.longitude)
            and math.isfinite(self.latitude)
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to JSON-compatible dict."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Restaurant':
        """
        Deserialize from dict.

        Accepts `longitude`/`latitude` or the short `lng`/`lat` keys.

        Raises:
            ValueError: If `id` is missing
        """
        try:
            restaurant_id = str(data['id'])
        except KeyError as e:
            raise ValueError(f"Missing required Restaurant field: {e}")

        review_count = to_number(data.get('review_count'))
        return cls(
            id=restaurant_id,
            name=data.get('name') or "Unknown",
            longitude=to_number(data.get('longitude', data.get('lng'))),
            latitude=to_number(data.get('latitude', data.get('lat'))),
            address=data.get('address') or "",
            cuisine=data.get('cuisine') or "Local",
            phone=data.get('phone') or "",
            website=data.get('website') or "#",
            description=data.get('description') or "",
            rating=to_number(data.get('rating')),
            review_count=int(review_count) if review_count is not None else None,
        )
