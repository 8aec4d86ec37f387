"""
Restaurant Dataset Loader
=========================

Reads the directory CSV into immutable Restaurant records.

Expected header (case-insensitive, trimmed):
    restaurant name, category, website, phone, address, city, state,
    zip code, location

`location` holds "lat, lng".
"""

import csv
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple, Union

from scribble_data.schemas import Restaurant, to_number
from scribble_zone.logging import StructuredLogger, LogEvent, create_logger


def parse_location(value: Optional[str]) -> Tuple[Optional[float], Optional[float]]:
    """
    Split a "lat, lng" cell into (lat, lng).

    Example:
        >>> parse_location("40.75, -73.98")
        (40.75, -73.98)
        >>> parse_location("40.75")
        (None, None)
    """
    if not value:
        return None, None
    parts = [p.strip() for p in value.split(',') if p.strip()]
    if len(parts) < 2:
        return None, None
    return to_number(parts[0]), to_number(parts[1])


def _row_to_restaurant(headers: Sequence[str], row: Sequence[str], index: int) -> Restaurant:
    def get(key: str) -> str:
        try:
            idx = headers.index(key)
        except ValueError:
            return ""
        return row[idx].strip() if idx < len(row) and row[idx] else ""

    name = get('restaurant name')
    lat, lng = parse_location(get('location'))
    address = ", ".join(
        part for part in (get('address'), get('city'), get('state'), get('zip code')) if part
    )

    return Restaurant(
        id=f"{name or 'row'}-{index}",
        name=name or "Unknown",
        longitude=lng,
        latitude=lat,
        address=address,
        cuisine=get('category') or "Local",
        phone=get('phone'),
        website=get('website') or "#",
    )


def load_restaurants(
    csv_path: Union[str, Path],
    logger: Optional[StructuredLogger] = None,
) -> List[Restaurant]:
    """
    Load restaurants from a CSV file.

    Blank rows are skipped; rows with unusable locations are kept with
    None coordinates (the spatial filter excludes them).

    Raises:
        FileNotFoundError: If the file does not exist
    """
    path = Path(csv_path)
    if not path.exists():
        raise FileNotFoundError(f"Dataset not found: {csv_path}")

    logger = logger or create_logger("dataset")

    with open(path, newline='', encoding='utf-8') as f:
        rows = [
            row for row in csv.reader(f)
            if row and any(cell.strip() for cell in row)
        ]

    if not rows:
        logger.warning(
            event=LogEvent.DATASET_LOADED,
            message="Dataset is empty",
            metadata={'path': str(path)}
        )
        return []

    headers = [h.strip().lower() for h in rows[0]]
    restaurants = [
        _row_to_restaurant(headers, row, idx)
        for idx, row in enumerate(rows[1:])
    ]

    stats: Dict[str, int] = {
        'total': len(restaurants),
        'with_coordinates': sum(1 for r in restaurants if r.has_valid_coordinates),
    }
    logger.info(
        event=LogEvent.DATASET_LOADED,
        message=f"Loaded {stats['total']} restaurants",
        metadata={'path': str(path), **stats}
    )
    return restaurants
