"""
Scribble Data
=============

Bounded Context: Restaurant directory records.

- schemas.py: Restaurant (immutable record)
- loader.py: CSV dataset reader
"""

from scribble_data.schemas import Restaurant, to_number
from scribble_data.loader import load_restaurants, parse_location

__all__ = [
    "Restaurant",
    "to_number",
    "load_restaurants",
    "parse_location",
]
