"""
Scribble CLI - Command-line interface for the geofencing core.

Usage:
    scribble-cli filter restaurants.csv --ring-file ring.yaml
    scribble-cli replay restaurants.csv gesture.yaml --output overlay.png
    scribble-cli geocode 08901
"""

__version__ = "1.0.0"
