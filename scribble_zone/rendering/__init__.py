"""
Rendering Layer
===============

Bounded Context: Ring overlay projection and drawing.

Responsibilities:
- Re-project geo rings on every viewport change
- Paint dashed outline + translucent fill
- Pixel buffer abstraction (DrawingSurface)

Non-responsibilities:
- Containment (handled by geometry)
- Gesture state (handled by capture)
"""

from scribble_zone.rendering.surface import DrawingSurface, FrameSurface, dash_segments
from scribble_zone.rendering.projector import RingProjector

__all__ = [
    "DrawingSurface",
    "FrameSurface",
    "dash_segments",
    "RingProjector",
]
