"""
Capture Layer
=============

Bounded Context: Freehand gesture -> geographic ring (stateful).

Responsibilities:
- Drawing lifecycle (idle / drawing / committed)
- Pointer sampling with a minimum pixel distance
- Commit-or-discard and camera fit on commit
"""

from scribble_zone.capture.state import DrawPhase, DrawState, DrawSnapshot
from scribble_zone.capture.capturer import GestureCapturer

__all__ = [
    "DrawPhase",
    "DrawState",
    "DrawSnapshot",
    "GestureCapturer",
]
