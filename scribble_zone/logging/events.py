"""
Structured Log Event Types
==========================

Bounded Context: Observability Event Taxonomy

Typed event names for the geofencing core.

Design:
- Enum-based (prevents typos, enables autocomplete)
- Hierarchical naming (namespace.category.action)
- Searchable in log aggregators

Event Naming Convention:
    <component>.<action>

    component: gesture, ring, filter, selection, camera, projection,
               viewport, dataset, geocode, cli
"""

from enum import Enum


class LogEvent(str, Enum):
    """
    Typed log event names for structured logging.

    Categories:
    - gesture.*: Pointer gesture lifecycle
    - ring.*: Ring commit / discard / clear
    - filter.*, selection.*: Spatial filter results
    - camera.*, projection.*, viewport.*: Map surface interaction
    - dataset.*, geocode.*: External collaborators
    - cli.*: Command-line failures
    """

    # ========== Gesture Events ==========
    DRAWING_MODE_CHANGED = "gesture.mode_changed"
    """Drawing mode switched on or off."""

    GESTURE_STARTED = "gesture.started"
    """Pointer pressed, capture started."""

    GESTURE_IGNORED = "gesture.ignored"
    """Pointer event arrived while capture was not possible."""

    # ========== Ring Events ==========
    RING_COMMITTED = "ring.committed"
    """Gesture finished with enough points to form a polygon."""

    RING_DISCARDED = "ring.discarded"
    """Gesture finished with fewer than 3 points."""

    RING_CLEARED = "ring.cleared"
    """User cleared the active ring."""

    # ========== Filter Events ==========
    FILTER_APPLIED = "filter.applied"
    """Filtered set recomputed."""

    SELECTION_CLEARED = "selection.cleared"
    """Selected restaurant fell outside the filtered set."""

    # ========== Map Surface Events ==========
    CAMERA_FIT = "camera.fit"
    """Camera fitted to the committed ring."""

    CAMERA_RESET = "camera.reset"
    """Camera returned to its default position."""

    CAMERA_FLY = "camera.fly"
    """Camera moved to a point of interest."""

    PROJECTION_SKIPPED = "projection.skipped"
    """Reprojection requested while no map surface was mounted."""

    VIEWPORT_MOUNTED = "viewport.mounted"
    """Map surface attached to a map view."""

    VIEWPORT_UNMOUNTED = "viewport.unmounted"
    """Map surface detached from a map view."""

    VIEWPORT_RESIZED = "viewport.resized"
    """Map surface and drawing surface resized."""

    # ========== Collaborator Events ==========
    DATASET_LOADED = "dataset.loaded"
    """Restaurant dataset parsed."""

    GEOCODE_SUCCESS = "geocode.success"
    """External lookup resolved coordinates."""

    GEOCODE_FAILED = "geocode.failed"
    """External lookup failed (non-fatal)."""

    # ========== CLI Events ==========
    COMMAND_FAILED = "cli.command_failed"
    """A CLI command aborted with an error."""


# Event categories for filtering
GESTURE_EVENTS = {
    LogEvent.DRAWING_MODE_CHANGED,
    LogEvent.GESTURE_STARTED,
    LogEvent.GESTURE_IGNORED,
}

RING_EVENTS = {
    LogEvent.RING_COMMITTED,
    LogEvent.RING_DISCARDED,
    LogEvent.RING_CLEARED,
}

FILTER_EVENTS = {
    LogEvent.FILTER_APPLIED,
    LogEvent.SELECTION_CLEARED,
}

MAP_EVENTS = {
    LogEvent.CAMERA_FIT,
    LogEvent.CAMERA_RESET,
    LogEvent.CAMERA_FLY,
    LogEvent.PROJECTION_SKIPPED,
    LogEvent.VIEWPORT_MOUNTED,
    LogEvent.VIEWPORT_UNMOUNTED,
    LogEvent.VIEWPORT_RESIZED,
}

COLLABORATOR_EVENTS = {
    LogEvent.DATASET_LOADED,
    LogEvent.GEOCODE_SUCCESS,
    LogEvent.GEOCODE_FAILED,
}

CLI_EVENTS = {
    LogEvent.COMMAND_FAILED,
}
