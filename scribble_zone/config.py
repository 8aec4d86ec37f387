"""
Configuration schema for the Scribble Map view.

Tuning values for gesture capture, camera fitting, overlay style, map
defaults and the postal-code lookup client. Loaded from YAML and
validated at construction (frozen dataclasses).
"""

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Tuple, Union
import yaml

_HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}$")


@dataclass(frozen=True)
class CaptureConfig:
    """Pointer sampling for freehand rings."""

    min_sample_distance_px: float = 2.0

    def __post_init__(self):
        if self.min_sample_distance_px < 0:
            raise ValueError(
                f"min_sample_distance_px must be >= 0, got {self.min_sample_distance_px}"
            )


@dataclass(frozen=True)
class CameraFitConfig:
    """Camera fit issued when a ring is committed."""

    padding_px: int = 60
    max_zoom: float = 15.0
    duration_ms: int = 700

    def __post_init__(self):
        if self.padding_px < 0:
            raise ValueError(f"padding_px must be >= 0, got {self.padding_px}")
        if not 0 <= self.max_zoom <= 24:
            raise ValueError(f"max_zoom must be in [0, 24], got {self.max_zoom}")
        if self.duration_ms < 0:
            raise ValueError(f"duration_ms must be >= 0, got {self.duration_ms}")


@dataclass(frozen=True)
class OverlayStyle:
    """Dashed outline and translucent fill for the drawn ring."""

    stroke_color: str = "#FF4500"
    stroke_opacity: float = 0.8
    line_width: int = 3
    dash_pattern: Tuple[int, int] = (6, 6)
    fill_color: str = "#FF4500"
    fill_opacity: float = 0.08

    def __post_init__(self):
        for name in ("stroke_color", "fill_color"):
            value = getattr(self, name)
            if not _HEX_COLOR.match(value):
                raise ValueError(f"{name} must be a #RRGGBB hex color, got {value!r}")

        for name in ("stroke_opacity", "fill_opacity"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be in [0.0, 1.0], got {value}")

        if self.line_width < 1:
            raise ValueError(f"line_width must be >= 1, got {self.line_width}")

        if len(self.dash_pattern) != 2 or min(self.dash_pattern) <= 0:
            raise ValueError(
                f"dash_pattern must be two positive lengths, got {self.dash_pattern}"
            )


@dataclass(frozen=True)
class MapConfig:
    """Map surface defaults."""

    default_center: Tuple[float, float] = (-73.975, 40.752)  # (lng, lat)
    default_zoom: float = 13.0
    viewport_wh: Tuple[int, int] = (1280, 720)
    tile_size: int = 512
    focus_zoom: float = 14.5
    postal_code_zoom: float = 13.0
    user_location_zoom: float = 14.0
    fly_speed: float = 1.2

    def __post_init__(self):
        lng, lat = self.default_center
        if not (-180 <= lng <= 180 and -90 <= lat <= 90):
            raise ValueError(f"default_center out of range: {self.default_center}")

        width, height = self.viewport_wh
        if width <= 0 or height <= 0:
            raise ValueError(
                f"viewport_wh must have positive dimensions, got {self.viewport_wh}"
            )

        if self.tile_size <= 0:
            raise ValueError(f"tile_size must be > 0, got {self.tile_size}")


@dataclass(frozen=True)
class GeocoderConfig:
    """Postal-code lookup endpoint (Nominatim-compatible)."""

    base_url: str = "https://nominatim.openstreetmap.org/search"
    country_codes: str = "us"
    timeout_s: float = 8.0
    user_agent: str = "scribble-map/1.0"

    def __post_init__(self):
        if not self.base_url:
            raise ValueError("base_url cannot be empty")
        if self.timeout_s <= 0:
            raise ValueError(f"timeout_s must be > 0, got {self.timeout_s}")


@dataclass(frozen=True)
class ScribbleConfig:
    """
    Main configuration for a map view.

    Immutable after construction (frozen dataclass).
    """

    capture: CaptureConfig = field(default_factory=CaptureConfig)
    camera_fit: CameraFitConfig = field(default_factory=CameraFitConfig)
    style: OverlayStyle = field(default_factory=OverlayStyle)
    map: MapConfig = field(default_factory=MapConfig)
    geocoder: GeocoderConfig = field(default_factory=GeocoderConfig)

    @classmethod
    def from_yaml(cls, yaml_path: Union[str, Path]) -> "ScribbleConfig":
        """
        Load configuration from YAML file. Missing sections keep defaults.

        Example YAML:
            capture:
              min_sample_distance_px: 2

            camera_fit:
              padding_px: 60
              max_zoom: 15
              duration_ms: 700

            style:
              stroke_color: "#FF4500"
              dash_pattern: [6, 6]
              fill_opacity: 0.08

            map:
              default_center: [-73.975, 40.752]  # [lng, lat]
              default_zoom: 13
              viewport_wh: [1280, 720]

            geocoder:
              country_codes: "us"
              timeout_s: 8
        """
        with open(yaml_path) as f:
            data = yaml.safe_load(f) or {}

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict) -> "ScribbleConfig":
        style_data = dict(data.get("style") or {})
        if "dash_pattern" in style_data:
            style_data["dash_pattern"] = tuple(style_data["dash_pattern"])

        map_data = dict(data.get("map") or {})
        for key in ("default_center", "viewport_wh"):
            if key in map_data:
                map_data[key] = tuple(map_data[key])

        return cls(
            capture=CaptureConfig(**(data.get("capture") or {})),
            camera_fit=CameraFitConfig(**(data.get("camera_fit") or {})),
            style=OverlayStyle(**style_data),
            map=MapConfig(**map_data),
            geocoder=GeocoderConfig(**(data.get("geocoder") or {})),
        )
