#!/usr/bin/env python3
"""
Core SDK for Seeded Slide Decorations

This module provides the single source of truth for types, constants and the
effective configuration. All seeded modules import from this file to avoid drift.
"""

import math
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union
from urllib.parse import urlsplit

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from deckart.core import get_logger
from deckart.utils.config import deep_merge

log = get_logger("seeded_svg.sdk")


# ============================================================================
# CONSTANTS
# ============================================================================

DEFAULT_SLIDE_W = 1280
DEFAULT_SLIDE_H = 720
DEFAULT_FONT_SIZE_PX = 16.0
MIN_SURFACE_PX = 10

MAX_DENSITY = 400
MIN_LAYERS = 1
MAX_LAYERS = 10

SINGLE_SHAPE_ATTEMPTS = 20
CONFETTI_ATTEMPTS = 10

OVERLAY_CLASS = "seeded-svg-overlay"
CONTAINER_CLASS = "seeded-svg-container"
STYLE_ID = "seeded-svg-style"
SVG_NS = "http://www.w3.org/2000/svg"

DEFAULT_COLORS = ["#0B3D91", "#00A3A3", "#FFB000", "#E84855", "#5E2BFF"]


class ShapeKind(str, Enum):
    CIRCLE = "circle"
    TRIANGLE = "triangle"
    LINE = "line"
    CONFETTI = "confetti"
    BLOB = "blob"


# Enabled-kind order is fixed; the composer picks uniformly from this order.
SHAPE_FLAGS: Dict[ShapeKind, str] = {
    ShapeKind.CIRCLE: "circles",
    ShapeKind.TRIANGLE: "triangles",
    ShapeKind.LINE: "lines",
    ShapeKind.CONFETTI: "confetti",
    ShapeKind.BLOB: "blobs",
}


class SeedMode(str, Enum):
    HASH = "hash"
    PATH = "path"
    FULL = "full"
    HASH_PATH = "hash+path"
    HASH_SLIDE = "hash+slide"


# ============================================================================
# VALUE TYPES
# ============================================================================


@dataclass(frozen=True)
class BBox:
    """Axis-aligned bounding box in inset-local pixels."""

    x: float
    y: float
    w: float
    h: float

    def intersects(self, other: "BBox") -> bool:
        # Half-open intervals: boxes that only share an edge do not overlap.
        return (
            self.x < other.x + other.w
            and other.x < self.x + self.w
            and self.y < other.y + other.h
            and other.y < self.y + self.h
        )


@dataclass(frozen=True)
class Location:
    """The page location a deck is rendered for."""

    href: str = ""
    pathname: str = ""
    search: str = ""
    hash: str = "#"

    @classmethod
    def from_url(cls, url: Optional[str]) -> "Location":
        if not url:
            return cls()
        parts = urlsplit(url)
        return cls(
            href=url,
            pathname=parts.path or "",
            search=f"?{parts.query}" if parts.query else "",
            hash=f"#{parts.fragment}" if parts.fragment else "#",
        )

    def with_hash(self, fragment: str) -> "Location":
        """Return the same location pointing at another fragment."""
        frag = fragment if fragment.startswith("#") else f"#{fragment}"
        base = self.href.split("#", 1)[0]
        return Location(href=base + frag, pathname=self.pathname, search=self.search, hash=frag)


# ============================================================================
# PYDANTIC MODELS
# ============================================================================


def _describe(value: Any) -> str:
    if isinstance(value, int) and not isinstance(value, bool) and value.bit_length() > 64:
        return f"<int of {value.bit_length()} bits>"
    return repr(value)


def _finite(value: Any) -> float:
    if isinstance(value, bool):
        raise ValueError("boolean is not a number")
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        raise ValueError(f"{_describe(value)} is not a representable number")
    if not math.isfinite(number):
        raise ValueError(f"{value!r} is not a finite number")
    return number


def _ordered_pair(value: Any) -> Tuple[float, float]:
    if isinstance(value, (str, bytes)) or not hasattr(value, "__iter__"):
        raise ValueError("range must be a [low, high] pair")
    items = list(value)
    if len(items) != 2:
        raise ValueError("range must have exactly two values")
    low, high = sorted(_finite(v) for v in items)
    return low, high


class ShapesConfig(BaseModel):
    """Which shape kinds the composer may draw."""

    model_config = ConfigDict(extra="ignore")

    circles: bool = True
    triangles: bool = True
    lines: bool = True
    confetti: bool = True
    blobs: bool = True

    @field_validator("*", mode="before")
    @classmethod
    def coerce_flag(cls, v):
        return bool(v)

    def enabled(self) -> List[ShapeKind]:
        return [kind for kind, flag in SHAPE_FLAGS.items() if getattr(self, flag)]


class DecorConfig(BaseModel):
    """Effective configuration for one render pass."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    target_selector: str = Field(".slide", alias="targetSelector")
    position: str = "afterbegin"
    seed_mode: str = Field(SeedMode.HASH_SLIDE.value, alias="seedMode")
    inset: Union[float, str] = "1em"
    density: int = 24
    layers: int = 3
    colors: List[str] = Field(default_factory=lambda: list(DEFAULT_COLORS))
    background: str = "transparent"
    opacity_range: Tuple[float, float] = Field((0.08, 0.22), alias="opacityRange")
    stroke_width_range: Tuple[float, float] = Field((1.0, 3.0), alias="strokeWidthRange")
    shapes: ShapesConfig = Field(default_factory=ShapesConfig)
    avoid_center: bool = Field(True, alias="avoidCenter")
    center_avoid_radius: float = Field(0.22, alias="centerAvoidRadius")
    z_index: int = Field(0, alias="zIndex")
    theme_by_hash: Dict[str, Dict[str, Any]] = Field(default_factory=dict, alias="themeByHash")

    @field_validator("target_selector", mode="before")
    @classmethod
    def validate_selector(cls, v):
        if not isinstance(v, str) or not v.strip():
            raise ValueError("target selector must be a non-empty string")
        return v.strip()

    @field_validator("position", mode="before")
    @classmethod
    def validate_position(cls, v):
        return "beforeend" if str(v).lower() in ("beforeend", "end") else "afterbegin"

    @field_validator("seed_mode", mode="before")
    @classmethod
    def validate_seed_mode(cls, v):
        if isinstance(v, SeedMode):
            return v.value
        return str(v)

    @field_validator("inset", mode="before")
    @classmethod
    def validate_inset(cls, v):
        if v is None:
            return "1em"
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return _finite(v)
        return str(v)

    @field_validator("density", mode="before")
    @classmethod
    def clamp_density(cls, v):
        return max(0, min(MAX_DENSITY, int(_finite(v))))

    @field_validator("layers", mode="before")
    @classmethod
    def clamp_layers(cls, v):
        return max(MIN_LAYERS, min(MAX_LAYERS, int(_finite(v))))

    @field_validator("colors", mode="before")
    @classmethod
    def validate_colors(cls, v):
        if isinstance(v, str):
            v = [v]
        if not isinstance(v, (list, tuple)):
            raise ValueError("colors must be a list of color values")
        colors = [str(c) for c in v if c is not None and str(c).strip()]
        if not colors:
            raise ValueError("palette needs at least one color")
        return colors

    @field_validator("background", mode="before")
    @classmethod
    def validate_background(cls, v):
        return str(v) if v else "transparent"

    @field_validator("opacity_range", mode="before")
    @classmethod
    def validate_opacity_range(cls, v):
        low, high = _ordered_pair(v)
        return max(0.0, min(1.0, low)), max(0.0, min(1.0, high))

    @field_validator("stroke_width_range", mode="before")
    @classmethod
    def validate_stroke_range(cls, v):
        low, high = _ordered_pair(v)
        return max(0.0, low), max(0.0, high)

    @field_validator("avoid_center", mode="before")
    @classmethod
    def coerce_avoid_center(cls, v):
        return bool(v)

    @field_validator("center_avoid_radius", mode="before")
    @classmethod
    def validate_center_radius(cls, v):
        if v is None:
            return 0.22
        return max(0.0, _finite(v))

    @field_validator("z_index", mode="before")
    @classmethod
    def validate_z_index(cls, v):
        return int(_finite(v))

    @field_validator("theme_by_hash", mode="before")
    @classmethod
    def validate_themes(cls, v):
        if v is None:
            return {}
        if not isinstance(v, Mapping):
            raise ValueError("theme_by_hash must map fragments to overrides")
        return {str(k): dict(o) for k, o in v.items() if isinstance(o, Mapping)}

    def enabled_kinds(self) -> List[ShapeKind]:
        return self.shapes.enabled()


# Accept both the field name and its camelCase alias as an input key.
_FIELD_NAMES: Dict[str, str] = {}
for _name, _field in DecorConfig.model_fields.items():
    _FIELD_NAMES[_name] = _name
    if _field.alias:
        _FIELD_NAMES[_field.alias] = _name


# ============================================================================
# CONFIG RESOLVER
# ============================================================================


def _merge_known(base: Dict[str, Any], override: Mapping) -> Dict[str, Any]:
    out = dict(base)
    for key, value in override.items():
        name = _FIELD_NAMES.get(key)
        if name is None:
            log.debug(f"Ignoring unknown config key: {key}")
            continue
        current = out.get(name)
        if isinstance(current, dict) and isinstance(value, Mapping):
            out[name] = deep_merge(current, dict(value))
        else:
            out[name] = value
    return out


def _validate_with_fallback(merged: Dict[str, Any], fallback: Dict[str, Any]) -> DecorConfig:
    data = dict(merged)
    while True:
        try:
            return DecorConfig(**data)
        except ValidationError as e:
            bad = set()
            for err in e.errors():
                loc = err.get("loc") or ()
                name = _FIELD_NAMES.get(str(loc[0])) if loc else None
                if name and data.get(name) is not fallback.get(name):
                    bad.add(name)
            if not bad:
                log.warning("Config could not be repaired; using defaults")
                return DecorConfig(**fallback)
            for name in sorted(bad):
                log.warning(f"Invalid value for {name!r}: {_describe(data.get(name))}; keeping default")
                data[name] = fallback[name]


def resolve_config(
    defaults: Union[DecorConfig, Mapping, None] = None,
    override: Union[DecorConfig, Mapping, None] = None,
) -> DecorConfig:
    """
    Merge a partial override over defaults into an effective configuration.

    Object-valued fields (``shapes`` and ``theme_by_hash``) merge per key;
    lists and scalars replace the default wholesale. Unknown keys are ignored
    and invalid values fall back to the default for that field, so this never
    raises.

    Args:
        defaults: Base configuration (built-in defaults when None)
        override: Partial configuration as a mapping or a DecorConfig

    Returns:
        Validated DecorConfig
    """
    if isinstance(defaults, DecorConfig):
        base = defaults
    elif isinstance(defaults, Mapping):
        base = resolve_config(None, defaults)
    else:
        base = DecorConfig()

    if isinstance(override, DecorConfig):
        override = override.model_dump(exclude_unset=True)
    if not isinstance(override, Mapping):
        if override is not None:
            log.debug(f"Ignoring non-mapping config override: {type(override).__name__}")
        return base.model_copy(deep=True)

    base_data = base.model_dump()
    merged = _merge_known(base_data, override)
    return _validate_with_fallback(merged, base_data)


__all__ = [
    "DEFAULT_SLIDE_W",
    "DEFAULT_SLIDE_H",
    "DEFAULT_FONT_SIZE_PX",
    "MIN_SURFACE_PX",
    "MAX_DENSITY",
    "MIN_LAYERS",
    "MAX_LAYERS",
    "SINGLE_SHAPE_ATTEMPTS",
    "CONFETTI_ATTEMPTS",
    "OVERLAY_CLASS",
    "CONTAINER_CLASS",
    "STYLE_ID",
    "SVG_NS",
    "DEFAULT_COLORS",
    "ShapeKind",
    "SHAPE_FLAGS",
    "SeedMode",
    "BBox",
    "Location",
    "ShapesConfig",
    "DecorConfig",
    "resolve_config",
]
