"""
Seeded Slide Decorations - Engine Package

Deterministic background artwork for slide containers: seed derivation,
the mulberry32 stream, placement with non-overlap and center avoidance,
five shape generators, the composer and the HTML renderer.
"""

from .composer import build_content, build_overlay, compose, layer_counts, overlay_attributes
from .layout_engine import PlacementEngine, edge_bias
from .motif_generators import (
    GENERATORS,
    gen_blob,
    gen_circle,
    gen_confetti,
    gen_line,
    gen_triangle,
    generate_shape,
)
from .render import decorate_html, parse_inset_px, render_all, render_fragments, render_one
from .rng import Mulberry32, clamp, lerp, pick
from .sdk import (  # Constants; Enums; Models; Resolver
    CONFETTI_ATTEMPTS,
    DEFAULT_COLORS,
    MAX_DENSITY,
    MAX_LAYERS,
    MIN_LAYERS,
    SINGLE_SHAPE_ATTEMPTS,
    BBox,
    DecorConfig,
    Location,
    SeedMode,
    ShapeKind,
    ShapesConfig,
    resolve_config,
)
from .seed import build_seed_string, derive_seed, fnv1a32

__version__ = "0.1.0"
__all__ = [
    "CONFETTI_ATTEMPTS",
    "DEFAULT_COLORS",
    "MAX_DENSITY",
    "MAX_LAYERS",
    "MIN_LAYERS",
    "SINGLE_SHAPE_ATTEMPTS",
    "ShapeKind",
    "SeedMode",
    "BBox",
    "Location",
    "ShapesConfig",
    "DecorConfig",
    "resolve_config",
    "fnv1a32",
    "build_seed_string",
    "derive_seed",
    "Mulberry32",
    "lerp",
    "clamp",
    "pick",
    "PlacementEngine",
    "edge_bias",
    "GENERATORS",
    "gen_circle",
    "gen_triangle",
    "gen_line",
    "gen_confetti",
    "gen_blob",
    "generate_shape",
    "layer_counts",
    "build_content",
    "compose",
    "overlay_attributes",
    "build_overlay",
    "parse_inset_px",
    "render_one",
    "render_all",
    "decorate_html",
    "render_fragments",
]
