#!/usr/bin/env python3
"""
Procedural Motif Generators for Seeded Slide Decorations

Each generator samples a position through the placement engine, and on
success draws one SVG primitive (or, for confetti, a small cluster of them).
All functions are deterministic given the same random stream and engine state.
"""

import math
from typing import Callable, Dict, List, Optional, Tuple

from deckart.core import get_logger

from .layout_engine import PlacementEngine
from .rng import Rng, lerp, pick
from .sdk import CONFETTI_ATTEMPTS, SINGLE_SHAPE_ATTEMPTS, BBox, DecorConfig, ShapeKind

log = get_logger("seeded_svg.motifs")

Generator = Callable[[Rng, DecorConfig, PlacementEngine], Optional[str]]

# Vertex offsets for triangles; deliberately not 120 degrees apart.
TRIANGLE_OFFSETS = (0.0, 2.1, 4.2)
BLOB_MAX_JITTER = 1.35


# ============================================================================
# UTILITY FUNCTIONS
# ============================================================================


def _f1(v: float) -> str:
    return f"{v:.1f}"


def _paint(rng: Rng, cfg: DecorConfig) -> Tuple[str, float]:
    """Draw a palette color and an opacity from the configured range."""
    color = pick(rng, cfg.colors)
    low, high = cfg.opacity_range
    return color, lerp(low, high, rng())


def _envelope(points: List[Tuple[float, float]], grow: float = 0.0) -> BBox:
    xs = [p[0] for p in points]
    ys = [p[1] for p in points]
    min_x, min_y = min(xs), min(ys)
    return BBox(
        min_x - grow,
        min_y - grow,
        max(xs) - min_x + grow * 2,
        max(ys) - min_y + grow * 2,
    )


# ============================================================================
# SHAPE GENERATORS
# ============================================================================


def gen_circle(rng: Rng, cfg: DecorConfig, engine: PlacementEngine) -> Optional[str]:
    """Circle with radius between 10px and 12% of the shorter side."""
    r = lerp(10, engine.min_dim * 0.12, rng())

    def candidate(x, y):
        return BBox(x - r, y - r, r * 2, r * 2), (x, y)

    placed = engine.try_place(rng, candidate, SINGLE_SHAPE_ATTEMPTS)
    if placed is None:
        return None
    x, y = placed
    fill, opacity = _paint(rng, cfg)
    return (
        f'<circle cx="{_f1(x)}" cy="{_f1(y)}" r="{_f1(r)}" '
        f'fill="{fill}" fill-opacity="{opacity:.3f}" />'
    )


def gen_triangle(rng: Rng, cfg: DecorConfig, engine: PlacementEngine) -> Optional[str]:
    """Irregular triangle sized between 16px and 18% of the shorter side."""

    def candidate(x, y):
        size = lerp(16, engine.min_dim * 0.18, rng())
        rot = rng() * math.pi * 2
        points = [
            (x + math.cos(rot + off) * size, y + math.sin(rot + off) * size)
            for off in TRIANGLE_OFFSETS
        ]
        return _envelope(points), points

    points = engine.try_place(rng, candidate, SINGLE_SHAPE_ATTEMPTS)
    if points is None:
        return None
    fill, opacity = _paint(rng, cfg)
    coords = " ".join(f"{_f1(px)},{_f1(py)}" for px, py in points)
    return f'<polygon points="{coords}" fill="{fill}" fill-opacity="{opacity:.3f}" />'


def gen_line(rng: Rng, cfg: DecorConfig, engine: PlacementEngine) -> Optional[str]:
    """Round-capped stroke of 15%-65% of the shorter side."""
    sw_low, sw_high = cfg.stroke_width_range

    def candidate(x1, y1):
        angle = rng() * math.pi * 2
        length = lerp(engine.min_dim * 0.15, engine.min_dim * 0.65, rng())
        x2 = x1 + math.cos(angle) * length
        y2 = y1 + math.sin(angle) * length
        sw = lerp(sw_low, sw_high, rng())
        return _envelope([(x1, y1), (x2, y2)], grow=sw), (x1, y1, x2, y2, sw)

    placed = engine.try_place(rng, candidate, SINGLE_SHAPE_ATTEMPTS)
    if placed is None:
        return None
    x1, y1, x2, y2, sw = placed
    stroke, opacity = _paint(rng, cfg)
    return (
        f'<line x1="{_f1(x1)}" y1="{_f1(y1)}" x2="{_f1(x2)}" y2="{_f1(y2)}" '
        f'stroke="{stroke}" stroke-width="{sw:.2f}" stroke-opacity="{opacity:.3f}" '
        f'stroke-linecap="round" />'
    )


def gen_confetti(rng: Rng, cfg: DecorConfig, engine: PlacementEngine) -> Optional[str]:
    """
    Cluster of 6-17 small rotated pills.

    Every piece gets its own bounded retry; pieces that do not fit are
    skipped and the cluster as a whole is never rejected.
    """
    count = math.floor(lerp(6, 18, rng()))

    def candidate(x, y):
        ww = lerp(6, 18, rng())
        hh = lerp(3, 10, rng())
        return BBox(x - ww / 2, y - hh / 2, ww, hh), (x, y, ww, hh)

    pieces = []
    for _ in range(count):
        placed = engine.try_place(rng, candidate, CONFETTI_ATTEMPTS)
        if placed is None:
            continue
        x, y, ww, hh = placed
        rot = lerp(-35, 35, rng())
        fill, opacity = _paint(rng, cfg)
        pieces.append(
            f'<rect x="{_f1(x - ww / 2)}" y="{_f1(y - hh / 2)}" '
            f'width="{_f1(ww)}" height="{_f1(hh)}" fill="{fill}" '
            f'fill-opacity="{opacity:.3f}" '
            f'transform="rotate({_f1(rot)} {_f1(x)} {_f1(y)})" rx="{_f1(hh / 2)}" />'
        )
    if not pieces:
        return None
    log.debug(f"Confetti placed {len(pieces)}/{count} pieces")
    return "".join(pieces)


def gen_blob(rng: Rng, cfg: DecorConfig, engine: PlacementEngine) -> Optional[str]:
    """Organic closed polygon with 7-11 jittered vertices."""

    def candidate(cx, cy):
        base = lerp(engine.min_dim * 0.08, engine.min_dim * 0.22, rng())
        # Box covers the largest possible jitter, not the drawn outline.
        size = base * BLOB_MAX_JITTER * 2
        return BBox(cx - size / 2, cy - size / 2, size, size), (cx, cy, base)

    placed = engine.try_place(rng, candidate, SINGLE_SHAPE_ATTEMPTS)
    if placed is None:
        return None
    cx, cy, base = placed

    n_points = 7 + math.floor(rng() * 5)
    segments = []
    for i in range(n_points):
        a = (i / n_points) * math.pi * 2
        r = base * lerp(0.65, BLOB_MAX_JITTER, rng())
        x = cx + math.cos(a) * r
        y = cy + math.sin(a) * r
        segments.append(f"{'M' if i == 0 else 'L'} {_f1(x)} {_f1(y)}")
    d = " ".join(segments) + " Z"
    fill, opacity = _paint(rng, cfg)
    return f'<path d="{d}" fill="{fill}" fill-opacity="{opacity:.3f}" />'


GENERATORS: Dict[ShapeKind, Generator] = {
    ShapeKind.CIRCLE: gen_circle,
    ShapeKind.TRIANGLE: gen_triangle,
    ShapeKind.LINE: gen_line,
    ShapeKind.CONFETTI: gen_confetti,
    ShapeKind.BLOB: gen_blob,
}


def generate_shape(
    kind: ShapeKind, rng: Rng, cfg: DecorConfig, engine: PlacementEngine
) -> Optional[str]:
    return GENERATORS[kind](rng, cfg, engine)
