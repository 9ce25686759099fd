#!/usr/bin/env python3
"""
Composer for Seeded Slide Decorations

Distributes the configured shape count across layers, dispatches each unit to
a shape generator, and wraps the result into one decorative SVG surface.
"""

from typing import Dict, Optional

from deckart.core import get_logger

from .layout_engine import PlacementEngine
from .motif_generators import generate_shape
from .rng import Mulberry32, Rng, pick
from .sdk import MIN_SURFACE_PX, OVERLAY_CLASS, SVG_NS, DecorConfig

log = get_logger("seeded_svg.composer")


def layer_counts(density: int, layers: int):
    """Units per layer; the first layer absorbs the remainder."""
    per_layer, remainder = divmod(density, layers)
    return [per_layer + (remainder if layer == 0 else 0) for layer in range(layers)]


def build_content(
    rng: Rng,
    cfg: DecorConfig,
    width: float,
    height: float,
    engine: Optional[PlacementEngine] = None,
) -> str:
    """
    Generate all primitives for one surface, layer-major.

    Args:
        rng: Random stream for this pass
        cfg: Effective configuration
        width, height: Drawable area (already reduced by the inset)
        engine: Placement arena; a fresh one is created when omitted

    Returns:
        Concatenated SVG markup, empty when nothing is enabled or placed
    """
    kinds = cfg.enabled_kinds()
    if not kinds:
        return ""

    if engine is None:
        engine = PlacementEngine(cfg, width, height)

    parts = []
    attempted = 0
    for count in layer_counts(cfg.density, cfg.layers):
        for _ in range(count):
            kind = pick(rng, kinds)
            attempted += 1
            shape = generate_shape(kind, rng, cfg, engine)
            if shape:
                parts.append(shape)

    log.debug(
        f"Composed {len(parts)}/{attempted} shapes, "
        f"{len(engine.placed)} boxes, {engine.rejected} rejections"
    )
    return "".join(parts)


def compose(
    cfg: DecorConfig,
    width: int,
    height: int,
    rng: Rng,
    inset_px: float = 0.0,
) -> str:
    """Background fill plus the layered primitives inside the inset group."""
    inner_w = max(MIN_SURFACE_PX, width - inset_px * 2)
    inner_h = max(MIN_SURFACE_PX, height - inset_px * 2)

    bg = ""
    if cfg.background and cfg.background != "transparent":
        bg = f'<rect x="0" y="0" width="{width}" height="{height}" fill="{cfg.background}" />'

    content = build_content(rng, cfg, inner_w, inner_h)
    return f'{bg}<g transform="translate({inset_px:.1f} {inset_px:.1f})">{content}</g>'


def overlay_attributes(cfg: DecorConfig, width: int, height: int, seed: int) -> Dict[str, str]:
    """Attributes of the overlay <svg>; the surface is marked decorative."""
    return {
        "xmlns": SVG_NS,
        "class": OVERLAY_CLASS,
        "viewBox": f"0 0 {width} {height}",
        "preserveAspectRatio": "none",
        "aria-hidden": "true",
        "focusable": "false",
        "data-seed": str(seed),
        "style": f"z-index: {cfg.z_index}",
    }


def build_overlay(
    cfg: DecorConfig,
    width: int,
    height: int,
    seed: int,
    inset_px: float = 0.0,
) -> str:
    """
    Build the complete decorative <svg> element for one container.

    The stream is seeded here so that a given (seed, config, size) always
    yields byte-identical markup.
    """
    body = compose(cfg, width, height, Mulberry32(seed), inset_px)
    attrs = " ".join(f'{k}="{v}"' for k, v in overlay_attributes(cfg, width, height, seed).items())
    return f"<svg {attrs}>{body}</svg>"
