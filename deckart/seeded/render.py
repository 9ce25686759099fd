#!/usr/bin/env python3
"""
Renderer for seeded decorations on HTML slide decks.

Finds every container matching the configured selector, measures it, derives
its seed and inserts one decorative <svg> overlay, replacing any overlay left
by an earlier pass. Each container gets its own placement arena and random
stream, so containers never influence each other.
"""

import math
import re
from typing import Dict, Iterable, Optional, Tuple

from bs4 import BeautifulSoup
from soupsieve import SelectorSyntaxError

from deckart.core import get_logger

from .composer import compose, overlay_attributes
from .rng import Mulberry32
from .sdk import (
    CONTAINER_CLASS,
    DEFAULT_FONT_SIZE_PX,
    DEFAULT_SLIDE_H,
    DEFAULT_SLIDE_W,
    MIN_SURFACE_PX,
    OVERLAY_CLASS,
    STYLE_ID,
    DecorConfig,
    Location,
    resolve_config,
)
from .seed import derive_seed

log = get_logger("seeded_svg.render")

BASE_CSS = """
.seeded-svg-container { position: relative; }
.seeded-svg-overlay {
  position: absolute;
  inset: 0;
  width: 100%;
  height: 100%;
  pointer-events: none;
  overflow: hidden;
}
"""

_NUMBER_RE = re.compile(r"^\s*([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)")

Size = Tuple[float, float]


# ============================================================================
# MEASUREMENT
# ============================================================================


def _leading_number(text: str) -> Optional[float]:
    m = _NUMBER_RE.match(text)
    if not m:
        return None
    value = float(m.group(1))
    return value if math.isfinite(value) else None


def _style_value(el, prop: str) -> Optional[str]:
    for decl in (el.get("style") or "").split(";"):
        name, sep, value = decl.partition(":")
        if sep and name.strip().lower() == prop:
            return value.strip()
    return None


def _px(value: Optional[str]) -> Optional[float]:
    if value is None:
        return None
    value = value.strip().lower()
    if value.endswith("px") or _NUMBER_RE.fullmatch(value):
        return _leading_number(value)
    return None


def parse_inset_px(inset, font_size: float = DEFAULT_FONT_SIZE_PX) -> float:
    """
    Resolve an inset length to pixels.

    Numbers are pixels, ``px`` strings are pixels, ``em`` strings scale by the
    container font size; anything else uses its leading number or 16.
    """
    if isinstance(inset, (int, float)) and not isinstance(inset, bool):
        return float(inset)
    text = str(inset).strip()
    number = _leading_number(text)
    if text.endswith("px"):
        return number if number is not None else DEFAULT_FONT_SIZE_PX
    if text.endswith("em"):
        return number * font_size if number is not None else DEFAULT_FONT_SIZE_PX
    return number if number is not None else DEFAULT_FONT_SIZE_PX


def font_size_px(el) -> float:
    """Container font size from inline style; falls back to 16px."""
    size = _px(_style_value(el, "font-size"))
    return size if size and size > 0 else DEFAULT_FONT_SIZE_PX


def measure_container(el, size: Optional[Size] = None) -> Tuple[int, int]:
    """
    Rendered pixel size of a container.

    An explicit ``size`` wins, then ``data-width``/``data-height``, then
    inline ``width``/``height`` in px, then the default slide size.
    """
    if size is not None:
        w, h = size
    else:
        w = _px(el.get("data-width")) or _px(_style_value(el, "width")) or DEFAULT_SLIDE_W
        h = _px(el.get("data-height")) or _px(_style_value(el, "height")) or DEFAULT_SLIDE_H
    return max(MIN_SURFACE_PX, math.floor(w)), max(MIN_SURFACE_PX, math.floor(h))


# ============================================================================
# LIFECYCLE
# ============================================================================


def ensure_base_styles(soup: BeautifulSoup) -> None:
    if soup.find("style", id=STYLE_ID):
        return
    style = soup.new_tag("style", id=STYLE_ID)
    style.string = BASE_CSS
    head = soup.head
    if head is None:
        head = soup.new_tag("head")
        if soup.html is not None:
            soup.html.insert(0, head)
        else:
            soup.insert(0, head)
    head.append(style)


def remove_overlay(el) -> bool:
    """Remove the overlay left on this container by a previous pass."""
    removed = False
    for old in el.find_all("svg", class_=OVERLAY_CLASS, recursive=False):
        old.decompose()
        removed = True
    return removed


def themed_config(cfg: DecorConfig, location: Location) -> DecorConfig:
    override = cfg.theme_by_hash.get(location.hash)
    if not override:
        return cfg
    return resolve_config(cfg, override)


def render_one(
    el,
    cfg: DecorConfig,
    location: Location,
    soup: BeautifulSoup,
    size: Optional[Size] = None,
) -> int:
    """
    Run one render pass for a container and return the seed it used.
    """
    classes = el.get("class") or []
    if isinstance(classes, str):
        classes = classes.split()
    if CONTAINER_CLASS not in classes:
        el["class"] = list(classes) + [CONTAINER_CLASS]

    themed = themed_config(cfg, location)
    remove_overlay(el)

    width, height = measure_container(el, size)
    inset_px = parse_inset_px(themed.inset, font_size_px(el))
    seed = derive_seed(themed.seed_mode, location, el.get("id"))

    body = compose(themed, width, height, Mulberry32(seed), inset_px)
    svg = soup.new_tag("svg", attrs=overlay_attributes(themed, width, height, seed))
    fragment = BeautifulSoup(body, "html.parser")
    for child in list(fragment.contents):
        svg.append(child.extract())

    if themed.position == "beforeend":
        el.append(svg)
    else:
        el.insert(0, svg)

    log.info(f"Decorated {el.name}#{el.get('id') or '-'} seed={seed} size={width}x{height}")
    return seed


def render_all(
    soup: BeautifulSoup,
    cfg: DecorConfig,
    location: Location,
    sizes: Optional[Dict[str, Size]] = None,
) -> int:
    """Render every matching container; returns how many were decorated."""
    try:
        containers = soup.select(cfg.target_selector)
    except SelectorSyntaxError as e:
        log.error(f"Invalid target selector {cfg.target_selector!r}: {e}")
        return 0

    ensure_base_styles(soup)
    sizes = sizes or {}
    for el in containers:
        render_one(el, cfg, location, soup, sizes.get(el.get("id") or ""))
    return len(containers)


def decorate_html(
    html: str,
    url: Optional[str] = None,
    config: Optional[DecorConfig] = None,
    sizes: Optional[Dict[str, Size]] = None,
) -> str:
    """
    Decorate every slide of an HTML document for one page location.

    Args:
        html: Document markup
        url: Page location used for seeding (fragment, path, query)
        config: Effective configuration; defaults when None
        sizes: Optional container id -> (width, height) measurements

    Returns:
        The decorated document
    """
    cfg = config if config is not None else resolve_config()
    soup = BeautifulSoup(html, "html.parser")
    count = render_all(soup, cfg, Location.from_url(url), sizes)
    if count == 0:
        log.warning(f"No containers matched {cfg.target_selector!r}")
    return str(soup)


def render_fragments(
    html: str,
    url: Optional[str],
    fragments: Iterable[str],
    config: Optional[DecorConfig] = None,
    sizes: Optional[Dict[str, Size]] = None,
) -> Dict[str, str]:
    """Decorate the same document once per location fragment."""
    base = Location.from_url(url)
    out: Dict[str, str] = {}
    for fragment in fragments:
        location = base.with_hash(fragment)
        cfg = config if config is not None else resolve_config()
        soup = BeautifulSoup(html, "html.parser")
        render_all(soup, cfg, location, sizes)
        out[location.hash] = str(soup)
    return out
