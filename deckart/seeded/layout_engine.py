#!/usr/bin/env python3
"""
Placement Engine for Seeded Decorations

Tracks the bounding boxes committed during one render pass and offers
edge-biased sampling plus bounded rejection sampling against the center
exclusion zone and previously placed shapes.

All units in pixels, in the inset-local coordinate space of one container.
"""

from typing import Callable, List, Optional, Tuple, TypeVar

from deckart.core import get_logger

from .rng import Rng
from .sdk import BBox, DecorConfig

log = get_logger("seeded_svg.layout")

G = TypeVar("G")

# Given a sampled anchor point, draw the shape's remaining geometry and
# return its bounding box together with whatever the generator needs to draw.
CandidateFn = Callable[[float, float], Tuple[BBox, G]]


def edge_bias(v: float) -> float:
    """Skew a uniform sample toward the high end: v -> 1-(1-v)^2."""
    return 1 - (1 - v) * (1 - v)


class PlacementEngine:
    """Arena of committed boxes for a single render pass."""

    def __init__(self, cfg: DecorConfig, width: float, height: float):
        self.cfg = cfg
        self.width = width
        self.height = height
        self.placed: List[BBox] = []
        self.rejected = 0

    @property
    def min_dim(self) -> float:
        return min(self.width, self.height)

    def biased_point(self, rng: Rng) -> Tuple[float, float]:
        """Draw a point biased toward the container's edges (two draws)."""
        rx = rng()
        ry = rng()
        return edge_bias(rx) * self.width, edge_bias(ry) * self.height

    def avoids_center(self, x: float, y: float) -> bool:
        """
        True when (x, y) falls inside the center exclusion zone.

        The zone is a circle of radius ``center_avoid_radius * min(w, h)``
        around the geometric center; it is ignored when avoidance is off.
        """
        if not self.cfg.avoid_center:
            return False
        r = self.cfg.center_avoid_radius * self.min_dim
        dx = x - self.width / 2
        dy = y - self.height / 2
        return dx * dx + dy * dy < r * r

    def overlaps(self, box: BBox) -> bool:
        return any(box.intersects(other) for other in self.placed)

    def commit(self, box: BBox) -> None:
        self.placed.append(box)

    def try_place(
        self,
        rng: Rng,
        candidate_fn: CandidateFn,
        max_attempts: int,
    ) -> Optional[G]:
        """
        Rejection-sample a position for one shape.

        Each attempt draws a biased point. Points inside the center zone spend
        the attempt; otherwise ``candidate_fn`` draws the remaining geometry
        and the resulting box is checked against every committed box.

        Args:
            rng: Shared random stream
            candidate_fn: Builds (box, geometry) from an anchor point
            max_attempts: Hard ceiling on attempts

        Returns:
            The geometry of the committed shape, or None when no attempt fit
        """
        for _ in range(max_attempts):
            x, y = self.biased_point(rng)
            if self.avoids_center(x, y):
                continue
            box, geometry = candidate_fn(x, y)
            if self.overlaps(box):
                continue
            self.commit(box)
            return geometry
        self.rejected += 1
        log.debug(f"No placement after {max_attempts} attempts ({len(self.placed)} placed)")
        return None
