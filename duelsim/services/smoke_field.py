"""Smoke opacity field used to penalize aim through volumetric obstructions.

Smokes are cheap radial volumes: opacity falls off linearly from the center
and overlapping volumes take the maximum, not the sum. The field is ticked
externally once per simulated step; duel engines only read it.
"""

import logging
import math
from dataclasses import dataclass
from typing import List

from .geometry import Vec2

logger = logging.getLogger(__name__)


@dataclass
class SmokeVolume:
    center: Vec2
    radius: float
    falloff: float
    remaining: float  # seconds of lifetime left


class SmokeField:
    """Live set of smoke volumes on a map."""

    def __init__(self):
        self.smokes: List[SmokeVolume] = []

    def add_smoke(self, center: Vec2, radius: float, falloff: float, duration: float) -> SmokeVolume:
        """Deploy a smoke volume (the smoke branch of a utility cast)."""
        smoke = SmokeVolume(center=center, radius=radius, falloff=falloff, remaining=duration)
        self.smokes.append(smoke)
        logger.debug(f"Smoke deployed at ({center.x:.2f}, {center.y:.2f}) r={radius} for {duration}s")
        return smoke

    def opacity_at_point(self, p: Vec2) -> float:
        opacity = 0.0
        for s in self.smokes:
            d = math.hypot(p.x - s.center.x, p.y - s.center.y)
            if d <= s.radius:
                local = 1.0 - (d / s.radius) * s.falloff
                opacity = max(opacity, local)
        return min(1.0, opacity)

    def integrate_opacity(self, a: Vec2, b: Vec2, samples: int = 10) -> float:
        """Mean point opacity over samples + 1 evenly spaced points on a-b."""
        if not self.smokes:
            return 0.0

        total = 0.0
        for i in range(samples + 1):
            t = i / samples
            p = Vec2(a.x + (b.x - a.x) * t, a.y + (b.y - a.y) * t)
            total += self.opacity_at_point(p)
        return total / (samples + 1)

    def tick(self, dt: float) -> None:
        """Advance lifetimes by dt and drop expired volumes."""
        before = len(self.smokes)
        for s in self.smokes:
            s.remaining -= dt
        self.smokes = [s for s in self.smokes if s.remaining > 0]

        expired = before - len(self.smokes)
        if expired:
            logger.debug(f"{expired} smoke(s) dissipated, {len(self.smokes)} active")

    def clear(self) -> None:
        self.smokes.clear()

    def __len__(self) -> int:
        return len(self.smokes)
