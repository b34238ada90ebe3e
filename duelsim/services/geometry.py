"""2D top-down geometry: wall segments, segment intersection and raycasts.

All queries are pure functions over an immutable wall tuple so the same map
can be shared by any number of duel evaluations.
"""

import math
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence, Tuple

from .definitions import MapDef

# Cross products below this are treated as parallel
PARALLEL_EPSILON = 1e-8


@dataclass(frozen=True)
class Vec2:
    x: float
    y: float

    def distance_to(self, other: "Vec2") -> float:
        return math.hypot(self.x - other.x, self.y - other.y)


@dataclass(frozen=True)
class Segment:
    """A single wall line from (ax, ay) to (bx, by)."""
    ax: float
    ay: float
    bx: float
    by: float

    def __str__(self) -> str:
        return f"[{self.ax},{self.ay}] -> [{self.bx},{self.by}]"


def _cross(ax: float, ay: float, bx: float, by: float) -> float:
    return ax * by - ay * bx


def intersect_segment(
    px: float, py: float, qx: float, qy: float,
    ax: float, ay: float, bx: float, by: float,
) -> Optional[float]:
    """Intersect ray segment p->q with wall segment a->b.

    Solves p + t*r = a + u*s. Parallel (and collinear) segments never
    intersect.

    Returns:
        The ray parameter t in [0, 1], or None when there is no hit
    """
    rx, ry = qx - px, qy - py
    sx, sy = bx - ax, by - ay

    rxs = _cross(rx, ry, sx, sy)
    if abs(rxs) < PARALLEL_EPSILON:
        return None

    apx, apy = ax - px, ay - py
    t = _cross(apx, apy, sx, sy) / rxs
    u = _cross(apx, apy, rx, ry) / rxs

    if 0.0 <= t <= 1.0 and 0.0 <= u <= 1.0:
        return t
    return None


def first_hit_t(walls: Sequence[Segment], x0: float, y0: float, x1: float, y1: float) -> float:
    """Smallest ray parameter at which any wall is hit, or inf."""
    best = math.inf
    for w in walls:
        t = intersect_segment(x0, y0, x1, y1, w.ax, w.ay, w.bx, w.by)
        if t is not None and t < best:
            best = t
    return best


def has_line_of_sight(walls: Sequence[Segment], x0: float, y0: float, x1: float, y1: float) -> bool:
    for w in walls:
        if intersect_segment(x0, y0, x1, y1, w.ax, w.ay, w.bx, w.by) is not None:
            return False
    return True


def intersect_circle(
    ax: float, ay: float, bx: float, by: float,
    cx: float, cy: float, r: float,
) -> Optional[float]:
    """First parameter t in [0, 1] where segment a->b enters the circle.

    Falls back to the exit point when the segment starts inside the circle.
    A circle without area is never hit.
    """
    if r <= 0.0:
        return None

    dx, dy = bx - ax, by - ay
    fx, fy = ax - cx, ay - cy

    a = dx * dx + dy * dy
    b = 2.0 * (fx * dx + fy * dy)
    c = (fx * fx + fy * fy) - r * r

    disc = b * b - 4.0 * a * c
    if disc < 0.0:
        return None
    disc = math.sqrt(disc)

    t1 = (-b - disc) / (2.0 * a)
    t2 = (-b + disc) / (2.0 * a)

    if 0.0 <= t1 <= 1.0:
        return t1
    if 0.0 <= t2 <= 1.0:
        return t2
    return None


class MapRuntime:
    """Static collision geometry for one map."""

    def __init__(self, map_id: str, walls: Iterable[Segment] = ()):
        self.id = map_id
        self.walls: Tuple[Segment, ...] = tuple(walls)

    @classmethod
    def from_def(cls, map_def: MapDef) -> "MapRuntime":
        return cls(
            map_def.id,
            (Segment(w.ax, w.ay, w.bx, w.by) for w in map_def.walls),
        )

    def has_line_of_sight(self, a: Vec2, b: Vec2) -> bool:
        return has_line_of_sight(self.walls, a.x, a.y, b.x, b.y)

    def __repr__(self) -> str:
        return f"MapRuntime(id={self.id!r}, walls={len(self.walls)})"
