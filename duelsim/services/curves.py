"""Piecewise-linear curves (range-to-damage-multiplier lookups)."""

from typing import Iterable, Tuple


class Curve:
    """Ordered (x, y) control points with clamped linear interpolation.

    An empty curve is the identity multiplier and always evaluates to 1.0.
    """

    __slots__ = ("_keys",)

    def __init__(self, keys: Iterable[Tuple[float, float]] = ()):
        self._keys: Tuple[Tuple[float, float], ...] = tuple(
            sorted(((float(x), float(y)) for x, y in keys), key=lambda k: k[0])
        )

    @property
    def keys(self) -> Tuple[Tuple[float, float], ...]:
        return self._keys

    def evaluate(self, x: float) -> float:
        keys = self._keys
        if not keys:
            return 1.0
        if x <= keys[0][0]:
            return keys[0][1]

        for (ax, ay), (bx, by) in zip(keys, keys[1:]):
            if x <= bx:
                t = (x - ax) / (bx - ax)
                return ay + t * (by - ay)

        return keys[-1][1]

    def __len__(self) -> int:
        return len(self._keys)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Curve):
            return NotImplemented
        return self._keys == other._keys

    def __hash__(self) -> int:
        return hash(self._keys)

    def __repr__(self) -> str:
        return f"Curve({list(self._keys)!r})"
