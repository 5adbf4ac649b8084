"""Control net of a tensor-product Bézier patch."""
from __future__ import annotations

from typing import Iterator, Sequence, Tuple

from .errors import InvalidArgument

Vector3 = Tuple[float, float, float]


class ControlNet:
    """Immutable square grid of 3-D control points.

    ``net[i][j]`` is the control point in row ``i`` (the ``u`` direction) and
    column ``j`` (the ``v`` direction).
    """

    __slots__ = ("_rows",)

    def __init__(self, rows: Sequence[Sequence[Sequence[float]]]) -> None:
        rows = [list(row) for row in rows]
        if len(rows) < 2:
            raise InvalidArgument("control net needs at least 2 rows")
        size = len(rows)
        grid = []
        for i, row in enumerate(rows):
            if len(row) != size:
                raise InvalidArgument(
                    f"control net must be square: row {i} has {len(row)} points, expected {size}"
                )
            points = []
            for j, p in enumerate(row):
                if len(p) != 3:
                    raise InvalidArgument(f"control point ({i}, {j}) is not 3-dimensional")
                points.append((float(p[0]), float(p[1]), float(p[2])))
            grid.append(tuple(points))
        self._rows: Tuple[Tuple[Vector3, ...], ...] = tuple(grid)

    @property
    def size(self) -> int:
        return len(self._rows)

    @property
    def degree(self) -> int:
        return len(self._rows) - 1

    def __getitem__(self, i: int) -> Tuple[Vector3, ...]:
        return self._rows[i]

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[Tuple[Vector3, ...]]:
        return iter(self._rows)

    def corners(self) -> Tuple[Vector3, Vector3, Vector3, Vector3]:
        """Return the control points at ``(0,0)``, ``(0,n)``, ``(n,0)`` and ``(n,n)``."""

        n = self.degree
        rows = self._rows
        return rows[0][0], rows[0][n], rows[n][0], rows[n][n]

    def __repr__(self) -> str:
        return f"ControlNet(size={self.size})"


def default_control_net(size: int = 4) -> ControlNet:
    """Saddle-shaped net centred on the origin.

    Point ``(i, j)`` sits at ``(i - c, j - c, -(i - c)**2 - (j - c)**2 + 4)``
    with ``c = (size - 1) / 2``; for the default 4×4 net ``c == 1.5``.
    """

    if size < 2:
        raise InvalidArgument("control net size must be >= 2")
    centre = (size - 1) * 0.5
    rows = []
    for i in range(size):
        row = []
        for j in range(size):
            x = i - centre
            y = j - centre
            row.append((x, y, -(x ** 2) - y ** 2 + 4.0))
        rows.append(row)
    return ControlNet(rows)


__all__ = ["ControlNet", "default_control_net", "Vector3"]
