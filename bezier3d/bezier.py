"""Bernstein-basis evaluation of tensor-product Bézier patches."""
from __future__ import annotations

from .control_net import ControlNet, Vector3


def binomial(n: int, k: int) -> float:
    """``C(n, k)`` as a running product, so large ``n`` never builds factorials."""

    result = 1.0
    for i in range(1, k + 1):
        result = result * (n + 1 - i) / i
    return result


def bernstein(i: int, n: int, t: float) -> float:
    return binomial(n, i) * t ** i * (1.0 - t) ** (n - i)


def evaluate(u: float, v: float, net: ControlNet) -> Vector3:
    """Evaluate the patch defined by *net* at ``(u, v)``.

    The patch interpolates its corner control points at the corners of the
    unit square. Parameters outside ``[0, 1]`` extrapolate the polynomials and
    give no meaningful surface point.
    """

    n = net.degree
    bu = [bernstein(i, n, u) for i in range(n + 1)]
    bv = [bernstein(j, n, v) for j in range(n + 1)]
    x = y = z = 0.0
    for i in range(n + 1):
        row = net[i]
        for j in range(n + 1):
            w = bu[i] * bv[j]
            px, py, pz = row[j]
            x += w * px
            y += w * py
            z += w * pz
    return (x, y, z)


def basis_sum(u: float, v: float, n: int) -> float:
    """Sum of all ``B(i,n,u) * B(j,n,v)``; equals 1 on the unit square."""

    return sum(bernstein(i, n, u) * bernstein(j, n, v) for i in range(n + 1) for j in range(n + 1))


__all__ = ["binomial", "bernstein", "evaluate", "basis_sum"]
