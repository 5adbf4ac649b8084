"""Mesh containers and vertex attribute utilities for tessellated surfaces."""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterable, List, Tuple

Vector2 = Tuple[float, float]
Vector3 = Tuple[float, float, float]
Face = Tuple[int, int, int]
Segment = Tuple[int, int]
Matrix3 = Tuple[Tuple[float, float, float], Tuple[float, float, float], Tuple[float, float, float]]

# Reference axes for the tangent frame, tried in this order.
_AXIS_Z: Vector3 = (0.0, 0.0, 1.0)
_AXIS_Y: Vector3 = (0.0, 1.0, 0.0)

BARYCENTRIC_CORNERS: Tuple[Vector3, Vector3, Vector3] = (
    (1.0, 0.0, 0.0),
    (0.0, 1.0, 0.0),
    (0.0, 0.0, 1.0),
)


def vec_add(a: Vector3, b: Vector3) -> Vector3:
    return (a[0] + b[0], a[1] + b[1], a[2] + b[2])


def vec_sub(a: Vector3, b: Vector3) -> Vector3:
    return (a[0] - b[0], a[1] - b[1], a[2] - b[2])


def vec_cross(a: Vector3, b: Vector3) -> Vector3:
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def vec_dot(a: Vector3, b: Vector3) -> float:
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


def vec_scale(v: Vector3, s: float) -> Vector3:
    return (v[0] * s, v[1] * s, v[2] * s)


def vec_length(v: Vector3) -> float:
    return math.sqrt(v[0] * v[0] + v[1] * v[1] + v[2] * v[2])


def vec_normalize(v: Vector3) -> Vector3:
    length = vec_length(v)
    if length == 0.0:
        return (0.0, 0.0, 0.0)
    return (v[0] / length, v[1] / length, v[2] / length)


def rotation_z(angle: float) -> Matrix3:
    c, s = math.cos(angle), math.sin(angle)
    return ((c, -s, 0.0), (s, c, 0.0), (0.0, 0.0, 1.0))


def _apply(rot: Matrix3, v: Vector3) -> Vector3:
    x, y, z = v
    return (
        rot[0][0] * x + rot[0][1] * y + rot[0][2] * z,
        rot[1][0] * x + rot[1][1] * y + rot[1][2] * z,
        rot[2][0] * x + rot[2][1] * y + rot[2][2] * z,
    )


def vertex_normals(positions: List[Vector3], faces: Iterable[Face]) -> List[Vector3]:
    """Per-vertex normals using an area-weighted face average.

    Vertices that end up with no usable normal (isolated or only touching
    degenerate triangles) get ``+Z`` so the result is always unit length.
    """

    normals: List[Vector3] = [(0.0, 0.0, 0.0) for _ in positions]
    for tri in faces:
        p0, p1, p2 = (positions[idx] for idx in tri)
        n = vec_cross(vec_sub(p1, p0), vec_sub(p2, p0))
        for idx in tri:
            normals[idx] = vec_add(normals[idx], n)
    result: List[Vector3] = []
    for n in normals:
        unit = vec_normalize(n)
        result.append(unit if unit != (0.0, 0.0, 0.0) else _AXIS_Z)
    return result


def tangent_frame(normal: Vector3) -> Tuple[Vector3, Vector3]:
    """Return ``(tangent, bitangent)`` for a unit *normal*.

    The tangent seed is ``normal x Z`` or ``normal x Y``, whichever is longer,
    so a normal parallel to one reference axis still gets a valid frame.
    """

    c1 = vec_cross(normal, _AXIS_Z)
    c2 = vec_cross(normal, _AXIS_Y)
    seed = c1 if vec_length(c1) > vec_length(c2) else c2
    # Gram-Schmidt against the normal
    tangent = vec_normalize(vec_sub(seed, vec_scale(normal, vec_dot(seed, normal))))
    bitangent = vec_normalize(vec_cross(normal, tangent))
    return tangent, bitangent


@dataclass(frozen=True)
class Mesh:
    """Indexed triangle mesh with the attributes needed for shading."""

    positions: List[Vector3]
    indices: List[int]
    uvs: List[Vector2]
    normals: List[Vector3]
    tangents: List[Vector3]
    bitangents: List[Vector3]
    barycentrics: List[Vector3]
    accuracy: int = 0

    @property
    def faces(self) -> List[Face]:
        idx = self.indices
        return [(idx[k], idx[k + 1], idx[k + 2]) for k in range(0, len(idx), 3)]

    @property
    def vertex_count(self) -> int:
        return len(self.positions)

    @property
    def triangle_count(self) -> int:
        return len(self.indices) // 3

    def transformed(self, rotation: Matrix3, translation: Iterable[float] = (0.0, 0.0, 0.0)) -> "Mesh":
        """Rigidly transform positions and the tangent frame; topology is shared."""

        tx, ty, tz = translation
        positions: List[Vector3] = []
        for p in self.positions:
            rx, ry, rz = _apply(rotation, p)
            positions.append((rx + tx, ry + ty, rz + tz))
        return Mesh(
            positions=positions,
            indices=self.indices,
            uvs=self.uvs,
            normals=[vec_normalize(_apply(rotation, n)) for n in self.normals],
            tangents=[vec_normalize(_apply(rotation, t)) for t in self.tangents],
            bitangents=[vec_normalize(_apply(rotation, b)) for b in self.bitangents],
            barycentrics=self.barycentrics,
            accuracy=self.accuracy,
        )

    def to_triangulated_faces(self) -> List[List[Vector3]]:
        return [[self.positions[idx] for idx in tri] for tri in self.faces]

    def to_obj(self) -> str:
        lines: List[str] = []
        for v in self.positions:
            lines.append(f"v {v[0]:.6f} {v[1]:.6f} {v[2]:.6f}")
        for uv in self.uvs:
            lines.append(f"vt {uv[0]:.6f} {uv[1]:.6f}")
        for n in self.normals:
            lines.append(f"vn {n[0]:.6f} {n[1]:.6f} {n[2]:.6f}")
        for tri in self.faces:
            i0, i1, i2 = tri[0] + 1, tri[1] + 1, tri[2] + 1
            lines.append(f"f {i0}/{i0}/{i0} {i1}/{i1}/{i1} {i2}/{i2}/{i2}")
        return "\n".join(lines) + "\n"

    def to_dict(self) -> dict:
        return {
            "accuracy": self.accuracy,
            "positions": [list(p) for p in self.positions],
            "indices": list(self.indices),
            "uvs": [list(uv) for uv in self.uvs],
            "normals": [list(n) for n in self.normals],
            "tangents": [list(t) for t in self.tangents],
            "bitangents": [list(b) for b in self.bitangents],
            "barycentrics": [list(b) for b in self.barycentrics],
        }


@dataclass(frozen=True)
class WireframeMesh:
    """Flattened grid overlay: positions with ``z == 0`` and line-pair indices."""

    positions: List[Vector3]
    line_indices: List[int] = field(default_factory=list)
    accuracy: int = 0

    @property
    def segments(self) -> List[Segment]:
        idx = self.line_indices
        return [(idx[k], idx[k + 1]) for k in range(0, len(idx), 2)]

    def to_line_segments(self) -> List[List[Vector3]]:
        return [[self.positions[a], self.positions[b]] for a, b in self.segments]

    def to_dict(self) -> dict:
        return {
            "accuracy": self.accuracy,
            "positions": [list(p) for p in self.positions],
            "line_indices": list(self.line_indices),
        }


__all__ = [
    "Mesh",
    "WireframeMesh",
    "Vector2",
    "Vector3",
    "Face",
    "Segment",
    "Matrix3",
    "BARYCENTRIC_CORNERS",
    "vertex_normals",
    "tangent_frame",
    "rotation_z",
    "vec_add",
    "vec_sub",
    "vec_cross",
    "vec_dot",
    "vec_scale",
    "vec_length",
    "vec_normalize",
]
