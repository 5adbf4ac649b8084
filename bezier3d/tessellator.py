"""Uniform tessellation of a Bézier patch into triangle and wireframe meshes."""
from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from .bezier import basis_sum, evaluate
from .control_net import ControlNet, default_control_net
from .errors import InvalidArgument
from .mesh import (
    BARYCENTRIC_CORNERS,
    Mesh,
    Vector2,
    Vector3,
    WireframeMesh,
    tangent_frame,
    vertex_normals,
)

logger = logging.getLogger(__name__)


def check_accuracy(accuracy: int) -> int:
    if isinstance(accuracy, bool) or not isinstance(accuracy, int):
        raise InvalidArgument(f"accuracy must be an integer, got {accuracy!r}")
    if accuracy < 1:
        raise InvalidArgument(f"accuracy must be >= 1, got {accuracy}")
    return accuracy


def sample_grid(accuracy: int, net: ControlNet) -> Tuple[List[Vector3], List[Vector2]]:
    """Evaluate *net* on the ``(accuracy + 1)**2`` grid.

    Row ``i`` walks ``u`` and column ``j`` walks ``v``; sample ``(i, j)`` is
    stored at ``i * (accuracy + 1) + j``. Returns positions and their ``(u, v)``.
    """

    positions: List[Vector3] = []
    params: List[Vector2] = []
    for i in range(accuracy + 1):
        u = i / accuracy
        for j in range(accuracy + 1):
            v = j / accuracy
            positions.append(evaluate(u, v, net))
            params.append((u, v))
    return positions, params


def _cells(accuracy: int):
    stride = accuracy + 1
    for i in range(accuracy):
        for j in range(accuracy):
            a = i * stride + j
            b = a + stride
            c = a + 1
            d = b + 1
            yield a, b, c, d


def triangle_indices(accuracy: int) -> List[int]:
    """Two triangles per cell, ``(a, b, c)`` then ``(b, d, c)``."""

    indices: List[int] = []
    for a, b, c, d in _cells(accuracy):
        indices.extend((a, b, c))
        indices.extend((b, d, c))
    return indices


def line_indices(accuracy: int) -> List[int]:
    """Five edges per cell: ``(a,b) (b,d) (d,a) (b,c) (c,a)``.

    Edges shared between neighbouring cells are emitted once per cell.
    """

    indices: List[int] = []
    for a, b, c, d in _cells(accuracy):
        indices.extend((a, b, b, d, d, a, b, c, c, a))
    return indices


def tessellate(accuracy: int, net: Optional[ControlNet] = None, *, with_uvs: bool = True) -> Mesh:
    """Build the triangle mesh of *net* sampled at ``accuracy`` steps per side.

    With ``with_uvs=False`` the UV buffer is zero-filled.
    """

    check_accuracy(accuracy)
    net = net if net is not None else default_control_net()

    positions, params = sample_grid(accuracy, net)
    indices = triangle_indices(accuracy)
    faces = [(indices[k], indices[k + 1], indices[k + 2]) for k in range(0, len(indices), 3)]
    normals = vertex_normals(positions, faces)
    tangents: List[Vector3] = []
    bitangents: List[Vector3] = []
    for n in normals:
        t, b = tangent_frame(n)
        tangents.append(t)
        bitangents.append(b)
    uvs = params if with_uvs else [(0.0, 0.0)] * len(positions)
    barycentrics = [BARYCENTRIC_CORNERS[k % 3] for k in range(len(indices))]
    if logger.isEnabledFor(logging.DEBUG):
        # Bernstein weights at the patch centre must sum to one
        logger.debug("basis sum at (0.5, 0.5) for degree %d: %.12f", net.degree, basis_sum(0.5, 0.5, net.degree))

    logger.debug(
        "tessellated accuracy=%d into %d vertices, %d triangles",
        accuracy,
        len(positions),
        len(faces),
    )
    return Mesh(
        positions=positions,
        indices=indices,
        uvs=uvs,
        normals=normals,
        tangents=tangents,
        bitangents=bitangents,
        barycentrics=barycentrics,
        accuracy=accuracy,
    )


def project_wireframe(accuracy: int, net: Optional[ControlNet] = None) -> WireframeMesh:
    """Tessellation grid flattened onto ``z = 0`` for the orthographic overlay."""

    check_accuracy(accuracy)
    net = net if net is not None else default_control_net()
    positions, _params = sample_grid(accuracy, net)
    flat = [(x, y, 0.0) for x, y, _z in positions]
    return WireframeMesh(positions=flat, line_indices=line_indices(accuracy), accuracy=accuracy)


class GeometryCache:
    """Holds the last mesh and wireframe, keyed by ``(accuracy, id(net))``.

    A key change rebuilds from scratch; nothing is patched in place.
    """

    def __init__(self) -> None:
        self._mesh_key: Optional[Tuple[int, int]] = None
        self._mesh: Optional[Mesh] = None
        self._wire_key: Optional[Tuple[int, int]] = None
        self._wireframe: Optional[WireframeMesh] = None
        # Keep nets alive so id() stays unique while a key refers to them.
        self._nets: dict = {}

    def mesh(self, accuracy: int, net: ControlNet) -> Mesh:
        key = (accuracy, id(net))
        if self._mesh is not None and key == self._mesh_key:
            logger.debug("mesh cache hit for accuracy=%d", accuracy)
            return self._mesh
        mesh = tessellate(accuracy, net)
        self._mesh_key, self._mesh = key, mesh
        self._remember(net)
        return mesh

    def wireframe(self, accuracy: int, net: ControlNet) -> WireframeMesh:
        key = (accuracy, id(net))
        if self._wireframe is not None and key == self._wire_key:
            return self._wireframe
        wire = project_wireframe(accuracy, net)
        self._wire_key, self._wireframe = key, wire
        self._remember(net)
        return wire

    def release_wireframe(self) -> None:
        if self._wireframe is not None:
            logger.debug("released wireframe for accuracy=%d", self._wireframe.accuracy)
        self._wire_key = None
        self._wireframe = None
        self._prune()

    @property
    def has_wireframe(self) -> bool:
        return self._wireframe is not None

    def _remember(self, net: ControlNet) -> None:
        self._nets[id(net)] = net
        self._prune()

    def _prune(self) -> None:
        live = {key[1] for key in (self._mesh_key, self._wire_key) if key is not None}
        self._nets = {k: v for k, v in self._nets.items() if k in live}


__all__ = [
    "check_accuracy",
    "sample_grid",
    "triangle_indices",
    "line_indices",
    "tessellate",
    "project_wireframe",
    "GeometryCache",
]
