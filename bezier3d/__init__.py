"""Bézier patch tessellation, shading and animation for interactive viewers."""
from __future__ import annotations

from typing import TYPE_CHECKING

from .animation import AnimationController, FrameState
from .bezier import basis_sum, bernstein, binomial, evaluate
from .config import SurfaceSettings
from .control_net import ControlNet, default_control_net
from .errors import InvalidArgument
from .mesh import Mesh, WireframeMesh
from .scene import SurfaceScene
from .shading import ShadingParameters, shade
from .tessellator import GeometryCache, project_wireframe, tessellate
from .texture import ImageTexture, LoadState, TextureSlot, load_texture

__all__ = [
    "AnimationController",
    "FrameState",
    "basis_sum",
    "bernstein",
    "binomial",
    "evaluate",
    "SurfaceSettings",
    "ControlNet",
    "default_control_net",
    "InvalidArgument",
    "Mesh",
    "WireframeMesh",
    "SurfaceScene",
    "ShadingParameters",
    "shade",
    "GeometryCache",
    "project_wireframe",
    "tessellate",
    "ImageTexture",
    "LoadState",
    "TextureSlot",
    "load_texture",
    "SurfaceRenderer",
]

if TYPE_CHECKING:  # pragma: no cover
    from .renderer import SurfaceRenderer


def __getattr__(name: str):
    if name == "SurfaceRenderer":
        from .renderer import SurfaceRenderer as _Renderer

        return _Renderer
    raise AttributeError(name)
