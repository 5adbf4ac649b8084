"""Matplotlib-based viewer for a :class:`SurfaceScene`."""
from __future__ import annotations

from typing import List, Optional, Tuple

import matplotlib.pyplot as plt
from matplotlib import animation
from mpl_toolkits.mplot3d.art3d import Line3DCollection, Poly3DCollection

from .mesh import Mesh, rotation_z, vec_add, vec_scale
from .scene import SurfaceScene
from .shading import ShadingParameters, clamp_color, shade
from .texture import RGBA


def _mean3(a, b, c) -> Tuple[float, float, float]:
    return vec_scale(vec_add(vec_add(a, b), c), 1.0 / 3.0)


def face_colors(mesh: Mesh, params: ShadingParameters) -> List[RGBA]:
    """Shade every triangle once at its centroid with interpolated attributes."""

    colors: List[RGBA] = []
    for i0, i1, i2 in mesh.faces:
        point = _mean3(mesh.positions[i0], mesh.positions[i1], mesh.positions[i2])
        normal = _mean3(mesh.normals[i0], mesh.normals[i1], mesh.normals[i2])
        tangent = _mean3(mesh.tangents[i0], mesh.tangents[i1], mesh.tangents[i2])
        bitangent = _mean3(mesh.bitangents[i0], mesh.bitangents[i1], mesh.bitangents[i2])
        uv0, uv1, uv2 = mesh.uvs[i0], mesh.uvs[i1], mesh.uvs[i2]
        uv = ((uv0[0] + uv1[0] + uv2[0]) / 3.0, (uv0[1] + uv1[1] + uv2[1]) / 3.0)
        colors.append(clamp_color(shade(params, point, normal, uv, tangent, bitangent)))
    return colors


class SurfaceRenderer:
    """Render a :class:`SurfaceScene` with a perspective view and an optional flat grid view."""

    def __init__(
        self,
        scene: SurfaceScene,
        background_color: str = "#021826",
        grid_color: str = "#f0c090",
    ) -> None:
        self.scene = scene
        self.background_color = background_color
        self.grid_color = grid_color
        self.fig = plt.figure(figsize=(10, 5))
        self.ax = self.fig.add_subplot(121, projection="3d")
        self.grid_ax = self.fig.add_subplot(122, projection="3d", proj_type="ortho")
        self.surface: Optional[Poly3DCollection] = None
        self.grid_lines: Optional[Line3DCollection] = None
        self.light_marker = None
        self._init_scene()

    def _init_scene(self) -> None:
        for ax in (self.ax, self.grid_ax):
            ax.set_facecolor(self.background_color)
            ax.grid(False)
            ax.set_xticks([])
            ax.set_yticks([])
            ax.set_zticks([])
            ax.set_xlim([-2.5, 2.5])
            ax.set_ylim([-2.5, 2.5])
        self.ax.set_zlim([-1.0, 4.0])
        self.ax.view_init(elev=25, azim=-60)
        self.grid_ax.set_zlim([-1.0, 1.0])
        self.grid_ax.view_init(elev=90, azim=-90)
        self.fig.subplots_adjust(left=0, right=1, top=1, bottom=0)

        self.surface = Poly3DCollection([], edgecolors="none", linewidths=0.0)
        self.ax.add_collection3d(self.surface, autolim=False)
        self.grid_lines = Line3DCollection([], colors=self.grid_color, linewidths=0.6)
        self.grid_ax.add_collection3d(self.grid_lines, autolim=False)
        (self.light_marker,) = self.ax.plot([], [], [], marker="o", color="#ffe28a", linestyle="none")

    def _update_frame(self, frame: int, dt: float) -> List:
        scene = self.scene
        state = scene.frame(frame * dt)
        assert scene.mesh is not None and self.surface is not None and self.grid_lines is not None
        mesh = scene.mesh.transformed(rotation_z(state.mesh_rotation_z))
        self.surface.set_verts(mesh.to_triangulated_faces())
        self.surface.set_facecolor(face_colors(mesh, scene.shading))

        light = state.light_position
        self.light_marker.set_data_3d([light[0]], [light[1]], [light[2]])

        wireframe = scene.wireframe
        self.grid_ax.set_visible(wireframe is not None)
        self.grid_lines.set_segments(wireframe.to_line_segments() if wireframe is not None else [])
        return [self.surface, self.grid_lines, self.light_marker]

    def animate(self, seconds: float = 30.0, fps: int = 24, save_path: str | None = None) -> animation.FuncAnimation:
        frame_count = int(seconds * fps)
        dt = 1.0 / fps
        anim = animation.FuncAnimation(
            self.fig,
            self._update_frame,
            fargs=(dt,),
            frames=frame_count,
            interval=1000.0 / fps,
            blit=False,
        )
        if save_path:
            anim.save(save_path, fps=fps)
        else:
            plt.show()
        return anim

    def render_single_frame(self, elapsed: float = 0.0, save_path: str | None = None) -> None:
        self._update_frame(1, elapsed)
        if save_path:
            self.fig.savefig(save_path, facecolor=self.background_color)
        else:
            plt.show()

    def close(self) -> None:
        plt.close(self.fig)


__all__ = ["SurfaceRenderer", "face_colors"]
