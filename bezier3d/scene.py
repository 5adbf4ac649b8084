"""Single pipeline tying settings, geometry, textures, shading and animation."""
from __future__ import annotations

import logging
from typing import Callable, Optional

from .animation import AnimationController, FrameState
from .config import SurfaceSettings
from .control_net import ControlNet, default_control_net
from .mesh import Mesh, WireframeMesh
from .shading import DEFAULT_LIGHT_POSITION, DEFAULT_VIEW_POSITION, ShadingParameters
from .tessellator import GeometryCache
from .texture import TextureSlot, load_texture

logger = logging.getLogger(__name__)

TextureLoader = Callable[[str], TextureSlot]


class SurfaceScene:
    """Bézier surface state as seen by a host render loop.

    :meth:`apply` is the only (re)configuration entry point and is where
    :class:`~bezier3d.errors.InvalidArgument` can surface. :meth:`frame` is
    the per-frame entry point and never raises for valid state.
    """

    def __init__(
        self,
        settings: Optional[SurfaceSettings] = None,
        net: Optional[ControlNet] = None,
        texture_loader: TextureLoader = load_texture,
        view_position=DEFAULT_VIEW_POSITION,
    ) -> None:
        self.net = net if net is not None else default_control_net()
        self.texture_loader = texture_loader
        self.view_position = tuple(view_position)
        self.cache = GeometryCache()
        self.animation = AnimationController(light_position=DEFAULT_LIGHT_POSITION)
        self.settings: Optional[SurfaceSettings] = None
        self.mesh: Optional[Mesh] = None
        self.wireframe: Optional[WireframeMesh] = None
        self.texture = TextureSlot.unloaded()
        self.normal_map = TextureSlot.unloaded()
        self.shading = ShadingParameters()
        self.apply(settings or SurfaceSettings())

    def apply(self, settings: SurfaceSettings) -> SurfaceSettings:
        previous = self.settings
        # geometry first: a failure leaves the previous state untouched
        mesh = self.cache.mesh(settings.accuracy, self.net)
        if settings.show_grid:
            wireframe: Optional[WireframeMesh] = self.cache.wireframe(settings.accuracy, self.net)
        else:
            self.cache.release_wireframe()
            wireframe = None

        if previous is None or previous.texture_path != settings.texture_path:
            self.texture = self.texture_loader(settings.texture_path)
            logger.debug("texture slot for %r is %s", settings.texture_path, self.texture.state.value)
        if previous is None or previous.normal_map_path != settings.normal_map_path:
            self.normal_map = self.texture_loader(settings.normal_map_path)
            logger.debug("normal map slot for %r is %s", settings.normal_map_path, self.normal_map.state.value)

        self.settings = settings
        self.mesh = mesh
        self.wireframe = wireframe
        self.animation.animate_light = settings.animate_light
        self._rebuild_shading()
        return settings

    def update(self, **changes) -> SurfaceSettings:
        assert self.settings is not None
        return self.apply(self.settings.updated(**changes))

    def set_texture(self, slot: TextureSlot) -> None:
        """Install a texture decoded by the host after :meth:`apply` returned."""

        self.texture = slot
        self._rebuild_shading()

    def set_normal_map(self, slot: TextureSlot) -> None:
        self.normal_map = slot
        self._rebuild_shading()

    def frame(self, elapsed: float) -> FrameState:
        state = self.animation.tick(elapsed)
        self.shading.light_position = state.light_position
        return state

    def _rebuild_shading(self) -> None:
        settings = self.settings
        assert settings is not None
        self.shading = ShadingParameters(
            kd=settings.kd,
            ks=settings.ks,
            specular_exponent=settings.specular_exponent,
            light_color=settings.light_color,
            object_color=settings.object_color,
            light_position=self.animation.light_at(self.animation.elapsed),
            view_position=self.view_position,
            texture=self.texture,
            normal_map=self.normal_map,
            use_normal_map=settings.use_normal_map,
        )

    def snapshot(self) -> dict:
        assert self.settings is not None
        state = self.animation.state
        return {
            "type": "state",
            "settings": self.settings.to_dict(),
            "frame": {
                "elapsed": state.elapsed,
                "mesh_rotation_z": state.mesh_rotation_z,
                "light_position": list(self.shading.light_position),
            },
            "shading": self.shading.to_uniforms(),
        }


__all__ = ["SurfaceScene", "TextureLoader"]
