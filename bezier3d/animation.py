"""Per-frame mesh spin and orbiting point light."""
from __future__ import annotations

import math
from dataclasses import dataclass

from .mesh import Vector3
from .shading import DEFAULT_LIGHT_POSITION

ROTATION_SPEED = 0.1  # rad per second about Z
LIGHT_ORBIT_RADIUS = 5.0


@dataclass(frozen=True)
class FrameState:
    elapsed: float
    mesh_rotation_z: float
    light_position: Vector3


class AnimationController:
    """Owns the animation state advanced once per rendered frame.

    The mesh always spins about Z. The light orbits in the XY plane at
    ``LIGHT_ORBIT_RADIUS`` and the configured height only while
    ``animate_light`` is set; otherwise it stays at its static position.
    Only the frame-update point of the host should call :meth:`tick`.
    """

    def __init__(self, animate_light: bool = False, light_position: Vector3 = DEFAULT_LIGHT_POSITION) -> None:
        self.animate_light = animate_light
        self.static_light = tuple(float(c) for c in light_position)
        self.elapsed = 0.0
        self.state = FrameState(0.0, 0.0, self.static_light)

    def light_at(self, elapsed: float) -> Vector3:
        if not self.animate_light:
            return self.static_light
        return (
            math.sin(elapsed) * LIGHT_ORBIT_RADIUS,
            math.cos(elapsed) * LIGHT_ORBIT_RADIUS,
            self.static_light[2],
        )

    def tick(self, elapsed: float) -> FrameState:
        self.elapsed = elapsed
        self.state = FrameState(
            elapsed=elapsed,
            mesh_rotation_z=elapsed * ROTATION_SPEED,
            light_position=self.light_at(elapsed),
        )
        return self.state


__all__ = ["AnimationController", "FrameState", "ROTATION_SPEED", "LIGHT_ORBIT_RADIUS"]
