"""Per-fragment local illumination: Lambert diffuse plus Phong specular.

A diffuse texture, when bound, replaces the object colour; it is never
combined with it. A tangent-space normal map, when enabled and bound,
perturbs the interpolated normal before lighting.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .config import RGB
from .mesh import Vector2, Vector3, tangent_frame, vec_dot, vec_normalize, vec_scale, vec_sub
from .texture import RGBA, TextureSlot

DEFAULT_LIGHT_POSITION: Vector3 = (10.0, 10.0, 10.0)
DEFAULT_VIEW_POSITION: Vector3 = (0.0, 0.0, 10.0)


@dataclass
class ShadingParameters:
    kd: float = 0.8
    ks: float = 0.5
    specular_exponent: float = 32.0
    light_color: RGB = (1.0, 1.0, 1.0)
    object_color: RGB = (1.0, 1.0, 1.0)
    light_position: Vector3 = DEFAULT_LIGHT_POSITION
    view_position: Vector3 = DEFAULT_VIEW_POSITION
    texture: TextureSlot = field(default_factory=TextureSlot)
    normal_map: TextureSlot = field(default_factory=TextureSlot)
    use_normal_map: bool = False

    @property
    def use_texture(self) -> bool:
        return self.texture.is_loaded

    @property
    def applies_normal_map(self) -> bool:
        return self.use_normal_map and self.normal_map.is_loaded

    def to_uniforms(self) -> dict:
        """Flat uniform block for a rasterizer."""

        return {
            "uKd": self.kd,
            "uKs": self.ks,
            "uShininess": self.specular_exponent,
            "uLightColor": list(self.light_color),
            "uObjectColor": list(self.object_color),
            "uLightPosition": list(self.light_position),
            "uViewPosition": list(self.view_position),
            "uUseTexture": self.use_texture,
            "uUseNormalMap": self.applies_normal_map,
        }


def reflect(incident: Vector3, normal: Vector3) -> Vector3:
    return vec_sub(incident, vec_scale(normal, 2.0 * vec_dot(normal, incident)))


def sample_normal(
    normal_map: TextureSlot,
    uv: Vector2,
    normal: Vector3,
    tangent: Vector3,
    bitangent: Vector3,
) -> Vector3:
    """Tangent-space normal from *normal_map* at *uv*, expressed in world space."""

    assert normal_map.image is not None
    r, g, b, _a = normal_map.image.sample(uv[0], uv[1])
    tx, ty, tz = r * 2.0 - 1.0, g * 2.0 - 1.0, b * 2.0 - 1.0
    return vec_normalize((
        tangent[0] * tx + bitangent[0] * ty + normal[0] * tz,
        tangent[1] * tx + bitangent[1] * ty + normal[1] * tz,
        tangent[2] * tx + bitangent[2] * ty + normal[2] * tz,
    ))


def shade(
    params: ShadingParameters,
    point: Vector3,
    normal: Vector3,
    uv: Vector2 = (0.0, 0.0),
    tangent: Optional[Vector3] = None,
    bitangent: Optional[Vector3] = None,
) -> RGBA:
    """Colour of the fragment at *point* as an ``(r, g, b, a)`` tuple."""

    n = vec_normalize(normal)
    if params.applies_normal_map:
        if tangent is None or bitangent is None:
            tangent, bitangent = tangent_frame(n)
        n = sample_normal(params.normal_map, uv, n, tangent, bitangent)

    light_dir = vec_normalize(vec_sub(params.light_position, point))
    view_dir = vec_normalize(vec_sub(params.view_position, point))

    lambert = max(vec_dot(n, light_dir), 0.0)
    specular = 0.0
    if lambert > 0.0:
        reflect_dir = reflect(vec_scale(light_dir, -1.0), n)
        specular = max(vec_dot(view_dir, reflect_dir), 0.0) ** params.specular_exponent
    intensity = params.kd * lambert
    highlight = params.ks * specular
    light = tuple(c * intensity + c * highlight for c in params.light_color)

    if params.use_texture:
        assert params.texture.image is not None
        base = params.texture.image.sample(uv[0], uv[1])
        return (base[0] * light[0], base[1] * light[1], base[2] * light[2], base[3])
    tint = params.object_color
    return (light[0] * tint[0], light[1] * tint[1], light[2] * tint[2], 1.0)


def clamp_color(rgba: RGBA) -> RGBA:
    """Clamp a shaded colour into displayable range."""

    return tuple(min(max(c, 0.0), 1.0) for c in rgba)  # type: ignore[return-value]


__all__ = [
    "ShadingParameters",
    "DEFAULT_LIGHT_POSITION",
    "DEFAULT_VIEW_POSITION",
    "reflect",
    "sample_normal",
    "shade",
    "clamp_color",
]
