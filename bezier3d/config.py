"""User-facing surface settings."""
from __future__ import annotations

import dataclasses
import math
from dataclasses import dataclass
from typing import Any, Mapping, Sequence, Tuple, Union

from .errors import InvalidArgument

RGB = Tuple[float, float, float]
ColorLike = Union[str, Sequence[float]]


def parse_color(value: ColorLike) -> RGB:
    """Accept ``#rrggbb``, ``#rgb`` or an RGB triple in ``[0, 1]``."""

    if isinstance(value, str):
        text = value.strip().lstrip("#")
        if len(text) == 3:
            text = "".join(ch * 2 for ch in text)
        if len(text) != 6:
            raise InvalidArgument(f"invalid colour {value!r}")
        try:
            channels = [int(text[k:k + 2], 16) / 255.0 for k in (0, 2, 4)]
        except ValueError:
            raise InvalidArgument(f"invalid colour {value!r}") from None
        return (channels[0], channels[1], channels[2])
    try:
        r, g, b = (float(c) for c in value)
    except (TypeError, ValueError):
        raise InvalidArgument(f"invalid colour {value!r}") from None
    for c in (r, g, b):
        if not 0.0 <= c <= 1.0:
            raise InvalidArgument(f"colour channels must be in [0, 1], got {value!r}")
    return (r, g, b)


@dataclass(frozen=True)
class SurfaceSettings:
    """Parameters a host may change at runtime.

    Defaults reproduce the stock scene: accuracy 5, ``kd`` 0.8, ``ks`` 0.5 and
    a specular exponent of 32 under a white light.
    """

    accuracy: int = 5
    kd: float = 0.8
    ks: float = 0.5
    specular_exponent: float = 32.0
    light_color: ColorLike = "#ffffff"
    object_color: ColorLike = "#ffffff"
    animate_light: bool = False
    texture_path: str = ""
    normal_map_path: str = ""
    show_grid: bool = False
    use_normal_map: bool = False

    def __post_init__(self) -> None:
        if isinstance(self.accuracy, bool) or not isinstance(self.accuracy, int) or self.accuracy < 1:
            raise InvalidArgument(f"accuracy must be an integer >= 1, got {self.accuracy!r}")
        for name in ("kd", "ks", "specular_exponent"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise InvalidArgument(f"{name} must be a number, got {value!r}")
        for name in ("kd", "ks"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise InvalidArgument(f"{name} must be in [0, 1], got {value!r}")
        if not 0 <= self.specular_exponent < math.inf:
            raise InvalidArgument(f"specular_exponent must be finite and >= 0, got {self.specular_exponent!r}")
        # normalise colours once so later comparisons are cheap
        object.__setattr__(self, "light_color", parse_color(self.light_color))
        object.__setattr__(self, "object_color", parse_color(self.object_color))

    def updated(self, **changes: Any) -> "SurfaceSettings":
        return dataclasses.replace(self, **changes)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], *, strict: bool = True) -> "SurfaceSettings":
        return cls().merged(data, strict=strict)

    def merged(self, data: Mapping[str, Any], *, strict: bool = True) -> "SurfaceSettings":
        """Return a copy with *data* applied; unknown keys fail when *strict*."""

        known = {f.name for f in dataclasses.fields(self)}
        unknown = set(data) - known
        if unknown and strict:
            raise InvalidArgument(f"unknown settings: {', '.join(sorted(unknown))}")
        return self.updated(**{k: v for k, v in data.items() if k in known})

    def to_dict(self) -> dict:
        data = dataclasses.asdict(self)
        data["light_color"] = list(self.light_color)
        data["object_color"] = list(self.object_color)
        return data


__all__ = ["SurfaceSettings", "parse_color", "RGB", "ColorLike"]
