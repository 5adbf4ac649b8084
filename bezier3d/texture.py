"""Image handles consumed by the shading model.

The shading code never decodes images. It only looks at a :class:`TextureSlot`
and, when the slot is loaded, samples its :class:`ImageTexture`. Hosts fill the
slots, for example with :func:`load_texture`.
"""
from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

import numpy as np

logger = logging.getLogger(__name__)

RGBA = Tuple[float, float, float, float]


class LoadState(enum.Enum):
    UNLOADED = "unloaded"
    LOADED = "loaded"
    FAILED = "failed"


class ImageTexture:
    """Read-only RGBA image sampled with clamp-to-edge nearest filtering.

    ``uv == (0, 0)`` is the bottom-left texel, matching the usual GL layout
    for images stored top row first.
    """

    def __init__(self, pixels: np.ndarray) -> None:
        data = np.asarray(pixels)
        if data.ndim == 2:
            data = np.stack([data, data, data], axis=-1)
        if data.ndim != 3 or data.shape[2] not in (3, 4) or data.shape[0] == 0 or data.shape[1] == 0:
            raise ValueError(f"expected an (H, W, 3|4) image, got shape {data.shape}")
        if np.issubdtype(data.dtype, np.integer):
            data = data.astype(np.float64) / 255.0
        else:
            data = data.astype(np.float64)
        if data.shape[2] == 3:
            alpha = np.ones(data.shape[:2] + (1,), dtype=np.float64)
            data = np.concatenate([data, alpha], axis=-1)
        data.setflags(write=False)
        self._pixels = data

    @property
    def width(self) -> int:
        return int(self._pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self._pixels.shape[0])

    def sample(self, u: float, v: float) -> RGBA:
        col = int(round(min(max(u, 0.0), 1.0) * (self.width - 1)))
        row = int(round((1.0 - min(max(v, 0.0), 1.0)) * (self.height - 1)))
        r, g, b, a = self._pixels[row, col]
        return (float(r), float(g), float(b), float(a))

    @classmethod
    def solid(cls, color: RGBA, size: int = 1) -> "ImageTexture":
        return cls(np.tile(np.asarray(color, dtype=np.float64), (size, size, 1)))


@dataclass(frozen=True)
class TextureSlot:
    """An image handle together with its load state."""

    state: LoadState = LoadState.UNLOADED
    image: Optional[ImageTexture] = None

    @property
    def is_loaded(self) -> bool:
        return self.state is LoadState.LOADED and self.image is not None

    @classmethod
    def unloaded(cls) -> "TextureSlot":
        return cls()

    @classmethod
    def loaded(cls, image: ImageTexture) -> "TextureSlot":
        return cls(LoadState.LOADED, image)

    @classmethod
    def failed(cls) -> "TextureSlot":
        return cls(LoadState.FAILED, None)


def load_texture(path: str | Path) -> TextureSlot:
    """Decode *path* with Matplotlib; an empty path gives an unloaded slot.

    Decoding problems are reported as a failed slot, never raised.
    """

    if not str(path):
        return TextureSlot.unloaded()
    import matplotlib.image as mpimg

    try:
        image = ImageTexture(mpimg.imread(str(path)))
    except (OSError, ValueError) as exc:
        logger.warning("could not load texture %s: %s", path, exc)
        return TextureSlot.failed()
    logger.debug("loaded texture %s (%dx%d)", path, image.width, image.height)
    return TextureSlot.loaded(image)


__all__ = ["LoadState", "ImageTexture", "TextureSlot", "load_texture", "RGBA"]
