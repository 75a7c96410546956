from __future__ import annotations

from pathlib import Path

import numpy as np
from PIL import Image

from fastthumbhash.core.types import ThumbHashImage


def load_rgba(path: Path) -> tuple[int, int, bytes]:
    with Image.open(path) as img:
        rgba = img.convert("RGBA")
        arr = np.asarray(rgba, dtype=np.uint8)
    h, w = int(arr.shape[0]), int(arr.shape[1])
    return w, h, np.ascontiguousarray(arr).tobytes(order="C")


def save_rgba(path: Path, image: ThumbHashImage, upscale: int = 1) -> None:
    if upscale < 1:
        raise ValueError("upscale must be >= 1")
    img = Image.fromarray(image.as_array())
    if upscale > 1:
        img = img.resize(
            (image.width * upscale, image.height * upscale),
            resample=Image.Resampling.BILINEAR,
        )
    path.parent.mkdir(parents=True, exist_ok=True)
    img.save(path)
