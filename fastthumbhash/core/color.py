from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray


@dataclass(frozen=True, slots=True)
class Planes:
    l: NDArray[np.float64]
    p: NDArray[np.float64]
    q: NDArray[np.float64]
    a: NDArray[np.float64]
    has_alpha: bool


def average_color(rgba01: NDArray[np.float64]) -> tuple[NDArray[np.float64], float]:
    """Alpha weighted mean RGB and the plain alpha sum."""
    alpha = rgba01[:, :, 3]
    alpha_sum = float(alpha.sum())
    weighted = (rgba01[:, :, :3] * alpha[:, :, None]).sum(axis=(0, 1))
    if alpha_sum > 0.0:
        weighted = weighted / alpha_sum
    return weighted.astype(np.float64, copy=False), alpha_sum


def rgba_to_planes(rgba: NDArray[np.uint8]) -> Planes:
    if rgba.ndim != 3 or rgba.shape[2] != 4:
        raise ValueError("rgba must be HxWx4")
    x = rgba.astype(np.float64) / 255.0
    h, w = int(x.shape[0]), int(x.shape[1])

    avg, alpha_sum = average_color(x)
    alpha = x[:, :, 3]
    inv = (1.0 - alpha)[:, :, None]
    rgb = avg[None, None, :] * inv + x[:, :, :3] * alpha[:, :, None]
    r = rgb[:, :, 0]
    g = rgb[:, :, 1]
    b = rgb[:, :, 2]

    return Planes(
        l=(r + g + b) / 3.0,
        p=(r + g) / 2.0 - b,
        q=r - g,
        a=alpha.copy(),
        has_alpha=alpha_sum < float(w * h),
    )


def to_u8(x: NDArray[np.float64]) -> NDArray[np.uint8]:
    y = np.floor(np.clip(x, 0.0, 1.0) * 255.0 + 0.5)
    return y.astype(np.uint8)


def planes_to_rgba(
    l: NDArray[np.float64],
    p: NDArray[np.float64],
    q: NDArray[np.float64],
    a: NDArray[np.float64],
) -> NDArray[np.uint8]:
    b = l - 2.0 / 3.0 * p
    r = (3.0 * l - b + q) / 2.0
    g = r - q
    return np.stack([to_u8(r), to_u8(g), to_u8(b), to_u8(a)], axis=2)
