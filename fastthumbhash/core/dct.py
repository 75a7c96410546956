from __future__ import annotations

from collections.abc import Sequence
from functools import lru_cache

import numpy as np
from numpy.typing import NDArray

from fastthumbhash.core.types import ChannelCoeffs


@lru_cache(maxsize=64)
def retained_frequencies(nx: int, ny: int) -> tuple[tuple[int, int], ...]:
    """
    AC frequencies kept for an (nx, ny) grid, in wire order.

    Outer loop over cy, inner over cx; (0, 0) is the DC term and is skipped.
    The triangular cut drops the highest joint frequencies.
    """
    nx = int(nx)
    ny = int(ny)
    out: list[tuple[int, int]] = []
    for cy in range(ny):
        for cx in range(nx):
            if (cx != 0 or cy != 0) and cx * ny + cy * nx < nx * ny:
                out.append((cx, cy))
    return tuple(out)


def count_ac(nx: int, ny: int) -> int:
    return len(retained_frequencies(nx, ny))


def cos_basis(size: int, n: int) -> NDArray[np.float64]:
    """(size, n) matrix with entry [x, k] = cos(pi / size * (x + 0.5) * k)."""
    pos = np.arange(int(size), dtype=np.float64) + 0.5
    k = np.arange(int(n), dtype=np.float64)
    return np.cos(np.pi / float(size) * pos[:, None] * k[None, :])


def encode_channel(channel: NDArray[np.float64], nx: int, ny: int) -> ChannelCoeffs:
    if channel.ndim != 2:
        raise ValueError("channel must be HxW")
    h = int(channel.shape[0])
    w = int(channel.shape[1])

    fx = cos_basis(w, nx)
    fy = cos_basis(h, ny)
    f = (fy.T @ channel.astype(np.float64, copy=False) @ fx) / float(w * h)

    freqs = retained_frequencies(nx, ny)
    ac = np.array([f[cy, cx] for cx, cy in freqs], dtype=np.float64)
    scale = float(np.abs(ac).max()) if ac.size else 0.0
    if scale > 0.0:
        ac = 0.5 + 0.5 * ac / scale

    return ChannelCoeffs(dc=float(f[0, 0]), ac=tuple(float(v) for v in ac), scale=scale)


def decode_channel(
    dc: float,
    ac: Sequence[float],
    nx: int,
    ny: int,
    width: int,
    height: int,
) -> NDArray[np.float64]:
    """
    Evaluate the truncated cosine series at every pixel centre of a
    width x height grid. `ac` holds already dequantized coefficients;
    frequencies past the end of `ac` contribute nothing.
    """
    coef = np.zeros((int(ny), int(nx)), dtype=np.float64)
    coef[0, 0] = float(dc)
    for (cx, cy), v in zip(retained_frequencies(nx, ny), ac):
        coef[cy, cx] = float(v)

    fx = cos_basis(width, nx)
    fy = cos_basis(height, ny)
    return fy @ coef @ fx.T
