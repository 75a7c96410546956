from __future__ import annotations

from pathlib import Path

import numpy as np
from numpy.typing import NDArray

from fastthumbhash.core.color import rgba_to_planes
from fastthumbhash.core.dct import encode_channel
from fastthumbhash.core.errors import InvalidInputSize
from fastthumbhash.core.quant import (
    A_DC_BITS,
    A_SCALE_BITS,
    L_DC_BITS,
    L_SCALE_BITS,
    PQ_DC_BITS,
    PQ_SCALE_BITS,
    quantize,
    quantize_ac,
    quantize_signed,
    round_half_up,
)
from fastthumbhash.core.types import (
    A_EXTENT,
    L_LIMIT_ALPHA,
    L_LIMIT_OPAQUE,
    MAX_ENCODE_DIM,
    PQ_EXTENT,
    ChannelCoeffs,
    Header,
)
from fastthumbhash.io.imageio import load_rgba
from fastthumbhash.io.layout import HashFields, dump_hash
from fastthumbhash.io.text import write_hash_file
from fastthumbhash.utils.logger import Logger


def downscale_nearest(rgba: NDArray[np.uint8], max_dim: int = MAX_ENCODE_DIM) -> NDArray[np.uint8]:
    h, w = int(rgba.shape[0]), int(rgba.shape[1])
    if max(w, h) <= int(max_dim):
        return rgba
    s = float(max_dim) / float(max(w, h))
    nw = max(1, int(w * s))
    nh = max(1, int(h * s))
    xs = (np.arange(nw) * (w / nw)).astype(np.int64)
    ys = (np.arange(nh) * (h / nh)).astype(np.int64)
    xs = np.minimum(xs, w - 1)
    ys = np.minimum(ys, h - 1)
    return np.ascontiguousarray(rgba[ys[:, None], xs[None, :], :])


def luma_extents(width: int, height: int, has_alpha: bool) -> tuple[int, int]:
    limit = L_LIMIT_ALPHA if has_alpha else L_LIMIT_OPAQUE
    m = max(int(width), int(height))
    lx = max(1, round_half_up(limit * width / m))
    ly = max(1, round_half_up(limit * height / m))
    return lx, ly


def _nibbles(c: ChannelCoeffs) -> tuple[int, ...]:
    return tuple(quantize_ac(v) for v in c.ac)


def encode_array(rgba: NDArray[np.uint8]) -> bytes:
    if rgba.ndim != 3 or rgba.shape[2] != 4:
        raise ValueError("rgba must be HxWx4")
    if rgba.shape[0] < 1 or rgba.shape[1] < 1:
        raise ValueError("image must be at least 1x1")

    img = downscale_nearest(np.asarray(rgba, dtype=np.uint8))
    h, w = int(img.shape[0]), int(img.shape[1])

    planes = rgba_to_planes(img)
    has_alpha = planes.has_alpha
    lx, ly = luma_extents(w, h, has_alpha)

    lc = encode_channel(planes.l, lx, ly)
    pc = encode_channel(planes.p, PQ_EXTENT, PQ_EXTENT)
    qc = encode_channel(planes.q, PQ_EXTENT, PQ_EXTENT)
    ac = encode_channel(planes.a, A_EXTENT, A_EXTENT) if has_alpha else None

    is_landscape = w > h
    header = Header(
        l_dc=quantize(lc.dc, L_DC_BITS),
        p_dc=quantize_signed(pc.dc, PQ_DC_BITS),
        q_dc=quantize_signed(qc.dc, PQ_DC_BITS),
        l_scale=quantize(lc.scale, L_SCALE_BITS),
        has_alpha=has_alpha,
        l_count=ly if is_landscape else lx,
        p_scale=quantize(pc.scale, PQ_SCALE_BITS),
        q_scale=quantize(qc.scale, PQ_SCALE_BITS),
        is_landscape=is_landscape,
        a_dc=quantize(ac.dc, A_DC_BITS) if ac is not None else 15,
        a_scale=quantize(ac.scale, A_SCALE_BITS) if ac is not None else 15,
    )
    fields = HashFields(
        header=header,
        l_ac=_nibbles(lc),
        p_ac=_nibbles(pc),
        q_ac=_nibbles(qc),
        a_ac=_nibbles(ac) if ac is not None else (),
    )
    return dump_hash(fields, lx, ly)


def encode(width: int, height: int, rgba: bytes | bytearray | memoryview) -> bytes:
    """
    Encode a straight (non-premultiplied) RGBA buffer into a ThumbHash.

    Raises InvalidInputSize when len(rgba) != width * height * 4.
    """
    w = int(width)
    h = int(height)
    buf = bytes(rgba)
    expected = w * h * 4
    if w < 1 or h < 1 or len(buf) != expected:
        raise InvalidInputSize(expected, len(buf))
    arr = np.frombuffer(buf, dtype=np.uint8).reshape(h, w, 4)
    return encode_array(arr)


def encode_to_file(
    input_path: Path,
    output_path: Path,
    text: bool | None = None,
    log: Logger | None = None,
) -> bytes:
    w, h, rgba = load_rgba(input_path)
    data = encode(w, h, rgba)
    write_hash_file(output_path, data, text=text)
    if log is not None:
        log.info(f"{input_path}: {w}x{h} -> {len(data)} bytes")
    return data
