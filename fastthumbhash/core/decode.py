from __future__ import annotations

from pathlib import Path

import numpy as np
from numpy.typing import NDArray

from fastthumbhash.core.color import planes_to_rgba
from fastthumbhash.core.dct import decode_channel
from fastthumbhash.core.quant import (
    A_DC_BITS,
    A_SCALE_BITS,
    L_DC_BITS,
    L_SCALE_BITS,
    PQ_DC_BITS,
    PQ_SCALE_BITS,
    dequantize,
    dequantize_ac,
    dequantize_signed,
    round_half_up,
)
from fastthumbhash.core.types import (
    A_EXTENT,
    DEFAULT_BASE_SIZE,
    PQ_EXTENT,
    Header,
    ThumbHashImage,
)
from fastthumbhash.io.imageio import save_rgba
from fastthumbhash.io.layout import load_hash_bytes, unpack_header
from fastthumbhash.io.text import read_hash_file
from fastthumbhash.utils.logger import Logger


def _ratio(h: Header) -> float:
    lx, ly = h.luma_extents()
    return float(lx) / float(ly)


def approximate_aspect_ratio(hash_bytes: bytes) -> float:
    """Width / height of the source image, recovered from the header alone."""
    return _ratio(unpack_header(bytes(hash_bytes)))


def output_size(ratio: float, base_size: int = DEFAULT_BASE_SIZE) -> tuple[int, int]:
    b = int(base_size)
    if ratio > 1.0:
        return b, max(1, round_half_up(b / ratio))
    return max(1, round_half_up(b * ratio)), b


def _dequant_all(raw: tuple[int, ...], scale: float) -> list[float]:
    return [dequantize_ac(v, scale) for v in raw]


def decode_array(hash_bytes: bytes, base_size: int = DEFAULT_BASE_SIZE) -> NDArray[np.uint8]:
    if int(base_size) < 1:
        raise ValueError("base_size must be positive")
    fields = load_hash_bytes(bytes(hash_bytes))
    h = fields.header
    lx, ly = h.luma_extents()

    l_dc = dequantize(h.l_dc, L_DC_BITS)
    p_dc = dequantize_signed(h.p_dc, PQ_DC_BITS)
    q_dc = dequantize_signed(h.q_dc, PQ_DC_BITS)
    l_scale = dequantize(h.l_scale, L_SCALE_BITS)
    p_scale = dequantize(h.p_scale, PQ_SCALE_BITS)
    q_scale = dequantize(h.q_scale, PQ_SCALE_BITS)

    w, hh = output_size(_ratio(h), base_size)

    l = decode_channel(l_dc, _dequant_all(fields.l_ac, l_scale), lx, ly, w, hh)
    p = decode_channel(p_dc, _dequant_all(fields.p_ac, p_scale), PQ_EXTENT, PQ_EXTENT, w, hh)
    q = decode_channel(q_dc, _dequant_all(fields.q_ac, q_scale), PQ_EXTENT, PQ_EXTENT, w, hh)
    if h.has_alpha:
        a_dc = dequantize(h.a_dc, A_DC_BITS)
        a_scale = dequantize(h.a_scale, A_SCALE_BITS)
        a = decode_channel(a_dc, _dequant_all(fields.a_ac, a_scale), A_EXTENT, A_EXTENT, w, hh)
    else:
        a = np.ones((hh, w), dtype=np.float64)

    return planes_to_rgba(l, p, q, a)


def decode(hash_bytes: bytes, base_size: int = DEFAULT_BASE_SIZE) -> ThumbHashImage:
    """
    Reconstruct a placeholder image from a ThumbHash.

    The longer side of the result is `base_size`. Raises MalformedHash
    when the hash is shorter than its header.
    """
    out = decode_array(hash_bytes, base_size=base_size)
    return ThumbHashImage(
        width=int(out.shape[1]),
        height=int(out.shape[0]),
        rgba=out.tobytes(order="C"),
    )


def decode_to_file(
    input_path: Path,
    output_path: Path,
    base_size: int = DEFAULT_BASE_SIZE,
    upscale: int = 1,
    text: bool | None = None,
    log: Logger | None = None,
) -> ThumbHashImage:
    img = decode(read_hash_file(input_path, text=text), base_size=int(base_size))
    save_rgba(output_path, img, upscale=int(upscale))
    if log is not None:
        log.info(f"{input_path}: {img.width}x{img.height} -> {output_path}")
    return img
