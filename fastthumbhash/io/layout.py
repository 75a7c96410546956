from __future__ import annotations

import struct
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from fastthumbhash.core.dct import count_ac
from fastthumbhash.core.errors import MalformedHash
from fastthumbhash.core.types import A_EXTENT, PQ_EXTENT, Header

_HDR = "<IB"
_HDR_SZ = struct.calcsize(_HDR)
_ALPHA_SZ = 1


@dataclass(frozen=True, slots=True)
class HashFields:
    header: Header
    l_ac: tuple[int, ...]
    p_ac: tuple[int, ...]
    q_ac: tuple[int, ...]
    a_ac: tuple[int, ...]


def header_size(has_alpha: bool) -> int:
    return _HDR_SZ + (_ALPHA_SZ if has_alpha else 0)


def hash_size(has_alpha: bool, lx: int, ly: int) -> int:
    n = count_ac(lx, ly) + 2 * count_ac(PQ_EXTENT, PQ_EXTENT)
    if has_alpha:
        n += count_ac(A_EXTENT, A_EXTENT)
    # the stream starts on a byte boundary, so only its own length is rounded
    return header_size(has_alpha) + (n + 1) // 2


class NibbleWriter:
    def __init__(self, buf: bytearray, start: int) -> None:
        self._buf = buf
        self.index = int(start)

    def write(self, value: int) -> None:
        v = int(value) & 0x0F
        i = self.index >> 1
        if self.index & 1:
            self._buf[i] |= v << 4
        else:
            self._buf[i] = (self._buf[i] & 0xF0) | v
        self.index += 1

    def write_all(self, values: Sequence[int]) -> None:
        for v in values:
            self.write(v)


class NibbleReader:
    def __init__(self, data: bytes, start: int) -> None:
        self._mv = memoryview(data)
        self.index = int(start)

    @property
    def remaining(self) -> int:
        return max(0, 2 * len(self._mv) - self.index)

    def read(self) -> int:
        if self.remaining <= 0:
            raise MalformedHash("truncated")
        b = self._mv[self.index >> 1]
        self.index += 1
        return (b >> 4) & 0x0F if (self.index - 1) & 1 else b & 0x0F

    def take(self, n: int) -> tuple[int, ...]:
        k = min(int(n), self.remaining)
        return tuple(self.read() for _ in range(k))


def pack_header(h: Header) -> bytes:
    word = (
        (h.l_dc & 63)
        | (h.p_dc & 63) << 6
        | (h.q_dc & 63) << 12
        | (h.l_scale & 31) << 18
        | int(h.has_alpha) << 23
        | (h.l_count & 7) << 24
        | (h.p_scale & 31) << 27
    )
    tail = (h.p_scale >> 5 & 1) | (h.q_scale & 63) << 1 | int(h.is_landscape) << 7
    out = struct.pack(_HDR, word, tail)
    if h.has_alpha:
        out += bytes([(h.a_dc & 15) | (h.a_scale & 15) << 4])
    return out


def unpack_header(data: bytes) -> Header:
    if len(data) < _HDR_SZ:
        raise MalformedHash(f"hash too short: {len(data)} bytes, need {_HDR_SZ}")
    word, tail = struct.unpack_from(_HDR, data, 0)
    has_alpha = (word >> 23 & 1) != 0

    a_dc = 15
    a_scale = 15
    if has_alpha:
        if len(data) < _HDR_SZ + _ALPHA_SZ:
            raise MalformedHash("hash too short for alpha channel")
        a_dc = data[_HDR_SZ] & 15
        a_scale = data[_HDR_SZ] >> 4 & 15

    return Header(
        l_dc=word & 63,
        p_dc=word >> 6 & 63,
        q_dc=word >> 12 & 63,
        l_scale=word >> 18 & 31,
        has_alpha=has_alpha,
        l_count=word >> 24 & 7,
        p_scale=(word >> 27 & 31) | (tail & 1) << 5,
        q_scale=tail >> 1 & 63,
        is_landscape=(tail >> 7 & 1) != 0,
        a_dc=a_dc,
        a_scale=a_scale,
    )


def dump_hash(fields: HashFields, lx: int, ly: int) -> bytes:
    h = fields.header
    buf = bytearray(hash_size(h.has_alpha, lx, ly))
    hdr = pack_header(h)
    buf[: len(hdr)] = hdr

    w = NibbleWriter(buf, 2 * len(hdr))
    w.write_all(fields.l_ac)
    w.write_all(fields.p_ac)
    w.write_all(fields.q_ac)
    if h.has_alpha:
        w.write_all(fields.a_ac)
    return bytes(buf)


def load_hash_bytes(data: bytes) -> HashFields:
    """
    Parse a hash into raw quantized fields.

    AC counts come from the header alone. A hash whose stream ends early
    yields shorter AC tuples rather than an error.
    """
    h = unpack_header(data)
    lx, ly = h.luma_extents()
    r = NibbleReader(data, 2 * header_size(h.has_alpha))
    l_ac = r.take(count_ac(lx, ly))
    p_ac = r.take(count_ac(PQ_EXTENT, PQ_EXTENT))
    q_ac = r.take(count_ac(PQ_EXTENT, PQ_EXTENT))
    a_ac = r.take(count_ac(A_EXTENT, A_EXTENT)) if h.has_alpha else ()
    return HashFields(header=h, l_ac=l_ac, p_ac=p_ac, q_ac=q_ac, a_ac=a_ac)


def save_hash(path: Path, data: bytes) -> None:
    path.write_bytes(bytes(data))


def load_hash(path: Path) -> bytes:
    return path.read_bytes()
