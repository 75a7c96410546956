from __future__ import annotations

from dataclasses import dataclass
from typing import Final

import numpy as np
from numpy.typing import NDArray

MAX_ENCODE_DIM: Final[int] = 128
DEFAULT_BASE_SIZE: Final[int] = 32

L_LIMIT_OPAQUE: Final[int] = 7
L_LIMIT_ALPHA: Final[int] = 5
PQ_EXTENT: Final[int] = 3
A_EXTENT: Final[int] = 5


@dataclass(frozen=True, slots=True)
class ThumbHashImage:
    width: int
    height: int
    rgba: bytes

    def as_array(self) -> NDArray[np.uint8]:
        return np.frombuffer(self.rgba, dtype=np.uint8).reshape(
            self.height, self.width, 4
        )


@dataclass(frozen=True, slots=True)
class ChannelCoeffs:
    dc: float
    ac: tuple[float, ...]
    scale: float


@dataclass(frozen=True, slots=True)
class Header:
    l_dc: int
    p_dc: int
    q_dc: int
    l_scale: int
    has_alpha: bool
    l_count: int
    p_scale: int
    q_scale: int
    is_landscape: bool
    a_dc: int = 15
    a_scale: int = 15

    @property
    def l_limit(self) -> int:
        return L_LIMIT_ALPHA if self.has_alpha else L_LIMIT_OPAQUE

    def luma_extents(self) -> tuple[int, int]:
        """(lx, ly) as the decoder sees them; never below the chroma grid."""
        if self.is_landscape:
            return max(PQ_EXTENT, self.l_limit), max(PQ_EXTENT, self.l_count)
        return max(PQ_EXTENT, self.l_count), max(PQ_EXTENT, self.l_limit)
