from __future__ import annotations

from fastthumbhash.core.decode import decode
from fastthumbhash.core.encode import encode
from fastthumbhash.core.errors import InvalidInputSize, MalformedHash
from fastthumbhash.core.types import ThumbHashImage

__all__ = ["ThumbHashImage", "InvalidInputSize", "MalformedHash", "encode", "decode"]
