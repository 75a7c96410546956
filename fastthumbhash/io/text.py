from __future__ import annotations

import base64
import binascii
from pathlib import Path

from fastthumbhash.io.layout import load_hash, save_hash

TEXT_SUFFIXES = {".txt", ".b64"}


def to_base64(data: bytes) -> str:
    return base64.b64encode(bytes(data)).decode("ascii")


def from_base64(text: str) -> bytes:
    """Accepts standard or URL-safe alphabet, with or without padding."""
    t = "".join(str(text).split())
    t = t.replace("-", "+").replace("_", "/")
    t = t.rstrip("=")
    if len(t) % 4 == 1:
        raise ValueError("invalid base64 length")
    t += "=" * (-len(t) % 4)
    try:
        return base64.b64decode(t, validate=True)
    except binascii.Error as e:
        raise ValueError("invalid base64 text") from e


def is_text_path(path: Path) -> bool:
    return path.suffix.lower() in TEXT_SUFFIXES


def write_hash_file(path: Path, data: bytes, text: bool | None = None) -> None:
    as_text = is_text_path(path) if text is None else bool(text)
    path.parent.mkdir(parents=True, exist_ok=True)
    if as_text:
        path.write_text(to_base64(data) + "\n", encoding="ascii")
        return
    save_hash(path, data)


def read_hash_file(path: Path, text: bool | None = None) -> bytes:
    as_text = is_text_path(path) if text is None else bool(text)
    if as_text:
        return from_base64(path.read_text(encoding="ascii"))
    return load_hash(path)
