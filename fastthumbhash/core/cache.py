from __future__ import annotations

import threading
from collections import OrderedDict
from dataclasses import dataclass

from fastthumbhash.core.decode import decode
from fastthumbhash.core.types import DEFAULT_BASE_SIZE, ThumbHashImage
from fastthumbhash.io.text import from_base64


@dataclass(frozen=True, slots=True)
class HashKey:
    """Cache key; two keys are equal iff their hash bytes and base size match."""

    data: bytes
    base_size: int = DEFAULT_BASE_SIZE

    def __post_init__(self) -> None:
        object.__setattr__(self, "data", bytes(self.data))
        object.__setattr__(self, "base_size", int(self.base_size))

    @classmethod
    def from_base64(cls, text: str, base_size: int = DEFAULT_BASE_SIZE) -> HashKey:
        return cls(from_base64(text), int(base_size))


class DecodeCache:
    """LRU of decoded placeholders; safe to share between worker threads."""

    def __init__(self, maxsize: int = 256) -> None:
        if maxsize < 1:
            raise ValueError("maxsize must be >= 1")
        self.maxsize = int(maxsize)
        self._items: OrderedDict[HashKey, ThumbHashImage] = OrderedDict()
        self.hits = 0
        self.misses = 0
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, key: object) -> bool:
        return key in self._items

    def get(self, hash_bytes: bytes, base_size: int = DEFAULT_BASE_SIZE) -> ThumbHashImage:
        return self.get_key(HashKey(bytes(hash_bytes), int(base_size)))

    def get_key(self, key: HashKey) -> ThumbHashImage:
        with self._lock:
            img = self._items.get(key)
            if img is not None:
                self._items.move_to_end(key)
                self.hits += 1
                return img
            self.misses += 1

        img = decode(key.data, base_size=key.base_size)
        with self._lock:
            self._items[key] = img
            self._items.move_to_end(key)
            if len(self._items) > self.maxsize:
                self._items.popitem(last=False)
        return img

    def clear(self) -> None:
        with self._lock:
            self._items.clear()
            self.hits = 0
            self.misses = 0
