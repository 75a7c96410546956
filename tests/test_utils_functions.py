import asyncio
import base64
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import numpy as np
import pytest

from fastthumbhash.core.cache import DecodeCache, HashKey
from fastthumbhash.core.decode import decode
from fastthumbhash.core.dispatch import decode_async, encode_async, submit_decode, submit_encode
from fastthumbhash.core.encode import encode
from fastthumbhash.io.text import from_base64, read_hash_file, to_base64, write_hash_file
from fastthumbhash.utils.logger import Logger


def _img(w=12, h=8, seed=0):
    rng = np.random.default_rng(seed)
    x = rng.integers(0, 256, size=(h, w, 4), dtype=np.uint8)
    return w, h, x.tobytes()


def test_logger_emits():
    out = []
    log = Logger(out.append)
    log.info("hello")
    assert out == ["hello"]


def test_logger_child_prefix():
    out = []
    log = Logger(out.append).child("encode: ").child("a.png: ")
    log.info("24 bytes")
    assert out == ["encode: a.png: 24 bytes"]


def test_base64_roundtrip_and_normalization():
    data = bytes(range(0, 250, 7))
    text = to_base64(data)
    assert from_base64(text) == data
    assert from_base64(text.rstrip("=")) == data
    assert from_base64(base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")) == data
    assert from_base64("  " + text + "\n") == data


def test_base64_rejects_garbage():
    with pytest.raises(ValueError):
        from_base64("abc$")
    with pytest.raises(ValueError):
        from_base64("abcde")


def test_hash_file_raw_and_text(tmp_path: Path):
    data = encode(*_img())
    raw = tmp_path / "h.bin"
    txt = tmp_path / "h.txt"
    write_hash_file(raw, data)
    write_hash_file(txt, data)
    assert raw.read_bytes() == data
    assert txt.read_text(encoding="ascii").strip() == to_base64(data)
    assert read_hash_file(raw) == data
    assert read_hash_file(txt) == data

    forced = tmp_path / "h.dat"
    write_hash_file(forced, data, text=True)
    assert read_hash_file(forced, text=True) == data


def test_hash_key_equality_by_content():
    data = encode(*_img())
    a = HashKey(bytes(data))
    b = HashKey(bytes(bytearray(data)))
    assert a == b
    assert hash(a) == hash(b)
    assert a != HashKey(data, base_size=64)
    assert HashKey.from_base64(to_base64(data)) == a


def test_hash_key_accepts_bytearray():
    data = encode(*_img())
    k = HashKey(bytearray(data))
    assert isinstance(k.data, bytes)
    assert k == HashKey(data)
    cache = DecodeCache()
    assert cache.get_key(k) == decode(data)
    assert HashKey(data) in cache


def test_decode_cache_shared_across_threads():
    hashes = [encode(*_img(seed=s)) for s in range(6)]
    cache = DecodeCache(maxsize=4)
    with ThreadPoolExecutor(max_workers=4) as ex:
        imgs = list(ex.map(cache.get, hashes * 5))
    assert imgs == [decode(d) for d in hashes * 5]
    assert len(cache) == 4
    assert cache.hits + cache.misses == 30


def test_decode_cache_hits_and_eviction():
    d1 = encode(*_img(seed=1))
    d2 = encode(*_img(seed=2))
    cache = DecodeCache(maxsize=1)

    first = cache.get(d1)
    again = cache.get(bytes(d1))
    assert again is first
    assert (cache.hits, cache.misses) == (1, 1)
    assert first == decode(d1)

    cache.get(d2)
    assert len(cache) == 1
    assert HashKey(d1) not in cache
    assert HashKey(d2) in cache

    cache.clear()
    assert len(cache) == 0
    assert (cache.hits, cache.misses) == (0, 0)


def test_decode_cache_keys_on_base_size():
    d = encode(*_img())
    cache = DecodeCache()
    a = cache.get(d, base_size=32)
    b = cache.get(d, base_size=64)
    assert max(a.width, a.height) == 32
    assert max(b.width, b.height) == 64
    assert cache.misses == 2


def test_submit_matches_sync():
    w, h, rgba = _img()
    with ThreadPoolExecutor(max_workers=2) as ex:
        fut = submit_encode(ex, w, h, rgba)
        data = fut.result()
        img = submit_decode(ex, data, 48).result()
    assert data == encode(w, h, rgba)
    assert img == decode(data, 48)


def test_async_matches_sync():
    w, h, rgba = _img(seed=9)

    async def run():
        data = await encode_async(w, h, rgba)
        img = await decode_async(data)
        return data, img

    data, img = asyncio.run(run())
    assert data == encode(w, h, rgba)
    assert img == decode(data)
