from __future__ import annotations

import asyncio
from concurrent.futures import Executor, Future

from fastthumbhash.core.decode import decode
from fastthumbhash.core.encode import encode
from fastthumbhash.core.types import DEFAULT_BASE_SIZE, ThumbHashImage


def submit_encode(executor: Executor, width: int, height: int, rgba: bytes) -> Future[bytes]:
    return executor.submit(encode, int(width), int(height), bytes(rgba))


def submit_decode(
    executor: Executor, hash_bytes: bytes, base_size: int = DEFAULT_BASE_SIZE
) -> Future[ThumbHashImage]:
    return executor.submit(decode, bytes(hash_bytes), int(base_size))


async def encode_async(
    width: int, height: int, rgba: bytes, executor: Executor | None = None
) -> bytes:
    """Run `encode` off the event loop; `executor=None` uses the loop default."""
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(executor, encode, int(width), int(height), bytes(rgba))


async def decode_async(
    hash_bytes: bytes,
    base_size: int = DEFAULT_BASE_SIZE,
    executor: Executor | None = None,
) -> ThumbHashImage:
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(executor, decode, bytes(hash_bytes), int(base_size))
