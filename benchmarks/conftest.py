from __future__ import annotations

import numpy as np
import pytest
from numpy.typing import NDArray


def pytest_addoption(parser: pytest.Parser) -> None:
    g = parser.getgroup("bench")
    g.addoption("--bench-size", action="store", type=int, default=128)
    g.addoption("--bench-seed", action="store", type=int, default=0)


def _make_rgba(size: int, kind: str, seed: int) -> NDArray[np.uint8]:
    rng = np.random.default_rng(seed)
    if kind == "random":
        return rng.integers(0, 256, size=(size, size, 4), dtype=np.uint8)

    if kind == "smooth":
        y = np.linspace(0.0, 1.0, size, dtype=np.float32)
        x = np.linspace(0.0, 1.0, size, dtype=np.float32)
        yy, xx = np.meshgrid(y, x, indexing="ij")
        base = 0.6 * yy + 0.4 * xx
        out = np.stack(
            [base, np.clip(base * 0.9 + 0.05, 0.0, 1.0), 1.0 - base, np.ones_like(base)],
            axis=2,
        )
        return np.clip(np.rint(out * 255.0), 0.0, 255.0).astype(np.uint8)

    raise ValueError("bad kind")


@pytest.fixture(params=["random", "smooth"])
def bench_image(request: pytest.FixtureRequest) -> tuple[int, int, bytes]:
    size = int(request.config.getoption("--bench-size"))
    seed = int(request.config.getoption("--bench-seed"))
    x = _make_rgba(size, str(request.param), seed)
    return size, size, x.tobytes()
