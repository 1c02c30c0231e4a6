from __future__ import annotations

import numpy as np
import pytest


def _rand_buf(rng: np.random.Generator, max_len: int) -> bytes:
    n = int(rng.integers(0, max_len))
    return rng.integers(0, 256, size=n, dtype=np.uint8).tobytes()


def _poly_cases() -> list[tuple[bytes, bytes]]:
    """
    Edge cases with empty and all-zero blocks, then random pairs.
    """
    zeroes = bytes(8)
    cases = [
        (b"", b""),
        (b"", zeroes),
        (zeroes, b""),
        (zeroes, zeroes),
    ]
    rng = np.random.default_rng(42)
    for _ in range(128):
        cases.append((_rand_buf(rng, 256), _rand_buf(rng, 256)))
    return cases


POLY_CASES = _poly_cases()


@pytest.fixture(params=range(len(POLY_CASES)), ids=lambda i: f"case{i}")
def poly_case(request) -> tuple[bytes, bytes]:
    return POLY_CASES[request.param]
