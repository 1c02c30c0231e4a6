# tests/unit/test_poly.py
from __future__ import annotations

import numpy as np
import pytest

from crccombine import Poly, crc32, crc64


@pytest.mark.parametrize("p", [crc32.ieee(), crc64.iso()], ids=["crc32", "crc64"])
def test_combine_empty_prefix_is_identity(p):
    for x in (0, 1, 0xDEADBEEF, p.checksum(b"abc")):
        for n in (-5, 0, 1, 1000, 1 << 40):
            assert p.combine(0, x, n) == x


@pytest.mark.parametrize("p", [crc32.ieee(), crc64.iso()], ids=["crc32", "crc64"])
def test_combine_empty_suffix_is_identity(p):
    x = p.checksum(b"prefix")
    for y in (0, 7, p.checksum(b"zzz")):
        for n in (0, -1, -(1 << 62)):
            assert p.combine(x, y, n) == x


def test_combine_long_runs_of_zeroes():
    p = crc32.ieee()
    a = b"header"
    zeros = bytes(100_000)
    assert p.combine(p.checksum(a), p.checksum(zeros), len(zeros)) == p.checksum(a + zeros)


def test_combine_is_deterministic():
    p = crc64.ecma()
    a, b = p.checksum(b"left"), p.checksum(b"right side")
    results = {p.combine(a, b, 10) for _ in range(10)}
    assert len(results) == 1


def test_update_chains():
    p = crc32.castagnoli()
    data = bytes(range(256)) * 3
    crc = 0
    for i in range(0, len(data), 37):
        crc = p.update(crc, data[i : i + 37])
    assert crc == p.checksum(data)


def test_accepts_numpy_and_buffers():
    p = crc32.ieee()
    data = b"\x00\x01\x02\xfe\xff" * 9
    arr = np.frombuffer(data, dtype=np.uint8)
    assert p.checksum(arr) == p.checksum(data)
    assert p.checksum(bytearray(data)) == p.checksum(data)
    assert p.checksum(memoryview(data)) == p.checksum(data)


def test_rejects_non_bytes():
    with pytest.raises(TypeError):
        crc32.ieee().checksum("text")


def test_poly_validation():
    with pytest.raises(ValueError):
        Poly(0xEDB88320, width=16)
    with pytest.raises(TypeError):
        Poly("0xEDB88320", width=32)
    with pytest.raises(ValueError):
        Poly(0, width=32)
    with pytest.raises(ValueError):
        Poly(1 << 32, width=32)


def test_poly_is_immutable():
    p = crc32.ieee()
    with pytest.raises(AttributeError):
        p._poly = 1
    with pytest.raises(AttributeError):
        p.polynomial = 1


def test_direct_construction_matches_shared():
    p = Poly(crc32.IEEE, width=32)
    assert p is not crc32.ieee()
    assert p.polynomial == crc32.ieee().polynomial
    assert p.x2n_table == crc32.ieee().x2n_table
    assert p.checksum(b"123456789") == 0xCBF43926


def test_to_bytes_is_big_endian():
    assert crc32.ieee().to_bytes(0xCBF43926) == b"\xcb\xf4\x39\x26"
    assert crc64.iso().to_bytes(1) == b"\x00" * 7 + b"\x01"


def test_repr():
    assert repr(crc32.ieee()) == "Poly(0xedb88320, width=32)"
