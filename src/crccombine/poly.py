# src/crccombine/poly.py
from __future__ import annotations

import logging
from typing import Any, Callable

import crcmod
import numpy as np

from .gf2 import mult_mod_p, reverse_bits, x2n_mod_p, x2n_table

logger = logging.getLogger(__name__)

WIDTHS = (32, 64)

# Combine works in whole bytes: x^(n * 2^3) is n bytes worth of zero bits.
_BYTE_SHIFT = 3


class Poly:
    """
    A CRC polynomial with tables for efficient processing.

    The polynomial is given in LSB-first form, also known as reversed
    representation. Checksums follow the usual inverted-register convention:
    the checksum of no data is 0 and update(sum, data) may be chained.

    Instances are immutable and may be shared between threads.
    """

    __slots__ = ("_width", "_poly", "_x2n", "_crc_fun")

    def __init__(self, poly: int, *, width: int) -> None:
        if width not in WIDTHS:
            raise ValueError(f"width must be one of {WIDTHS}")
        if not isinstance(poly, int) or isinstance(poly, bool):
            raise TypeError("poly must be int")
        if not (0 < poly < (1 << width)):
            raise ValueError(f"poly must be a non-zero {width}-bit value")

        mask = (1 << width) - 1
        # crcmod wants the normal-form polynomial including the x^width term.
        normal = reverse_bits(poly, width) | (1 << width)

        self._width = width
        self._poly = poly
        self._crc_fun: Callable[..., int] = crcmod.mkCrcFun(normal, initCrc=0, rev=True, xorOut=mask)
        self._x2n = x2n_table(poly, width)

        logger.debug("built crc%d tables for poly 0x%0*x", width, width // 4, poly)

    def __setattr__(self, name: str, value: Any) -> None:
        if hasattr(self, "_x2n"):
            raise AttributeError(f"{type(self).__name__} is immutable")
        super().__setattr__(name, value)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(0x{self._poly:0{self._width // 4}x}, width={self._width})"

    @property
    def polynomial(self) -> int:
        """The polynomial in LSB-first form, as given."""
        return self._poly

    @property
    def width(self) -> int:
        return self._width

    @property
    def size(self) -> int:
        """Checksum size in bytes."""
        return self._width // 8

    @property
    def x2n_table(self) -> tuple[int, ...]:
        return self._x2n

    def checksum(self, data) -> int:
        """CRC checksum of data."""
        return self._crc_fun(_as_bytes(data), 0)

    def update(self, crc: int, data) -> int:
        """Result of adding the bytes in data to crc."""
        return self._crc_fun(_as_bytes(data), crc & self._mask())

    def combine(self, prev: int, nxt: int, n: int) -> int:
        """
        Result of adding n bytes with checksum nxt to the checksum prev.

        combine(checksum(a), checksum(b), len(b)) == checksum(a + b)
        """
        if prev == 0:
            return nxt
        if n <= 0:
            return prev
        return self._mult_mod_p(prev, self._x2n_mod_p(n, _BYTE_SHIFT)) ^ nxt

    def to_bytes(self, crc: int) -> bytes:
        """Big-endian byte layout of a checksum."""
        return (crc & self._mask()).to_bytes(self.size, "big")

    # ----------------------------
    # Internal
    # ----------------------------

    def _mask(self) -> int:
        return (1 << self._width) - 1

    def _mult_mod_p(self, a: int, b: int) -> int:
        return mult_mod_p(a, b, self._poly, self._width)

    def _x2n_mod_p(self, n: int, k: int) -> int:
        return x2n_mod_p(n, k, self._x2n, self._poly, self._width)


def _as_bytes(data) -> bytes:
    if isinstance(data, bytes):
        return data
    if isinstance(data, np.ndarray):
        return np.ascontiguousarray(data).tobytes()
    if isinstance(data, (bytearray, memoryview)):
        return bytes(data)
    raise TypeError("data must be bytes-like or a numpy array")
