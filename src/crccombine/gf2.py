# src/crccombine/gf2.py
from __future__ import annotations

from typing import Sequence

# Polynomials here are in reflected (LSB-first) form:
#   bit (width-1) is x^0, bit (width-2) is x^1, ...


def reverse_bits(x: int, width: int) -> int:
    r = 0
    for _ in range(width):
        r = (r << 1) | (x & 1)
        x >>= 1
    return r


def mult_mod_p(a: int, b: int, poly: int, width: int) -> int:
    """
    (a(x) * b(x)) modulo p(x), where p(x) is the reflected CRC polynomial.

    For speed this requires a != 0: the loop exits as soon as the last set
    bit of a has been consumed. Falling off the end means a was zero.
    """
    v = 0
    m = 1 << (width - 1)
    while m:
        if a & m:
            v ^= b
            if (a & (m - 1)) == 0:
                return v
        xor = b & 1
        b >>= 1
        if xor:
            b ^= poly
        m >>= 1
    raise RuntimeError(f"crc{width}: invalid state")


def x2n_mod_p(n: int, k: int, table: Sequence[int], poly: int, width: int) -> int:
    """
    x^(n * 2^k) modulo p(x), using table[i] = x^(2^i) mod p(x).
    """
    v = 1 << (width - 1)
    while n:
        if n & 1:
            v = mult_mod_p(table[k & (width - 1)], v, poly, width)
        n >>= 1
        k += 1
    return v


def x2n_table(poly: int, width: int) -> tuple[int, ...]:
    """
    Successive squares of x modulo p(x): entry k is x^(2^k).
    """
    v = 1 << (width - 2)
    out = [v]
    for _ in range(1, width):
        v = mult_mod_p(v, v, poly, width)
        out.append(v)
    return tuple(out)
