# src/crccombine/crc32.py
"""
32-bit cyclic redundancy check, or CRC-32, checksum.
See https://en.wikipedia.org/wiki/Cyclic_redundancy_check for information.

Polynomials are represented in LSB-first form, also known as reversed
representation. Checksums are laid out in big-endian byte order.
"""
from __future__ import annotations

import logging

from .hash import Hash
from .lazy import Lazy
from .poly import Poly

logger = logging.getLogger(__name__)

# The size of a CRC-32 checksum in bytes.
SIZE = 4
_WIDTH = SIZE * 8

# Ethernet (IEEE 802.3), v.42, fddi, gzip, zip, png, ...
IEEE = 0xEDB88320
# iSCSI; better error detection than IEEE. https://dx.doi.org/10.1109/26.231911
CASTAGNOLI = 0x82F63B78
# Better error detection than IEEE. https://dx.doi.org/10.1109/DSN.2002.1028931
KOOPMAN = 0xEB31D82E


def _shared(poly: int) -> Lazy[Poly]:
    def init() -> Poly:
        logger.debug("initializing shared crc32 poly 0x%08x", poly)
        return Poly(poly, width=_WIDTH)

    return Lazy(init)


_ieee = _shared(IEEE)
_castagnoli = _shared(CASTAGNOLI)
_koopman = _shared(KOOPMAN)

_KNOWN = {
    IEEE: _ieee,
    CASTAGNOLI: _castagnoli,
    KOOPMAN: _koopman,
}


def ieee() -> Poly:
    """The IEEE polynomial, by far and away the most common CRC-32 polynomial."""
    return _ieee.get()


def castagnoli() -> Poly:
    """Castagnoli's polynomial."""
    return _castagnoli.get()


def koopman() -> Poly:
    """Koopman's polynomial."""
    return _koopman.get()


def make_poly(poly: int) -> Poly:
    """
    Poly for a polynomial given in LSB-first form.

    Well-known polynomials return a shared instance; anything else builds
    a fresh one.
    """
    shared = _KNOWN.get(poly)
    if shared is not None:
        return shared.get()
    return Poly(poly, width=_WIDTH)


def new(p: Poly, data=None) -> Hash:
    """Streaming CRC-32 hash over p."""
    if p.width != _WIDTH:
        raise ValueError(f"new: expected a crc32 Poly, got width {p.width}")
    return Hash(p, data)
