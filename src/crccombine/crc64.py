# src/crccombine/crc64.py
"""
64-bit cyclic redundancy check, or CRC-64, checksum.
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

# The size of a CRC-64 checksum in bytes.
SIZE = 8
_WIDTH = SIZE * 8

# ISO 3309, used in HDLC.
ISO = 0xD800000000000000
# ECMA 182.
ECMA = 0xC96C5795D7870F42


def _shared(poly: int) -> Lazy[Poly]:
    def init() -> Poly:
        logger.debug("initializing shared crc64 poly 0x%016x", poly)
        return Poly(poly, width=_WIDTH)

    return Lazy(init)


_iso = _shared(ISO)
_ecma = _shared(ECMA)

_KNOWN = {
    ISO: _iso,
    ECMA: _ecma,
}


def iso() -> Poly:
    """The ISO polynomial, defined in ISO 3309 and used in HDLC."""
    return _iso.get()


def ecma() -> Poly:
    """The ECMA polynomial, defined in ECMA 182."""
    return _ecma.get()


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
    """Streaming CRC-64 hash over p."""
    if p.width != _WIDTH:
        raise ValueError(f"new: expected a crc64 Poly, got width {p.width}")
    return Hash(p, data)
