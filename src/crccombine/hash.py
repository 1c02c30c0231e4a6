# src/crccombine/hash.py
from __future__ import annotations

import struct

from .poly import Poly

# Marshaled state, big-endian, byte-compatible with Go's hash/crc32 and hash/crc64:
#   magic(4) | table_sum(u32|u64) | crc(u32|u64)
# table_sum is the IEEE (32-bit) or ISO (64-bit) checksum of the byte table,
# each entry laid out big-endian.
_MAGIC = {32: b"crc\x01", 64: b"crc\x02"}
_STATE_STRUCT = {32: struct.Struct(">4sII"), 64: struct.Struct(">4sQQ")}


class Hash:
    """
    Streaming CRC over a Poly, in the style of hashlib objects.

    digest() lays the value out in big-endian byte order. The running
    value can be marshaled and restored with marshal_binary() and
    unmarshal_binary(). Not safe for concurrent use of one instance.
    """

    block_size = 1

    def __init__(self, poly: Poly, data=None) -> None:
        if not isinstance(poly, Poly):
            raise TypeError("poly must be a Poly")
        self._poly = poly
        self._crc = 0
        if data is not None:
            self.update(data)

    @property
    def poly(self) -> Poly:
        return self._poly

    @property
    def name(self) -> str:
        return f"crc{self._poly.width}"

    @property
    def digest_size(self) -> int:
        return self._poly.size

    @property
    def value(self) -> int:
        """Running checksum as an int."""
        return self._crc

    def update(self, data) -> None:
        self._crc = self._poly.update(self._crc, data)

    def reset(self) -> None:
        self._crc = 0

    def copy(self) -> "Hash":
        h = Hash(self._poly)
        h._crc = self._crc
        return h

    def digest(self) -> bytes:
        return self._poly.to_bytes(self._crc)

    def hexdigest(self) -> str:
        return self.digest().hex()

    def marshal_binary(self) -> bytes:
        width = self._poly.width
        return _STATE_STRUCT[width].pack(_MAGIC[width], table_sum(self._poly), self._crc)

    def unmarshal_binary(self, b: bytes) -> None:
        if not isinstance(b, (bytes, bytearray)):
            raise TypeError("state must be bytes-like")
        width = self._poly.width
        st = _STATE_STRUCT[width]
        b = bytes(b)
        if not b.startswith(_MAGIC[width]):
            raise ValueError("hash/crc: invalid hash state identifier")
        if len(b) != st.size:
            raise ValueError("hash/crc: invalid hash state size")
        _, tsum, crc = st.unpack(b)
        if tsum != table_sum(self._poly):
            raise ValueError("hash/crc: tables do not match")
        self._crc = crc

    def __repr__(self) -> str:
        return f"<{self.name} Hash poly=0x{self._poly.polynomial:x} value=0x{self._crc:x}>"


def crc_table(poly: Poly) -> tuple[int, ...]:
    """
    The 256-entry byte table of poly: entry i is the raw (non-inverted)
    register after feeding byte i into a zero register.
    """
    mask = (1 << poly.width) - 1
    return tuple(poly.update(mask, bytes([i])) ^ mask for i in range(256))


def table_sum(poly: Poly) -> int:
    from . import crc32, crc64

    width = poly.width
    entry = struct.Struct(">I" if width == 32 else ">Q")
    raw = b"".join(entry.pack(x) for x in crc_table(poly))
    summer = crc32.ieee() if width == 32 else crc64.iso()
    return summer.checksum(raw)
