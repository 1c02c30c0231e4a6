from __future__ import annotations

from . import crc32, crc64
from .hash import Hash
from .poly import Poly

__all__ = ["Hash", "Poly", "crc32", "crc64"]
