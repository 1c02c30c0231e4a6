# src/crccombine/parallel.py
from __future__ import annotations

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from itertools import islice
from pathlib import Path
from typing import Any, Iterable, Iterator, Optional, Tuple

from .poly import Poly, _as_bytes

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Config:
    """
    Chunked checksum config.

    chunk_size: bytes per chunk handed to a worker.
    max_workers: thread pool size (None -> executor default).
    """
    chunk_size: int = 1 << 20
    max_workers: Optional[int] = None


def combine_all(poly: Poly, parts: Iterable[Tuple[int, int]]) -> int:
    """
    Fold (checksum, length) pairs of consecutive blocks into the checksum
    of their concatenation.
    """
    crc = 0
    for part_crc, n in parts:
        crc = poly.combine(crc, part_crc, n)
    return crc


def checksum_chunks(chunks: Iterable[bytes], *, poly: Poly, cfg: Any = None) -> int:
    """
    Checksum consecutive chunks concurrently, combining in order.

    Chunks are pulled from the iterable in batches of 2 * max_workers, so
    at most two batches are alive at once however long the input is.
    """
    cfg = cfg if cfg is not None else Config()
    _get_chunk_size(cfg)
    workers = _get_max_workers(cfg) or _default_workers()

    it = iter(chunks)
    crc = 0
    count = 0
    with ThreadPoolExecutor(max_workers=workers) as pool:
        while True:
            batch = [_as_bytes(c) for c in islice(it, 2 * workers)]
            if not batch:
                break
            for block, block_crc in zip(batch, pool.map(poly.checksum, batch)):
                crc = poly.combine(crc, block_crc, len(block))
            count += len(batch)

    logger.debug("crc%d: combined %d chunks", poly.width, count)
    return crc


def checksum_parallel(data, *, poly: Poly, cfg: Any = None) -> int:
    """
    Split data into cfg.chunk_size pieces and checksum them concurrently.
    """
    cfg = cfg if cfg is not None else Config()
    b = _as_bytes(data)
    return checksum_chunks(_split(b, _get_chunk_size(cfg)), poly=poly, cfg=cfg)


def checksum_file(path: str | Path, *, poly: Poly, cfg: Any = None) -> int:
    """
    Checksum a file read in cfg.chunk_size chunks.
    """
    cfg = cfg if cfg is not None else Config()
    chunk_size = _get_chunk_size(cfg)
    p = Path(path)
    with p.open("rb") as f:
        crc = checksum_chunks(_read_chunks(f, chunk_size), poly=poly, cfg=cfg)
    logger.debug("crc%d of %s = 0x%x", poly.width, p, crc)
    return crc


# ----------------------------
# Internal
# ----------------------------

def _split(b: bytes, chunk_size: int) -> Iterator[bytes]:
    for off in range(0, len(b), chunk_size):
        yield b[off : off + chunk_size]


def _read_chunks(f, chunk_size: int) -> Iterator[bytes]:
    while True:
        chunk = f.read(chunk_size)
        if not chunk:
            return
        yield chunk


def _get_chunk_size(cfg: Any) -> int:
    cs = getattr(cfg, "chunk_size", None)
    if cs is None:
        raise AttributeError("cfg missing required attribute: chunk_size")
    if not isinstance(cs, int) or isinstance(cs, bool):
        raise TypeError("cfg.chunk_size must be int")
    if cs <= 0:
        raise ValueError("cfg.chunk_size must be > 0")
    return cs


def _get_max_workers(cfg: Any) -> Optional[int]:
    mw = getattr(cfg, "max_workers", None)
    if mw is None:
        return None
    if not isinstance(mw, int) or isinstance(mw, bool):
        raise TypeError("cfg.max_workers must be int or None")
    if mw <= 0:
        raise ValueError("cfg.max_workers must be > 0")
    return mw


def _default_workers() -> int:
    # Same default as ThreadPoolExecutor.
    return min(32, (os.cpu_count() or 1) + 4)
