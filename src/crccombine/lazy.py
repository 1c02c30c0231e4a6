# src/crccombine/lazy.py
from __future__ import annotations

import threading
from typing import Callable, Generic, TypeVar

T = TypeVar("T")


class Lazy(Generic[T]):
    """
    A value built on first use, exactly once, and shared by every caller.

    Concurrent first calls block on the lock until the single construction
    finishes, so nobody sees a partially built value.
    """

    __slots__ = ("_init", "_lock", "_done", "_val")

    def __init__(self, init: Callable[[], T]) -> None:
        self._init = init
        self._lock = threading.Lock()
        self._done = False
        self._val: T | None = None

    def get(self) -> T:
        if not self._done:
            with self._lock:
                if not self._done:
                    self._val = self._init()
                    self._done = True
        return self._val  # type: ignore[return-value]
