"""OnceCell — a thread-safe, write-once value slot."""

from __future__ import annotations

import threading
from collections.abc import Callable


class OnceCell[T]:
    """A slot written at most once and read many times.

    Initialization runs under a lock, so concurrent callers of
    ``get_or_init``/``get_or_try_init`` block until the running initializer
    finishes and then observe the same value. If the initializer raises, the
    exception reaches the caller that ran it and the cell stays empty.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._value: T | None = None
        self._set = False

    def get(self) -> T | None:
        """Return the stored value, or None if the cell is empty."""
        return self._value if self._set else None

    def is_set(self) -> bool:
        return self._set

    def set(self, value: T) -> None:
        """Store a value; raises ValueError if one is already stored."""
        with self._lock:
            if self._set:
                raise ValueError("OnceCell is already initialized")
            self._value = value
            self._set = True

    def get_or_try_init(self, init: Callable[[], T]) -> T:
        """Return the stored value, running ``init`` to produce it if empty."""
        if self._set:
            return self._value  # type: ignore[return-value]
        with self._lock:
            if not self._set:
                self._value = init()
                self._set = True
        return self._value  # type: ignore[return-value]

    get_or_init = get_or_try_init

    def __repr__(self) -> str:
        if self._set:
            return f"OnceCell({self._value!r})"
        return "OnceCell(<uninit>)"
