# ipldblock/utils/async_helpers.py
"""
Async utilities for write-once memoization.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Generic, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

_EMPTY: Any = object()


class OnceCell(Generic[T]):
    """
    Single-assignment cell filled by the first successful async computation.

    Concurrent first callers of get_or_init() share one computation: the
    first one runs the factory while the others wait on the cell's lock and
    then read the stored value. Once filled the cell never changes.

    A factory that raises leaves the cell empty; the exception goes to the
    caller that ran it, and the next caller runs the factory again.

    Example:
        cell = OnceCell()
        value = await cell.get_or_init(lambda: compute())
    """

    __slots__ = ("_value", "_lock", "_name")

    def __init__(self, value: Any = _EMPTY, name: Optional[str] = None):
        self._value = value
        self._lock: Optional[asyncio.Lock] = None
        self._name = name or "cell"

    @property
    def is_set(self) -> bool:
        return self._value is not _EMPTY

    def peek(self) -> Optional[T]:
        """Return the stored value, or None while the cell is empty."""
        if self._value is _EMPTY:
            return None
        return self._value

    async def get_or_init(self, factory: Callable[[], Awaitable[T]]) -> T:
        if self._value is not _EMPTY:
            return self._value

        if self._lock is None:
            self._lock = asyncio.Lock()

        async with self._lock:
            # Another caller may have filled the cell while we waited
            if self._value is not _EMPTY:
                logger.debug(f"[OnceCell:{self._name}] Joined in-flight computation")
                return self._value
            value = await factory()
            self._value = value
            return value

    def __repr__(self) -> str:
        state = "set" if self.is_set else "empty"
        return f"OnceCell({self._name}, {state})"
