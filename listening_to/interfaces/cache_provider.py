"""Abstract base class for single-value cache providers.

The resolved track is one logical value per plugin instance, so the cache
contract has no keys: it holds at most one value and forgets it after a
fixed time-to-live or on an explicit ``clear()``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

_T = TypeVar("_T")


class ICacheProvider(ABC, Generic[_T]):
    """Contract for single-slot caches with lazy expiry."""

    @abstractmethod
    def get(self) -> _T | None:
        """Return the stored value if set and not expired; ``None`` otherwise.

        A miss does not say whether the cache was never set, was cleared or
        expired.  Reading never extends the entry's lifetime.
        """

    @abstractmethod
    def set(self, value: _T) -> None:
        """Replace the stored value and restart the time-to-live window."""

    @abstractmethod
    def clear(self) -> None:
        """Drop the stored value.  Safe to call on an empty cache."""
