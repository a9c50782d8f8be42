"""
Abstract Storage Interface

DESIGN DECISION: The data service only ever needs two operations on a
key-value string store: read a key and write a key. Keeping the
interface that small lets us:
1. Use an in-memory store in tests
2. Persist to a local JSON file across sessions
3. Swap in another backend without touching the data service

Writes are last-write-wins. There are no transactions. Failures are
raised to the caller; the storage layer never retries or swallows them.
"""

from abc import ABC, abstractmethod
from typing import Iterable, Optional


class KeyValueStorage(ABC):
    """
    Synchronous key-value store of strings.

    Any storage backend must implement read() and write().
    """

    @abstractmethod
    def read(self, key: str) -> Optional[str]:
        """
        Read the value stored under a key.

        Returns:
            The stored string, or None if the key is absent

        Raises:
            StorageError: If the backend cannot be read
        """
        pass

    @abstractmethod
    def write(self, key: str, value: str) -> None:
        """
        Store a value under a key, replacing any previous value.

        Raises:
            QuotaExceededError: If the write would exceed the quota
            StorageError: If the backend cannot be written
        """
        pass


def used_chars(items: Iterable[tuple[str, str]]) -> int:
    """Total characters taken by keys and values, as browsers count quota."""
    return sum(len(key) + len(value) for key, value in items)


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class QuotaExceededError(StorageError):
    """A write would take the store past its size quota."""

    def __init__(self, key: str, required: int, quota: int):
        self.key = key
        self.required = required
        self.quota = quota
        super().__init__(
            f"Writing {key!r} needs {required} characters, quota is {quota}"
        )


class StorageUnavailableError(StorageError):
    """The backing store could not be read or written."""
    pass
