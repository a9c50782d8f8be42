"""
Storage Services Package

Provides the abstract key-value interface and its implementations.
The data service only depends on KeyValueStorage, so backends are swappable.
"""

from reimbursements.services.storage.interface import (
    KeyValueStorage,
    QuotaExceededError,
    StorageError,
    StorageUnavailableError,
)
from reimbursements.services.storage.json_file import JsonFileStorage
from reimbursements.services.storage.memory import InMemoryStorage

__all__ = [
    # Interface
    "KeyValueStorage",
    # Exceptions
    "QuotaExceededError",
    "StorageError",
    "StorageUnavailableError",
    # Implementations
    "InMemoryStorage",
    "JsonFileStorage",
]
