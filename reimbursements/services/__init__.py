"""Services package."""

from reimbursements.services.reimbursement_service import ReimbursementService
from reimbursements.services.seed import generate_sample_data, placeholder_receipt
from reimbursements.services.storage import (
    InMemoryStorage,
    JsonFileStorage,
    KeyValueStorage,
    QuotaExceededError,
    StorageError,
    StorageUnavailableError,
)

__all__ = [
    # Data service
    "ReimbursementService",
    "generate_sample_data",
    "placeholder_receipt",
    # Storage
    "InMemoryStorage",
    "JsonFileStorage",
    "KeyValueStorage",
    "QuotaExceededError",
    "StorageError",
    "StorageUnavailableError",
]
