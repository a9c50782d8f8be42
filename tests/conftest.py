"""Shared fixtures: zero-latency service, in-memory storage, virtual clock."""

import json
from io import BytesIO

import pytest
from PIL import Image

from reimbursements.config import ServiceSettings
from reimbursements.notifications import ManualScheduler, ToastManager, reset_toast_manager
from reimbursements.services import InMemoryStorage, ReimbursementService


COLLECTION_KEY = "reimbursements"

SAMPLE_RECORDS = [
    {
        "id": "1",
        "name": "João",
        "category": "Alimentação",
        "amount": 50.0,
        "createdAt": "2024-01-15T00:00:00.000Z",
    },
    {
        "id": "2",
        "name": "Maria",
        "category": "Transporte",
        "amount": 100.0,
        "createdAt": "2024-01-14T00:00:00.000Z",
    },
    {
        "id": "3",
        "name": "Pedro",
        "category": "Hospedagem",
        "amount": 200.0,
        "createdAt": "2024-01-13T00:00:00.000Z",
    },
]


@pytest.fixture
def fast_settings() -> ServiceSettings:
    return ServiceSettings(
        list_delay_ms=0,
        get_delay_ms=0,
        create_delay_ms=0,
        delete_delay_ms=0,
    )


@pytest.fixture
def storage() -> InMemoryStorage:
    """Empty store: the service seeds it on first use."""
    return InMemoryStorage()


@pytest.fixture
def seeded_storage() -> InMemoryStorage:
    """Store already holding the three sample records."""
    return InMemoryStorage({COLLECTION_KEY: json.dumps(SAMPLE_RECORDS)})


@pytest.fixture
def service(seeded_storage, fast_settings) -> ReimbursementService:
    return ReimbursementService(
        seeded_storage,
        settings=fast_settings,
        collection_key=COLLECTION_KEY,
    )


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def toasts(scheduler) -> ToastManager:
    return ToastManager(limit=1, remove_delay=1000.0, scheduler=scheduler)


@pytest.fixture(autouse=True)
def isolated_global_toasts():
    """Keep the process-wide toast manager off real timer threads."""
    reset_toast_manager(ToastManager(limit=1, remove_delay=1000.0, scheduler=ManualScheduler()))
    yield
    reset_toast_manager()


@pytest.fixture
def png_bytes() -> bytes:
    buffer = BytesIO()
    Image.new("RGB", (8, 8), "white").save(buffer, format="PNG")
    return buffer.getvalue()
