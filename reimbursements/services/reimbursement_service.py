"""
Reimbursement Data Service

Owns the reimbursement collection: listing with search and pagination,
lookup, creation and deletion. The whole collection lives under a single
storage key as one JSON array, newest record first.

DESIGN DECISIONS:
- Every operation re-reads the full collection, so each call sees a
  consistent snapshot.
- Every mutation rewrites the full collection (read-modify-write, last
  write wins). Two creates in flight at once can lose one of them; this
  is accepted because a single writer is assumed.
- No validation happens here. Callers validate before create().
- Absence is not an error: get_by_id() returns None, delete() of an
  unknown id does nothing.
- Each operation first waits a fixed artificial delay so callers behave
  as they would against a remote API.
"""

import asyncio
import json
from datetime import datetime, timezone
from typing import Callable, Optional

from pydantic import TypeAdapter

from reimbursements.config import ServiceSettings, get_settings
from reimbursements.models.reimbursement import (
    PaginatedResponse,
    Reimbursement,
    ReimbursementCreate,
)
from reimbursements.observability import get_logger
from reimbursements.services.seed import generate_sample_data
from reimbursements.services.storage import KeyValueStorage


_collection_adapter = TypeAdapter(list[Reimbursement])


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ReimbursementService:
    """
    CRUD and pagination over the stored reimbursement collection.

    Usage:
        service = ReimbursementService(JsonFileStorage("data.json"))
        page = await service.list(page=1, limit=6, search="lara")
        created = await service.create(ReimbursementCreate(...))
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        settings: Optional[ServiceSettings] = None,
        collection_key: Optional[str] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Initialize the service.

        Args:
            storage: Key-value store holding the collection
            settings: Delays and page size. Defaults to ServiceSettings from the environment.
            collection_key: Storage key of the collection. Defaults to StorageSettings.collection_key.
            clock: Returns the current UTC time; used for ids and created_at
        """
        self._storage = storage
        self._settings = settings or get_settings().service
        self._key = collection_key or get_settings().storage.collection_key
        self._clock = clock or _utcnow
        self._logger = get_logger(__name__)

    @property
    def default_page_size(self) -> int:
        return self._settings.default_page_size

    async def _delay(self, milliseconds: int) -> None:
        await asyncio.sleep(milliseconds / 1000)

    async def initialize(self) -> None:
        """
        Seed the store with sample data if the collection is absent.

        Idempotent: an existing collection, even an empty one, is left alone.
        """
        if self._storage.read(self._key):
            return

        samples = generate_sample_data()
        self._save(samples)
        self._logger.info("storage_seeded", key=self._key, count=len(samples))

    async def _load(self) -> list[Reimbursement]:
        await self.initialize()
        raw = self._storage.read(self._key)
        if not raw:
            return []
        return _collection_adapter.validate_json(raw)

    def _save(self, records: list[Reimbursement]) -> None:
        payload = json.dumps(
            [record.to_storage_dict() for record in records],
            ensure_ascii=False,
        )
        self._storage.write(self._key, payload)

    def _next_id(self, records: list[Reimbursement]) -> str:
        """Epoch milliseconds, bumped until no stored record uses it."""
        taken = {record.id for record in records}
        candidate = int(self._clock().timestamp() * 1000)
        while str(candidate) in taken:
            candidate += 1
        return str(candidate)

    async def list(
        self,
        page: int = 1,
        limit: Optional[int] = None,
        search: Optional[str] = None,
    ) -> PaginatedResponse:
        """
        List reimbursements, optionally filtered by name.

        Args:
            page: 1-based page number
            limit: Page size. Defaults to ServiceSettings.default_page_size.
            search: Case-insensitive substring matched against name.
                    Empty or None disables filtering.

        Returns:
            The requested page plus the filtered total and page count.
            A page past the end has no data but correct totals.
        """
        if limit is None:
            limit = self._settings.default_page_size
        if page < 1:
            raise ValueError(f"page must be >= 1, got {page}")
        if limit < 1:
            raise ValueError(f"limit must be >= 1, got {limit}")

        await self._delay(self._settings.list_delay_ms)
        records = await self._load()

        if search:
            needle = search.lower()
            records = [r for r in records if needle in r.name.lower()]

        total = len(records)
        start = (page - 1) * limit
        return PaginatedResponse(
            data=records[start:start + limit],
            total=total,
            pages=-(-total // limit),
        )

    async def get_by_id(self, reimbursement_id: str) -> Optional[Reimbursement]:
        """Return the reimbursement with this exact id, or None."""
        await self._delay(self._settings.get_delay_ms)
        records = await self._load()

        for record in records:
            if record.id == reimbursement_id:
                return record
        return None

    async def create(self, data: ReimbursementCreate) -> Reimbursement:
        """
        Create a reimbursement and put it at the front of the collection.

        Raises:
            StorageError: If the collection cannot be written
        """
        await self._delay(self._settings.create_delay_ms)
        records = await self._load()

        created = Reimbursement(
            **data.model_dump(),
            id=self._next_id(records),
            created_at=self._clock(),
        )
        records.insert(0, created)
        self._save(records)

        self._logger.info(
            "reimbursement_created",
            reimbursement_id=created.id,
            category=created.category,
            amount=created.amount,
            has_receipt=created.receipt is not None,
        )
        return created

    async def delete(self, reimbursement_id: str) -> None:
        """
        Delete a reimbursement by id.

        Unknown ids are ignored; the collection is rewritten either way.
        """
        await self._delay(self._settings.delete_delay_ms)
        records = await self._load()

        remaining = [r for r in records if r.id != reimbursement_id]
        self._save(remaining)

        self._logger.info(
            "reimbursement_deleted",
            reimbursement_id=reimbursement_id,
            found=len(remaining) != len(records),
        )
