"""
JSON File Storage Implementation

DESIGN DECISION: A single JSON object file stands in for the browser's
origin-scoped storage area:
1. Survives across sessions
2. Human-readable, easy to inspect or reset by deleting the file
3. No database setup required

TRADEOFFS:
- Every write rewrites the whole file (fine for a single user)
- No locking: one writer is assumed

Writes go to a temporary file in the same directory and are moved into
place with os.replace, so a crash never leaves a half-written store.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Optional, Union

from reimbursements.observability import get_logger
from reimbursements.services.storage.interface import (
    KeyValueStorage,
    QuotaExceededError,
    StorageUnavailableError,
    used_chars,
)


logger = get_logger(__name__)


class JsonFileStorage(KeyValueStorage):
    """
    File-backed key-value storage.

    The file holds one JSON object mapping keys to string values.
    A missing file is an empty store.
    """

    def __init__(
        self,
        path: Union[str, Path],
        quota_chars: Optional[int] = None,
    ):
        self._path = Path(path)
        self._quota = quota_chars

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> dict[str, str]:
        try:
            raw = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as e:
            raise StorageUnavailableError(f"Failed to read {self._path}: {e}")

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise StorageUnavailableError(f"Corrupt storage file {self._path}: {e}")

        if not isinstance(data, dict):
            raise StorageUnavailableError(
                f"Corrupt storage file {self._path}: expected a JSON object"
            )
        return data

    def read(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def write(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value

        if self._quota is not None:
            required = used_chars(data.items())
            if required > self._quota:
                raise QuotaExceededError(key, required, self._quota)

        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self._path.parent,
                prefix=f".{self._path.name}.",
                suffix=".tmp",
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    json.dump(data, fh, ensure_ascii=False)
                os.replace(tmp_name, self._path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise StorageUnavailableError(f"Failed to write {self._path}: {e}")

        logger.debug("storage_written", path=str(self._path), key=key, chars=len(value))
