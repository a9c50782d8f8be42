"""In-memory key-value storage, used by tests and ephemeral sessions."""

from typing import Optional

from reimbursements.services.storage.interface import (
    KeyValueStorage,
    QuotaExceededError,
    used_chars,
)


class InMemoryStorage(KeyValueStorage):
    """Dict-backed storage with an optional character quota."""

    def __init__(
        self,
        initial: Optional[dict[str, str]] = None,
        quota_chars: Optional[int] = None,
    ):
        self._data: dict[str, str] = dict(initial or {})
        self._quota = quota_chars

    def read(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def write(self, key: str, value: str) -> None:
        if self._quota is not None:
            others = ((k, v) for k, v in self._data.items() if k != key)
            required = used_chars(others) + len(key) + len(value)
            if required > self._quota:
                raise QuotaExceededError(key, required, self._quota)
        self._data[key] = value

    def snapshot(self) -> dict[str, str]:
        """Copy of everything currently stored."""
        return dict(self._data)
