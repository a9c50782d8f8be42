"""
Receipt Transcoder

Bridges stored data-URL receipts and short-lived handles that a viewer
can render (image or PDF) or hand to the user as a file.

CRITICAL: Every handle holds resources (memory or a temporary file)
until release() is called. Whoever creates a handle owns it and must
release it; ReceiptViewer does this for viewer sessions.
"""

import mimetypes
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Union
from uuid import uuid4

from reimbursements.observability import get_logger
from reimbursements.receipts.encoding import DecodedReceipt, decode_data_url


logger = get_logger(__name__)


class HandleRegistry(ABC):
    """Allocates and revokes URLs that point at decoded receipt content."""

    @abstractmethod
    def create(self, receipt: DecodedReceipt) -> str:
        """Make the content reachable and return its URL."""
        pass

    @abstractmethod
    def revoke(self, url: str) -> None:
        """Free the content behind a URL. Unknown URLs are ignored."""
        pass

    @property
    @abstractmethod
    def live_count(self) -> int:
        """Number of URLs created and not yet revoked."""
        pass


class InMemoryHandleRegistry(HandleRegistry):
    """Keeps content in memory under blob: URLs."""

    def __init__(self):
        self._blobs: dict[str, DecodedReceipt] = {}

    def create(self, receipt: DecodedReceipt) -> str:
        url = f"blob:reimbursements/{uuid4()}"
        self._blobs[url] = receipt
        return url

    def revoke(self, url: str) -> None:
        self._blobs.pop(url, None)

    def resolve(self, url: str) -> Optional[DecodedReceipt]:
        """Content behind a live URL, or None once revoked."""
        return self._blobs.get(url)

    @property
    def live_count(self) -> int:
        return len(self._blobs)


class TempFileHandleRegistry(HandleRegistry):
    """
    Writes content to temporary files exposed as file:// URIs.

    Useful when the viewer is an external program (browser, PDF reader).
    """

    def __init__(self, directory: Optional[Union[str, Path]] = None):
        self._directory = Path(directory) if directory else None
        self._files: dict[str, Path] = {}

    def create(self, receipt: DecodedReceipt) -> str:
        suffix = mimetypes.guess_extension(receipt.mime_type) or ""
        if self._directory is not None:
            self._directory.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            prefix="receipt-",
            suffix=suffix,
            dir=self._directory,
            delete=False,
        ) as fh:
            fh.write(receipt.data)
            path = Path(fh.name)
        url = path.resolve().as_uri()
        self._files[url] = path
        return url

    def revoke(self, url: str) -> None:
        path = self._files.pop(url, None)
        if path is not None:
            path.unlink(missing_ok=True)

    @property
    def live_count(self) -> int:
        return len(self._files)


class ReceiptHandle:
    """A live, releasable reference to decoded receipt content."""

    def __init__(
        self,
        url: str,
        kind: Optional[str],
        mime_type: str,
        size: int,
        registry: HandleRegistry,
    ):
        self.url = url
        self.kind = kind
        self.mime_type = mime_type
        self.size = size
        self._registry = registry
        self._released = False

    @property
    def released(self) -> bool:
        return self._released

    def release(self) -> None:
        """Free the underlying content. Safe to call more than once."""
        if self._released:
            return
        self._registry.revoke(self.url)
        self._released = True
        logger.debug("receipt_handle_released", url=self.url)

    def __repr__(self) -> str:
        return (
            f"ReceiptHandle(url={self.url!r}, kind={self.kind!r}, "
            f"released={self._released})"
        )


class ReceiptTranscoder:
    """Turns encoded receipts into display handles and downloaded files."""

    def __init__(self, registry: Optional[HandleRegistry] = None):
        self._registry = registry or InMemoryHandleRegistry()

    @property
    def registry(self) -> HandleRegistry:
        return self._registry

    def to_display_handle(self, encoded: str) -> ReceiptHandle:
        """
        Decode a receipt and allocate a handle for displaying it.

        The handle's kind is "pdf", "image", or None for media types
        that cannot be displayed.

        Raises:
            ReceiptDecodeError: If the receipt is malformed
        """
        decoded = decode_data_url(encoded)
        url = self._registry.create(decoded)

        handle = ReceiptHandle(
            url=url,
            kind=decoded.kind,
            mime_type=decoded.mime_type,
            size=decoded.size,
            registry=self._registry,
        )
        if handle.kind is None:
            logger.warning("receipt_type_unsupported", mime_type=decoded.mime_type)
        logger.debug("receipt_handle_created", url=url, kind=handle.kind, size=handle.size)
        return handle

    def download(
        self,
        encoded: str,
        filename: str,
        directory: Union[str, Path],
    ) -> Path:
        """
        Decode a receipt and save it as `filename` inside `directory`.

        Any directory part of `filename` is dropped.

        Returns:
            Path of the written file

        Raises:
            ReceiptDecodeError: If the receipt is malformed
            OSError: If the file cannot be written
        """
        decoded = decode_data_url(encoded)

        target_dir = Path(directory)
        target_dir.mkdir(parents=True, exist_ok=True)
        target = target_dir / (Path(filename).name or "comprovante")
        target.write_bytes(decoded.data)

        logger.info("receipt_downloaded", path=str(target), size=decoded.size)
        return target
