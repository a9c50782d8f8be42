"""
Receipt Viewer Session

Holds at most one live display handle. Opening another receipt releases
the current handle first; closing the viewer, or leaving its `with`
block, releases it too.

Decode failures never raise out of the viewer: viewing falls back to the
loading state and downloading shows an error toast.
"""

from pathlib import Path
from typing import Optional, Union

from reimbursements.models.toast import ToastVariant
from reimbursements.notifications import ToastManager, get_toast_manager
from reimbursements.observability import get_logger
from reimbursements.receipts.encoding import ReceiptDecodeError
from reimbursements.receipts.transcoder import ReceiptHandle, ReceiptTranscoder


logger = get_logger(__name__)

LOADING = "loading"


class ReceiptViewer:
    """One viewer session over stored receipts."""

    def __init__(
        self,
        transcoder: Optional[ReceiptTranscoder] = None,
        toast_manager: Optional[ToastManager] = None,
    ):
        self._transcoder = transcoder or ReceiptTranscoder()
        self._toast_manager = toast_manager
        self._handle: Optional[ReceiptHandle] = None
        self._receipt: Optional[str] = None
        self._receipt_name: Optional[str] = None

    @property
    def handle(self) -> Optional[ReceiptHandle]:
        return self._handle

    @property
    def receipt_name(self) -> Optional[str]:
        return self._receipt_name

    @property
    def title(self) -> str:
        return self._receipt_name or "Comprovante"

    @property
    def state(self) -> str:
        """
        What the viewer shows: "image", "pdf" or "loading".

        Unsupported media types and failed decodes stay in "loading".
        """
        if self._handle is None or self._handle.kind is None:
            return LOADING
        return self._handle.kind

    def _release(self) -> None:
        if self._handle is not None:
            self._handle.release()
            self._handle = None

    def open(
        self,
        receipt: Optional[str],
        receipt_name: Optional[str] = None,
    ) -> Optional[ReceiptHandle]:
        """
        Show a receipt, replacing whatever was shown before.

        Returns:
            The new handle, or None when there is no receipt or it cannot be decoded
        """
        self._release()
        self._receipt = receipt
        self._receipt_name = receipt_name

        if not receipt:
            return None

        try:
            self._handle = self._transcoder.to_display_handle(receipt)
        except ReceiptDecodeError as e:
            logger.warning(
                "receipt_decode_failed",
                receipt_name=receipt_name,
                error=str(e),
            )
            return None

        return self._handle

    def close(self) -> None:
        """Release the current handle and forget the receipt."""
        self._release()
        self._receipt = None
        self._receipt_name = None

    def download(self, directory: Union[str, Path]) -> Optional[Path]:
        """
        Save the open receipt into `directory` under its original name.

        Returns:
            The written path, or None when nothing is open or the download failed.
            Failures are reported to the user with a destructive toast.
        """
        if not self._receipt or not self._receipt_name:
            return None

        try:
            return self._transcoder.download(self._receipt, self._receipt_name, directory)
        except (ReceiptDecodeError, OSError) as e:
            logger.error(
                "receipt_download_failed",
                receipt_name=self._receipt_name,
                error=str(e),
            )
            manager = self._toast_manager or get_toast_manager()
            manager.toast(
                title="Erro ao baixar o arquivo",
                description="Por favor, tente novamente.",
                variant=ToastVariant.DESTRUCTIVE,
            )
            return None

    def __enter__(self) -> "ReceiptViewer":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
