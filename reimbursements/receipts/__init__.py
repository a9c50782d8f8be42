"""Receipt encoding, display handles and viewer sessions."""

from reimbursements.receipts.encoding import (
    DecodedReceipt,
    ReceiptDecodeError,
    decode_data_url,
    display_kind,
    encode_data_url,
)
from reimbursements.receipts.files import ReceiptFile, file_to_data_url
from reimbursements.receipts.transcoder import (
    HandleRegistry,
    InMemoryHandleRegistry,
    ReceiptHandle,
    ReceiptTranscoder,
    TempFileHandleRegistry,
)
from reimbursements.receipts.viewer import ReceiptViewer

__all__ = [
    "DecodedReceipt",
    "HandleRegistry",
    "InMemoryHandleRegistry",
    "ReceiptDecodeError",
    "ReceiptFile",
    "ReceiptHandle",
    "ReceiptTranscoder",
    "ReceiptViewer",
    "TempFileHandleRegistry",
    "decode_data_url",
    "display_kind",
    "encode_data_url",
    "file_to_data_url",
]
