"""
Receipt Encoding

Receipts are persisted as data URLs: a single string carrying both the
media type and the file content, e.g.

    data:application/pdf;base64,JVBERi0xLjQK...

Decoding follows what browsers accept when fetching a data URL: the
payload is percent-decoded, ASCII whitespace is ignored inside base64
and missing padding is tolerated. Anything else is a decode error.
"""

import base64
import binascii
from typing import Optional
from urllib.parse import unquote_to_bytes

from pydantic import BaseModel, ConfigDict, Field


DATA_URL_PREFIX = "data:"
DEFAULT_MEDIA_TYPE = "text/plain"


class ReceiptDecodeError(Exception):
    """The encoded receipt could not be decoded."""
    pass


class DecodedReceipt(BaseModel):
    """Binary content of a receipt and its declared media type."""
    model_config = ConfigDict(frozen=True)

    mime_type: str
    data: bytes = Field(repr=False)

    @property
    def size(self) -> int:
        return len(self.data)

    @property
    def kind(self) -> Optional[str]:
        return display_kind(self.mime_type)


def display_kind(mime_type: str) -> Optional[str]:
    """
    How a receipt of this media type is displayed.

    Returns "pdf", "image", or None when the type is not viewable.
    """
    mime_type = mime_type.lower()
    if "pdf" in mime_type:
        return "pdf"
    if "image" in mime_type:
        return "image"
    return None


def encode_data_url(data: bytes, mime_type: str) -> str:
    """Encode binary content as a base64 data URL."""
    payload = base64.b64encode(data).decode("ascii")
    return f"{DATA_URL_PREFIX}{mime_type};base64,{payload}"


def _forgiving_b64decode(payload: bytes) -> bytes:
    compact = b"".join(payload.split())
    if len(compact) % 4 == 1:
        raise ReceiptDecodeError("Invalid base64 payload length")
    compact += b"=" * (-len(compact) % 4)
    try:
        return base64.b64decode(compact, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ReceiptDecodeError(f"Invalid base64 payload: {e}")


def decode_data_url(encoded: str) -> DecodedReceipt:
    """
    Decode a data URL into its media type and bytes.

    Raises:
        ReceiptDecodeError: If the string is not a well-formed data URL
    """
    if not isinstance(encoded, str) or not encoded[:5].lower() == DATA_URL_PREFIX:
        raise ReceiptDecodeError("Receipt is not a data URL")

    header, separator, payload = encoded[len(DATA_URL_PREFIX):].partition(",")
    if not separator:
        raise ReceiptDecodeError("Data URL has no payload separator")

    params = [p.strip() for p in header.split(";")]
    is_base64 = len(params) > 1 and params[-1].lower() == "base64"
    if is_base64:
        params = params[:-1]

    mime_type = params[0].lower() or DEFAULT_MEDIA_TYPE

    try:
        raw = unquote_to_bytes(payload)
    except (TypeError, ValueError) as e:
        raise ReceiptDecodeError(f"Invalid data URL payload: {e}")

    data = _forgiving_b64decode(raw) if is_base64 else raw
    return DecodedReceipt(mime_type=mime_type, data=data)
