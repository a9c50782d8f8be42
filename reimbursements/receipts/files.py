"""Picked receipt files and their data-URL encoding."""

import mimetypes
from pathlib import Path
from typing import Union

from pydantic import BaseModel, ConfigDict, Field

from reimbursements.receipts.encoding import encode_data_url


class ReceiptFile(BaseModel):
    """A file chosen by the user as proof of an expense."""
    model_config = ConfigDict(frozen=True)

    filename: str = Field(..., min_length=1)
    mime_type: str = Field(
        ...,
        description="Declared media type, e.g. image/png"
    )
    data: bytes = Field(repr=False)

    @property
    def size(self) -> int:
        return len(self.data)

    @property
    def extension(self) -> str:
        return Path(self.filename).suffix.lower()

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "ReceiptFile":
        """
        Read a file from disk, guessing its media type from the name.

        Unknown types are declared as application/octet-stream.
        """
        path = Path(path)
        mime_type, _ = mimetypes.guess_type(path.name)
        return cls(
            filename=path.name,
            mime_type=mime_type or "application/octet-stream",
            data=path.read_bytes(),
        )


def file_to_data_url(file: ReceiptFile) -> str:
    """Encode a picked file the way receipts are stored."""
    return encode_data_url(file.data, file.mime_type)
