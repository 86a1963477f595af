"""Compare API request/response models"""

from __future__ import annotations

import base64
import binascii
from enum import Enum

from pydantic import BaseModel

from .diff import DiffOptions


class ContentEncoding(str, Enum):
    """How blob content travels in a request body"""

    UTF8 = "utf-8"
    BASE64 = "base64"


class BlobContent(BaseModel):
    """Inline blob content"""

    data: str
    encoding: ContentEncoding = ContentEncoding.UTF8

    def to_bytes(self) -> bytes:
        """Decode into raw bytes. Raises ValueError on malformed base64."""
        if self.encoding == ContentEncoding.BASE64:
            try:
                return base64.b64decode(self.data, validate=True)
            except binascii.Error as e:
                raise ValueError(f"Invalid base64 content: {e}") from e
        return self.data.encode("utf-8")


class CompareRequest(BaseModel):
    """Request to compare two inline blobs; a missing side is an absent blob"""

    old: BlobContent | None = None
    new: BlobContent | None = None
    options: DiffOptions | None = None


class CompareBlobsRequest(BaseModel):
    """Request to compare two stored blobs by id"""

    old_id: str | None = None
    new_id: str | None = None
    options: DiffOptions | None = None


class StreamSummary(BaseModel):
    """Final SSE event of a streamed comparison"""

    is_binary: bool
    lines_added: int
    lines_deleted: int
    hunk_count: int
    done: bool = True
