"""Models module - Pydantic data models"""

from .compare import (
    BlobContent,
    CompareBlobsRequest,
    CompareRequest,
    ContentEncoding,
    StreamSummary,
)
from .diff import (
    BINARY_PATCH,
    ContentChanges,
    DiffOptions,
    Hunk,
    Line,
    LineOrigin,
    WhitespaceMode,
    format_hunk_header,
)

__all__ = [
    # Compare API models
    "BlobContent",
    "CompareBlobsRequest",
    "CompareRequest",
    "ContentEncoding",
    "StreamSummary",
    # Diff models
    "BINARY_PATCH",
    "ContentChanges",
    "DiffOptions",
    "Hunk",
    "Line",
    "LineOrigin",
    "WhitespaceMode",
    "format_hunk_header",
]
