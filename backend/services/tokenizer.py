"""
Tokenizer - Split blob content into lines and classify binary content
"""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_BINARY_DETECTION_BOUND = 8000


@dataclass(frozen=True)
class TokenizedBuffer:
    """Lines of a blob plus what the patch renderer needs to reproduce it"""

    lines: tuple[str, ...] = ()
    trailing_newline: bool = True
    is_binary: bool = False

    @property
    def missing_eol_index(self) -> int | None:
        """Index of the last line when it is not newline-terminated"""
        if self.trailing_newline or not self.lines:
            return None
        return len(self.lines) - 1


def is_binary_content(data: bytes | None, bound: int = DEFAULT_BINARY_DETECTION_BOUND) -> bool:
    """A blob is binary when a NUL byte shows up within the first `bound` bytes"""
    if not data:
        return False
    return b"\x00" in data[:bound]


def tokenize(
    data: bytes | None,
    binary_detection_bound: int = DEFAULT_BINARY_DETECTION_BOUND,
    detect_binary: bool = True,
) -> TokenizedBuffer:
    """
    Split a blob into lines.

    An absent blob behaves like an empty file. Lines are split on "\\n" only, so
    a "\\r" before it stays part of the line. Undecodable bytes are replaced
    rather than rejected. Binary blobs are classified but not split.
    """
    if data is None:
        return TokenizedBuffer()

    if detect_binary and is_binary_content(data, binary_detection_bound):
        return TokenizedBuffer(is_binary=True)

    text = data.decode("utf-8", errors="replace")
    if not text:
        return TokenizedBuffer()

    lines = text.split("\n")
    trailing_newline = text.endswith("\n")
    if trailing_newline:
        lines.pop()

    return TokenizedBuffer(lines=tuple(lines), trailing_newline=trailing_newline)
