"""Diff-related data models"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict

BINARY_PATCH = "Binary content differ\n"


def format_hunk_header(old_start: int, old_length: int, new_start: int, new_length: int) -> str:
    """Unified-diff hunk header, always with explicit lengths"""
    return f"@@ -{old_start},{old_length} +{new_start},{new_length} @@"


class LineOrigin(str, Enum):
    """Origin of a line inside a hunk"""

    ADDITION = "+"
    DELETION = "-"
    CONTEXT = " "


class WhitespaceMode(str, Enum):
    """How whitespace takes part in line equality"""

    EXACT = "exact"
    IGNORE_EOL = "ignore_eol"  # trailing whitespace
    IGNORE_CHANGE = "ignore_change"  # amount of whitespace
    IGNORE_ALL = "ignore_all"


class DiffOptions(BaseModel):
    """Options accepted by the diff engine"""

    model_config = ConfigDict(frozen=True)

    context_lines: int = 3
    interhunk_lines: int = 0
    binary_detection_bound: int = 8000
    whitespace: WhitespaceMode = WhitespaceMode.EXACT
    force_text: bool = False


class Line(BaseModel):
    """A single rendered line of a hunk"""

    model_config = ConfigDict(frozen=True)

    content: str  # prefix + text, no trailing newline
    line_number: int  # new side for additions/context, old side for deletions
    origin: LineOrigin

    @classmethod
    def from_rendered(cls, content: str, line_number: int) -> Line:
        return cls(content=content, line_number=line_number, origin=LineOrigin(content[:1]))

    @property
    def text(self) -> str:
        """Line text without its prefix"""
        return self.content[1:]


class Hunk(BaseModel):
    """A contiguous region of change with its context"""

    model_config = ConfigDict(frozen=True)

    old_start: int
    old_length: int
    new_start: int
    new_length: int
    lines: tuple[Line, ...] = ()

    @property
    def key(self) -> tuple[int, int]:
        return self.new_start, self.old_start

    @property
    def header(self) -> str:
        return format_hunk_header(self.old_start, self.old_length, self.new_start, self.new_length)

    @property
    def added_lines(self) -> list[Line]:
        return [line for line in self.lines if line.origin == LineOrigin.ADDITION]

    @property
    def removed_lines(self) -> list[Line]:
        return [line for line in self.lines if line.origin == LineOrigin.DELETION]

    @property
    def context_lines(self) -> list[Line]:
        return [line for line in self.lines if line.origin == LineOrigin.CONTEXT]

    @property
    def old_content(self) -> list[str]:
        """Texts of the old side covered by this hunk"""
        return [line.text for line in self.lines if line.origin != LineOrigin.ADDITION]

    @property
    def content(self) -> list[str]:
        """Texts of the new side covered by this hunk"""
        return [line.text for line in self.lines if line.origin != LineOrigin.DELETION]


class ContentChanges(BaseModel):
    """Complete comparison result for two blobs"""

    model_config = ConfigDict(frozen=True)

    is_binary: bool = False
    lines_added: int = 0
    lines_deleted: int = 0
    patch: str = ""  # hunk headers + prefixed lines, no file headers
    hunks: tuple[Hunk, ...] = ()

    @classmethod
    def empty(cls) -> ContentChanges:
        return cls()

    @classmethod
    def binary(cls) -> ContentChanges:
        return cls(is_binary=True, patch=BINARY_PATCH)

    def __str__(self) -> str:
        return f"{{+{self.lines_added}, -{self.lines_deleted}}}"
