"""
Patch Renderer - Turn grouped hunks into unified-diff text and line models
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from models.diff import Hunk, Line, LineOrigin

from .edit_script import EditKind
from .hunk_grouper import HunkRange
from .tokenizer import TokenizedBuffer

NO_NEWLINE_MARKER = "\\ No newline at end of file\n"


@dataclass(frozen=True)
class RenderedPatch:
    """Output of the renderer"""

    patch: str
    hunks: tuple[Hunk, ...]
    lines_added: int
    lines_deleted: int


class HunkAccumulator:
    """
    Collect lines into hunks keyed by (new_start, old_start).

    A line for a known key extends that hunk; an unknown key opens a new one.
    Insertion order is kept, which is new_start order for a single comparison.
    """

    def __init__(self):
        self._headers: dict[tuple[int, int], tuple[int, int, int, int]] = {}
        self._lines: dict[tuple[int, int], list[Line]] = {}

    def add_line(self, hunk_range: HunkRange, line: Line):
        key = (hunk_range.new_start, hunk_range.old_start)
        if key not in self._headers:
            self._headers[key] = (
                hunk_range.old_start,
                hunk_range.old_length,
                hunk_range.new_start,
                hunk_range.new_length,
            )
            self._lines[key] = []
        self._lines[key].append(line)

    def __len__(self) -> int:
        return len(self._headers)

    def hunks(self) -> tuple[Hunk, ...]:
        result = []
        for key, (old_start, old_length, new_start, new_length) in self._headers.items():
            result.append(
                Hunk(
                    old_start=old_start,
                    old_length=old_length,
                    new_start=new_start,
                    new_length=new_length,
                    lines=tuple(self._lines[key]),
                )
            )
        return tuple(result)


def render_lines(
    hunk_range: HunkRange,
    old: TokenizedBuffer,
    new: TokenizedBuffer,
) -> list[tuple[Line, bool]]:
    """Render the lines of one hunk; the flag marks a line missing its newline"""
    old_eol = old.missing_eol_index
    new_eol = new.missing_eol_index
    rendered = []

    for edit in hunk_range.edits:
        if edit.kind == EditKind.DELETE:
            origin = LineOrigin.DELETION
            text = old.lines[edit.old_index]
            number = edit.old_index + 1
            no_eol = edit.old_index == old_eol
        else:
            # Context lines show the new side's text
            origin = LineOrigin.ADDITION if edit.kind == EditKind.INSERT else LineOrigin.CONTEXT
            text = new.lines[edit.new_index]
            number = edit.new_index + 1
            no_eol = edit.new_index == new_eol

        line = Line(content=origin.value + text, line_number=number, origin=origin)
        rendered.append((line, no_eol))

    return rendered


def _render_into(
    hunk_range: HunkRange,
    old: TokenizedBuffer,
    new: TokenizedBuffer,
    accumulator: HunkAccumulator,
    parts: list[str],
):
    parts.append(hunk_range.header)
    parts.append("\n")
    for line, no_eol in render_lines(hunk_range, old, new):
        accumulator.add_line(hunk_range, line)
        parts.append(line.content)
        parts.append("\n")
        if no_eol:
            parts.append(NO_NEWLINE_MARKER)


def render_hunk(
    hunk_range: HunkRange,
    old: TokenizedBuffer,
    new: TokenizedBuffer,
) -> tuple[Hunk, str]:
    """Render a single hunk and its patch text"""
    accumulator = HunkAccumulator()
    parts: list[str] = []
    _render_into(hunk_range, old, new, accumulator, parts)
    (hunk,) = accumulator.hunks()
    return hunk, "".join(parts)


def render(
    hunk_ranges: Iterable[HunkRange],
    old: TokenizedBuffer,
    new: TokenizedBuffer,
) -> RenderedPatch:
    """Render all hunks of a comparison and count added/deleted lines"""
    accumulator = HunkAccumulator()
    parts: list[str] = []

    for hunk_range in hunk_ranges:
        _render_into(hunk_range, old, new, accumulator, parts)

    hunks = accumulator.hunks()
    return RenderedPatch(
        patch="".join(parts),
        hunks=hunks,
        lines_added=sum(len(hunk.added_lines) for hunk in hunks),
        lines_deleted=sum(len(hunk.removed_lines) for hunk in hunks),
    )
