"""
Hunk Grouper - Group an edit script into hunks with surrounding context
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from models.diff import format_hunk_header

from .edit_script import Edit, EditKind


@dataclass(frozen=True)
class HunkRange:
    """Line ranges of one hunk, before rendering (unified-diff numbering)"""

    old_start: int
    old_length: int
    new_start: int
    new_length: int
    edits: tuple[Edit, ...]

    @property
    def header(self) -> str:
        return format_hunk_header(self.old_start, self.old_length, self.new_start, self.new_length)


def group(
    edit_script: Sequence[Edit],
    context_size: int = 3,
    interhunk_lines: int = 0,
) -> tuple[HunkRange, ...]:
    """
    Split an edit script into hunks.

    Changes separated by more than `2 * context_size + interhunk_lines`
    unchanged lines go to separate hunks; closer ones share a hunk. Each hunk
    carries up to `context_size` unchanged lines on either side.
    """
    if context_size < 0:
        raise ValueError(f"context_size must be >= 0, got {context_size}")
    if interhunk_lines < 0:
        raise ValueError(f"interhunk_lines must be >= 0, got {interhunk_lines}")

    changes = [pos for pos, edit in enumerate(edit_script) if edit.kind != EditKind.KEEP]
    if not changes:
        return ()

    max_gap = 2 * context_size + interhunk_lines
    clusters: list[tuple[int, int]] = []
    first = last = changes[0]
    for pos in changes[1:]:
        if pos - last - 1 > max_gap:
            clusters.append((first, last))
            first = pos
        last = pos
    clusters.append((first, last))

    # Lines of each side consumed before each script position
    old_before = [0]
    new_before = [0]
    for edit in edit_script:
        old_before.append(old_before[-1] + (edit.old_index is not None))
        new_before.append(new_before[-1] + (edit.new_index is not None))

    hunks = []
    for first, last in clusters:
        lo = max(0, first - context_size)
        hi = min(len(edit_script), last + context_size + 1)

        old_length = old_before[hi] - old_before[lo]
        new_length = new_before[hi] - new_before[lo]
        # An empty range starts at the line before it
        old_start = old_before[lo] + 1 if old_length else old_before[lo]
        new_start = new_before[lo] + 1 if new_length else new_before[lo]

        hunks.append(
            HunkRange(
                old_start=old_start,
                old_length=old_length,
                new_start=new_start,
                new_length=new_length,
                edits=tuple(edit_script[lo:hi]),
            )
        )

    return tuple(hunks)
