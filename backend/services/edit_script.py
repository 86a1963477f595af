"""
Edit Script - Minimal line-level edit scripts (linear-space Myers diff)
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Hashable, NamedTuple, Sequence

from models.diff import WhitespaceMode

_WHITESPACE_RUN = re.compile(r"\s+")


class EditKind(str, Enum):
    """Kind of an edit script operation"""

    KEEP = "keep"
    INSERT = "insert"
    DELETE = "delete"


class Edit(NamedTuple):
    """A single edit operation; indices are 0-based"""

    kind: EditKind
    old_index: int | None
    new_index: int | None

    @classmethod
    def keep(cls, old_index: int, new_index: int) -> Edit:
        return cls(EditKind.KEEP, old_index, new_index)

    @classmethod
    def insert(cls, new_index: int) -> Edit:
        return cls(EditKind.INSERT, None, new_index)

    @classmethod
    def delete(cls, old_index: int) -> Edit:
        return cls(EditKind.DELETE, old_index, None)


def normalize_line(line: str, whitespace: WhitespaceMode) -> str:
    """Normalize a line for comparison according to the whitespace mode"""
    if whitespace == WhitespaceMode.IGNORE_EOL:
        return line.rstrip()
    if whitespace == WhitespaceMode.IGNORE_CHANGE:
        return _WHITESPACE_RUN.sub(" ", line).rstrip()
    if whitespace == WhitespaceMode.IGNORE_ALL:
        return _WHITESPACE_RUN.sub("", line)
    return line


def comparison_keys(
    lines: Sequence[str],
    whitespace: WhitespaceMode = WhitespaceMode.EXACT,
    trailing_newline: bool = True,
) -> list[Hashable]:
    """
    Build the values lines are compared by.

    A final line without newline never equals the same text with one, so it
    gets a distinct key.
    """
    keys: list[Hashable] = [normalize_line(line, whitespace) for line in lines]
    if keys and not trailing_newline:
        keys[-1] = (keys[-1], "no-eol")
    return keys


def diff(old_lines: Sequence[Hashable], new_lines: Sequence[Hashable]) -> tuple[Edit, ...]:
    """
    Compute a minimal edit script turning `old_lines` into `new_lines`.

    Change groups that could sit at several positions are moved to the
    conventional one, and deletions come before insertions inside a block.
    """
    old_changed, new_changed = _mark_changes(old_lines, new_lines)
    _compact(old_lines, old_changed, new_changed)
    _compact(new_lines, new_changed, old_changed)
    return _build_script(old_changed, new_changed)


def _mark_changes(
    a: Sequence[Hashable], b: Sequence[Hashable]
) -> tuple[list[bool], list[bool]]:
    old_changed = [False] * len(a)
    new_changed = [False] * len(b)

    # A line with no counterpart on the other side is never kept
    in_a, in_b = set(a), set(b)
    old_index = []
    for i, line in enumerate(a):
        if line in in_b:
            old_index.append(i)
        else:
            old_changed[i] = True
    new_index = []
    for j, line in enumerate(b):
        if line in in_a:
            new_index.append(j)
        else:
            new_changed[j] = True

    old_kept = [a[i] for i in old_index]
    new_kept = [b[j] for j in new_index]

    def mark(alo: int, ahi: int, blo: int, bhi: int) -> None:
        while alo < ahi and blo < bhi and old_kept[alo] == new_kept[blo]:
            alo += 1
            blo += 1
        while alo < ahi and blo < bhi and old_kept[ahi - 1] == new_kept[bhi - 1]:
            ahi -= 1
            bhi -= 1

        if alo == ahi or blo == bhi:
            for i in range(alo, ahi):
                old_changed[old_index[i]] = True
            for j in range(blo, bhi):
                new_changed[new_index[j]] = True
            return

        # Both halves cost strictly fewer edits than the whole
        x, y, u, v = _middle_snake(old_kept, alo, ahi, new_kept, blo, bhi)
        mark(alo, x, blo, y)
        mark(u, ahi, v, bhi)

    mark(0, len(old_kept), 0, len(new_kept))
    return old_changed, new_changed


def _middle_snake(
    a: Sequence[Hashable],
    alo: int,
    ahi: int,
    b: Sequence[Hashable],
    blo: int,
    bhi: int,
) -> tuple[int, int, int, int]:
    """
    Find the middle snake of an optimal path through a[alo:ahi] x b[blo:bhi].

    Forward and reverse searches run until they overlap, keeping only the
    furthest point per diagonal, so memory stays linear. Returns the snake
    as absolute (x, y, u, v).
    """
    n, m = ahi - alo, bhi - blo
    delta = n - m
    odd = delta % 2 == 1
    max_d = (n + m + 1) // 2
    offset = max_d + 1

    # forward[offset + k]: furthest x on diagonal k = x - y, -1 if unreached
    forward = [-1] * (2 * max_d + 3)
    forward[offset + 1] = 0
    # backward[offset + c]: smallest x on diagonal delta + c, n + 1 if unreached
    backward = [n + 1] * (2 * max_d + 3)
    backward[offset - 1] = n

    for d in range(max_d + 1):
        for k in range(-d, d + 1, 2):
            down = forward[offset + k + 1]
            right = forward[offset + k - 1] + 1
            if down < 0 or down - k > m:
                down = -1
            if right < 1 or right > n:
                right = -1
            x = max(down, right)
            if x < 0:
                forward[offset + k] = -1
                continue

            y = x - k
            start_x, start_y = x, y
            while x < n and y < m and a[alo + x] == b[blo + y]:
                x += 1
                y += 1
            forward[offset + k] = x

            if odd and delta - d < k < delta + d and x >= backward[offset + k - delta]:
                return alo + start_x, blo + start_y, alo + x, blo + y

        for c in range(-d, d + 1, 2):
            k = delta + c
            up = backward[offset + c - 1]
            left = backward[offset + c + 1] - 1
            if up > n or up - k < 0:
                up = n + 1
            if left > n - 1 or left < 0:
                left = n + 1
            x = min(up, left)
            if x > n:
                backward[offset + c] = n + 1
                continue

            y = x - k
            end_x, end_y = x, y
            while x > 0 and y > 0 and a[alo + x - 1] == b[blo + y - 1]:
                x -= 1
                y -= 1
            backward[offset + c] = x

            if not odd and -d <= k <= d and x <= forward[offset + k]:
                return alo + x, blo + y, alo + end_x, blo + end_y

    raise RuntimeError("diff search ended without meeting in the middle")


def _gap_sizes(changed: list[bool]) -> list[int]:
    """gaps[u] = number of changed lines right after the u-th unchanged line"""
    gaps = [0]
    for flag in changed:
        if flag:
            gaps[-1] += 1
        else:
            gaps.append(0)
    return gaps


def _compact(lines: Sequence[Hashable], changed: list[bool], other_changed: list[bool]) -> None:
    """
    Slide each change group over identical neighbouring lines.

    A group ends up lined up with a change on the other side when one of its
    positions allows it, otherwise as low as it can go.
    """
    gaps = _gap_sizes(other_changed)
    n = len(lines)
    start = 0
    unchanged = 0  # unchanged lines before `start`

    while True:
        while start < n and not changed[start]:
            start += 1
            unchanged += 1
        if start == n:
            return

        end = start
        while end < n and changed[end]:
            end += 1

        while True:
            size = end - start

            while start > 0 and lines[start - 1] == lines[end - 1]:
                start -= 1
                end -= 1
                changed[start] = True
                changed[end] = False
                unchanged -= 1
                while start > 0 and changed[start - 1]:
                    start -= 1

            earliest_end = end
            matching_end = end if gaps[unchanged] else None

            while end < n and lines[start] == lines[end]:
                changed[start] = False
                changed[end] = True
                start += 1
                end += 1
                unchanged += 1
                while end < n and changed[end]:
                    end += 1
                if gaps[unchanged]:
                    matching_end = end

            if end - start == size:
                break

        if end != earliest_end and matching_end is not None:
            while end > matching_end:
                start -= 1
                end -= 1
                changed[start] = True
                changed[end] = False
                unchanged -= 1

        start = end


def _build_script(old_changed: list[bool], new_changed: list[bool]) -> tuple[Edit, ...]:
    n, m = len(old_changed), len(new_changed)
    edits: list[Edit] = []
    i = j = 0

    while i < n or j < m:
        if (i < n and old_changed[i]) or (j < m and new_changed[j]):
            while i < n and old_changed[i]:
                edits.append(Edit.delete(i))
                i += 1
            while j < m and new_changed[j]:
                edits.append(Edit.insert(j))
                j += 1
        else:
            edits.append(Edit.keep(i, j))
            i += 1
            j += 1

    return tuple(edits)
