"""
Diff Generator Service - Compare two blobs into hunks, patch text and counts
"""

from __future__ import annotations

import logging
from typing import Iterator

from models.diff import ContentChanges, DiffOptions, Hunk

from .edit_script import comparison_keys, diff
from .hunk_grouper import HunkRange, group
from .patch_renderer import render, render_hunk
from .tokenizer import TokenizedBuffer, is_binary_content, tokenize

logger = logging.getLogger(__name__)


class InvalidOptionsError(ValueError):
    """Raised when diff options cannot be honoured"""


def validate_options(options: DiffOptions):
    """Reject option values the engine cannot work with"""
    for name in ("context_lines", "interhunk_lines", "binary_detection_bound"):
        value = getattr(options, name)
        if value < 0:
            raise InvalidOptionsError(f"{name} must be >= 0, got {value}")


class DiffGenerator:
    """Generate content changes between two versions of a blob"""

    def __init__(self, options: DiffOptions | None = None):
        self.options = options or DiffOptions()

    def is_binary_comparison(self, old: bytes | None, new: bytes | None) -> bool:
        """True when the blobs differ and at least one side holds binary content"""
        if old == new or self.options.force_text:
            return False
        bound = self.options.binary_detection_bound
        return is_binary_content(old, bound) or is_binary_content(new, bound)

    def compare(self, old: bytes | None, new: bytes | None) -> ContentChanges:
        """
        Compare two blobs. `None` stands for an absent blob.

        Raises:
            InvalidOptionsError: before any work, if the options are invalid
        """
        validate_options(self.options)

        if old == new:
            return ContentChanges.empty()

        old_buffer, new_buffer = self._tokenize(old, new)
        if old_buffer.is_binary or new_buffer.is_binary:
            logger.debug("Binary comparison (%s vs %s bytes)", _size(old), _size(new))
            return ContentChanges.binary()

        rendered = render(self._group(old_buffer, new_buffer), old_buffer, new_buffer)

        logger.debug(
            "Compared %d vs %d lines: %d hunks, +%d -%d",
            len(old_buffer.lines),
            len(new_buffer.lines),
            len(rendered.hunks),
            rendered.lines_added,
            rendered.lines_deleted,
        )

        return ContentChanges(
            is_binary=False,
            lines_added=rendered.lines_added,
            lines_deleted=rendered.lines_deleted,
            patch=rendered.patch,
            hunks=rendered.hunks,
        )

    def iter_hunks(self, old: bytes | None, new: bytes | None) -> Iterator[Hunk]:
        """Yield rendered hunks one at a time; nothing for binary or identical blobs"""
        validate_options(self.options)

        if old == new:
            return

        old_buffer, new_buffer = self._tokenize(old, new)
        if old_buffer.is_binary or new_buffer.is_binary:
            return

        for hunk_range in self._group(old_buffer, new_buffer):
            hunk, _ = render_hunk(hunk_range, old_buffer, new_buffer)
            yield hunk

    def _tokenize(
        self,
        old: bytes | None,
        new: bytes | None,
    ) -> tuple[TokenizedBuffer, TokenizedBuffer]:
        bound = self.options.binary_detection_bound
        detect_binary = not self.options.force_text
        return tokenize(old, bound, detect_binary), tokenize(new, bound, detect_binary)

    def _group(self, old: TokenizedBuffer, new: TokenizedBuffer) -> tuple[HunkRange, ...]:
        options = self.options
        edit_script = diff(
            comparison_keys(old.lines, options.whitespace, old.trailing_newline),
            comparison_keys(new.lines, options.whitespace, new.trailing_newline),
        )
        return group(edit_script, options.context_lines, options.interhunk_lines)


def compare(
    old: bytes | None,
    new: bytes | None,
    options: DiffOptions | None = None,
) -> ContentChanges:
    """Compare two blobs with the given options"""
    return DiffGenerator(options).compare(old, new)


def _size(data: bytes | None) -> int | str:
    return "absent" if data is None else len(data)
