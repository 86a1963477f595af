"""Shared fixtures for the blobdiff test suite"""

import pytest

from models.diff import LineOrigin
from services.config_manager import CONFIG_DIR_ENV, ConfigManager

# Two versions of the same blob: one line inserted near the top, one line
# swapped and one appended further down.
OLD_BLOB = b"1\n3\n4\n5\n6\n7\n7.5\n8\n9\n10\n12\n12\n13\n14\n15\n"
NEW_BLOB = b"1\n2\n3\n4\n5\n6\n7\n7.5\n8\n9\n10\n11\n12\n13\n14\n15\n16\n"

TWO_HUNK_PATCH = (
    "@@ -1,4 +1,5 @@\n"
    " 1\n"
    "+2\n"
    " 3\n"
    " 4\n"
    " 5\n"
    "@@ -8,8 +9,9 @@\n"
    " 8\n"
    " 9\n"
    " 10\n"
    "-12\n"
    "+11\n"
    " 12\n"
    " 13\n"
    " 14\n"
    " 15\n"
    "+16\n"
)

BINARY_BLOB = bytes([17, 16, 0, 4, 65])


def apply_hunks(old_lines, hunks):
    """Apply rendered hunks to the old lines and return the new lines"""
    result = []
    pos = 0
    for hunk in hunks:
        start = hunk.old_start - 1 if hunk.old_length else hunk.old_start
        result.extend(old_lines[pos:start])
        pos = start
        for line in hunk.lines:
            if line.origin == LineOrigin.DELETION:
                pos += 1
            elif line.origin == LineOrigin.CONTEXT:
                result.append(line.text)
                pos += 1
            else:
                result.append(line.text)
    result.extend(old_lines[pos:])
    return result


@pytest.fixture
def old_blob():
    return OLD_BLOB


@pytest.fixture
def new_blob():
    return NEW_BLOB


@pytest.fixture
def binary_blob():
    return BINARY_BLOB


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    """Point the config singleton at a fresh temporary directory"""
    monkeypatch.setenv(CONFIG_DIR_ENV, str(tmp_path))
    ConfigManager.reset_instance()
    yield tmp_path
    ConfigManager.reset_instance()
