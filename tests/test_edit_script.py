"""Tests for the edit script computer"""

import random
import tracemalloc

from models.diff import WhitespaceMode
from services.edit_script import Edit, EditKind, comparison_keys, diff, normalize_line
from services.tokenizer import tokenize

from conftest import NEW_BLOB, OLD_BLOB


def kinds(script):
    return "".join({EditKind.KEEP: "=", EditKind.INSERT: "+", EditKind.DELETE: "-"}[e.kind] for e in script)


def apply_script(old, new, script):
    result = []
    for edit in script:
        if edit.kind == EditKind.KEEP:
            assert old[edit.old_index] == new[edit.new_index]
            result.append(old[edit.old_index])
        elif edit.kind == EditKind.INSERT:
            result.append(new[edit.new_index])
    return result


class TestDiff:
    def test_empty_vs_empty(self):
        assert diff([], []) == ()

    def test_identical(self):
        assert diff(["a", "b"], ["a", "b"]) == (Edit.keep(0, 0), Edit.keep(1, 1))

    def test_all_inserted(self):
        assert diff([], ["x", "y"]) == (Edit.insert(0), Edit.insert(1))

    def test_all_deleted(self):
        assert diff(["x", "y"], []) == (Edit.delete(0), Edit.delete(1))

    def test_single_deletion(self):
        assert diff(["a", "b", "c"], ["a", "c"]) == (
            Edit.keep(0, 0),
            Edit.delete(1),
            Edit.keep(2, 1),
        )

    def test_replacement_puts_deletion_first(self):
        assert diff(["a", "b", "c"], ["a", "x", "c"]) == (
            Edit.keep(0, 0),
            Edit.delete(1),
            Edit.insert(1),
            Edit.keep(2, 2),
        )

    def test_script_is_minimal(self):
        old = list("ABCABBA")
        new = list("CBABAC")
        script = diff(old, new)
        changes = sum(1 for e in script if e.kind != EditKind.KEEP)
        assert changes == 5
        assert apply_script(old, new, script) == new

    def test_duplicate_line_removal_takes_the_last_copy(self):
        assert diff(["x", "x"], ["x"]) == (Edit.keep(0, 0), Edit.delete(1))

    def test_deletion_lines_up_with_neighbouring_insertion(self):
        old = tokenize(OLD_BLOB).lines
        new = tokenize(NEW_BLOB).lines
        script = diff(old, new)

        assert kinds(script) == "=+" + "=" * 9 + "-+" + "=" * 4 + "+"
        assert Edit.delete(10) in script
        assert Edit.insert(11) in script
        assert apply_script(old, new, script) == list(new)

    def test_deterministic(self):
        old = ["a", "b", "a", "c", "b"]
        new = ["b", "a", "c", "a", "b", "b"]
        assert diff(old, new) == diff(old, new)

    def test_reconstructs_new_sequence(self):
        old = "the quick brown fox jumps over the lazy dog".split()
        new = "a quick brown cat jumps over the dog again".split()
        assert apply_script(old, new, diff(old, new)) == new


class TestComparisonKeys:
    def test_missing_eol_line_differs_from_terminated_one(self):
        without = comparison_keys(["a", "b"], trailing_newline=False)
        with_eol = comparison_keys(["a", "b"], trailing_newline=True)
        assert without[0] == with_eol[0]
        assert without[1] != with_eol[1]

    def test_whitespace_modes(self):
        assert normalize_line("a b  \r", WhitespaceMode.IGNORE_EOL) == "a b"
        assert normalize_line(" a \t b ", WhitespaceMode.IGNORE_CHANGE) == " a b"
        assert normalize_line(" a \t b ", WhitespaceMode.IGNORE_ALL) == "ab"
        assert normalize_line(" a ", WhitespaceMode.EXACT) == " a "

    def test_ignored_whitespace_yields_keeps(self):
        old = comparison_keys(["a  b", "c"], WhitespaceMode.IGNORE_CHANGE)
        new = comparison_keys(["a b", "c"], WhitespaceMode.IGNORE_CHANGE)
        assert kinds(diff(old, new)) == "=="


def lcs_length(old, new):
    previous = [0] * (len(new) + 1)
    for a in old:
        current = [0]
        for j, b in enumerate(new):
            current.append(previous[j] + 1 if a == b else max(previous[j + 1], current[j]))
        previous = current
    return previous[-1]


def peak_memory(func, *args):
    tracemalloc.start()
    try:
        func(*args)
        return tracemalloc.get_traced_memory()[1]
    finally:
        tracemalloc.stop()


class TestLargeInputs:
    def test_full_rewrite_stays_small(self):
        old = [f"old{i}" for i in range(5000)]
        new = [f"new{i}" for i in range(5000)]

        assert peak_memory(diff, old, new) < 16 * 1024 * 1024
        assert kinds(diff(old, new)) == "-" * 5000 + "+" * 5000

    def test_reversed_lines_stay_small(self):
        old = [f"line{i}" for i in range(600)]
        new = old[::-1]

        assert peak_memory(diff, old, new) < 4 * 1024 * 1024
        script = diff(old, new)
        assert sum(1 for e in script if e.kind == EditKind.KEEP) == 1
        assert apply_script(old, new, script) == new

    def test_scripts_are_minimal(self):
        rng = random.Random(20240601)
        for _ in range(300):
            old = [rng.choice("abc") for _ in range(rng.randint(0, 25))]
            new = [rng.choice("abc") for _ in range(rng.randint(0, 25))]
            script = diff(old, new)

            keeps = sum(1 for e in script if e.kind == EditKind.KEEP)
            assert keeps == lcs_length(old, new), (old, new)
            assert apply_script(old, new, script) == new
            assert [e.old_index for e in script if e.old_index is not None] == list(range(len(old)))
