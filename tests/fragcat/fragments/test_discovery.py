"""Tests for fragment discovery and the fragment store."""

from __future__ import annotations

from pathlib import Path

import pytest

from fragcat.exceptions import FragmentDiscoveryError, FragmentReadError
from fragcat.fragments.discovery import discover_fragments, normalize_extensions, read_fragment_lines
from fragcat.fragments.models import Fragment
from fragcat.fragments.store import FragmentStore


class TestDiscoverFragments:

    def test_sorted_recursive_walk(self, write_fragments):
        root = write_fragments({
            "b.txt": "",
            "a.txt": "",
            "sub/c.txt": "",
            "sub/deeper/d.txt": "",
        })

        found = discover_fragments(root)

        assert [p.relative_to(root).as_posix() for p in found] == [
            "a.txt",
            "b.txt",
            "sub/c.txt",
            "sub/deeper/d.txt",
        ]
        assert all(p.is_absolute() for p in found)

    def test_extension_filter(self, write_fragments):
        root = write_fragments({"a.txt": "", "b.md": "", "c.txt.bak": "", "d": ""})

        assert [p.name for p in discover_fragments(root)] == ["a.txt"]
        assert [p.name for p in discover_fragments(root, ["md", ".txt"])] == ["a.txt", "b.md"]

    def test_output_file_is_excluded(self, write_fragments):
        root = write_fragments({"a.txt": "", "output/result.txt": "old result"})

        found = discover_fragments(root, exclude=[root / "output" / "result.txt"])

        assert [p.name for p in found] == ["a.txt"]

    def test_directories_are_skipped(self, fragment_root: Path):
        (fragment_root / "folder.txt").mkdir()
        (fragment_root / "real.txt").write_text("x", encoding="utf-8")

        assert [p.name for p in discover_fragments(fragment_root)] == ["real.txt"]

    def test_stable_across_calls(self, write_fragments):
        root = write_fragments({f"f{i}.txt": "" for i in (5, 1, 9, 3)})

        assert discover_fragments(root) == discover_fragments(root)

    def test_missing_root(self, tmp_path: Path):
        with pytest.raises(FragmentDiscoveryError, match="does not exist"):
            discover_fragments(tmp_path / "nope")

    def test_root_is_a_file(self, tmp_path: Path):
        target = tmp_path / "file.txt"
        target.write_text("", encoding="utf-8")

        with pytest.raises(FragmentDiscoveryError, match="not a directory"):
            discover_fragments(target)


def test_read_fragment_lines_splits_only_on_line_terminators(fragment_root: Path):
    target = fragment_root / "mixed.txt"
    target.write_bytes("page1\x0cpage2\r\nsep\u2028same\rlast\n".encode("utf-8"))

    assert read_fragment_lines(target) == ("page1\x0cpage2", "sep\u2028same", "last")


def test_read_fragment_lines_keeps_trailing_blank_line(fragment_root: Path):
    target = fragment_root / "blank.txt"
    target.write_text("one\n\n", encoding="utf-8")

    assert read_fragment_lines(target) == ("one", "")


def test_normalize_extensions():
    assert normalize_extensions(["txt", ".md", " .txt ", ""]) == (".txt", ".md")


class TestFragmentStore:

    def test_load_keeps_order_and_strips_terminators(self, write_fragments):
        root = write_fragments({"b.txt": "one\r\ntwo\n", "a.txt": "solo"})

        store = FragmentStore.load([root / "b.txt", root / "a.txt"])

        assert [f.name for f in store] == ["b.txt", "a.txt"]
        assert store.get((root / "b.txt").resolve()).lines == ("one", "two")
        assert (root / "a.txt").resolve() in store
        assert len(store) == 2

    def test_read_failure_names_the_path(self, fragment_root: Path):
        missing = fragment_root / "ghost.txt"

        with pytest.raises(FragmentReadError) as excinfo:
            FragmentStore.load([missing])

        assert excinfo.value.path == missing.resolve()
        assert isinstance(excinfo.value.__cause__, OSError)

    def test_decode_failure_is_a_read_error(self, fragment_root: Path):
        target = fragment_root / "latin.txt"
        target.write_bytes("caf\xe9".encode("latin-1"))

        with pytest.raises(FragmentReadError):
            FragmentStore.load([target], encoding="utf-8")

        store = FragmentStore.load([target], encoding="latin-1")
        assert store.get(target.resolve()).lines == ("caf\xe9",)

    def test_duplicate_fragment(self, tmp_path: Path):
        fragment = Fragment(path=(tmp_path / "a.txt").resolve())

        with pytest.raises(ValueError):
            FragmentStore([fragment, fragment])


def test_fragment_requires_resolved_path():
    with pytest.raises(ValueError):
        Fragment(path=Path("relative.txt"))
