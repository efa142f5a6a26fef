"""Tests for require-directive extraction."""

from __future__ import annotations

from pathlib import Path

from fragcat.diagnostics import CollectingSink
from fragcat.fragments.extraction import (
    extract_dependencies,
    iter_directives,
    resolve_target,
)
from fragcat.fragments.models import Fragment

from tests.utils import require


def _fragment(root: Path, name: str, *lines: str) -> Fragment:
    return Fragment(path=(root / name).resolve(), lines=tuple(lines))


class TestIterDirectives:
    """Test the raw line scan."""

    def test_directive_alone_on_line(self):
        assert list(iter_directives([require("b.txt")])) == [(1, "b.txt")]

    def test_directive_embedded_in_text(self):
        lines = ["intro", "See *require 'parts/b.txt'* for details", "outro"]
        assert list(iter_directives(lines)) == [(2, "parts/b.txt")]

    def test_only_first_directive_per_line(self):
        line = f"{require('a.txt')} and {require('b.txt')}"
        assert list(iter_directives([line])) == [(1, "a.txt")]

    def test_lines_without_marker_are_ignored(self):
        lines = [
            "require 'a.txt'",      # no asterisks
            "*require a.txt*",      # no quotes
            "*require ''*",         # empty path
            "*REQUIRE 'a.txt'*",    # case sensitive
        ]
        assert list(iter_directives(lines)) == []

    def test_path_cannot_contain_quote(self):
        assert list(iter_directives(["*require 'it's.txt'*"])) == []

    def test_line_numbers_are_one_based_and_ordered(self):
        lines = ["x", require("a.txt"), "y", require("b.txt")]
        assert list(iter_directives(lines)) == [(2, "a.txt"), (4, "b.txt")]


class TestExtractDependencies:
    """Test resolution against the fragment universe."""

    def test_known_target_is_emitted(self, fragment_root: Path):
        a = _fragment(fragment_root, "a.txt", require("b.txt"))
        b = (fragment_root / "b.txt").resolve()
        sink = CollectingSink()

        targets = extract_dependencies(a, {a.path, b}, fragment_root, sink)

        assert targets == [b]
        assert sink.warnings == []

    def test_nested_path_resolves_against_root(self, fragment_root: Path):
        a = _fragment(fragment_root, "chapters/a.txt", require("shared/terms.txt"))
        terms = (fragment_root / "shared" / "terms.txt").resolve()

        targets = extract_dependencies(a, {a.path, terms}, fragment_root, CollectingSink())

        assert targets == [terms]

    def test_repeated_directives_are_not_deduplicated(self, fragment_root: Path):
        a = _fragment(fragment_root, "a.txt", require("b.txt"), "text", require("b.txt"))
        b = (fragment_root / "b.txt").resolve()

        targets = extract_dependencies(a, {a.path, b}, fragment_root, CollectingSink())

        assert targets == [b, b]

    def test_missing_target_is_dropped_with_one_warning(self, fragment_root: Path):
        a = _fragment(fragment_root, "a.txt", require("missing"))
        sink = CollectingSink()

        targets = extract_dependencies(a, {a.path}, fragment_root, sink)

        assert targets == []
        assert len(sink.warnings) == 1
        assert "missing" in sink.warnings[0]
        assert "not found" in sink.warnings[0]

    def test_processing_continues_after_missing_target(self, fragment_root: Path):
        a = _fragment(fragment_root, "a.txt", require("gone.txt"), require("b.txt"))
        b = (fragment_root / "b.txt").resolve()
        sink = CollectingSink()

        targets = extract_dependencies(a, {a.path, b}, fragment_root, sink)

        assert targets == [b]
        assert len(sink.warnings) == 1

    def test_order_follows_lines(self, fragment_root: Path):
        a = _fragment(fragment_root, "a.txt", require("c.txt"), require("b.txt"))
        b = (fragment_root / "b.txt").resolve()
        c = (fragment_root / "c.txt").resolve()

        targets = extract_dependencies(a, {a.path, b, c}, fragment_root, CollectingSink())

        assert targets == [c, b]


def test_unresolved_records_line_and_raw_path(fragment_root: Path):
    a = _fragment(fragment_root, "a.txt", "intro", require("nope/x.txt"))
    missing = []

    extract_dependencies(a, {a.path}, fragment_root, CollectingSink(), unresolved=missing)

    assert len(missing) == 1
    assert missing[0].line_number == 2
    assert missing[0].raw_path == "nope/x.txt"
    assert missing[0].target == resolve_target("nope/x.txt", fragment_root)
    assert missing[0].dependent == a.path
