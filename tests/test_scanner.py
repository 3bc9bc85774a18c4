"""Tests for Scanner."""

from pathlib import Path
from unittest.mock import Mock

import pytest

from plainpress.errors import InvalidDocumentError, NotFoundError
from plainpress.index.scanner import Scanner, ScanReport, scan_tree
from plainpress.ingestion.entry_loader import parse_one
from plainpress.models import ScanOutcome


class TestScanReport:
    """Test ScanReport tracking."""

    def test_init_defaults(self):
        """Test default initialization."""
        report = ScanReport()
        assert report.outcomes == []
        assert report.kept == []
        assert report.dropped == []
        assert report.documents == []

    def test_record_dropped(self):
        """Test recording a dropped outcome."""
        report = ScanReport()
        outcome = ScanOutcome(path=Path("/tmp/bad.txt"), reason="boom")

        report.record(outcome)

        assert report.dropped == [outcome]
        assert report.kept == []
        assert not outcome.kept


class TestScanner:
    """Test Scanner against real trees."""

    def test_scan_mixed_tree(self, tmp_path: Path):
        """Test that non-text files are ignored."""
        (tmp_path / "post.txt").write_text("Post\n\nbody\n")
        (tmp_path / "readme.md").write_text("Readme\n\nbody\n")

        report = Scanner().scan(tmp_path)

        assert len(report.outcomes) == 1
        assert report.documents[0].title == "Post"

    def test_invalid_files_dropped(self, tmp_path: Path):
        """Test that unparsable files are recorded as dropped."""
        (tmp_path / "empty.txt").write_text("")
        (tmp_path / "good.txt").write_text("Good\n")

        report = Scanner().scan(tmp_path)

        assert [d.title for d in report.documents] == ["Good"]
        assert len(report.dropped) == 1
        assert report.dropped[0].path.name == "empty.txt"
        assert "Invalid entry file" in report.dropped[0].reason

    def test_parser_errors_do_not_abort(self, tmp_path: Path):
        """Test that a failing parser call only drops that file."""
        (tmp_path / "a.txt").write_text("A\n")
        (tmp_path / "b.txt").write_text("B\n")

        def flaky(path: Path):
            if path.name == "a.txt":
                raise OSError("disk error")
            return parse_one(path)

        report = Scanner(parser=flaky).scan(tmp_path)

        assert [d.title for d in report.documents] == ["B"]
        assert report.dropped[0].reason == "disk error"

    def test_unexpected_errors_propagate(self, tmp_path: Path):
        """Test that programming errors are not swallowed."""
        (tmp_path / "a.txt").write_text("A\n")
        parser = Mock(side_effect=RuntimeError("bug"))

        with pytest.raises(RuntimeError):
            Scanner(parser=parser).scan(tmp_path)

    def test_nested_order(self, tmp_path: Path):
        """Test deterministic traversal order."""
        (tmp_path / "b").mkdir()
        (tmp_path / "a").mkdir()
        (tmp_path / "b" / "one.txt").write_text("B1\n")
        (tmp_path / "a" / "two.txt").write_text("A2\n")
        (tmp_path / "top.txt").write_text("Top\n")

        titles = [d.title for d in Scanner().scan(tmp_path).documents]

        assert titles == ["A2", "B1", "Top"]

    def test_missing_root(self, tmp_path: Path):
        """Test that a missing root propagates."""
        with pytest.raises(NotFoundError):
            Scanner().scan(tmp_path / "missing")

    def test_file_root(self, tmp_path: Path):
        """Test that a file root is rejected."""
        entry = tmp_path / "a.txt"
        entry.write_text("A\n")
        with pytest.raises(NotFoundError):
            Scanner().scan(entry)

    def test_scan_tree_returns_documents(self, tmp_path: Path):
        """Test the convenience wrapper."""
        (tmp_path / "a.txt").write_text("A\n")
        documents = scan_tree(tmp_path)
        assert [d.title for d in documents] == ["A"]

    def test_parser_invalid_document(self, tmp_path: Path):
        """Test that InvalidDocumentError from a custom parser is absorbed."""
        (tmp_path / "a.txt").write_text("A\n")
        parser = Mock(side_effect=InvalidDocumentError("nope"))

        report = Scanner(parser=parser).scan(tmp_path)

        assert report.documents == []
        assert report.dropped[0].reason == "nope"
