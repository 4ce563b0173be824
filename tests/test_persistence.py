"""
Tests for persistence: last-result cache and scan history.
"""

import json
from pathlib import Path

from sillydeps.core.persistence.cache import (
    DEFAULT_CACHE_FILE,
    default_cache_path,
    load_cached_result,
    save_cached_result,
)
from sillydeps.core.persistence.history import HistoryEntry, HistoryWriter


class TestCache:
    """Tests for the last-result cache."""

    def test_save_and_load(self, tmp_path: Path):
        """Result dicts roundtrip through save/load."""
        path = tmp_path / "cache" / "result.json"
        data = {"direct_count": 1, "by_category": {"padding": [{"name": "left-pad"}]}}

        save_cached_result(data, path)
        assert path.is_file()
        assert load_cached_result(path) == data

    def test_load_missing(self, tmp_path: Path):
        assert load_cached_result(tmp_path / "nope.json") is None

    def test_load_corrupt(self, tmp_path: Path):
        """Corrupt JSON is ignored."""
        path = tmp_path / "corrupt.json"
        path.write_text("not json at all {{{")
        assert load_cached_result(path) is None

    def test_load_non_object(self, tmp_path: Path):
        path = tmp_path / "list.json"
        path.write_text("[1, 2, 3]")
        assert load_cached_result(path) is None

    def test_overwrite(self, tmp_path: Path):
        path = tmp_path / "result.json"
        save_cached_result({"n": 1}, path)
        save_cached_result({"n": 2}, path)
        assert load_cached_result(path) == {"n": 2}

    def test_no_temp_files_left(self, tmp_path: Path):
        """Atomic write leaves only the target behind."""
        path = tmp_path / "result.json"
        save_cached_result({"n": 1}, path)
        assert [p.name for p in tmp_path.iterdir()] == ["result.json"]

    def test_default_path(self):
        assert default_cache_path().name == DEFAULT_CACHE_FILE


class TestHistory:
    """Tests for the append-only history ledger."""

    def test_write_and_read(self, tmp_path: Path):
        writer = HistoryWriter(project_root=tmp_path)
        assert writer.write(HistoryEntry(project="demo", direct=1, indirect=2))
        assert writer.path == tmp_path / ".sillydeps" / "history.ndjson"

        [entry] = writer.read_all()
        assert entry.project == "demo"
        assert entry.direct == 1
        assert entry.indirect == 2
        assert entry.timestamp

    def test_append_only(self, tmp_path: Path):
        writer = HistoryWriter(path=tmp_path / "history.ndjson")
        for i in range(5):
            writer.write(HistoryEntry(project=f"p{i}"))

        lines = (tmp_path / "history.ndjson").read_text().strip().split("\n")
        assert len(lines) == 5
        assert json.loads(lines[0])["project"] == "p0"
        assert writer.entry_count() == 5

    def test_read_recent(self, tmp_path: Path):
        writer = HistoryWriter(path=tmp_path / "history.ndjson")
        for i in range(10):
            writer.write(HistoryEntry(project=f"p{i}"))

        recent = writer.read_recent(3)
        assert [e.project for e in recent] == ["p7", "p8", "p9"]
        assert writer.read_recent(0) == []

    def test_empty(self, tmp_path: Path):
        writer = HistoryWriter(path=tmp_path / "history.ndjson")
        assert writer.read_all() == []
        assert writer.entry_count() == 0

    def test_corrupt_lines_skipped(self, tmp_path: Path):
        path = tmp_path / "history.ndjson"
        writer = HistoryWriter(path=path)
        writer.write(HistoryEntry(project="good"))
        with path.open("a") as f:
            f.write("garbage\n")
        writer.write(HistoryEntry(project="also-good"))

        assert [e.project for e in writer.read_all()] == ["good", "also-good"]

    def test_clear(self, tmp_path: Path):
        writer = HistoryWriter(path=tmp_path / "history.ndjson")
        writer.write(HistoryEntry(project="demo"))
        writer.clear()
        assert writer.read_all() == []
        writer.clear()  # already gone

    def test_write_failure_returns_false(self, tmp_path: Path):
        blocker = tmp_path / "blocker"
        blocker.write_text("file")
        writer = HistoryWriter(path=blocker / "history.ndjson")
        assert writer.write(HistoryEntry(project="demo")) is False
