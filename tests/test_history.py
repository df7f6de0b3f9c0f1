# Tests for cfsync.sync.history
# Persistent sync run history

import json

from cfsync.graph.types import ItemKind
from cfsync.sync.engine import SyncError, SyncResult
from cfsync.sync.history import RunRecord, SyncHistory


def _record(root_id="homepage-1", **kwargs):
    defaults = {"source": "master", "target": "staging", "timestamp": "2026-01-01T10:00:00", "success": True}
    defaults.update(kwargs)
    return RunRecord(root_id=root_id, **defaults)


class TestRunRecord:
    """Tests for RunRecord."""

    def test_from_result(self):
        result = SyncResult(
            success=False,
            entries_synced=3,
            assets_synced=1,
            skipped_count=2,
            errors=[SyncError("x", ItemKind.ENTRY, "boom")],
            duration=1.23456,
        )
        record = RunRecord.from_result(result, root_id="homepage-1", source="master", target="staging")

        assert record.root_id == "homepage-1"
        assert not record.success
        assert record.entries_synced == 3
        assert record.skipped == 2
        assert record.errors == 1
        assert record.duration == 1.235
        assert "T" in record.timestamp

    def test_from_dict_defaults(self):
        record = RunRecord.from_dict({"root_id": "a"})
        assert record.root_id == "a"
        assert not record.success
        assert record.entries_synced == 0


class TestSyncHistory:
    """Tests for SyncHistory."""

    def test_missing_file(self, temp_dir):
        assert SyncHistory(temp_dir / "history.yaml").records == []

    def test_record_and_reload(self, temp_dir):
        path = temp_dir / "history.yaml"
        SyncHistory(path).record(_record("a"))
        SyncHistory(path).record(_record("b"))

        history = SyncHistory(path)
        assert [record.root_id for record in history.records] == ["a", "b"]
        assert [record.root_id for record in history.recent(1)] == ["b"]

    def test_limit_trims_oldest(self, temp_dir):
        history = SyncHistory(temp_dir / "history.yaml", limit=2)
        for root_id in ("a", "b", "c"):
            history.record(_record(root_id))

        reloaded = SyncHistory(temp_dir / "history.yaml")
        assert [record.root_id for record in reloaded.records] == ["b", "c"]

    def test_zero_limit_keeps_all(self, temp_dir):
        history = SyncHistory(temp_dir / "history.yaml", limit=0)
        for root_id in ("a", "b", "c"):
            history.record(_record(root_id))
        assert len(SyncHistory(temp_dir / "history.yaml").records) == 3

    def test_recent_newest_first(self, temp_dir):
        history = SyncHistory(temp_dir / "history.yaml")
        for root_id in ("a", "b", "c"):
            history.record(_record(root_id))

        assert [record.root_id for record in history.recent(10)] == ["c", "b", "a"]
        assert history.recent(0) == []

    def test_clear(self, temp_dir):
        history = SyncHistory(temp_dir / "history.yaml")
        history.record(_record())
        history.clear()
        assert SyncHistory(temp_dir / "history.yaml").records == []

    def test_reads_json_list(self, temp_dir):
        path = temp_dir / "history.json"
        path.write_text(json.dumps([_record("a").to_dict()]), encoding="utf-8")
        assert SyncHistory(path).records[0].root_id == "a"

    def test_unreadable_file(self, temp_dir):
        path = temp_dir / "history.yaml"
        path.write_text("runs: [", encoding="utf-8")
        assert SyncHistory(path).records == []

    def test_null_runs(self, temp_dir):
        path = temp_dir / "history.yaml"
        path.write_text("runs: null\n", encoding="utf-8")
        history = SyncHistory(path)

        assert history.records == []
        history.record(_record("a"))
        assert [record.root_id for record in SyncHistory(path).records] == ["a"]

    def test_path_is_directory(self, temp_dir):
        path = temp_dir / "history.yaml"
        path.mkdir()
        assert SyncHistory(path).records == []
