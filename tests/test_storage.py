"""Tests for the file-backed and in-memory log stores."""

import json
import os
import stat

from services.storage import LogStore, MemoryLogStore


class TestLogStoreLoad:
    def test_missing_file_is_empty(self, file_store):
        assert file_store.load() == []

    def test_reads_saved_array(self, file_store, log_file):
        log_file.parent.mkdir(parents=True)
        log_file.write_text(json.dumps([{"id": "b"}, {"id": "a"}]), encoding="utf-8")

        assert file_store.load() == [{"id": "b"}, {"id": "a"}]

    def test_malformed_json_reads_as_empty(self, file_store, log_file, caplog):
        log_file.parent.mkdir(parents=True)
        log_file.write_text("[{not json", encoding="utf-8")

        assert file_store.load() == []
        assert "Error reading logs" in caplog.text

    def test_non_array_reads_as_empty(self, file_store, log_file):
        log_file.parent.mkdir(parents=True)
        log_file.write_text('{"id": "a"}', encoding="utf-8")

        assert file_store.load() == []


class TestLogStoreSave:
    def test_creates_parent_dir_and_pretty_prints(self, file_store, log_file):
        assert file_store.save([{"id": "a"}]) is True

        text = log_file.read_text(encoding="utf-8")
        assert text == json.dumps([{"id": "a"}], indent=2)

    def test_save_replaces_whole_collection(self, file_store):
        file_store.save([{"id": "a"}, {"id": "b"}])
        file_store.save([{"id": "c"}])

        assert file_store.load() == [{"id": "c"}]

    def test_no_temp_files_left_behind(self, file_store, log_file):
        file_store.save([{"id": "a"}])
        file_store.save([{"id": "b"}])

        assert [p.name for p in log_file.parent.iterdir()] == ["logs.json"]

    def test_io_error_returns_false(self, tmp_path, caplog):
        blocker = tmp_path / "blocker"
        blocker.write_text("a file, not a directory")
        store = LogStore(str(blocker / "logs.json"))

        assert store.save([{"id": "a"}]) is False
        assert "Error writing logs" in caplog.text

    def test_unserializable_returns_false(self, file_store, log_file):
        file_store.save([{"id": "a"}])

        assert file_store.save([{"id": object()}]) is False
        assert file_store.load() == [{"id": "a"}]

    def test_non_finite_numbers_not_written(self, file_store, log_file):
        file_store.save([{"id": "a"}])

        assert file_store.save([{"id": "b", "headers": {"a": float("nan")}}]) is False
        assert json.loads(log_file.read_text(encoding="utf-8")) == [{"id": "a"}]

    def test_new_file_is_world_readable(self, file_store, log_file):
        file_store.save([{"id": "a"}])

        assert stat.S_IMODE(os.stat(log_file).st_mode) == 0o644

    def test_existing_file_mode_is_kept(self, file_store, log_file):
        file_store.save([{"id": "a"}])
        os.chmod(log_file, 0o640)

        file_store.save([{"id": "b"}])

        assert stat.S_IMODE(os.stat(log_file).st_mode) == 0o640


class TestLogStoreStat:
    def test_missing_file(self, file_store):
        status = file_store.stat()

        assert status.exists is False
        assert status.size_bytes == 0
        assert status.total_logs == 0
        assert status.latest_timestamp is None

    def test_reports_newest_timestamp(self, file_store):
        file_store.save([
            {"id": "b", "timestamp": "2026-10-18T09:15:02.123Z"},
            {"id": "a", "timestamp": "2026-10-18T09:00:00.000Z"},
        ])

        status = file_store.stat()

        assert status.exists is True
        assert status.size_bytes > 0
        assert status.total_logs == 2
        assert status.latest_timestamp == "2026-10-18T09:15:02.123000+00:00"


class TestMemoryLogStore:
    def test_round_trip_is_isolated(self):
        store = MemoryLogStore()
        logs = [{"id": "a", "request": {"url": "/x"}}]

        store.save(logs)
        logs[0]["request"]["url"] = "/changed"
        loaded = store.load()
        loaded.append({"id": "b"})

        assert store.load() == [{"id": "a", "request": {"url": "/x"}}]

    def test_stat_counts_entries(self):
        store = MemoryLogStore([{"id": "a"}])

        assert store.stat().total_logs == 1
        assert store.stat().path == ":memory:"

    def test_saved_empty_collection_exists(self):
        store = MemoryLogStore()

        assert store.stat().exists is False
        store.save([])
        assert store.stat().exists is True
