"""Tests for JSON file persistence of the store snapshot."""

from __future__ import annotations

import json
import logging

import pytest

from resume_studio.store import DEFAULT_STORAGE_KEY, JsonFileStorage, ResumeStore


@pytest.fixture
def path(tmp_path):
    return tmp_path / "state" / "store.json"


@pytest.fixture
def storage(path):
    return JsonFileStorage(path)


class TestJsonFileStorage:
    def test_missing_file_loads_nothing(self, storage):
        assert storage.load() is None

    def test_round_trip_through_store(self, storage):
        store = ResumeStore(storage)
        store.init()
        store.add_resume("Persisted")
        store.update_document_basics({"name": "Jane Doe"})

        restored = ResumeStore(JsonFileStorage(storage.path))
        restored.init()
        assert restored.state == store.state
        assert restored.active_document.basics.name == "Jane Doe"

    def test_file_layout(self, storage, path):
        store = ResumeStore(storage)
        store.add_resume("Layout")
        data = json.loads(path.read_text(encoding="utf-8"))
        entry = data[DEFAULT_STORAGE_KEY]
        assert entry["version"] == 0
        assert entry["state"]["resumes"][0]["title"] == "Layout"

    def test_other_keys_preserved(self, storage, path):
        path.parent.mkdir(parents=True)
        path.write_text(json.dumps({"other-app": {"keep": True}}), encoding="utf-8")
        ResumeStore(storage).add_resume("x")
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["other-app"] == {"keep": True}
        assert DEFAULT_STORAGE_KEY in data

    def test_corrupt_json_falls_back_to_empty(self, storage, path, caplog):
        path.parent.mkdir(parents=True)
        path.write_text("{not json", encoding="utf-8")
        store = ResumeStore(storage)
        with caplog.at_level(logging.WARNING):
            state = store.init()
        assert state.resumes == []
        assert "Could not read" in caplog.text

    def test_invalid_state_falls_back_to_empty(self, storage, path, caplog):
        path.parent.mkdir(parents=True)
        bad = {DEFAULT_STORAGE_KEY: {"state": {"resumes": [{"id": "r1"}]}, "version": 0}}
        path.write_text(json.dumps(bad), encoding="utf-8")
        store = ResumeStore(storage)
        with caplog.at_level(logging.WARNING):
            state = store.init()
        assert state.resumes == []
        assert "validation error" in caplog.text

    def test_clear_removes_only_own_key(self, storage, path):
        path.parent.mkdir(parents=True)
        path.write_text(json.dumps({"other-app": 1}), encoding="utf-8")
        store = ResumeStore(storage)
        store.add_resume("x")
        store.reset()
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data == {"other-app": 1}

    def test_custom_storage_key(self, path):
        ResumeStore(JsonFileStorage(path, storage_key="custom")).add_resume("x")
        assert JsonFileStorage(path).load() is None
        assert JsonFileStorage(path, storage_key="custom").load() is not None

    def test_no_temp_files_left(self, storage, path):
        ResumeStore(storage).add_resume("x")
        assert [p.name for p in path.parent.iterdir()] == ["store.json"]

    def test_save_failure_is_logged_not_raised(self, tmp_path, caplog):
        blocker = tmp_path / "blocker"
        blocker.write_text("file, not a directory", encoding="utf-8")
        storage = JsonFileStorage(blocker / "store.json")
        store = ResumeStore(storage)
        with caplog.at_level(logging.WARNING):
            store.add_resume("x")
        assert store.current_resume is not None
        assert "Failed to save" in caplog.text
