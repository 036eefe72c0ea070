import json
import logging
import os

from core.storage import JsonStore


def test_missing_file_is_empty(store):
    assert store.load_section("progress") is None


def test_sections_are_independent(store):
    assert store.save_section("progress", {"current_level": 3})
    assert store.save_section("leaderboard", [1, 2])
    assert store.load_section("progress") == {"current_level": 3}
    assert store.load_section("leaderboard") == [1, 2]


def test_write_leaves_no_temp_files(store, tmp_path):
    store.save_section("progress", {"a": 1})
    store.save_section("progress", {"a": 2})
    assert os.listdir(tmp_path) == ["save.json"]


def test_corrupt_file_is_logged_and_ignored(store, caplog):
    with open(store.path, "w", encoding="utf-8") as f:
        f.write("{not json")
    with caplog.at_level(logging.ERROR, logger="core.storage"):
        assert store.load_section("progress") is None
    assert "Failed to read save file" in caplog.text


def test_non_object_document_is_ignored(store):
    with open(store.path, "w", encoding="utf-8") as f:
        json.dump([1, 2, 3], f)
    assert store.load_section("progress") is None
    assert store.save_section("progress", {"ok": True})
    assert store.load_section("progress") == {"ok": True}


def test_unwritable_location_returns_false(tmp_path, caplog):
    blocker = tmp_path / "blocker"
    blocker.write_text("")
    store = JsonStore(str(blocker / "save.json"))
    with caplog.at_level(logging.ERROR, logger="core.storage"):
        assert store.save_section("progress", {}) is False
    assert "Failed to write save file" in caplog.text


def test_clear(store):
    store.save_section("progress", {"a": 1})
    assert store.clear()
    assert store.load_section("progress") is None
