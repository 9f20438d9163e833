"""Tests for snapshot creation, listing, restore, and deletion."""

import itertools
from pathlib import Path

import pytest

from tickoff.backups import BackupManager, Snapshot
from tickoff.errors import (
    NotFoundError,
    SnapshotExistsError,
    SourceMissingError,
    StoreIOError,
)
from tickoff.todos import TodoStore, load_store, save_store

TS = 1_767_258_000


def _saved_store(path: Path, *descs: str) -> TodoStore:
    store = TodoStore()
    for desc in descs:
        store.add(desc)
    save_store(store, path)
    return store


class TestSnapshot:
    def test_from_path(self, tmp_path):
        snapshot = Snapshot.from_path(tmp_path / "todos_backup_42.json")
        assert snapshot == Snapshot(42, tmp_path / "todos_backup_42.json")

    @pytest.mark.parametrize(
        "name",
        [
            "todos_backup_.json",
            "todos_backup_abc.json",
            "todos_backup_\u00b2.json",
            "todos_backup_1.txt",
            "x.json",
        ],
    )
    def test_from_path_rejects_bad_names(self, tmp_path, name):
        assert Snapshot.from_path(tmp_path / name) is None

    def test_created_at_is_utc(self, tmp_path):
        assert Snapshot(0, tmp_path).created_at.year == 1970


class TestCreate:
    def test_requires_store_file(self, backup_manager):
        with pytest.raises(SourceMissingError):
            backup_manager.create()

    def test_copies_store_file(self, tmp_path, backup_manager):
        store = _saved_store(tmp_path / "todos.json", "Buy milk::Walk dog")

        snapshot = backup_manager.create()

        assert snapshot.timestamp == TS
        assert snapshot.path == tmp_path / "backups" / f"todos_backup_{TS}.json"
        assert snapshot.path.read_text() == (tmp_path / "todos.json").read_text()
        assert load_store(snapshot.path) == store

    def test_does_not_touch_store_file(self, tmp_path, backup_manager):
        _saved_store(tmp_path / "todos.json", "a")
        before = (tmp_path / "todos.json").read_text()

        backup_manager.create()

        assert (tmp_path / "todos.json").read_text() == before

    def test_undecodable_store_file(self, tmp_path, backup_manager):
        (tmp_path / "todos.json").write_bytes(b'{"todos": [], "x": "\xff"}')

        with pytest.raises(StoreIOError, match="Error creating backup"):
            backup_manager.create()
        assert backup_manager.list() == []

    def test_same_second_does_not_overwrite(self, tmp_path, backup_manager):
        _saved_store(tmp_path / "todos.json", "a")
        backup_manager.create()

        with pytest.raises(SnapshotExistsError):
            backup_manager.create()


class TestListAndOpen:
    def test_empty_when_no_directory(self, backup_manager):
        assert backup_manager.list() == []

    def test_lists_each_snapshot_once(self, tmp_path):
        _saved_store(tmp_path / "todos.json", "a")
        ticks = itertools.count(300, -100)
        manager = BackupManager(
            tmp_path / "todos.json", tmp_path / "backups", clock=lambda: next(ticks)
        )
        for _ in range(3):
            manager.create()
        (tmp_path / "backups" / "todos_backup_junk.json").write_text("{}")
        (tmp_path / "backups" / "todos_backup_\u00b2.json").write_text("{}")
        (tmp_path / "backups" / "notes.txt").write_text("")

        assert [s.timestamp for s in manager.list()] == [100, 200, 300]

    def test_open_returns_snapshot_contents(self, tmp_path, backup_manager):
        _saved_store(tmp_path / "todos.json", "Buy milk::Walk dog")
        backup_manager.create()

        opened = backup_manager.open(str(TS))

        assert [t.desc for t in opened] == ["Buy milk", "Walk dog"]

    def test_open_missing(self, backup_manager):
        with pytest.raises(NotFoundError):
            backup_manager.open("123")

    @pytest.mark.parametrize("key", ["../todos", "", "12a", "-5", "\u00b2"])
    def test_open_rejects_non_numeric_keys(self, backup_manager, key):
        with pytest.raises(NotFoundError):
            backup_manager.open(key)


class TestRestore:
    def test_assigns_fresh_ids(self, tmp_path, backup_manager):
        source = _saved_store(tmp_path / "todos.json", "a::b::Old task")
        assert source.get(3).desc == "Old task"
        backup_manager.create()
        live = TodoStore()

        result = backup_manager.restore(TS, [3], live)

        assert result.ok
        assert [t.id for t in result.restored] == [1]
        assert live.get(1).desc == "Old task"
        assert live.get(1).timestamp == source.get(3).timestamp

    def test_uses_recycled_ids_of_live_store(self, tmp_path, backup_manager):
        _saved_store(tmp_path / "todos.json", "x::y")
        backup_manager.create()
        live = TodoStore()
        live.add("one::two::three")
        live.remove([2])

        result = backup_manager.restore(TS, [1, 2], live)

        assert [t.id for t in result.restored] == [2, 4]
        assert live.ids() == [1, 3, 2, 4]

    def test_missing_item_is_not_fatal(self, tmp_path, backup_manager):
        _saved_store(tmp_path / "todos.json", "a::b")
        backup_manager.create()
        live = TodoStore()

        result = backup_manager.restore(TS, [7, 2], live)

        assert not result.ok
        assert result.missing == [7]
        assert [t.desc for t in live] == ["b"]

    def test_missing_snapshot(self, backup_manager):
        live = TodoStore()
        with pytest.raises(NotFoundError):
            backup_manager.restore(TS, [1], live)
        assert len(live) == 0


class TestDelete:
    def test_delete_one(self, tmp_path, backup_manager):
        _saved_store(tmp_path / "todos.json", "a")
        backup_manager.create()

        deleted = backup_manager.delete_one(str(TS))

        assert deleted.timestamp == TS
        assert backup_manager.list() == []
        with pytest.raises(NotFoundError):
            backup_manager.open(str(TS))

    def test_delete_one_missing(self, backup_manager):
        with pytest.raises(NotFoundError):
            backup_manager.delete_one("999")

    def test_delete_all(self, tmp_path):
        _saved_store(tmp_path / "todos.json", "a")
        ticks = itertools.count(1)
        manager = BackupManager(
            tmp_path / "todos.json", tmp_path / "backups", clock=lambda: next(ticks)
        )
        manager.create()
        manager.create()
        stray = tmp_path / "backups" / "todos_backup_\u00b2.json"
        stray.write_text("{}")

        assert manager.delete_all() == 2
        assert stray.exists()
        assert manager.list() == []
        assert (tmp_path / "todos.json").exists()

    def test_delete_all_without_backups(self, backup_manager):
        assert backup_manager.delete_all() == 0
