# tests/test_task_store.py

from __future__ import annotations

import json
from pathlib import Path

import pytest

from todo_tracker.tasks import task_api
from todo_tracker.tasks.task_errors import NotFoundError, PersistenceError
from todo_tracker.tasks.task_models import TodoList
from todo_tracker.tasks.task_store import TaskStore

# Byte-for-byte what the original Go tool writes (json.MarshalIndent): no
# updated_at, completed_at only on done tasks, "&" escaped, no final newline.
LEGACY_FILE = """{
  "tasks": [
    {
      "id": 1,
      "content": "buy milk",
      "done": false,
      "created_at": "2024-03-01 09:00:00"
    },
    {
      "id": 3,
      "content": "salt \\u0026 pepper",
      "done": true,
      "created_at": "2024-03-01 09:05:00",
      "completed_at": "2024-03-02 18:30:00"
    }
  ],
  "next_id": 4
}"""


def test_missing_file_loads_empty_list(tmp_path: Path) -> None:
    store = TaskStore(tmp_path / "tasks.json")
    todo = store.load()
    assert todo.tasks == []
    assert todo.next_id == 1
    assert not (tmp_path / "tasks.json").exists()


def test_save_then_load(tmp_path: Path) -> None:
    path = tmp_path / "tasks.json"
    store = TaskStore(path)

    todo = TodoList()
    task_api.add_task(todo, "buy milk", now="2024-03-01 09:00:00")
    task_api.add_task(todo, "чай с лимоном", now="2024-03-01 09:01:00")
    task_api.toggle_task(todo, 1, now="2024-03-01 10:00:00")
    store.save(todo)

    text = path.read_text("utf-8")
    assert '\n  "tasks": [' in text  # 2-space indent
    assert "чай с лимоном" in text  # non-ASCII written as-is

    loaded = store.load()
    assert loaded == todo


def test_completed_at_omitted_when_absent(tmp_path: Path) -> None:
    path = tmp_path / "tasks.json"
    todo = TodoList()
    task_api.add_task(todo, "a", now="2024-03-01 09:00:00")
    TaskStore(path).save(todo)

    data = json.loads(path.read_text("utf-8"))
    assert data["next_id"] == 2
    assert data["tasks"][0] == {
        "id": 1,
        "content": "a",
        "done": False,
        "created_at": "2024-03-01 09:00:00",
        "updated_at": "2024-03-01 09:00:00",
    }


def test_load_save_without_mutation_keeps_file_content(tmp_path: Path) -> None:
    path = tmp_path / "tasks.json"
    path.write_text(LEGACY_FILE, "utf-8")
    store = TaskStore(path)

    store.save(store.load())

    assert json.loads(path.read_text("utf-8")) == json.loads(LEGACY_FILE)
    assert path.read_text("utf-8") == LEGACY_FILE


def test_legacy_file_loads_with_gaps_in_ids(tmp_path: Path) -> None:
    path = tmp_path / "tasks.json"
    path.write_text(LEGACY_FILE, "utf-8")
    todo = TaskStore(path).load()

    assert [t.id for t in todo.tasks] == [1, 3]
    assert todo.tasks[0].updated_at is None
    assert todo.tasks[1].content == "salt & pepper"
    assert todo.tasks[1].completed_at == "2024-03-02 18:30:00"
    assert todo.next_id == 4


def test_delete_missing_id_leaves_file_identical(tmp_path: Path) -> None:
    path = tmp_path / "tasks.json"
    path.write_text(LEGACY_FILE, "utf-8")
    before = path.read_bytes()
    store = TaskStore(path)

    todo = store.load()
    with pytest.raises(NotFoundError):
        task_api.delete_task(todo, 2)

    assert path.read_bytes() == before


@pytest.mark.parametrize(
    "content",
    [
        "{not json",
        "[]",
        '{"tasks": {}, "next_id": 1}',
        '{"tasks": []}',
        '{"tasks": [], "next_id": 0}',
        '{"tasks": [{"id": "1", "content": "a", "done": false, "created_at": "x"}], "next_id": 2}',
        '{"tasks": [{"id": 1, "done": false, "created_at": "x"}], "next_id": 2}',
        '{"tasks": [{"id": 1, "content": "  ", "done": false, "created_at": "x"}], "next_id": 2}',
        '{"tasks": [{"id": 1, "content": "a", "done": "no", "created_at": "x"}], "next_id": 2}',
        (
            '{"tasks": [{"id": 1, "content": "a", "done": false, "created_at": "x"},'
            ' {"id": 1, "content": "b", "done": false, "created_at": "x"}], "next_id": 2}'
        ),
    ],
)
def test_malformed_file_raises_persistence_error(tmp_path: Path, content: str) -> None:
    path = tmp_path / "tasks.json"
    path.write_text(content, "utf-8")

    with pytest.raises(PersistenceError) as exc_info:
        TaskStore(path).load()

    assert exc_info.value.path == path
    # No repair: the broken file stays as it was.
    assert path.read_text("utf-8") == content


def test_invalid_utf8_raises_persistence_error(tmp_path: Path) -> None:
    path = tmp_path / "tasks.json"
    path.write_bytes(b"\xff\xfe\x00garbage")

    with pytest.raises(PersistenceError):
        TaskStore(path).load()


def test_unreadable_path_raises_persistence_error(tmp_path: Path) -> None:
    # A directory in place of the file: exists, but cannot be read as text.
    path = tmp_path / "tasks.json"
    path.mkdir()

    with pytest.raises(PersistenceError):
        TaskStore(path).load()


def test_save_failure_raises_and_keeps_previous_file(tmp_path: Path) -> None:
    path = tmp_path / "tasks.json"
    path.write_text(LEGACY_FILE, "utf-8")
    # The temp file name is taken by a directory, so the write fails.
    (tmp_path / "tasks.json.tmp").mkdir()

    store = TaskStore(path)
    todo = store.load()
    task_api.clear_all(todo)

    with pytest.raises(PersistenceError):
        store.save(todo)

    assert path.read_text("utf-8") == LEGACY_FILE


def test_save_creates_parent_directory(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "dir" / "tasks.json"
    TaskStore(path).save(TodoList())
    assert json.loads(path.read_text("utf-8")) == {"tasks": [], "next_id": 1}
    assert not path.with_name("tasks.json.tmp").exists()


def test_null_task_list_is_written_back_as_null(tmp_path: Path) -> None:
    # The Go tool writes a never-filled slice as null.
    path = tmp_path / "tasks.json"
    text = '{\n  "tasks": null,\n  "next_id": 1\n}'
    path.write_text(text, "utf-8")
    store = TaskStore(path)

    todo = store.load()
    assert todo.tasks == []
    store.save(todo)
    assert path.read_text("utf-8") == text

    task_api.add_task(todo, "a", now="2024-03-01 09:00:00")
    task_api.delete_task(todo, 1)
    store.save(todo)
    assert json.loads(path.read_text("utf-8"))["tasks"] == []

    task_api.clear_all(todo)
    store.save(todo)
    assert path.read_text("utf-8") == '{\n  "tasks": [],\n  "next_id": 1\n}'


TRICKY_TEXT = "fix <b> & \u2028 ünïcode"


def test_html_sensitive_characters_are_escaped(tmp_path: Path) -> None:
    path = tmp_path / "tasks.json"
    store = TaskStore(path)
    todo = TodoList()
    task_api.add_task(todo, TRICKY_TEXT, now="2024-03-01 09:00:00")
    store.save(todo)

    text = path.read_text("utf-8")
    assert '"fix \\u003cb\\u003e \\u0026 \\u2028 ünïcode"' in text
    assert not text.endswith("\n")
    assert store.load().tasks[0].content == TRICKY_TEXT


def test_case_insensitive_duplicates_in_file_still_load(tmp_path: Path) -> None:
    # Uniqueness is a write-time rule that can be turned off, so a file may
    # legitimately carry duplicates.
    path = tmp_path / "tasks.json"
    path.write_text(
        '{"tasks": [{"id": 1, "content": "A", "done": false, "created_at": "x"},'
        ' {"id": 2, "content": "a", "done": false, "created_at": "x"}], "next_id": 3}',
        "utf-8",
    )

    todo = TaskStore(path).load()
    assert [t.content for t in todo.tasks] == ["A", "a"]
