"""Tests for the memory and JSON-file collections"""

import json

import pytest

from todoapp.auth.models import User
from todoapp.stores.json_file import JsonFileCollection
from todoapp.stores.memory import MemoryCollection
from todoapp.todos.models import Todo
from todoapp.utils.exceptions import StorageError


@pytest.fixture(params=["memory", "json"])
def todos(request, tmp_path):
    if request.param == "memory":
        return MemoryCollection()
    return JsonFileCollection(tmp_path / "todos.json", Todo, key="todos")


def test_put_get_delete(todos):
    todo = Todo(user_id="u1", text="x")
    todos.put(todo)

    assert todos.get(todo.id) == todo
    assert todos.delete(todo.id) is True
    assert todos.get(todo.id) is None
    assert todos.delete(todo.id) is False


def test_put_replaces_in_place(todos):
    first = todos.put(Todo(user_id="u1", text="one"))
    todos.put(Todo(user_id="u1", text="two"))
    todos.put(first.model_copy(update={"text": "uno"}))

    assert [t.text for t in todos.all()] == ["uno", "two"]


def test_list_by_owner(todos):
    todos.put(Todo(user_id="u1", text="a"))
    todos.put(Todo(user_id="u2", text="b"))
    todos.put(Todo(user_id="u1", text="c"))

    assert [t.text for t in todos.list_by_owner("u1")] == ["a", "c"]
    assert [t.text for t in todos.list_by_owner("u2")] == ["b"]
    assert todos.list_by_owner("u3") == []


def test_find_one(todos):
    todos.put(Todo(user_id="u1", text="a"))
    assert todos.find_one(lambda t: t.text == "a").user_id == "u1"
    assert todos.find_one(lambda t: t.text == "zzz") is None


class TestJsonFileCollection:
    def test_missing_file_reads_empty(self, tmp_path):
        users = JsonFileCollection(tmp_path / "nested" / "users.json", User, key="users")
        assert users.all() == []

    def test_document_layout(self, tmp_path):
        path = tmp_path / "todos.json"
        todos = JsonFileCollection(path, Todo, key="todos")
        todo = todos.put(Todo(user_id="u1", text="x"))

        data = json.loads(path.read_text(encoding="utf-8"))
        assert list(data) == ["todos"]
        assert data["todos"][0]["id"] == todo.id
        assert data["todos"][0]["user_id"] == "u1"

    def test_survives_reopen(self, tmp_path):
        path = tmp_path / "users.json"
        users = JsonFileCollection(path, User, key="users")
        user = users.put(User(email="a@b.com", password_hash="h", name="A"))

        reopened = JsonFileCollection(path, User, key="users")
        assert reopened.get(user.id) == user

    def test_no_temp_files_left_behind(self, tmp_path):
        todos = JsonFileCollection(tmp_path / "todos.json", Todo, key="todos")
        todos.put(Todo(user_id="u1", text="x"))
        assert [p.name for p in tmp_path.iterdir()] == ["todos.json"]

    def test_corrupt_file_raises_storage_error(self, tmp_path):
        path = tmp_path / "todos.json"
        path.write_text("{not json", encoding="utf-8")
        todos = JsonFileCollection(path, Todo, key="todos")
        with pytest.raises(StorageError):
            todos.all()
