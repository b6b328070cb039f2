"""Tests for the Python API client, run against the app in-process"""

import stat
import sys

import pytest
import requests

from client.api_client import ApiError, TodoApiClient
from client.token_store import FileTokenStore, MemoryTokenStore


@pytest.fixture
def api(client):
    # TestClient exposes the same request() signature as requests.Session
    return TodoApiClient(base_url="http://testserver", token_store=MemoryTokenStore(), session=client)


def test_register_stores_and_replays_token(api):
    body = api.register("a@b.com", "pw", "A")

    assert api.is_authenticated()
    assert api.token_store.get() == body["token"]
    assert api.get_current_user() == body["user"]


def test_todo_lifecycle(api):
    api.register("a@b.com", "pw", "A")

    todo = api.add_todo("buy milk", "2026-02-03")
    assert todo["date"] == "2026-02-03"

    updated = api.update_todo(todo["id"], {"important": True})
    assert updated["important"] is True
    assert updated["text"] == "buy milk"

    assert [t["id"] for t in api.fetch_todos()] == [todo["id"]]
    assert api.delete_todo(todo["id"]) == {"success": True}
    assert api.fetch_todos() == []


def test_server_message_is_surfaced(api):
    api.register("a@b.com", "pw", "A")
    api.logout()

    with pytest.raises(ApiError) as err:
        api.register("a@b.com", "pw", "A")

    assert err.value.status_code == 400
    assert err.value.message == "Email is already registered"


def test_401_clears_token(api):
    api.logout()
    with pytest.raises(ApiError) as err:
        api.fetch_todos()
    assert err.value.status_code == 401
    assert not api.is_authenticated()


def test_403_keeps_token(api):
    api.token_store.set("garbage")
    with pytest.raises(ApiError) as err:
        api.fetch_todos()
    assert err.value.status_code == 403
    assert api.token_store.get() == "garbage"


def test_transport_failure():
    class DownSession:
        def request(self, *args, **kwargs):
            raise requests.ConnectionError("connection refused")

    api = TodoApiClient(session=DownSession())
    with pytest.raises(ApiError) as err:
        api.fetch_todos()
    assert err.value.status_code == 0


class TestFileTokenStore:
    def test_set_get_clear(self, tmp_path):
        store = FileTokenStore(tmp_path / "auth" / "token.json")
        assert store.get() is None

        store.set("abc")
        assert FileTokenStore(tmp_path / "auth" / "token.json").get() == "abc"

        store.clear()
        assert store.get() is None
        store.clear()

    def test_corrupt_file_reads_as_logged_out(self, tmp_path):
        path = tmp_path / "token.json"
        path.write_text("nope", encoding="utf-8")
        assert FileTokenStore(path).get() is None

    @pytest.mark.skipif(sys.platform == "win32", reason="POSIX file modes")
    def test_token_file_is_user_only(self, tmp_path):
        path = tmp_path / "token.json"
        FileTokenStore(path).set("abc")
        assert stat.S_IMODE(path.stat().st_mode) == 0o600
