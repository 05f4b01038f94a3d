"""Tests for the API client and client session against the app."""

import pytest

from taskmanager.client import ApiError, ClientSession, TaskManagerClient

PASSWORD = "Testpass1!"


@pytest.fixture
def api(client):
    return TaskManagerClient(client=client)


@pytest.fixture
def session(api):
    return ClientSession(api)


class TestTaskManagerClient:
    """Tests for TaskManagerClient."""

    def test_signup_and_check(self, api):
        user = api.signup("alice", "alice@example.com", PASSWORD)

        assert api.check() == user

    def test_error_carries_server_message(self, api):
        with pytest.raises(ApiError) as exc_info:
            api.login("nobody@example.com", PASSWORD)

        assert exc_info.value.status_code == 401
        assert exc_info.value.message == "Invalid email or password"

    def test_task_crud(self, api):
        api.signup("alice", "alice@example.com", PASSWORD)

        task = api.create_task("Buy milk", priority="low", dueDate="2030-01-01")
        assert api.get_task(task["id"]) == task

        updated = api.update_task(task["id"], status="completed")
        assert updated["status"] == "completed"
        assert [t["id"] for t in api.filter_tasks("completed")] == [task["id"]]
        assert api.list_tasks(priority="high") == []

        assert api.delete_task(task["id"]) == "Task deleted successfully"
        with pytest.raises(ApiError) as exc_info:
            api.get_task(task["id"])
        assert exc_info.value.status_code == 404


class TestClientSession:
    """Tests for ClientSession."""

    def test_login_flow_updates_state(self, session, signup, client):
        signup(client, username="alice", email="alice@example.com")
        client.cookies.clear()

        state = session.check_auth()
        assert not state.auth.is_authenticated
        assert state.auth.error == "Token is not present"

        state = session.login("alice@example.com", PASSWORD)
        assert state.auth.is_authenticated
        assert state.auth.user["email"] == "alice@example.com"
        assert state.auth.error is None

    def test_task_lifecycle(self, session):
        session.signup("alice", "alice@example.com", PASSWORD)

        session.create_task("low one", priority="low")
        state = session.create_task("high one", priority="high")
        assert [t["title"] for t in state.tasks.tasks] == ["high one", "low one"]

        state = session.set_filters(sort="priority", priority="low")
        assert [t["title"] for t in state.tasks.tasks] == ["low one"]

        task_id = state.tasks.tasks[0]["id"]
        state = session.open_task(task_id)
        assert state.tasks.current_task["id"] == task_id

        state = session.update_task(task_id, status="completed")
        assert state.tasks.current_task["status"] == "completed"
        assert state.tasks.tasks[0]["status"] == "completed"

        state = session.delete_task(task_id)
        assert state.tasks.tasks == ()
        assert state.tasks.current_task is None

    def test_failures_are_recorded(self, session):
        session.signup("alice", "alice@example.com", PASSWORD)

        state = session.open_task("missing")
        assert state.tasks.error == "Task not found"
        assert state.tasks.loading is False

        state = session.create_task("x" * 201)
        assert state.tasks.error == "Title cannot exceed 200 characters"

    def test_logout(self, session):
        session.signup("alice", "alice@example.com", PASSWORD)
        session.create_task("Something")
        session.load_tasks()

        state = session.logout()
        assert not state.auth.is_authenticated
        assert state.tasks.tasks == ()

        state = session.load_tasks()
        assert state.tasks.error == "Token is not present"

    def test_logout_failure_is_recorded(self, session, monkeypatch):
        state = session.signup("alice", "alice@example.com", PASSWORD)
        user = state.auth.user

        def unavailable():
            raise ApiError(503, "Service unavailable")

        monkeypatch.setattr(session.api, "logout", unavailable)

        state = session.logout()
        assert state.auth.error == "Service unavailable"
        assert state.auth.loading is False
        assert state.auth.user == user
