"""Tests for the owner-scoped task service."""

from datetime import UTC, datetime

import pytest

from taskmanager.errors import NotFound
from taskmanager.models import Task, User
from taskmanager.models.enums import TaskPriority, TaskSort, TaskStatus
from taskmanager.schemas.task import TaskCreate, TaskUpdate, parse_due_date
from taskmanager.services.tasks import TaskService


def make_user(db, email):
    user = User(username=email.split("@")[0], email=email, password_hash="not-a-real-hash")
    db.add(user)
    db.commit()
    return user


@pytest.fixture
def alice(db):
    return make_user(db, "alice@example.com")


@pytest.fixture
def bob(db):
    return make_user(db, "bob@example.com")


@pytest.fixture
def service(db, alice):
    return TaskService(db, alice.id)


class TestParseDueDate:
    """Tests for due date parsing."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("2030-01-15", datetime(2030, 1, 15, tzinfo=UTC)),
            ("2030-01-15T10:00:00", datetime(2030, 1, 15, 10, tzinfo=UTC)),
            ("2030-01-15T10:00:00+05:00", datetime(2030, 1, 15, 5, tzinfo=UTC)),
            ("2030-01-15T10:00:00Z", datetime(2030, 1, 15, 10, tzinfo=UTC)),
        ],
    )
    def test_normalised_to_utc(self, value, expected):
        parsed = parse_due_date(value)
        assert parsed == expected
        assert parsed.utcoffset().total_seconds() == 0


class TestTaskSort:
    """Tests for sort option parsing."""

    def test_known_values(self):
        assert TaskSort.parse("dueDate") is TaskSort.DUE_DATE
        assert TaskSort.parse("priority") is TaskSort.PRIORITY

    @pytest.mark.parametrize("value", [None, "", "createdAt", "PRIORITY"])
    def test_unknown_values_fall_back_to_newest(self, value):
        assert TaskSort.parse(value) is TaskSort.NEWEST

    def test_priority_ranks(self):
        assert TaskPriority.HIGH.rank > TaskPriority.MEDIUM.rank > TaskPriority.LOW.rank


class TestTaskService:
    """Tests for TaskService."""

    def test_create_assigns_owner(self, service, alice):
        task = service.create_task(TaskCreate(title="Buy milk"))

        assert task.owner_id == alice.id
        assert task.status == TaskStatus.PENDING.value
        assert task.priority == TaskPriority.MEDIUM.value
        assert task.created_at is not None

    def test_priority_sort(self, service):
        for priority in ["low", "high", "medium"]:
            service.create_task(TaskCreate(title=priority, priority=priority))

        tasks = service.list_tasks(sort="priority")
        assert [t.priority for t in tasks] == ["high", "medium", "low"]

    def test_list_only_returns_own_tasks(self, db, service, bob):
        service.create_task(TaskCreate(title="Alice's"))
        TaskService(db, bob.id).create_task(TaskCreate(title="Bob's"))

        assert [t.title for t in service.list_tasks()] == ["Alice's"]
        assert [t.title for t in service.filter_by_status("pending")] == ["Alice's"]

    def test_get_other_users_task(self, db, service, bob):
        task = TaskService(db, bob.id).create_task(TaskCreate(title="Bob's"))

        with pytest.raises(NotFound):
            service.get_task(task.id)

    def test_update_other_users_task_writes_nothing(self, db, service, bob):
        task = TaskService(db, bob.id).create_task(TaskCreate(title="Bob's"))

        with pytest.raises(NotFound):
            service.update_task(task.id, TaskUpdate(title="Stolen"))

        db.expire_all()
        assert db.get(Task, task.id).title == "Bob's"

    def test_update_only_sent_fields(self, service):
        task = service.create_task(
            TaskCreate(title="Write report", description="draft", priority="high")
        )

        updated = service.update_task(task.id, TaskUpdate.model_validate({"status": "in-progress"}))

        assert updated.status == "in-progress"
        assert updated.title == "Write report"
        assert updated.description == "draft"
        assert updated.priority == "high"

    def test_update_due_date(self, service):
        task = service.create_task(TaskCreate(title="Pay rent"))

        updated = service.update_task(task.id, TaskUpdate.model_validate({"dueDate": "2030-02-01"}))

        assert updated.due_date.replace(tzinfo=UTC) == datetime(2030, 2, 1, tzinfo=UTC)

    def test_delete_other_users_task(self, db, service, bob):
        task = TaskService(db, bob.id).create_task(TaskCreate(title="Bob's"))

        with pytest.raises(NotFound):
            service.delete_task(task.id)
        assert db.get(Task, task.id) is not None

    def test_delete_twice(self, service):
        task = service.create_task(TaskCreate(title="Temp"))
        task_id = task.id

        service.delete_task(task_id)
        with pytest.raises(NotFound):
            service.delete_task(task_id)
