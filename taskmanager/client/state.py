"""Client-side application state.

State is an immutable ``AppState`` value. ``reduce`` is a pure function that
returns the next state for an ``Action``; nothing here is global.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any

Task = dict[str, Any]


class ActionType(str, Enum):
    """Kinds of state transitions."""

    AUTH_PENDING = "auth/pending"
    AUTH_SUCCEEDED = "auth/succeeded"
    AUTH_FAILED = "auth/failed"
    LOGGED_OUT = "auth/loggedOut"
    LOGOUT_FAILED = "auth/logoutFailed"

    TASKS_PENDING = "tasks/pending"
    TASKS_FAILED = "tasks/failed"
    TASKS_LOADED = "tasks/loaded"
    TASK_LOADED = "tasks/taskLoaded"
    TASK_CREATED = "tasks/created"
    TASK_UPDATED = "tasks/updated"
    TASK_DELETED = "tasks/deleted"

    SET_FILTERS = "tasks/setFilters"
    RESET_FILTERS = "tasks/resetFilters"
    CLEAR_ERROR = "tasks/clearError"
    CLEAR_CURRENT_TASK = "tasks/clearCurrentTask"


@dataclass(frozen=True)
class Action:
    type: ActionType
    payload: Any = None


@dataclass(frozen=True)
class TaskFilters:
    """List filters; ``None`` means no filter on that field."""

    status: str | None = None
    priority: str | None = None
    sort: str = "newest"

    def as_query(self) -> dict[str, str]:
        query = {"sort": self.sort}
        if self.status:
            query["status"] = self.status
        if self.priority:
            query["priority"] = self.priority
        return query


@dataclass(frozen=True)
class AuthState:
    user: dict[str, Any] | None = None
    loading: bool = False
    error: str | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None


@dataclass(frozen=True)
class TaskState:
    tasks: tuple[Task, ...] = ()
    current_task: Task | None = None
    loading: bool = False
    error: str | None = None
    filters: TaskFilters = field(default_factory=TaskFilters)


@dataclass(frozen=True)
class AppState:
    auth: AuthState = field(default_factory=AuthState)
    tasks: TaskState = field(default_factory=TaskState)


def _with_auth(state: AppState, **changes: Any) -> AppState:
    return replace(state, auth=replace(state.auth, **changes))


def _with_tasks(state: AppState, **changes: Any) -> AppState:
    return replace(state, tasks=replace(state.tasks, **changes))


def _replace_task(tasks: tuple[Task, ...], updated: Task) -> tuple[Task, ...]:
    return tuple(updated if task["id"] == updated["id"] else task for task in tasks)


def _auth_pending(state: AppState, payload: Any) -> AppState:
    return _with_auth(state, loading=True, error=None)


def _auth_succeeded(state: AppState, user: dict[str, Any]) -> AppState:
    return _with_auth(state, user=user, loading=False, error=None)


def _auth_failed(state: AppState, message: str) -> AppState:
    return _with_auth(state, user=None, loading=False, error=message)


def _logged_out(state: AppState, payload: Any) -> AppState:
    # Tasks belong to the old session
    return AppState(tasks=TaskState(filters=state.tasks.filters))


def _logout_failed(state: AppState, message: str) -> AppState:
    return _with_auth(state, loading=False, error=message)


def _tasks_pending(state: AppState, payload: Any) -> AppState:
    return _with_tasks(state, loading=True, error=None)


def _tasks_failed(state: AppState, message: str) -> AppState:
    return _with_tasks(state, loading=False, error=message)


def _tasks_loaded(state: AppState, tasks: list[Task]) -> AppState:
    return _with_tasks(state, tasks=tuple(tasks), loading=False, error=None)


def _task_loaded(state: AppState, task: Task) -> AppState:
    return _with_tasks(state, current_task=task, loading=False, error=None)


def _task_created(state: AppState, task: Task) -> AppState:
    return _with_tasks(state, tasks=(task, *state.tasks.tasks), loading=False, error=None)


def _task_updated(state: AppState, task: Task) -> AppState:
    current = state.tasks.current_task
    if current is not None and current["id"] == task["id"]:
        current = task
    return _with_tasks(
        state,
        tasks=_replace_task(state.tasks.tasks, task),
        current_task=current,
        loading=False,
        error=None,
    )


def _task_deleted(state: AppState, task_id: str) -> AppState:
    current = state.tasks.current_task
    if current is not None and current["id"] == task_id:
        current = None
    return _with_tasks(
        state,
        tasks=tuple(task for task in state.tasks.tasks if task["id"] != task_id),
        current_task=current,
        loading=False,
        error=None,
    )


def _set_filters(state: AppState, changes: dict[str, Any]) -> AppState:
    return _with_tasks(state, filters=replace(state.tasks.filters, **changes))


def _reset_filters(state: AppState, payload: Any) -> AppState:
    return _with_tasks(state, filters=TaskFilters())


def _clear_error(state: AppState, payload: Any) -> AppState:
    return replace(
        state,
        auth=replace(state.auth, error=None),
        tasks=replace(state.tasks, error=None),
    )


def _clear_current_task(state: AppState, payload: Any) -> AppState:
    return _with_tasks(state, current_task=None)


REDUCERS = {
    ActionType.AUTH_PENDING: _auth_pending,
    ActionType.AUTH_SUCCEEDED: _auth_succeeded,
    ActionType.AUTH_FAILED: _auth_failed,
    ActionType.LOGGED_OUT: _logged_out,
    ActionType.LOGOUT_FAILED: _logout_failed,
    ActionType.TASKS_PENDING: _tasks_pending,
    ActionType.TASKS_FAILED: _tasks_failed,
    ActionType.TASKS_LOADED: _tasks_loaded,
    ActionType.TASK_LOADED: _task_loaded,
    ActionType.TASK_CREATED: _task_created,
    ActionType.TASK_UPDATED: _task_updated,
    ActionType.TASK_DELETED: _task_deleted,
    ActionType.SET_FILTERS: _set_filters,
    ActionType.RESET_FILTERS: _reset_filters,
    ActionType.CLEAR_ERROR: _clear_error,
    ActionType.CLEAR_CURRENT_TASK: _clear_current_task,
}


def reduce(state: AppState, action: Action) -> AppState:
    """Return the state that follows ``action``. Unknown actions are a no-op."""
    reducer = REDUCERS.get(action.type)
    if reducer is None:
        return state
    return reducer(state, action.payload)
