"""Drive the API client and fold each outcome into an ``AppState``."""

from collections.abc import Callable
from typing import Any

from taskmanager.client.api import ApiError, TaskManagerClient
from taskmanager.client.state import Action, ActionType, AppState, reduce


class ClientSession:
    """Pairs an API client with the state it has produced so far.

    Each call dispatches a pending action, performs the request and then
    dispatches either the success or the failure action. API errors are
    recorded in state rather than raised.
    """

    def __init__(self, api: TaskManagerClient, state: AppState | None = None):
        self.api = api
        self.state = state or AppState()

    def dispatch(self, action: Action) -> AppState:
        self.state = reduce(self.state, action)
        return self.state

    def _run(
        self,
        pending: ActionType,
        call: Callable[[], Any],
        succeeded: ActionType,
        failed: ActionType,
    ) -> AppState:
        self.dispatch(Action(pending))
        try:
            result = call()
        except ApiError as e:
            return self.dispatch(Action(failed, e.message))
        return self.dispatch(Action(succeeded, result))

    def _run_auth(self, call: Callable[[], Any]) -> AppState:
        return self._run(
            ActionType.AUTH_PENDING, call, ActionType.AUTH_SUCCEEDED, ActionType.AUTH_FAILED
        )

    def _run_tasks(self, call: Callable[[], Any], succeeded: ActionType) -> AppState:
        return self._run(ActionType.TASKS_PENDING, call, succeeded, ActionType.TASKS_FAILED)

    def signup(self, username: str, email: str, password: str) -> AppState:
        return self._run_auth(lambda: self.api.signup(username, email, password))

    def login(self, email: str, password: str) -> AppState:
        return self._run_auth(lambda: self.api.login(email, password))

    def check_auth(self) -> AppState:
        return self._run_auth(self.api.check)

    def logout(self) -> AppState:
        return self._run(
            ActionType.AUTH_PENDING,
            self.api.logout,
            ActionType.LOGGED_OUT,
            ActionType.LOGOUT_FAILED,
        )

    def load_tasks(self) -> AppState:
        """Fetch tasks using the filters currently held in state."""
        query = self.state.tasks.filters.as_query()
        return self._run_tasks(lambda: self.api.list_tasks(**query), ActionType.TASKS_LOADED)

    def set_filters(self, **changes: Any) -> AppState:
        self.dispatch(Action(ActionType.SET_FILTERS, changes))
        return self.load_tasks()

    def filter_by_status(self, status: str) -> AppState:
        return self._run_tasks(lambda: self.api.filter_tasks(status), ActionType.TASKS_LOADED)

    def open_task(self, task_id: str) -> AppState:
        return self._run_tasks(lambda: self.api.get_task(task_id), ActionType.TASK_LOADED)

    def create_task(self, title: str, **fields: Any) -> AppState:
        return self._run_tasks(
            lambda: self.api.create_task(title, **fields), ActionType.TASK_CREATED
        )

    def update_task(self, task_id: str, **fields: Any) -> AppState:
        return self._run_tasks(
            lambda: self.api.update_task(task_id, **fields), ActionType.TASK_UPDATED
        )

    def delete_task(self, task_id: str) -> AppState:
        def call() -> str:
            self.api.delete_task(task_id)
            return task_id

        return self._run_tasks(call, ActionType.TASK_DELETED)
