"""HTTP client for the task manager API."""

import logging
from typing import Any

import httpx

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Error response from the API, carrying the server's message."""

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class TaskManagerClient:
    """Client for the task manager API.

    The session cookie set by signup/login lives in the underlying
    ``httpx.Client`` cookie jar and is sent with every later request.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        *,
        client: httpx.Client | None = None,
        timeout: float = 10.0,
    ) -> None:
        self._owns_client = client is None
        self._client = client or httpx.Client(base_url=base_url, timeout=timeout)

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "TaskManagerClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def _request(self, method: str, url: str, **kwargs: Any) -> dict[str, Any]:
        response = self._client.request(method, url, **kwargs)
        try:
            data = response.json()
        except ValueError:
            data = {}
        if response.is_error or not data.get("success", False):
            message = data.get("message") or response.reason_phrase or "Request failed"
            logger.debug(f"{method} {url} failed with {response.status_code}: {message}")
            raise ApiError(response.status_code, message)
        return data

    # --- Session ---

    def signup(self, username: str, email: str, password: str) -> dict[str, Any]:
        data = self._request(
            "POST",
            "/user/signup",
            json={"username": username, "email": email, "password": password},
        )
        return data["user"]

    def login(self, email: str, password: str) -> dict[str, Any]:
        data = self._request("POST", "/user/login", json={"email": email, "password": password})
        return data["user"]

    def logout(self) -> str:
        return self._request("POST", "/user/logout")["message"]

    def check(self) -> dict[str, Any]:
        """Return the user behind the current session cookie."""
        return self._request("GET", "/user/check")["user"]

    # --- Tasks ---

    def list_tasks(
        self,
        status: str | None = None,
        priority: str | None = None,
        sort: str | None = None,
    ) -> list[dict[str, Any]]:
        params = {
            key: value
            for key, value in {"status": status, "priority": priority, "sort": sort}.items()
            if value is not None
        }
        return self._request("GET", "/tasks/", params=params)["tasks"]

    def filter_tasks(self, status: str) -> list[dict[str, Any]]:
        return self._request("GET", f"/tasks/filter/{status}")["tasks"]

    def get_task(self, task_id: str) -> dict[str, Any]:
        return self._request("GET", f"/tasks/{task_id}")["task"]

    def create_task(self, title: str, **fields: Any) -> dict[str, Any]:
        """Create a task. Extra fields use the API names (``dueDate`` etc.)."""
        return self._request("POST", "/tasks/create", json={"title": title, **fields})["task"]

    def update_task(self, task_id: str, **fields: Any) -> dict[str, Any]:
        return self._request("PUT", f"/tasks/update/{task_id}", json=fields)["task"]

    def delete_task(self, task_id: str) -> str:
        return self._request("DELETE", f"/tasks/delete/{task_id}")["message"]
