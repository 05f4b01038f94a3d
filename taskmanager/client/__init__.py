"""Python client for the task manager API."""

from taskmanager.client.api import ApiError, TaskManagerClient
from taskmanager.client.session import ClientSession
from taskmanager.client.state import Action, ActionType, AppState, reduce

__all__ = [
    "ApiError",
    "TaskManagerClient",
    "ClientSession",
    "Action",
    "ActionType",
    "AppState",
    "reduce",
]
