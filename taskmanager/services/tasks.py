"""Task service: CRUD and listing scoped to the task owner."""

import logging
from enum import Enum

from sqlalchemy import case
from sqlalchemy.orm import Query, Session

from taskmanager.errors import NotFound
from taskmanager.models.enums import PRIORITY_RANKS, TaskSort
from taskmanager.models.task import Task
from taskmanager.schemas.task import TaskCreate, TaskUpdate

logger = logging.getLogger(__name__)

priority_rank = case(
    {priority.value: rank for priority, rank in PRIORITY_RANKS.items()},
    value=Task.priority,
    else_=0,
)

SORT_ORDERS = {
    TaskSort.NEWEST: (Task.created_at.desc(),),
    TaskSort.OLDEST: (Task.created_at.asc(),),
    # Tasks without a due date go last
    TaskSort.DUE_DATE: (Task.due_date.is_(None), Task.due_date.asc(), Task.created_at.desc()),
    TaskSort.PRIORITY: (priority_rank.desc(), Task.created_at.desc()),
}


class TaskService:
    """Task operations for a single owner.

    Every query filters on ``owner_id``; a task id on its own never reaches a
    task that belongs to someone else.
    """

    def __init__(self, db: Session, owner_id: str):
        self.db = db
        self.owner_id = owner_id

    def _owned(self) -> Query:
        return self.db.query(Task).filter(Task.owner_id == self.owner_id)

    def list_tasks(
        self,
        status: str | None = None,
        priority: str | None = None,
        sort: str | TaskSort | None = None,
    ) -> list[Task]:
        """List the owner's tasks, optionally filtered by status and priority.

        Filter values are matched as given; an unknown value yields no tasks.
        """
        query = self._owned()
        if status:
            query = query.filter(Task.status == status)
        if priority:
            query = query.filter(Task.priority == priority)
        order = SORT_ORDERS[TaskSort.parse(sort)]
        return query.order_by(*order).all()

    def filter_by_status(self, status: str) -> list[Task]:
        """List the owner's tasks with the given status, newest first."""
        return (
            self._owned()
            .filter(Task.status == status)
            .order_by(*SORT_ORDERS[TaskSort.NEWEST])
            .all()
        )

    def get_task(self, task_id: str) -> Task:
        task = self._owned().filter(Task.id == task_id).first()
        if not task:
            raise NotFound("Task not found")
        return task

    def create_task(self, data: TaskCreate) -> Task:
        task = Task(
            owner_id=self.owner_id,
            title=data.title,
            description=data.description,
            status=data.status.value,
            priority=data.priority.value,
            due_date=data.due_date,
        )
        self.db.add(task)
        self.db.commit()
        self.db.refresh(task)
        return task

    def update_task(self, task_id: str, data: TaskUpdate) -> Task:
        """Apply a partial update. Fields missing from the request are left alone."""
        task = self.get_task(task_id)

        for field, value in data.model_dump(exclude_unset=True).items():
            if isinstance(value, Enum):
                value = value.value
            setattr(task, field, value)

        self.db.commit()
        self.db.refresh(task)
        return task

    def delete_task(self, task_id: str) -> None:
        """Delete a task in a single owner-scoped statement."""
        deleted = (
            self._owned().filter(Task.id == task_id).delete(synchronize_session=False)
        )
        self.db.commit()
        if not deleted:
            raise NotFound("Task not found")
        logger.info(f"Deleted task {task_id} for user {self.owner_id}")
