"""Task service - Business logic for task operations.

This service layer sits between commands and the repository, providing
a clean API for task-related business logic.
"""

from __future__ import annotations

from datetime import datetime

from pomopro_cli.models.focus.exceptions import TaskNotFoundError
from pomopro_cli.models.focus.history import Session, sessions_for_task
from pomopro_cli.models.task import Task, new_task_id
from pomopro_cli.repositories.focus_repository import FocusRepository
from pomopro_cli.utils.logger import get_logger


class TaskService:
    """Service for task business logic."""

    def __init__(self, repository: FocusRepository):
        """Initialize the task service.

        Args:
            repository: FocusRepository used for data access
        """
        self.repository = repository

    def list_tasks(self, include_completed: bool = True) -> list[Task]:
        """List tasks in creation order.

        Args:
            include_completed: Whether to include completed tasks

        Returns:
            List of Task objects
        """
        tasks = self.repository.load_tasks()
        if include_completed:
            return tasks
        return [t for t in tasks if not t.completed]

    def get_task(self, task_id: str) -> Task:
        """Get a specific task by ID.

        Raises:
            TaskNotFoundError: If no task has this ID
        """
        for task in self.repository.load_tasks():
            if task.id == task_id:
                return task
        raise TaskNotFoundError(task_id)

    def task_sessions(self, task_id: str) -> list[Session]:
        """Sessions bound to a task, most recent first.

        Raises:
            TaskNotFoundError: If no task has this ID
        """
        self.get_task(task_id)
        return sessions_for_task(self.repository.load_sessions(), task_id)

    def add_task(
        self,
        title: str,
        description: str = "",
        estimated_pomodoros: int = 1,
        now: datetime | None = None,
    ) -> Task:
        """Create a new task.

        Args:
            title: Task title (required, non-empty)
            description: Optional description
            estimated_pomodoros: Expected number of focus sessions (min 1)
            now: Creation time

        Returns:
            Created Task object
        """
        title = title.strip()
        if not title:
            raise ValueError("Task title cannot be empty")

        now = now or datetime.now().astimezone()
        tasks = self.repository.load_tasks()
        task = Task(
            id=new_task_id(now, {t.id for t in tasks}),
            title=title,
            description=description.strip(),
            estimated_pomodoros=estimated_pomodoros,
            created_at=now,
        )
        tasks.append(task)
        self.repository.save_tasks(tasks)
        get_logger().info("Task created: %s", task.id)
        return task

    def toggle_task(self, task_id: str) -> Task:
        """Flip the completed flag of a task."""
        return self._update(task_id, lambda t: t.model_copy(update={"completed": not t.completed}))

    def delete_task(self, task_id: str) -> None:
        """Delete a task. Sessions that referenced it are left untouched."""
        tasks = self.repository.load_tasks()
        remaining = [t for t in tasks if t.id != task_id]
        if len(remaining) == len(tasks):
            raise TaskNotFoundError(task_id)
        self.repository.save_tasks(remaining)
        get_logger().info("Task deleted: %s", task_id)

    def increment_pomodoros(self, task_id: str) -> Task:
        """Count one more completed focus session against a task."""
        return self._update(
            task_id,
            lambda t: t.model_copy(update={"completed_pomodoros": t.completed_pomodoros + 1}),
        )

    def _update(self, task_id: str, change) -> Task:
        tasks = self.repository.load_tasks()
        for index, task in enumerate(tasks):
            if task.id == task_id:
                tasks[index] = change(task)
                self.repository.save_tasks(tasks)
                return tasks[index]
        raise TaskNotFoundError(task_id)
