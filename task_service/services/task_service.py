"""
Business logic for task management.
"""
import logging
from dataclasses import dataclass
from typing import List, Optional

from ..core.exceptions import TaskNotFoundError
from ..models.task import Task
from ..repositories.task_repository import TaskRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TaskStatistics:
    """Aggregate task counts"""
    total: int
    completed: int
    incomplete: int


class TaskService:
    """Task operations on top of a TaskRepository"""

    def __init__(self, repository: TaskRepository):
        self.repository = repository

    def _require(self, task_id: int) -> Task:
        task = self.repository.find_by_id(task_id)
        if task is None:
            logger.info(f"Task id={task_id} not found")
            raise TaskNotFoundError(task_id)
        return task

    def list_tasks(self) -> List[Task]:
        """All tasks, newest first"""
        return self.repository.list_all()

    def list_completed(self) -> List[Task]:
        return self.repository.list_by_completed(True)

    def list_incomplete(self) -> List[Task]:
        return self.repository.list_by_completed(False)

    def get_task(self, task_id: int) -> Task:
        return self._require(task_id)

    def create_task(self, title: str, description: Optional[str] = None) -> Task:
        """
        Create a new task

        Title and description arrive trimmed from the API layer.
        """
        task = Task(title=title, description=description, completed=False)
        return self.repository.save(task)

    def update_task(
        self,
        task_id: int,
        title: Optional[str] = None,
        description: Optional[str] = None,
        completed: Optional[bool] = None
    ) -> Task:
        """
        Apply a partial update

        Only provided fields change. A blank title leaves the existing title.
        """
        task = self._require(task_id)

        if title is not None and title.strip():
            task.title = title.strip()
        if description is not None:
            task.description = description.strip()
        if completed is not None:
            task.completed = completed

        return self.repository.save(task)

    def _set_completed(self, task_id: int, completed: bool) -> Task:
        task = self._require(task_id)
        task.completed = completed
        return self.repository.save(task)

    def mark_completed(self, task_id: int) -> Task:
        return self._set_completed(task_id, True)

    def mark_incomplete(self, task_id: int) -> Task:
        return self._set_completed(task_id, False)

    def delete_task(self, task_id: int) -> None:
        if not self.repository.exists_by_id(task_id):
            raise TaskNotFoundError(task_id)
        self.repository.delete_by_id(task_id)

    def search_by_title(self, text: str) -> List[Task]:
        return self.repository.search_by_title_contains(text)

    def statistics(self) -> TaskStatistics:
        # Three independent counts; no snapshot across them
        return TaskStatistics(
            total=self.repository.count_all(),
            completed=self.repository.count_by_completed(True),
            incomplete=self.repository.count_by_completed(False),
        )
