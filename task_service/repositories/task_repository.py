"""
Data access for Task records.
"""
import logging
from typing import List, Optional
from sqlalchemy import desc
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..models.task import Task

logger = logging.getLogger(__name__)


def escape_like(value: str, escape: str = "\\") -> str:
    """Escape LIKE wildcards so the value matches literally"""
    return (
        value.replace(escape, escape + escape)
        .replace("%", escape + "%")
        .replace("_", escape + "_")
    )


class TaskRepository:
    """Repository over the tasks table"""

    def __init__(self, db: Session):
        self.db = db

    def _ordered(self, query):
        # Newest first; id breaks ties between rows created in the same instant
        return query.order_by(desc(Task.created_at), desc(Task.id))

    def list_all(self) -> List[Task]:
        return self._ordered(self.db.query(Task)).all()

    def list_by_completed(self, completed: bool) -> List[Task]:
        return self._ordered(
            self.db.query(Task).filter(Task.completed == completed)
        ).all()

    def find_by_id(self, task_id: int) -> Optional[Task]:
        return self.db.query(Task).filter(Task.id == task_id).first()

    def exists_by_id(self, task_id: int) -> bool:
        return self.db.query(Task.id).filter(Task.id == task_id).first() is not None

    def save(self, task: Task) -> Task:
        """
        Insert a new task or update an existing one

        Args:
            task: Task instance, transient when id is None

        Returns:
            Task: Persisted task with refreshed updated_at
        """
        is_new = task.id is None
        task.touch()
        try:
            if is_new:
                self.db.add(task)
            self.db.commit()
            self.db.refresh(task)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Error saving task: {e}")
            raise

        logger.info(f"{'Created' if is_new else 'Updated'} task id={task.id}")
        return task

    def delete_by_id(self, task_id: int) -> None:
        task = self.find_by_id(task_id)
        if task is None:
            return
        try:
            self.db.delete(task)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Error deleting task id={task_id}: {e}")
            raise
        logger.info(f"Deleted task id={task_id}")

    def search_by_title_contains(self, text: str) -> List[Task]:
        """Case-insensitive substring match on title"""
        pattern = f"%{escape_like(text)}%"
        return self._ordered(
            self.db.query(Task).filter(Task.title.ilike(pattern, escape="\\"))
        ).all()

    def count_all(self) -> int:
        return self.db.query(Task).count()

    def count_by_completed(self, completed: bool) -> int:
        return self.db.query(Task).filter(Task.completed == completed).count()
