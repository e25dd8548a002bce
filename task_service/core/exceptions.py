"""
Domain exceptions for Task Service.
"""


class TaskServiceError(Exception):
    """Base class for task service errors."""


class TaskNotFoundError(TaskServiceError):
    """Raised when a referenced task id does not exist."""

    def __init__(self, task_id: int):
        self.task_id = task_id
        super().__init__(f"Task not found with id: {task_id}")
