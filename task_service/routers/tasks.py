from typing import List
from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from ..core.database import get_db
from ..repositories.task_repository import TaskRepository
from ..schemas.task import (
    TaskCreate, TaskUpdate, TaskResponse, TaskStatistics, ErrorResponse
)
from ..services.task_service import TaskService

router = APIRouter()

NOT_FOUND = {status.HTTP_404_NOT_FOUND: {"model": ErrorResponse, "description": "Task not found"}}
BAD_REQUEST = {status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse, "description": "Invalid task data"}}


def get_task_service(db: Session = Depends(get_db)) -> TaskService:
    """Task service bound to the request's database session"""
    return TaskService(TaskRepository(db))


@router.get("", response_model=List[TaskResponse])
async def get_tasks(service: TaskService = Depends(get_task_service)):
    """Get all tasks ordered by creation date (newest first)"""
    return service.list_tasks()


# Fixed paths are registered before /{task_id} so they are not captured by it
@router.get("/completed", response_model=List[TaskResponse])
async def get_completed_tasks(service: TaskService = Depends(get_task_service)):
    """Get completed tasks"""
    return service.list_completed()


@router.get("/incomplete", response_model=List[TaskResponse])
async def get_incomplete_tasks(service: TaskService = Depends(get_task_service)):
    """Get incomplete tasks"""
    return service.list_incomplete()


@router.get("/search", response_model=List[TaskResponse], responses=BAD_REQUEST)
async def search_tasks(
    title: str = Query(..., description="Title text to search for (case insensitive)"),
    service: TaskService = Depends(get_task_service)
):
    """Search tasks by title"""
    return service.search_by_title(title)


@router.get("/statistics", response_model=TaskStatistics)
async def get_task_statistics(service: TaskService = Depends(get_task_service)):
    """Get task statistics (total, completed, incomplete)"""
    stats = service.statistics()
    return TaskStatistics(
        total_tasks=stats.total,
        completed_tasks=stats.completed,
        incomplete_tasks=stats.incomplete
    )


@router.get("/{task_id}", response_model=TaskResponse, responses=NOT_FOUND)
async def get_task(task_id: int, service: TaskService = Depends(get_task_service)):
    """Get a specific task by ID"""
    return service.get_task(task_id)


@router.post(
    "",
    response_model=TaskResponse,
    status_code=status.HTTP_201_CREATED,
    responses=BAD_REQUEST
)
async def create_task(
    task_data: TaskCreate,
    service: TaskService = Depends(get_task_service)
):
    """Create a new task with title and description"""
    return service.create_task(task_data.title, task_data.description)


@router.put("/{task_id}", response_model=TaskResponse, responses={**NOT_FOUND, **BAD_REQUEST})
async def update_task(
    task_id: int,
    task_update: TaskUpdate,
    service: TaskService = Depends(get_task_service)
):
    """Update a task; only provided fields change"""
    return service.update_task(
        task_id,
        title=task_update.title,
        description=task_update.description,
        completed=task_update.completed
    )


@router.put("/{task_id}/complete", response_model=TaskResponse, responses=NOT_FOUND)
async def mark_task_completed(task_id: int, service: TaskService = Depends(get_task_service)):
    """Mark a task as completed"""
    return service.mark_completed(task_id)


@router.put("/{task_id}/incomplete", response_model=TaskResponse, responses=NOT_FOUND)
async def mark_task_incomplete(task_id: int, service: TaskService = Depends(get_task_service)):
    """Mark a task as incomplete"""
    return service.mark_incomplete(task_id)


@router.delete(
    "/{task_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=NOT_FOUND
)
async def delete_task(task_id: int, service: TaskService = Depends(get_task_service)):
    """Delete a task"""
    service.delete_task(task_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
