"""
Pydantic schemas for Task Service.
"""
from datetime import datetime, timezone
from typing import Optional
from pydantic import BaseModel, Field, field_serializer
from pydantic.alias_generators import to_camel

from ..models.task import TITLE_MAX_LENGTH, DESCRIPTION_MAX_LENGTH


def convert_datetime_to_utc(dt) -> datetime:
    """Convert datetime to UTC timezone-aware datetime"""
    if dt is None:
        return None

    if isinstance(dt, datetime):
        if dt.tzinfo is None:
            # Naive datetime, assume UTC
            return dt.replace(tzinfo=timezone.utc)
        else:
            # Already timezone-aware, convert to UTC
            return dt.astimezone(timezone.utc)

    return dt


class CamelModel(BaseModel):
    """Base schema exchanging camelCase JSON while accepting snake_case too"""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        str_strip_whitespace = True


class TaskCreate(CamelModel):
    """Schema for creating a task"""
    title: str = Field(..., min_length=1, max_length=TITLE_MAX_LENGTH, description="Task title")
    description: Optional[str] = Field(None, max_length=DESCRIPTION_MAX_LENGTH, description="Task description")


class TaskUpdate(CamelModel):
    """Schema for updating a task; blank title keeps the existing one"""
    title: Optional[str] = Field(None, max_length=TITLE_MAX_LENGTH, description="Task title")
    description: Optional[str] = Field(None, max_length=DESCRIPTION_MAX_LENGTH, description="Task description")
    completed: Optional[bool] = Field(None, description="Completion flag")


class TaskResponse(CamelModel):
    """Schema for task response"""
    id: int = Field(..., description="Task ID")
    title: str = Field(..., description="Task title")
    description: Optional[str] = Field(None, description="Task description")
    completed: bool = Field(..., description="Completion flag")
    created_at: datetime = Field(..., description="Task creation timestamp")
    updated_at: datetime = Field(..., description="Task update timestamp")

    class Config:
        from_attributes = True

    @field_serializer("created_at", "updated_at")
    def serialize_timestamp(self, value: datetime) -> str:
        return convert_datetime_to_utc(value).isoformat()


class TaskStatistics(CamelModel):
    """Schema for task summary statistics"""
    total_tasks: int = Field(..., description="Total number of tasks")
    completed_tasks: int = Field(..., description="Number of completed tasks")
    incomplete_tasks: int = Field(..., description="Number of incomplete tasks")


class ErrorResponse(BaseModel):
    """Schema for error bodies"""
    message: str = Field(..., description="Human readable error message")
    errors: Optional[dict] = Field(None, description="Field validation messages")
