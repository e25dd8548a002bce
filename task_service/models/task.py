from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, Boolean, DateTime
from ..core.database import Base


TITLE_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 500


def utcnow() -> datetime:
    """Current time as a timezone-aware UTC datetime"""
    return datetime.now(timezone.utc)


class Task(Base):
    """Task model for database"""
    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    title = Column(String(TITLE_MAX_LENGTH), nullable=False, index=True)
    description = Column(String(DESCRIPTION_MAX_LENGTH), nullable=True)
    completed = Column(Boolean, default=False, nullable=False, index=True)

    # Timestamps are assigned by the repository so that a new row gets
    # identical created_at and updated_at values
    created_at = Column(DateTime(timezone=True), nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), nullable=False)

    def touch(self, now: datetime = None):
        """Refresh timestamps for a write, setting created_at only once"""
        now = now or utcnow()
        if self.created_at is None:
            self.created_at = now
        self.updated_at = now

    def __repr__(self):
        return f"<Task(id={self.id}, title='{self.title}', completed={self.completed})>"
