"""Task Service - task management API."""

__version__ = "2.0.0"
__author__ = "Task Manager Team"
