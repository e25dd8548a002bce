"""Task frontend - client-side task controller for the Task Service API."""

__version__ = "2.0.0"
