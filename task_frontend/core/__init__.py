"""Core modules for the task frontend."""
