"""Business logic for Task Service."""
