"""Error types raised by the task store and command handlers."""

from __future__ import annotations

from pathlib import Path


class TaskTrackerError(Exception):
    """Base class for every error task-tracker reports to the user."""

    exit_code = 1


class TaskNotFoundError(TaskTrackerError):
    def __init__(self, task_id: int) -> None:
        self.task_id = task_id
        super().__init__(f"Task with ID {task_id} not found.")


class InvalidTaskDataError(TaskTrackerError, ValueError):
    """A serialized task or collection does not match the file format."""


class StoreReadError(TaskTrackerError):
    """The backing file exists but could not be read or parsed."""

    def __init__(self, path: Path | str, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Cannot read tasks from {self.path}: {reason}")
