"""Task operations: load the store, apply one change, save it back."""

from __future__ import annotations

from dataclasses import dataclass

from task_tracker.errors import TaskNotFoundError
from task_tracker.tasks.model import Clock, Task, TaskStatus, utc_now
from task_tracker.tasks.store import TaskStore


@dataclass
class DeleteResult:
    task_id: int
    removed: bool


class TaskService:
    """Runs the tracker operations against a :class:`TaskStore`.

    Every call reloads the full collection, so the store is the single source
    of truth. Failed lookups raise :class:`TaskNotFoundError` before anything
    is written.
    """

    def __init__(
        self,
        store: TaskStore,
        *,
        clock: Clock = utc_now,
        strict_delete: bool = False,
    ) -> None:
        self.store = store
        self._clock = clock
        self.strict_delete = strict_delete

    def add(self, description: str) -> Task:
        tasks = self.store.load()
        now = self._clock()
        task = Task(
            id=tasks.next_id(),
            description=description,
            status=TaskStatus.TODO,
            created_at=now,
            updated_at=now,
        )
        tasks.append(task)
        self.store.save(tasks)
        return task

    def update(self, task_id: int, description: str) -> Task:
        tasks = self.store.load()
        task = tasks.get_task(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        task.description = description
        task.touch(self._clock())
        self.store.save(tasks)
        return task

    def delete(self, task_id: int) -> DeleteResult:
        """Remove *task_id*.

        A missing id is not an error unless ``strict_delete`` is set; the
        unchanged collection is still written back in that case.
        """
        tasks = self.store.load()
        removed = tasks.remove(task_id)
        if not removed and self.strict_delete:
            raise TaskNotFoundError(task_id)
        self.store.save(tasks)
        return DeleteResult(task_id=task_id, removed=removed)

    def mark(self, task_id: int, status: TaskStatus) -> Task:
        tasks = self.store.load()
        task = tasks.get_task(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        task.status = status
        task.touch(self._clock())
        self.store.save(tasks)
        return task

    def mark_in_progress(self, task_id: int) -> Task:
        return self.mark(task_id, TaskStatus.IN_PROGRESS)

    def mark_done(self, task_id: int) -> Task:
        return self.mark(task_id, TaskStatus.DONE)

    def list_tasks(self, status: TaskStatus | None = None) -> list[Task]:
        return self.store.load().with_status(status)
