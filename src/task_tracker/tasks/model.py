"""Task and TaskList data models shared by the store and command handlers."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Iterable, Iterator

from task_tracker.errors import InvalidTaskDataError


class TaskStatus(str, Enum):
    TODO = "todo"
    IN_PROGRESS = "in-progress"
    DONE = "done"

    @classmethod
    def parse(cls, raw: str) -> TaskStatus:
        try:
            return cls(raw)
        except ValueError:
            raise InvalidTaskDataError(f"Unknown task status: {raw!r}") from None


STATUS_VALUES: tuple[str, ...] = tuple(s.value for s in TaskStatus)

# Key order of a serialized task.
FIELD_ORDER: tuple[str, ...] = ("id", "description", "status", "createdAt", "updatedAt")

Clock = Callable[[], str]


def utc_now() -> str:
    """Current UTC time as ISO-8601 with millisecond precision, e.g. ``2024-01-02T03:04:05.678Z``."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass
class Task:
    id: int
    description: str
    status: TaskStatus = TaskStatus.TODO
    created_at: str = ""
    updated_at: str = ""

    def touch(self, now: str) -> None:
        self.updated_at = now

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "description": self.description,
            "status": self.status.value,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }

    @classmethod
    def from_dict(cls, raw: Any) -> Task:
        """Build a Task from one JSON object, rejecting anything malformed."""
        if not isinstance(raw, dict):
            raise InvalidTaskDataError(f"Task entry must be an object, got {type(raw).__name__}")
        missing = [k for k in FIELD_ORDER if k not in raw]
        if missing:
            raise InvalidTaskDataError(f"Task entry is missing field(s): {', '.join(missing)}")

        task_id = raw["id"]
        # bool is an int subclass; reject it explicitly.
        if not isinstance(task_id, int) or isinstance(task_id, bool) or task_id < 1:
            raise InvalidTaskDataError(f"Task id must be a positive integer, got {task_id!r}")
        for key in ("description", "status", "createdAt", "updatedAt"):
            if not isinstance(raw[key], str):
                raise InvalidTaskDataError(f"Task {task_id}: {key} must be a string")

        return cls(
            id=task_id,
            description=raw["description"],
            status=TaskStatus.parse(raw["status"]),
            created_at=raw["createdAt"],
            updated_at=raw["updatedAt"],
        )


@dataclass
class TaskList:
    """Ordered task collection loaded for one invocation.

    Insertion order is the only structure; lookups are linear scans.
    """

    tasks: list[Task] = field(default_factory=list)

    def __post_init__(self) -> None:
        seen: set[int] = set()
        for t in self.tasks:
            if t.id in seen:
                raise InvalidTaskDataError(f"Duplicate task id: {t.id}")
            seen.add(t.id)

    def __iter__(self) -> Iterator[Task]:
        return iter(self.tasks)

    def __len__(self) -> int:
        return len(self.tasks)

    def next_id(self) -> int:
        """``1`` when empty, else highest id + 1.

        Deleting the highest-id task lets its id be handed out again.
        """
        if not self.tasks:
            return 1
        return max(t.id for t in self.tasks) + 1

    def get_task(self, task_id: int) -> Task | None:
        for t in self.tasks:
            if t.id == task_id:
                return t
        return None

    def append(self, task: Task) -> None:
        if self.get_task(task.id) is not None:
            raise InvalidTaskDataError(f"Duplicate task id: {task.id}")
        self.tasks.append(task)

    def remove(self, task_id: int) -> bool:
        """Drop the task with *task_id*. Returns ``False`` if nothing matched."""
        kept = [t for t in self.tasks if t.id != task_id]
        removed = len(kept) != len(self.tasks)
        self.tasks = kept
        return removed

    def with_status(self, status: TaskStatus | None) -> list[Task]:
        if status is None:
            return list(self.tasks)
        return [t for t in self.tasks if t.status == status]

    def to_list(self) -> list[dict[str, Any]]:
        return [t.to_dict() for t in self.tasks]

    @classmethod
    def from_list(cls, raw: Any) -> TaskList:
        if not isinstance(raw, list):
            raise InvalidTaskDataError(f"Task file must hold a JSON array, got {type(raw).__name__}")
        return cls(tasks=[Task.from_dict(item) for item in raw])

    @classmethod
    def of(cls, tasks: Iterable[Task]) -> TaskList:
        return cls(tasks=list(tasks))
