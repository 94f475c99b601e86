"""Whole-collection persistence for tasks.

A store only knows how to load every task and save every task. There is no
partial read or write, no locking and no atomic rename: concurrent writers
race and the last save wins.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

from rich.markup import escape

from task_tracker import log
from task_tracker.errors import StoreReadError
from task_tracker.io_utils import dump_json, parse_json, read_text, write_text
from task_tracker.tasks.model import TaskList

READ_ERROR_POLICIES = ("recover", "fail")


class TaskStore(ABC):
    """Abstract store.  Subclasses implement raw text access."""

    name: str = "base"

    def __init__(self, *, on_read_error: str = "recover") -> None:
        if on_read_error not in READ_ERROR_POLICIES:
            raise ValueError(f"Unknown read error policy: {on_read_error}")
        self.on_read_error = on_read_error

    @abstractmethod
    def read_raw(self) -> str | None:
        """Return the stored text, or ``None`` when nothing was ever saved."""
        ...

    @abstractmethod
    def write_raw(self, text: str) -> None:
        """Replace the stored text entirely."""
        ...

    def describe(self) -> str:
        return self.name

    def load(self) -> TaskList:
        """Load the full collection.

        A missing backing file is an empty collection. Unreadable or invalid
        data is also an empty collection under the ``recover`` policy, and
        raises :class:`StoreReadError` under ``fail``.
        """
        # ValueError also covers JSONDecodeError, UnicodeDecodeError, InvalidTaskDataError
        # and the int digit limit; deeply nested arrays raise RecursionError.
        try:
            text = self.read_raw()
            if text is None:
                log.debug(f"No task data at {escape(self.describe())}; starting empty")
                return TaskList()
            tasks = TaskList.from_list(parse_json(text))
        except (OSError, ValueError, RecursionError) as exc:
            if self.on_read_error == "fail":
                raise StoreReadError(self.describe(), str(exc)) from exc
            log.debug(f"Ignoring unreadable task data at {escape(self.describe())}: {escape(str(exc))}")
            return TaskList()

        log.debug(f"Loaded {len(tasks)} task(s) from {escape(self.describe())}")
        return tasks

    def save(self, tasks: TaskList) -> None:
        """Serialize and overwrite the full collection. Write errors propagate."""
        self.write_raw(dump_json(tasks.to_list()))
        log.debug(f"Saved {len(tasks)} task(s) to {escape(self.describe())}")


class JsonFileStore(TaskStore):
    """Tasks kept as a pretty-printed JSON array in one file."""

    name = "json-file"

    def __init__(self, path: Path | str, *, on_read_error: str = "recover") -> None:
        super().__init__(on_read_error=on_read_error)
        self.path = Path(path)

    def describe(self) -> str:
        return str(self.path)

    def read_raw(self) -> str | None:
        if not self.path.exists():
            return None
        return read_text(self.path)

    def write_raw(self, text: str) -> None:
        write_text(self.path, text)


class MemoryStore(TaskStore):
    """In-memory store holding the serialized text, for tests and embedding."""

    name = "memory"

    def __init__(self, text: str | None = None, *, on_read_error: str = "recover") -> None:
        super().__init__(on_read_error=on_read_error)
        self.text = text
        self.saves = 0

    def read_raw(self) -> str | None:
        return self.text

    def write_raw(self, text: str) -> None:
        self.text = text
        self.saves += 1
