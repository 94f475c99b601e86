"""Shared fixtures for task-tracker tests.

File handling in tests:
- Use tmp_path for every task file so tests are isolated and cleaned up.
- Use task_tracker.io_utils read_text/write_text for consistent UTF-8 I/O.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from task_tracker import log
from task_tracker.config import ENV_STRICT_DELETE, ENV_STRICT_LOAD, ENV_TASKS_FILE
from task_tracker.io_utils import dump_json, write_text
from task_tracker.tasks.model import Task, TaskList, TaskStatus


def pytest_addoption(parser: pytest.Parser) -> None:
    """Register opt-in switch for subprocess end-to-end tests."""
    parser.addoption(
        "--run-e2e",
        action="store_true",
        default=False,
        help="Run end-to-end tests marked with 'e2e'.",
    )


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Skip e2e tests unless explicitly enabled."""
    if config.getoption("--run-e2e"):
        return

    skip_e2e = pytest.mark.skip(
        reason="E2E tests are skipped by default. Use --run-e2e to include them.",
    )
    for item in items:
        if "e2e" in item.keywords:
            item.add_marker(skip_e2e)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Keep the developer's own task-tracker settings out of the tests."""
    for name in (ENV_TASKS_FILE, ENV_STRICT_LOAD, ENV_STRICT_DELETE):
        monkeypatch.delenv(name, raising=False)
    yield
    log.set_verbose(False)


def _make_task(
    id: int,
    description: str = "",
    status: TaskStatus = TaskStatus.TODO,
    created_at: str = "2024-01-01T00:00:00.000Z",
    updated_at: str = "",
) -> Task:
    return Task(
        id=id,
        description=description or f"Task {id}",
        status=status,
        created_at=created_at,
        updated_at=updated_at or created_at,
    )


@pytest.fixture
def make_task():
    """Factory fixture that creates Task instances."""
    return _make_task


@pytest.fixture
def tasks_file(tmp_path: Path) -> Path:
    """Path to a task file that does not exist yet."""
    return tmp_path / "tasks.json"


@pytest.fixture
def write_tasks():
    """Write Task instances to a path in the on-disk format."""

    def _write(path: Path, tasks: list[Task]) -> None:
        write_text(path, dump_json(TaskList.of(tasks).to_list()))

    return _write


class TickingClock:
    """Deterministic clock: every call is one second later than the last."""

    def __init__(self) -> None:
        self.calls = 0

    def __call__(self) -> str:
        self.calls += 1
        minutes, seconds = divmod(self.calls, 60)
        return f"2024-01-01T00:{minutes:02d}:{seconds:02d}.000Z"


@pytest.fixture
def clock() -> TickingClock:
    return TickingClock()


@pytest.fixture
def cli_runner():
    """Click CliRunner for invoking the CLI in-process."""
    from click.testing import CliRunner
    return CliRunner()
