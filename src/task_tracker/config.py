"""Configuration defaults, env vars, and runtime options for task-tracker."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


DEFAULT_TASKS_FILE = "tasks.json"

ENV_TASKS_FILE = "TASK_TRACKER_FILE"
ENV_STRICT_LOAD = "TASK_TRACKER_STRICT_LOAD"
ENV_STRICT_DELETE = "TASK_TRACKER_STRICT_DELETE"

_TRUTHY = {"1", "true", "yes", "on"}


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in _TRUTHY


@dataclass
class Config:
    """Runtime configuration. CLI flags win over environment variables."""

    tasks_file: str = ""

    # Policies
    strict_load: bool = False
    strict_delete: bool = False

    # Misc
    verbose: bool = False

    def __post_init__(self) -> None:
        if not self.tasks_file:
            self.tasks_file = os.environ.get(ENV_TASKS_FILE) or DEFAULT_TASKS_FILE
        if not self.strict_load:
            self.strict_load = _env_flag(ENV_STRICT_LOAD)
        if not self.strict_delete:
            self.strict_delete = _env_flag(ENV_STRICT_DELETE)

    @property
    def tasks_path(self) -> Path:
        """Backing file path; relative paths resolve against the cwd."""
        return Path(self.tasks_file).expanduser()

    @property
    def read_error_policy(self) -> str:
        return "fail" if self.strict_load else "recover"
