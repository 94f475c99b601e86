"""task-cli: track tasks in a JSON file from the command line.

Installed as ``task-cli`` console_script; also runnable as ``python -m task_tracker``.
"""

from __future__ import annotations

import sys
from collections.abc import Callable
from typing import TypeVar

import click
from rich.markup import escape

from task_tracker import __version__, log
from task_tracker.commands import TaskService
from task_tracker.config import Config
from task_tracker.errors import TaskTrackerError
from task_tracker.tasks.model import STATUS_VALUES, Task, TaskStatus
from task_tracker.tasks.store import JsonFileStore

T = TypeVar("T")

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])

# Description words may start with "-"; only -h/--help is an option there.
DESCRIPTION_SETTINGS = dict(CONTEXT_SETTINGS, ignore_unknown_options=True)


def _join_description(words: tuple[str, ...]) -> str:
    description = " ".join(words)
    if not description.strip():
        raise click.BadParameter("Task description cannot be empty.", param_hint="DESCRIPTION")
    return description


def _build_service(cfg: Config) -> TaskService:
    store = JsonFileStore(cfg.tasks_path, on_read_error=cfg.read_error_policy)
    return TaskService(store, strict_delete=cfg.strict_delete)


def _run(ctx: click.Context, action: Callable[[TaskService], T]) -> T:
    """Run *action* against the configured store, turning failures into exit codes."""
    cfg: Config = ctx.obj
    service = _build_service(cfg)
    try:
        return action(service)
    except TaskTrackerError as exc:
        log.error(escape(str(exc)))
        sys.exit(exc.exit_code)
    except OSError as exc:
        log.error(escape(f"Failed to write {cfg.tasks_path}: {exc}"))
        sys.exit(1)


def _print_task(task: Task) -> None:
    log.console.print(escape(f"[{task.id}] {task.description} ({task.status.value})"))
    log.console.print(f"  Created: {escape(task.created_at)}")
    log.console.print(f"  Updated: {escape(task.updated_at)}")
    log.console.print()


@click.group(invoke_without_command=True, context_settings=CONTEXT_SETTINGS)
@click.option(
    "-f",
    "--file",
    "tasks_file",
    default="",
    metavar="PATH",
    help="Task file (default: $TASK_TRACKER_FILE or ./tasks.json)",
)
@click.option("--strict-load", is_flag=True, help="Fail on an unreadable task file instead of starting empty")
@click.option("--strict-delete", is_flag=True, help="Treat deleting a missing task as an error")
@click.option("-v", "--verbose", is_flag=True, help="Show debug output")
@click.version_option(__version__, prog_name="task-cli")
@click.pass_context
def main(
    ctx: click.Context,
    tasks_file: str,
    strict_load: bool,
    strict_delete: bool,
    verbose: bool,
) -> None:
    """Track tasks stored in a single JSON file.

    \b
    EXAMPLES:
      task-cli add "Buy groceries"
      task-cli update 1 "Buy groceries and cook dinner"
      task-cli mark-in-progress 1
      task-cli mark-done 1
      task-cli list done
      task-cli delete 1
    """
    cfg = Config(
        tasks_file=tasks_file,
        strict_load=strict_load,
        strict_delete=strict_delete,
        verbose=verbose,
    )
    log.set_verbose(cfg.verbose)
    ctx.obj = cfg
    log.debug(f"Task file: {escape(str(cfg.tasks_path))}")

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_usage())
        ctx.exit(0)


# ── Mutating commands ───────────────────────────────────────────────


@main.command(context_settings=DESCRIPTION_SETTINGS)
@click.argument("description", nargs=-1, required=True)
@click.pass_context
def add(ctx: click.Context, description: tuple[str, ...]) -> None:
    """Add a task. Words are joined with spaces."""
    text = _join_description(description)
    task = _run(ctx, lambda svc: svc.add(text))
    log.success(f"Task added successfully (ID: {task.id})")


@main.command(context_settings=DESCRIPTION_SETTINGS)
@click.argument("task_id", metavar="ID", type=int)
@click.argument("description", nargs=-1, required=True)
@click.pass_context
def update(ctx: click.Context, task_id: int, description: tuple[str, ...]) -> None:
    """Replace the description of task ID."""
    text = _join_description(description)
    _run(ctx, lambda svc: svc.update(task_id, text))
    log.success(f"Task {task_id} updated successfully.")


@main.command(context_settings=CONTEXT_SETTINGS)
@click.argument("task_id", metavar="ID", type=int)
@click.pass_context
def delete(ctx: click.Context, task_id: int) -> None:
    """Delete task ID."""
    result = _run(ctx, lambda svc: svc.delete(task_id))
    if not result.removed:
        log.debug(f"No task with ID {task_id}; task file left unchanged")
    log.success(f"Task {task_id} deleted successfully.")


def _mark(ctx: click.Context, task_id: int, status: TaskStatus) -> None:
    _run(ctx, lambda svc: svc.mark(task_id, status))
    log.success(f"Task {task_id} marked as {status.value}.")


@main.command("mark-in-progress", context_settings=CONTEXT_SETTINGS)
@click.argument("task_id", metavar="ID", type=int)
@click.pass_context
def mark_in_progress(ctx: click.Context, task_id: int) -> None:
    """Set task ID to in-progress."""
    _mark(ctx, task_id, TaskStatus.IN_PROGRESS)


@main.command("mark-done", context_settings=CONTEXT_SETTINGS)
@click.argument("task_id", metavar="ID", type=int)
@click.pass_context
def mark_done(ctx: click.Context, task_id: int) -> None:
    """Set task ID to done."""
    _mark(ctx, task_id, TaskStatus.DONE)


# ── Listing ─────────────────────────────────────────────────────────


@main.command("list", context_settings=CONTEXT_SETTINGS)
@click.argument("status", required=False, type=click.Choice(STATUS_VALUES))
@click.pass_context
def list_cmd(ctx: click.Context, status: str | None) -> None:
    """List tasks, optionally only those with STATUS."""
    wanted = TaskStatus(status) if status else None
    tasks = _run(ctx, lambda svc: svc.list_tasks(wanted))

    if not tasks:
        log.info("No tasks found.")
        return

    for task in tasks:
        _print_task(task)
