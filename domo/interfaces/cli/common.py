"""Shared utilities for Domo CLI commands.

- User resolution and service wiring
- Formatted output helpers (error, success, info)
- Result unwrapping that exits on errors
- Task and domain lookup by short id or name
"""

from typing import Annotated, Any, Optional

import typer

from domo.application import DomainService, MoveCoordinator, TaskService
from domo.config import AppConfig, load_config
from domo.domain.area import Domain
from domo.domain.shared import Err, Result, unwrap_or
from domo.domain.task import Task, TaskStatus
from domo.infrastructure.storage import JsonStore

# Reusable user option for CLI commands
# Usage: def my_command(user: UserOption = None) -> None:
UserOption = Annotated[Optional[str], typer.Option(
    "--user", "-u",
    help="User ID (or set DOMO_USER env var)",
    envvar="DOMO_USER",
)]


class CliContext:
    """Config, user and services for one CLI invocation."""

    def __init__(self, config: AppConfig, user_id: str) -> None:
        self.config = config
        self.user_id = user_id
        store = JsonStore(config.data_dir)
        self.moves = MoveCoordinator(store)
        self.tasks = TaskService(store, self.moves)
        self.domains = DomainService(store, self.moves)


def get_context(user: str | None = None) -> CliContext:
    """Build the CLI context; an explicit ``--user`` wins over config."""
    config = load_config()
    return CliContext(config, user or config.user_id)


def print_error(msg: str) -> None:
    """Print a formatted error message."""
    typer.echo(typer.style(f"Error: {msg}", fg=typer.colors.RED), err=True)


def print_success(msg: str) -> None:
    """Print a formatted success message."""
    typer.echo(typer.style(msg, fg=typer.colors.GREEN))


def print_info(msg: str) -> None:
    """Print a formatted info message."""
    typer.echo(typer.style(msg, fg=typer.colors.BLUE))


def print_separator(char: str = "=", width: int = 60) -> None:
    typer.echo(char * width)


def print_header(title: str, width: int = 60) -> None:
    """Print a formatted header with separators."""
    print_separator("=", width)
    typer.echo(title)
    print_separator("=", width)


def unwrap(result: Result) -> Any:
    """Return the Ok value, or print the error and exit with status 1."""
    if isinstance(result, Err):
        print_error(str(result.error))
        raise typer.Exit(1)
    return result.value


def short_id(value: str) -> str:
    return value[:8]


def resolve_domain(ctx: CliContext, ref: str) -> Domain:
    """Find a domain by id, id prefix or case-insensitive name."""
    domains = unwrap(ctx.domains.list_domains(ctx.user_id))
    for domain in domains:
        if domain.id == ref or domain.name.lower() == ref.lower():
            return domain

    matches = [d for d in domains if d.id.startswith(ref)]
    if len(matches) == 1:
        return matches[0]

    print_error(f"Domain not found: {ref}" if not matches else f"Ambiguous domain id: {ref}")
    raise typer.Exit(1)


def resolve_task(ctx: CliContext, ref: str) -> Task:
    """Find a task by id, or by unique id prefix among listed tasks."""
    exact = unwrap_or(ctx.tasks.get_task(ctx.user_id, ref), None)
    if exact is not None:
        return exact

    tasks = unwrap(ctx.tasks.list_tasks(ctx.user_id, "all"))
    tasks += unwrap(ctx.tasks.list_tasks(ctx.user_id, "archived"))

    matches = [t for t in tasks if t.id.startswith(ref)]
    if len(matches) == 1:
        return matches[0]

    print_error(f"Task not found: {ref}" if not matches else f"Ambiguous task id: {ref}")
    raise typer.Exit(1)


def format_task(task: Task) -> str:
    """One-line task summary for list output."""
    mark = "[x]" if task.status == TaskStatus.COMPLETED else "[ ]"
    parts = [f"{task.domain_sort_order:>3}", mark, short_id(task.id), task.title]

    details = []
    if task.priority is not None:
        details.append(f"p{task.priority}")
    if task.effort_points is not None:
        details.append(f"e{task.effort_points}")
    if task.complexity is not None:
        details.append(f"c{task.complexity}")
    if task.due_date is not None:
        details.append(f"due {task.due_date.isoformat()}")
    if task.scheduled_date is not None:
        details.append(f"on {task.scheduled_date.isoformat()}")
    if task.is_archived:
        details.append("archived")
    if details:
        parts.append(f"({', '.join(details)})")
    return " ".join(parts)
