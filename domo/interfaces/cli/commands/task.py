"""Task management CLI commands.

Listing, creating and editing tasks, lifecycle transitions, and manual
reordering within and across domains.
"""

from datetime import datetime
from typing import Optional

import typer

from domo.domain.task import FilterMode, SortMode
from domo.interfaces.cli.common import (
    UserOption,
    format_task,
    get_context,
    print_error,
    print_header,
    print_info,
    print_success,
    resolve_domain,
    resolve_task,
    short_id,
    unwrap,
)

app = typer.Typer(help="Task management commands")

DATE_FORMATS = ["%Y-%m-%d"]


def _as_date(value: Optional[datetime]):
    return value.date() if value is not None else None


@app.command("list")
def list_tasks(
    filter_mode: Optional[FilterMode] = typer.Option(None, "--filter", "-f", help="all, open, completed or archived"),
    sort_mode: Optional[SortMode] = typer.Option(None, "--sort", "-s", help="Sort mode inside each domain"),
    user: UserOption = None,
) -> None:
    """Show tasks grouped by domain."""
    ctx = get_context(user)
    filter_mode = filter_mode or ctx.config.default_filter
    sort_mode = sort_mode or ctx.config.default_sort

    tasks = unwrap(ctx.tasks.list_tasks(ctx.user_id, filter_mode, sort_mode))
    domains = unwrap(ctx.domains.list_domains(ctx.user_id, include_inactive=False))

    print_header(f"Tasks ({filter_mode.value}, sorted by {sort_mode.value})")
    if not tasks:
        print_info("No tasks.")
        return

    names = {d.id: d.name for d in domains}
    current = None
    for task in tasks:
        if task.domain_id != current:
            current = task.domain_id
            typer.echo(f"\n## {names.get(current, current)}")
        typer.echo(format_task(task))


@app.command("add")
def add(
    title: str = typer.Argument(..., help="Task title"),
    domain: str = typer.Option(..., "--domain", "-d", help="Domain name or id"),
    priority: Optional[int] = typer.Option(None, "--priority", "-p", min=1, max=3),
    effort: Optional[int] = typer.Option(None, "--effort", "-e", min=1, max=3),
    complexity: Optional[int] = typer.Option(None, "--complexity", "-c", min=1, max=5),
    due: Optional[datetime] = typer.Option(None, "--due", formats=DATE_FORMATS),
    scheduled: Optional[datetime] = typer.Option(None, "--scheduled", formats=DATE_FORMATS),
    user: UserOption = None,
) -> None:
    """Create a task at the end of a domain."""
    ctx = get_context(user)
    target = resolve_domain(ctx, domain)
    task, _ = unwrap(
        ctx.tasks.create_task(
            ctx.user_id,
            target.id,
            title,
            priority=priority,
            effort_points=effort,
            complexity=complexity,
            due_date=_as_date(due),
            scheduled_date=_as_date(scheduled),
        )
    )
    print_success(f"Created {short_id(task.id)} in {target.name} at position {task.domain_sort_order}")


@app.command("edit")
def edit(
    task_ref: str = typer.Argument(..., help="Task id or id prefix"),
    title: Optional[str] = typer.Option(None, "--title", "-t"),
    domain: Optional[str] = typer.Option(None, "--domain", "-d", help="Move to the end of this domain"),
    priority: Optional[int] = typer.Option(None, "--priority", "-p", min=1, max=3),
    effort: Optional[int] = typer.Option(None, "--effort", "-e", min=1, max=3),
    complexity: Optional[int] = typer.Option(None, "--complexity", "-c", min=1, max=5),
    due: Optional[datetime] = typer.Option(None, "--due", formats=DATE_FORMATS),
    scheduled: Optional[datetime] = typer.Option(None, "--scheduled", formats=DATE_FORMATS),
    clear_due: bool = typer.Option(False, "--clear-due", help="Remove the due date"),
    clear_scheduled: bool = typer.Option(False, "--clear-scheduled", help="Remove the scheduled date"),
    user: UserOption = None,
) -> None:
    """Edit task attributes."""
    ctx = get_context(user)
    task = resolve_task(ctx, task_ref)

    changes: dict = {}
    if title is not None:
        changes["title"] = title
    if domain is not None:
        changes["domain_id"] = resolve_domain(ctx, domain).id
    if priority is not None:
        changes["priority"] = priority
    if effort is not None:
        changes["effort_points"] = effort
    if complexity is not None:
        changes["complexity"] = complexity
    if due is not None or clear_due:
        changes["due_date"] = _as_date(due)
    if scheduled is not None or clear_scheduled:
        changes["scheduled_date"] = _as_date(scheduled)

    if not changes:
        print_error("Nothing to change")
        raise typer.Exit(1)

    updated, _ = unwrap(ctx.tasks.update_task(ctx.user_id, task.id, changes))
    print_success(f"Updated {short_id(updated.id)}: {updated.title}")


@app.command("done")
def done(task_ref: str = typer.Argument(...), user: UserOption = None) -> None:
    """Mark a task completed."""
    ctx = get_context(user)
    task, _ = unwrap(ctx.tasks.complete_task(ctx.user_id, resolve_task(ctx, task_ref).id))
    print_success(f"Completed: {task.title}")


@app.command("reopen")
def reopen(task_ref: str = typer.Argument(...), user: UserOption = None) -> None:
    """Reopen a completed task (its old position is kept)."""
    ctx = get_context(user)
    task, _ = unwrap(ctx.tasks.reopen_task(ctx.user_id, resolve_task(ctx, task_ref).id))
    print_success(f"Reopened: {task.title} (position {task.domain_sort_order})")


@app.command("archive")
def archive(task_ref: str = typer.Argument(...), user: UserOption = None) -> None:
    """Hide a task from active views."""
    ctx = get_context(user)
    task, _ = unwrap(ctx.tasks.archive_task(ctx.user_id, resolve_task(ctx, task_ref).id))
    print_success(f"Archived: {task.title}")


@app.command("restore")
def restore(task_ref: str = typer.Argument(...), user: UserOption = None) -> None:
    """Restore an archived task to the end of its domain."""
    ctx = get_context(user)
    task, _ = unwrap(ctx.tasks.restore_task(ctx.user_id, resolve_task(ctx, task_ref).id))
    print_success(f"Restored: {task.title} (position {task.domain_sort_order})")


@app.command("reorder")
def reorder(
    task_ref: str = typer.Argument(..., help="Task id or id prefix"),
    index: int = typer.Argument(..., help="Zero-based target position"),
    user: UserOption = None,
) -> None:
    """Move a task to another position inside its domain."""
    ctx = get_context(user)
    task = resolve_task(ctx, task_ref)
    updated, event = unwrap(ctx.moves.reorder_within_domain(ctx.user_id, task.domain_id, task.id, index))
    if event is None:
        print_info(f"No change for {short_id(task.id)}")
        return
    print_success(f"{updated.title}: {event.from_index} -> {event.to_index}")


@app.command("move")
def move(
    task_ref: str = typer.Argument(..., help="Task id or id prefix"),
    domain: str = typer.Argument(..., help="Target domain name or id"),
    index: int = typer.Argument(0, help="Zero-based target position"),
    user: UserOption = None,
) -> None:
    """Move an open task to a domain at a position."""
    ctx = get_context(user)
    task = resolve_task(ctx, task_ref)
    target = resolve_domain(ctx, domain)
    updated, _ = unwrap(ctx.moves.move_across_domains(ctx.user_id, task.id, target.id, index))
    print_success(f"{updated.title} -> {target.name} at position {updated.domain_sort_order}")
