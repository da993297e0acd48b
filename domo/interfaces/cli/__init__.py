"""CLI interface for Domo using Typer.

Usage:
    domo init                       # Create the default life areas
    domo task list --sort due_date  # Tasks grouped by domain
    domo task move 3f2a Learn 0     # Move a task to the top of Learn

The CLI is structured as:
- app: Main Typer application
- commands/: Command groups (task, domain)
- common.py: Shared utilities for CLI commands
- main.py: Entry point that runs the app
"""

import logging
from typing import Optional

import typer

from domo import __version__
from domo.interfaces.cli.commands import domain, task
from domo.interfaces.cli.common import UserOption, get_context, print_success, unwrap

app = typer.Typer(
    name="domo",
    help="Life-area task tracking with manual ordering",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"domo version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Log debug output"),
) -> None:
    """Domo - organize tasks into life areas and keep them in order."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


# =============================================================================
# Register Command Groups
# =============================================================================

app.add_typer(task.app, name="task")
app.add_typer(domain.app, name="domain")


# =============================================================================
# Top-Level Commands
# =============================================================================


@app.command("init")
def init(user: UserOption = None) -> None:
    """Create the default life areas for a user with no domains."""
    ctx = get_context(user)
    domains = unwrap(ctx.domains.seed_default_domains(ctx.user_id, ctx.config.seed_domains))
    print_success(f"{len(domains)} domains ready for {ctx.user_id}")


__all__ = ["app"]
