"""CLI command groups for Domo.

Command groups:
- task: Task lifecycle and ordering (list, add, done, reorder, move, ...)
- domain: Life-area management (list, add, rename, deactivate, reorder)

Each command group is a Typer app registered with the main app using
app.add_typer().
"""

from domo.interfaces.cli.commands import domain, task

__all__ = ["task", "domain"]
