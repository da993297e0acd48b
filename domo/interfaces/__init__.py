"""Interfaces layer for Domo.

Adapters for external interactions:
- CLI: Command-line interface using Typer
- API: REST API using FastAPI

The interfaces layer accepts user input, calls application services
and formats their Results for the user.
"""

from domo.interfaces.cli import app

__all__ = ["app"]
