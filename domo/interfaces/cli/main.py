"""Entry point for the Domo CLI.

Usage:
    python -m domo.interfaces.cli.main

Or via installed entry point:
    domo <command>
"""

from domo.interfaces.cli import app


def main() -> None:
    """Run the Domo CLI application."""
    app()


if __name__ == "__main__":
    main()
