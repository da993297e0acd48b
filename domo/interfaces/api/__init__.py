"""API interface for Domo.

Exports the FastAPI router and app factory.
"""

from domo.interfaces.api.routes import create_app, router

__all__ = ["router", "create_app"]
