"""
Application package.

``main`` assembles the FastAPI app; ``services`` holds the roster
logic; ``schemas`` the pydantic models; ``api`` the HTTP routes.
"""

from .main import app, create_app  # noqa: F401
