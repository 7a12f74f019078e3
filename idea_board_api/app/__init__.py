"""
Application package initializer.

The API is organised into ``core`` (settings, logging, database and
exceptions), ``schemas`` (Pydantic payloads), ``services`` (the store
implementations and business rules) and ``api`` (HTTP routes).
"""

from .main import app, create_app  # noqa: F401
