"""
Application package initializer.

The API is split into small layers: ``core`` holds configuration,
logging, database access, security helpers and the error taxonomy;
``services`` contains the SQL behind each operation; ``schemas``
defines the JSON payloads; ``api`` wires HTTP routes to services.
"""

from .main import app, create_app  # noqa: F401
