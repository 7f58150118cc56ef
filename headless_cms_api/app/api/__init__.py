"""
API package containing the HTTP routes.

``router.py`` aggregates the domain routers from ``endpoints`` and
``deps.py`` holds the FastAPI dependencies shared between them.
"""
