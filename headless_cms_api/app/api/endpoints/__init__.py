"""
Endpoint subpackage.

Each module defines an APIRouter for one resource (admin session,
posts).  The routers are aggregated in ``router.py`` and then included
in the main application.
"""
