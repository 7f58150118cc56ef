"""
Service layer abstraction.

Each service encapsulates the SQL for one concern (admin tokens,
posts).  Services are built per request from the application's
``Settings`` so that no configuration lives in module globals.
"""

from .auth_service import AuthService  # noqa: F401
from .post_service import PostService  # noqa: F401
