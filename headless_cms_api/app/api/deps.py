"""
FastAPI dependencies shared by the endpoint modules.

Settings and the clock live on ``app.state`` (see ``create_app``);
services are constructed from them for every request.
"""

from datetime import datetime
from typing import Callable

from fastapi import Depends, Request

from ..core.config import Settings
from ..core.security import bearer_token, extract_bearer_token
from ..services.auth_service import AuthService
from ..services.post_service import PostService


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_clock(request: Request) -> Callable[[], datetime]:
    return request.app.state.clock


def get_auth_service(
    settings: Settings = Depends(get_settings),
    clock: Callable[[], datetime] = Depends(get_clock),
) -> AuthService:
    return AuthService(settings, clock)


def get_post_service(
    settings: Settings = Depends(get_settings),
    clock: Callable[[], datetime] = Depends(get_clock),
) -> PostService:
    return PostService(settings, clock)


async def require_admin(
    token: str = Depends(bearer_token),
    auth_service: AuthService = Depends(get_auth_service),
) -> str:
    """Dependency that rejects the request unless the bearer token is valid.

    Returns the verified token so that handlers such as logout can act
    on it.
    """
    await auth_service.verify(token)
    return token


async def check_admin_request(request: Request) -> None:
    """Run the ``require_admin`` checks straight from a request."""
    token = extract_bearer_token(request.headers.get("authorization"))
    await AuthService(get_settings(request), get_clock(request)).verify(token)


def admin_only(endpoint: Callable) -> Callable:
    """Mark an endpoint so body parsing errors are reported after auth.

    ``require_admin`` only runs once FastAPI has parsed the body; the
    validation error handler uses this marker to authenticate first.
    """
    endpoint.auth_guard = check_admin_request
    return endpoint
