"""
Post endpoints.

Listing and reading posts is public.  Creating, updating and deleting
require a valid admin bearer token, checked by the ``require_admin``
dependency before the request body is looked at.
"""

from typing import Optional

from fastapi import APIRouter, Depends, status

from ..deps import admin_only, get_post_service, require_admin
from ...schemas.post import (
    PostCreate,
    PostDeletedResponse,
    PostListResponse,
    PostResponse,
    PostUpdate,
)
from ...services.post_service import PostService


router = APIRouter()


@router.get("", response_model=PostListResponse)
async def list_posts(post_service: PostService = Depends(get_post_service)) -> PostListResponse:
    """Return all posts, most recently created first.  No pagination."""
    posts = await post_service.list_posts()
    return PostListResponse(data=posts, count=len(posts))


@router.get("/{post_id}", response_model=PostResponse, response_model_exclude_none=True)
async def get_post(post_id: str, post_service: PostService = Depends(get_post_service)) -> PostResponse:
    """Retrieve a single post.  Returns 404 if it does not exist."""
    return PostResponse(data=await post_service.get_post(post_id))


@router.post("", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
@admin_only
async def create_post(
    post_in: Optional[PostCreate] = None,
    token: str = Depends(require_admin),
    post_service: PostService = Depends(get_post_service),
) -> PostResponse:
    """Create a new post (admin only)."""
    post = await post_service.create_post(post_in if post_in is not None else PostCreate())
    return PostResponse(message="Post created successfully", data=post)


@router.patch("/{post_id}", response_model=PostResponse)
@admin_only
async def update_post(
    post_id: str,
    post_in: Optional[PostUpdate] = None,
    token: str = Depends(require_admin),
    post_service: PostService = Depends(get_post_service),
) -> PostResponse:
    """Partially update a post (admin only).

    Fields that are omitted keep their value; ``last_modified`` is
    refreshed on every successful update.
    """
    post = await post_service.update_post(post_id, post_in if post_in is not None else PostUpdate())
    return PostResponse(message="Post updated successfully", data=post)


@router.delete("/{post_id}", response_model=PostDeletedResponse)
@admin_only
async def delete_post(
    post_id: str,
    token: str = Depends(require_admin),
    post_service: PostService = Depends(get_post_service),
) -> PostDeletedResponse:
    """Delete a post (admin only) and echo the removed record."""
    deleted = await post_service.delete_post(post_id)
    return PostDeletedResponse(deleted_post=deleted)
