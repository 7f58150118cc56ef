"""
Pydantic models for blog posts.

``PostCreate`` and ``PostUpdate`` describe incoming bodies.  Both
declare their fields as optional: presence and emptiness are checked
by ``PostService`` so that the client receives the full list of
problems rather than the first one.  ``PostRead`` is one row of the
``posts`` table exposed verbatim.
"""

from typing import List, Optional

from pydantic import BaseModel, Field


class PostCreate(BaseModel):
    """Schema for creating a post."""

    title: Optional[str] = Field(None, examples=["Hello world"])
    content: Optional[str] = Field(None, examples=["My first post, written in **markdown**."])


class PostUpdate(BaseModel):
    """Schema for a partial update.

    Fields left out, or sent as ``null``, are not touched.
    """

    title: Optional[str] = None
    content: Optional[str] = None

    def provided_fields(self) -> dict[str, str]:
        return {
            name: value
            for name, value in self.model_dump(exclude_unset=True).items()
            if value is not None
        }


class PostRead(BaseModel):
    id: str
    title: str
    content: str
    created_at: str
    last_modified: str

    model_config = {
        "from_attributes": True,
    }


class PostListResponse(BaseModel):
    success: bool = True
    data: List[PostRead]
    count: int


class PostResponse(BaseModel):
    success: bool = True
    message: Optional[str] = None
    data: PostRead


class PostDeletedResponse(BaseModel):
    success: bool = True
    message: str = "Post deleted successfully"
    deleted_post: PostRead
