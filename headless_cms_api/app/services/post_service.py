"""
Business logic for blog posts.

``PostService`` runs parameterised SQL against the ``posts`` table.
Validation of titles and content happens here rather than in the
pydantic schemas so that every problem with a request is reported
together in the ``errors`` list of a single 400 response.

Updates are not wrapped in a transaction: the existence check, the
``UPDATE`` and the re‑read are separate statements.  Two concurrent
edits of the same post may race on ``last_modified``; at the scale of
a personal blog this is accepted.
"""

import logging
import sqlite3
from datetime import datetime
from typing import Callable, List, Optional

from ..core.config import Settings
from ..core.db import format_timestamp, get_connection, utc_now
from ..core.errors import NotFoundError, StorageError, ValidationFailedError
from ..core.security import generate_post_id, is_utf8_text
from ..schemas.post import PostCreate, PostRead, PostUpdate


logger = logging.getLogger(__name__)

# Only these columns may appear in the SET clause of an update.
UPDATABLE_FIELDS = ("title", "content")


def _encoding_errors(fields: dict) -> List[str]:
    return [
        f"{name.capitalize()} contains characters that are not valid UTF-8"
        for name in UPDATABLE_FIELDS
        if fields.get(name) and not is_utf8_text(fields[name])
    ]


def validate_new_post(data: PostCreate) -> List[str]:
    errors: List[str] = []
    if not data.title:
        errors.append("Title is required")
    if not data.content:
        errors.append("Content is required")
    errors.extend(_encoding_errors({"title": data.title, "content": data.content}))
    return errors


def validate_post_update(data: PostUpdate) -> List[str]:
    """Collect problems with a partial update.

    A field that is present must not be empty, and at least one of the
    fields has to carry a non‑empty value.
    """
    provided = data.provided_fields()
    errors: List[str] = []
    if "title" in provided and not provided["title"]:
        errors.append("Title cannot be empty")
    if "content" in provided and not provided["content"]:
        errors.append("Content cannot be empty")
    if not any(provided.get(name) for name in UPDATABLE_FIELDS):
        errors.append("At least one field (title or content) must be provided")
    errors.extend(_encoding_errors(provided))
    return errors


class PostService:
    """CRUD operations over the ``posts`` table."""

    def __init__(self, settings: Settings, clock: Optional[Callable[[], datetime]] = None) -> None:
        self.settings = settings
        self.clock = clock or utc_now

    def _connect(self) -> sqlite3.Connection:
        return get_connection(self.settings.database_url)

    @staticmethod
    def _row_to_post(row: sqlite3.Row) -> PostRead:
        return PostRead(
            id=row["id"],
            title=row["title"],
            content=row["content"],
            created_at=row["created_at"],
            last_modified=row["last_modified"],
        )

    @staticmethod
    def _fetch(conn: sqlite3.Connection, post_id: str) -> Optional[sqlite3.Row]:
        return conn.execute(
            "SELECT id, title, content, created_at, last_modified FROM posts WHERE id = ?",
            (post_id,),
        ).fetchone()

    async def list_posts(self) -> List[PostRead]:
        """Return every post, newest first."""
        try:
            conn = self._connect()
            try:
                rows = conn.execute(
                    "SELECT id, title, content, created_at, last_modified FROM posts "
                    "ORDER BY created_at DESC, rowid DESC"
                ).fetchall()
            finally:
                conn.close()
        except sqlite3.Error as exc:
            logger.exception("Failed to list posts")
            raise StorageError(f"Failed to fetch posts: {exc}") from exc
        return [self._row_to_post(row) for row in rows]

    async def get_post(self, post_id: str) -> PostRead:
        """Retrieve a single post.  Raises ``NotFoundError`` if absent."""
        try:
            conn = self._connect()
            try:
                row = self._fetch(conn, post_id)
            finally:
                conn.close()
        except sqlite3.Error as exc:
            logger.exception("Failed to fetch post %s", post_id)
            raise StorageError(f"Failed to fetch post: {exc}") from exc
        if row is None:
            raise NotFoundError("Post not found")
        return self._row_to_post(row)

    async def create_post(self, data: PostCreate) -> PostRead:
        """Insert a new post and return the stored record.

        ``created_at`` and ``last_modified`` receive the same timestamp.
        """
        errors = validate_new_post(data)
        if errors:
            raise ValidationFailedError(errors)

        post_id = generate_post_id()
        now = format_timestamp(self.clock())
        try:
            conn = self._connect()
            try:
                conn.execute(
                    """
                    INSERT INTO posts (id, title, content, created_at, last_modified)
                    VALUES (?, ?, ?, ?, ?)
                    """,
                    (post_id, data.title, data.content, now, now),
                )
                conn.commit()
                row = self._fetch(conn, post_id)
            finally:
                conn.close()
        except sqlite3.Error as exc:
            logger.exception("Failed to create post")
            raise StorageError(f"Failed to create post: {exc}") from exc
        logger.info("Created post %s (%r)", post_id, data.title)
        return self._row_to_post(row)

    async def update_post(self, post_id: str, data: PostUpdate) -> PostRead:
        """Apply a partial update and return the refreshed record.

        Only the supplied fields are written; ``last_modified`` is
        stamped on every successful update.  Validation runs before the
        existence check, so an empty body is rejected even for an
        unknown id.
        """
        errors = validate_post_update(data)
        if errors:
            raise ValidationFailedError(errors)

        changes = [(name, value) for name, value in data.provided_fields().items() if name in UPDATABLE_FIELDS]
        changes.append(("last_modified", format_timestamp(self.clock())))
        assignments = ", ".join(f"{name} = ?" for name, _ in changes)
        params = [value for _, value in changes] + [post_id]

        try:
            conn = self._connect()
            try:
                if self._fetch(conn, post_id) is None:
                    raise NotFoundError("Post not found")
                conn.execute(f"UPDATE posts SET {assignments} WHERE id = ?", params)
                conn.commit()
                row = self._fetch(conn, post_id)
            finally:
                conn.close()
        except sqlite3.Error as exc:
            logger.exception("Failed to update post %s", post_id)
            raise StorageError(f"Failed to update post: {exc}") from exc
        logger.info("Updated post %s (%s)", post_id, ", ".join(name for name, _ in changes[:-1]))
        return self._row_to_post(row)

    async def delete_post(self, post_id: str) -> PostRead:
        """Delete a post and return a snapshot of the removed record."""
        try:
            conn = self._connect()
            try:
                row = self._fetch(conn, post_id)
                if row is None:
                    raise NotFoundError("Post not found")
                conn.execute("DELETE FROM posts WHERE id = ?", (post_id,))
                conn.commit()
            finally:
                conn.close()
        except sqlite3.Error as exc:
            logger.exception("Failed to delete post %s", post_id)
            raise StorageError(f"Failed to delete post: {exc}") from exc
        logger.info("Deleted post %s", post_id)
        return self._row_to_post(row)
