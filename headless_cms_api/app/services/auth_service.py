"""
Admin authentication backed by the ``admin_tokens`` table.

A successful login stores a random token together with its expiry
time.  Verification is a lookup of an unexpired row.  Every access to
the table first deletes expired rows, so there is no background
sweeper; this costs one extra ``DELETE`` per authenticated request,
which is fine for a single‑author blog but would not scale to high
request volumes.
"""

import logging
import sqlite3
from datetime import datetime, timedelta
from typing import Callable, Optional

from ..core.config import Settings
from ..core.db import format_timestamp, get_connection, utc_now
from ..core.errors import BadRequestError, StorageError, UnauthorizedError, ValidationFailedError
from ..core.security import generate_token, is_utf8_text, password_matches
from ..schemas.auth import LoginResponse


logger = logging.getLogger(__name__)


class AuthService:
    """Issue, verify and revoke admin bearer tokens."""

    def __init__(self, settings: Settings, clock: Optional[Callable[[], datetime]] = None) -> None:
        self.settings = settings
        self.clock = clock or utc_now

    def _connect(self) -> sqlite3.Connection:
        conn = get_connection(self.settings.database_url)
        try:
            self._purge_expired(conn)
        except sqlite3.Error:
            conn.close()
            raise
        return conn

    def _purge_expired(self, conn: sqlite3.Connection) -> None:
        now = format_timestamp(self.clock())
        deleted = conn.execute("DELETE FROM admin_tokens WHERE expires_at <= ?", (now,)).rowcount
        conn.commit()
        if deleted:
            logger.debug("Purged %d expired admin tokens", deleted)

    async def login(self, password: Optional[str]) -> LoginResponse:
        """Check the admin password and mint a new token.

        Raises ``BadRequestError`` when no password was supplied and
        ``UnauthorizedError`` when it does not match; in both cases no
        token is written.
        """
        if not password:
            raise BadRequestError("Password is required")
        if not is_utf8_text(password):
            raise ValidationFailedError(["Password contains characters that are not valid UTF-8"])
        if not password_matches(password, self.settings.admin_password):
            logger.warning("Rejected admin login with an invalid password")
            raise UnauthorizedError("Invalid password")

        issued_at = self.clock()
        expires_at = issued_at + timedelta(hours=self.settings.token_expiry_hours)
        token = generate_token()
        try:
            conn = self._connect()
            try:
                conn.execute(
                    "INSERT INTO admin_tokens (token, created_at, expires_at) VALUES (?, ?, ?)",
                    (token, format_timestamp(issued_at), format_timestamp(expires_at)),
                )
                conn.commit()
            finally:
                conn.close()
        except sqlite3.Error as exc:
            logger.exception("Could not store admin token")
            raise StorageError(f"Failed to create session: {exc}") from exc
        logger.info("Admin logged in; token valid until %s", format_timestamp(expires_at))
        return LoginResponse(token=token, expires_at=format_timestamp(expires_at))

    async def verify(self, token: str) -> None:
        """Raise ``UnauthorizedError`` unless ``token`` exists and is unexpired."""
        now = format_timestamp(self.clock())
        try:
            conn = self._connect()
            try:
                row = conn.execute(
                    "SELECT token FROM admin_tokens WHERE token = ? AND expires_at > ?",
                    (token, now),
                ).fetchone()
            finally:
                conn.close()
        except sqlite3.Error as exc:
            logger.exception("Token verification failed")
            raise StorageError(f"Token verification failed: {exc}") from exc
        if row is None:
            raise UnauthorizedError("Invalid or expired token")

    async def logout(self, token: str) -> None:
        """Delete ``token``.  Deleting an already removed token is a no‑op."""
        try:
            conn = self._connect()
            try:
                conn.execute("DELETE FROM admin_tokens WHERE token = ?", (token,))
                conn.commit()
            finally:
                conn.close()
        except sqlite3.Error as exc:
            logger.exception("Logout failed")
            raise StorageError(f"Logout failed: {exc}") from exc
        logger.info("Admin logged out")
