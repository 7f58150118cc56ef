"""
Security helpers for admin token authentication.

Admin tokens are opaque random strings stored in the ``admin_tokens``
table; there is no signing and no embedded claims.  This module
produces new tokens and post identifiers, compares the login secret
and parses the ``Authorization`` header.
"""

import hmac
import secrets
import uuid
from typing import Optional

from fastapi import Header

from .errors import UnauthorizedError


# 32 random bytes, rendered as 64 hex characters (256 bits of entropy).
TOKEN_BYTES = 32


def generate_token() -> str:
    return secrets.token_hex(TOKEN_BYTES)


def generate_post_id() -> str:
    """Return a new random UUID4 string used as a post identifier."""
    return str(uuid.uuid4())


def password_matches(supplied: str, configured: str) -> bool:
    """Compare the supplied login password with the configured secret.

    The secret is a plaintext value from the environment, so there is
    nothing to hash against; the comparison is done in constant time.
    An unconfigured (empty) secret never matches.
    """
    if not configured:
        return False
    return hmac.compare_digest(
        supplied.encode("utf-8", "surrogatepass"), configured.encode("utf-8", "surrogatepass")
    )


def extract_bearer_token(authorization: Optional[str]) -> str:
    """Pull the token out of an ``Authorization: Bearer <token>`` header.

    Raises ``UnauthorizedError`` with a message that distinguishes a
    missing header from a malformed one.
    """
    if not authorization:
        raise UnauthorizedError("Authorization header required")
    parts = authorization.split(" ")
    if len(parts) != 2 or parts[0].lower() != "bearer" or not parts[1]:
        raise UnauthorizedError("Invalid authorization header format")
    return parts[1]


def bearer_token(authorization: Optional[str] = Header(None)) -> str:
    """Dependency returning the raw bearer token from the request."""
    return extract_bearer_token(authorization)


def is_utf8_text(value: str) -> bool:
    """JSON allows lone surrogate escapes (``"\\ud800"``) that SQLite cannot store."""
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True
