# Overview: Token issuance and lookup; the only path from a presented token to a User.

"""
Token Management Service

Each user owns exactly one opaque token, generated at registration and never
rotated, expired or revoked. Clients send it back verbatim in the
Authorization header. Tokens are stored in plaintext because login must
return the same token again.

No caching: every protected request resolves its token against the database.
"""

import secrets

from ..extensions import db
from ..models import User


BEARER_SCHEME = "bearer"


def generate_token() -> str:
    """
    Generate cryptographically secure random token.

    Returns 64-character hex string (32 bytes of entropy).
    """
    return secrets.token_hex(32)


def extract_token(header_value: str | None) -> str | None:
    """
    Pull the token out of an Authorization header value.

    The browser client sends the raw token; a "Bearer " prefix is accepted
    and stripped (scheme matched case-insensitively). Blank values, including
    a bare "Bearer", count as no token.
    """
    if header_value is None:
        return None
    parts = header_value.split(None, 1)
    if not parts:
        return None
    if parts[0].lower() == BEARER_SCHEME:
        return parts[1].strip() if len(parts) > 1 else None
    return header_value.strip() or None


def resolve_token(token: str) -> User | None:
    """Return the user owning this token, or None. Read-only."""
    if not token:
        return None
    return db.session.query(User).filter_by(token=token).first()
