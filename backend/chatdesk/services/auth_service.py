# Overview: Service-layer operations for auth; registration, password hashing and login.

"""
Authentication Service (credential store)

Usernames are case-sensitive and globally unique. Passwords are hashed with
bcrypt using the BCRYPT_ROUNDS config value; plaintext passwords are never
stored or returned.

Login returns the user's existing token. UserNotFoundError and
InvalidCredentialsError are separate types for callers that need the
distinction, but share one message so HTTP clients cannot enumerate
usernames.
"""

import bcrypt
from flask import current_app
from sqlalchemy.exc import IntegrityError

from ..extensions import db
from ..models import User
from ..validation import InvalidInputError, ServiceError
from . import session_service


MIN_USERNAME_LENGTH = 3
MAX_USERNAME_LENGTH = 64
MIN_PASSWORD_LENGTH = 3
# bcrypt only reads the first 72 bytes of a password
MAX_PASSWORD_BYTES = 72

LOGIN_FAILED_MESSAGE = "Invalid username or password"

_dummy_hash: bytes | None = None


class DuplicateUsernameError(ServiceError):
    """Raised when registering a username that is already taken."""


class UserNotFoundError(ServiceError):
    """Raised when logging in with an unknown username."""

    def __init__(self, message: str = LOGIN_FAILED_MESSAGE):
        super().__init__(message)


class InvalidCredentialsError(ServiceError):
    """Raised when the password does not match."""

    def __init__(self, message: str = LOGIN_FAILED_MESSAGE):
        super().__init__(message)


def _require_credentials(username, password) -> None:
    if not username or not password:
        raise InvalidInputError("Username and password are required")
    if not isinstance(username, str) or not isinstance(password, str):
        raise InvalidInputError("Username and password must be strings")


def validate_registration(username, password) -> None:
    """
    Validate registration input.

    Requirements:
    - both fields present and strings
    - username 3-64 characters
    - password at least 3 characters and at most 72 bytes

    Raises InvalidInputError if requirements not met.
    """
    _require_credentials(username, password)

    if len(username) < MIN_USERNAME_LENGTH or len(password) < MIN_PASSWORD_LENGTH:
        raise InvalidInputError(
            f"Username and password must be at least {MIN_USERNAME_LENGTH} characters"
        )

    if len(username) > MAX_USERNAME_LENGTH:
        raise InvalidInputError(f"Username must be at most {MAX_USERNAME_LENGTH} characters")

    if len(password.encode('utf-8')) > MAX_PASSWORD_BYTES:
        raise InvalidInputError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")


def hash_password(password: str) -> str:
    """Hash password using bcrypt with the configured cost factor."""
    salt = bcrypt.gensalt(rounds=current_app.config["BCRYPT_ROUNDS"])
    hashed = bcrypt.hashpw(password.encode('utf-8'), salt)
    return hashed.decode('utf-8')  # Store as string in database


def verify_password(password: str, password_hash: str) -> bool:
    """
    Verify password against bcrypt hash.

    bcrypt.checkpw() compares in constant time. A malformed stored hash
    counts as a mismatch.
    """
    if len(password.encode('utf-8')) > MAX_PASSWORD_BYTES:
        return False
    try:
        return bcrypt.checkpw(password.encode('utf-8'), password_hash.encode('utf-8'))
    except ValueError:
        current_app.logger.warning("Stored password hash is malformed")
        return False


def _burn_hash_time(password: str) -> None:
    # Same bcrypt cost on the unknown-user path so response timing does not
    # reveal whether the username exists.
    global _dummy_hash
    if _dummy_hash is None:
        _dummy_hash = bcrypt.hashpw(
            b"chatdesk-dummy-password",
            bcrypt.gensalt(rounds=current_app.config["BCRYPT_ROUNDS"]),
        )
    bcrypt.checkpw(password.encode('utf-8')[:MAX_PASSWORD_BYTES], _dummy_hash)


def _username_taken(username: str) -> bool:
    return db.session.query(User).filter_by(username=username).first() is not None


def register(username, password) -> User:
    """
    Create a user and issue their permanent token.

    Raises:
        InvalidInputError: missing or too-short fields
        DuplicateUsernameError: username already taken (including a
            concurrent registration that won the unique constraint)
    """
    validate_registration(username, password)

    if _username_taken(username):
        raise DuplicateUsernameError("Username already exists")

    user = User(
        username=username,
        password_hash=hash_password(password),
        token=session_service.generate_token(),
    )
    db.session.add(user)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise DuplicateUsernameError("Username already exists")

    current_app.logger.info("User registered: %s", username)
    return user


def authenticate(username, password) -> User:
    """
    Check credentials and return the user (whose token is unchanged).

    Raises:
        InvalidInputError: missing fields
        UserNotFoundError: no such username
        InvalidCredentialsError: wrong password
    """
    _require_credentials(username, password)

    user = db.session.query(User).filter_by(username=username).first()
    if not user:
        _burn_hash_time(password)
        raise UserNotFoundError()

    if not verify_password(password, user.password_hash):
        raise InvalidCredentialsError()

    return user
