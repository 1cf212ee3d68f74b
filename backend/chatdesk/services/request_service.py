# Overview: Service-layer operations for support requests (tickets).

"""
Support Request Service

The ticket queue is shared: every authenticated user lists every ticket.
Deletion is owner-only and reports a ticket owned by someone else exactly
like a missing one. Status updates are open to any authenticated user and
any status may move to any other (no terminal states).
"""

from __future__ import annotations

from flask import current_app
from sqlalchemy.orm.exc import StaleDataError

from ..extensions import db
from ..models import SupportRequest, User, REQUEST_STATUSES
from ..models.requests import PRIORITY_MEDIUM, STATUS_NEW
from ..time_utils import utcnow
from ..validation import InvalidInputError, NotFoundError, clean_text


MAX_TITLE_LENGTH = 255
MAX_PRIORITY_LENGTH = 32
# SQLite INTEGER is a signed 64-bit value
MAX_REQUEST_ID = 2**63 - 1

DELETE_NOT_FOUND_MESSAGE = "Request not found or you do not have permission to delete it"


class RequestNotFoundError(NotFoundError):
    """Raised when a request does not exist or is not visible to the caller."""


def normalize_priority(priority) -> str:
    """
    Missing or blank priority means medium. Anything else is kept as given
    (trimmed, cut to column width); unknown values are a display concern.
    """
    if priority is None:
        return PRIORITY_MEDIUM
    value = str(priority).strip()
    if not value:
        return PRIORITY_MEDIUM
    return value[:MAX_PRIORITY_LENGTH]


def create(user: User, title, description, priority=None) -> SupportRequest:
    title = clean_text(title, "title", message="Title and description are required",
                       max_length=MAX_TITLE_LENGTH)
    description = clean_text(description, "description", message="Title and description are required")

    now = utcnow()
    req = SupportRequest(
        owner_token=user.token,
        author_username=user.username,
        title=title,
        description=description,
        priority=normalize_priority(priority),
        status=STATUS_NEW,
        created_at=now,
        updated_at=now,
    )
    db.session.add(req)
    db.session.commit()

    current_app.logger.info("Request %s created by %s", req.id, user.username)
    return req


def list_all() -> list[SupportRequest]:
    """All requests, newest first."""
    return (
        db.session.query(SupportRequest)
        .order_by(SupportRequest.created_at.desc(), SupportRequest.id.desc())
        .all()
    )


def list_for_owner(user: User) -> list[SupportRequest]:
    """Requests created by `user`, newest first."""
    return (
        db.session.query(SupportRequest)
        .filter_by(owner_token=user.token)
        .order_by(SupportRequest.created_at.desc(), SupportRequest.id.desc())
        .all()
    )


def _check_id(request_id: int, message: str) -> None:
    if not 0 < request_id <= MAX_REQUEST_ID:
        raise RequestNotFoundError(message)


def get(request_id: int) -> SupportRequest:
    _check_id(request_id, "Request not found")
    req = db.session.get(SupportRequest, request_id)
    if req is None:
        raise RequestNotFoundError("Request not found")
    return req


def delete(user: User, request_id: int) -> None:
    """
    Hard-delete a request owned by `user`.

    Ownership and existence are checked in the same statement.
    """
    _check_id(request_id, DELETE_NOT_FOUND_MESSAGE)
    deleted = (
        db.session.query(SupportRequest)
        .filter_by(id=request_id, owner_token=user.token)
        .delete(synchronize_session=False)
    )
    if not deleted:
        db.session.rollback()
        raise RequestNotFoundError(DELETE_NOT_FOUND_MESSAGE)
    db.session.commit()

    current_app.logger.info("Request %s deleted by %s", request_id, user.username)


def update_status(request_id: int, status) -> SupportRequest:
    """
    Set a request's status and refresh updated_at.

    No ownership check: any authenticated caller may move any ticket.
    A request deleted between the lookup and the commit counts as missing.
    """
    if status not in REQUEST_STATUSES:
        raise InvalidInputError(
            f"Invalid status. Allowed: {', '.join(REQUEST_STATUSES)}"
        )

    req = get(request_id)
    req.status = status
    req.updated_at = utcnow()
    try:
        db.session.commit()
    except StaleDataError:
        db.session.rollback()
        raise RequestNotFoundError("Request not found")

    current_app.logger.info("Request %s status set to %s", request_id, status)
    return req
