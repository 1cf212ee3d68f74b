# Overview: Service-layer operations for the shared chat log.

from __future__ import annotations

from flask import current_app

from ..extensions import db
from ..models import Message, User
from ..time_utils import parse_client_timestamp, utcnow
from ..validation import InvalidInputError


class EmptyMessageError(InvalidInputError):
    """Raised when a message body is empty after trimming."""


def append(user: User, text) -> Message:
    """Append a message from `user`. The body is stored trimmed."""
    if text is not None and not isinstance(text, str):
        raise InvalidInputError("Message text must be a string")
    if not text or not text.strip():
        raise EmptyMessageError("Message cannot be empty")

    message = Message(
        owner_token=user.token,
        author_username=user.username,
        body=text.strip(),
        created_at=utcnow(),
    )
    db.session.add(message)
    db.session.commit()
    return message


def list_recent(limit: int | None = None) -> list[Message]:
    """
    Most recent `limit` messages (default MESSAGE_WINDOW), oldest first.

    Older messages stay in the table but are no longer reachable here.
    """
    if limit is None:
        limit = current_app.config["MESSAGE_WINDOW"]

    newest_first = (
        db.session.query(Message)
        .order_by(Message.created_at.desc(), Message.id.desc())
        .limit(limit)
        .all()
    )
    return list(reversed(newest_first))


def import_legacy(user: User, items) -> int:
    """
    Import chat history that older clients kept in browser storage.

    Each item is {"text": ..., "timestamp": ...}. Every imported message is
    attributed to `user`; any username inside the item is ignored. Items
    without text are skipped, unparseable timestamps become "now".
    Returns the number of messages written.
    """
    if not isinstance(items, list):
        raise InvalidInputError("oldMessages must be a list")

    max_items = current_app.config["MIGRATE_MAX_ITEMS"]
    if len(items) > max_items:
        raise InvalidInputError(f"At most {max_items} messages can be imported at once")

    imported = 0
    for item in items:
        if not isinstance(item, dict):
            continue
        text = item.get("text")
        if not isinstance(text, str) or not text.strip():
            continue
        db.session.add(Message(
            owner_token=user.token,
            author_username=user.username,
            body=text.strip(),
            created_at=parse_client_timestamp(item.get("timestamp")) or utcnow(),
        ))
        imported += 1

    db.session.commit()
    current_app.logger.info("Imported %d legacy messages for %s", imported, user.username)
    return imported
