from __future__ import annotations

from ..extensions import db
from ..time_utils import to_utc_z, utcnow


class Message(db.Model):
    """
    Shared chat log entry. Append-only: rows are never updated or deleted.

    author_username is a snapshot of the sender's username at post time.
    """
    __tablename__ = "messages"
    __table_args__ = (
        db.Index("ix_messages_created_at_id", "created_at", "id"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)
    owner_token = db.Column(db.String(64), db.ForeignKey("users.token"), nullable=False, index=True)
    author_username = db.Column(db.String(64), nullable=False)
    body = db.Column(db.Text, nullable=False)
    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow)

    def __repr__(self) -> str:
        return f"<Message id={self.id} author={self.author_username!r}>"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "username": self.author_username,
            "text": self.body,
            "timestamp": to_utc_z(self.created_at),
        }
