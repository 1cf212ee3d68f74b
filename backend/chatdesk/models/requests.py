from __future__ import annotations

from ..extensions import db
from ..time_utils import to_utc_z, utcnow


STATUS_NEW = "new"
STATUS_IN_PROGRESS = "in-progress"
STATUS_COMPLETED = "completed"
STATUS_REJECTED = "rejected"
REQUEST_STATUSES = (STATUS_NEW, STATUS_IN_PROGRESS, STATUS_COMPLETED, STATUS_REJECTED)

PRIORITY_LOW = "low"
PRIORITY_MEDIUM = "medium"
PRIORITY_HIGH = "high"
PRIORITY_CRITICAL = "critical"
REQUEST_PRIORITIES = (PRIORITY_LOW, PRIORITY_MEDIUM, PRIORITY_HIGH, PRIORITY_CRITICAL)

STATUS_LABELS = {
    STATUS_NEW: "New",
    STATUS_IN_PROGRESS: "In progress",
    STATUS_COMPLETED: "Completed",
    STATUS_REJECTED: "Rejected",
}

PRIORITY_LABELS = {
    PRIORITY_LOW: "Low",
    PRIORITY_MEDIUM: "Medium",
    PRIORITY_HIGH: "High",
    PRIORITY_CRITICAL: "Critical",
}


class SupportRequest(db.Model):
    """
    Support ticket ("request") on the shared queue.

    Every authenticated user can see every ticket; only the owner
    (owner_token) can delete one. Priority is stored as submitted, so
    unknown values survive and are mapped to a fallback label on display.
    """
    __tablename__ = "requests"
    __table_args__ = (
        db.Index("ix_requests_created_at_id", "created_at", "id"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)
    owner_token = db.Column(db.String(64), db.ForeignKey("users.token"), nullable=False, index=True)
    author_username = db.Column(db.String(64), nullable=False)

    title = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=False)
    priority = db.Column(db.String(32), nullable=False, default=PRIORITY_MEDIUM)
    status = db.Column(db.String(32), nullable=False, default=STATUS_NEW, index=True)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow)

    def __repr__(self) -> str:
        return f"<SupportRequest id={self.id} status={self.status!r}>"

    def to_dict(self) -> dict:
        # owner_token is a credential and never leaves the server
        return {
            "id": self.id,
            "username": self.author_username,
            "title": self.title,
            "description": self.description,
            "priority": self.priority,
            "priority_label": PRIORITY_LABELS.get(self.priority, self.priority),
            "status": self.status,
            "status_label": STATUS_LABELS.get(self.status, self.status),
            "created_at": to_utc_z(self.created_at),
            "updated_at": to_utc_z(self.updated_at),
        }
