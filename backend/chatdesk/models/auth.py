from __future__ import annotations

from ..extensions import db
from ..time_utils import to_utc_z, utcnow


class User(db.Model):
    """
    User accounts for authentication and attribution.

    The token is the user's permanent API key: issued once at registration,
    returned again on every login, never rotated. Usernames are immutable,
    which is what makes the author_username snapshots on messages and
    requests safe to store.
    """
    __tablename__ = "users"
    __table_args__ = {"sqlite_autoincrement": True}

    id = db.Column(db.Integer, primary_key=True)

    # Case-sensitive, globally unique
    username = db.Column(db.String(64), nullable=False, unique=True, index=True)

    # Bcrypt hashed password
    password_hash = db.Column(db.String(255), nullable=False)

    token = db.Column(db.String(64), nullable=False, unique=True, index=True)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow)

    def __repr__(self) -> str:
        return f"<User id={self.id} username={self.username!r}>"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "username": self.username,
            "created_at": to_utc_z(self.created_at),
        }
