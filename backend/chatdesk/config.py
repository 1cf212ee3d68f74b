# backend/chatdesk/config.py
from __future__ import annotations
import os


def _split_origins(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


class Config:
    # Optional "SECRET_KEY", with default dev key
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key-change-me")

    # SQLite DB stored relative to the instance folder by default
    SQLALCHEMY_DATABASE_URI = os.environ.get(
        "DATABASE_URL", #optional alternative location
        "sqlite:///chatdesk.sqlite3", #default local location
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Seconds SQLite waits on a locked database before raising
    SQLITE_BUSY_TIMEOUT = float(os.environ.get("SQLITE_BUSY_TIMEOUT", "15"))

    # bcrypt cost; 10 keeps registration/login in the tens of milliseconds
    BCRYPT_ROUNDS = int(os.environ.get("BCRYPT_ROUNDS", "10"))

    # Chat read window and legacy import cap
    MESSAGE_WINDOW = int(os.environ.get("MESSAGE_WINDOW", "100"))
    MIGRATE_MAX_ITEMS = int(os.environ.get("MIGRATE_MAX_ITEMS", "500"))

    CORS_ALLOWED_ORIGINS = _split_origins(os.environ.get(
        "CORS_ALLOWED_ORIGINS",
        "http://localhost:3000,http://127.0.0.1:3000,http://localhost:5173,http://127.0.0.1:5173",
    ))

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
