"""
Database package for the Mail Digest service.

Provides async SQLAlchemy models, session management, and the message
repository for PostgreSQL persistence.
"""

from db.base import Base
from db.models import EmailMessage
from db.repositories import MessageRepository
from db.session import close_db, get_db, init_db

__all__ = [
    "Base",
    "close_db",
    "get_db",
    "init_db",
    "EmailMessage",
    "MessageRepository",
]
