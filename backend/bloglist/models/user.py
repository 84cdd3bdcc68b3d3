"""
Bloglist Backend — User SQLAlchemy Model
=========================================

What:  ORM model for the `users` table.
Why:   Accounts own blogs and are the subject of bearer tokens.

Table Design:
    - UUID primary key, generated in Python so it is portable across
      PostgreSQL and SQLite
    - username: unique index (uniqueness is also checked in UserService so
      the client gets a readable message)
    - password_hash: bcrypt digest, never serialized by any response schema
    - blogs: one-to-many, deleted together with the owner
"""

import uuid
from datetime import datetime, timezone
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import DateTime, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bloglist.database import Base

if TYPE_CHECKING:
    from bloglist.models.blog import Blog


class User(Base):
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    username: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        unique=True,
        index=True,
    )

    name: Mapped[Optional[str]] = mapped_column(
        String(128),
        nullable=True,
        default=None,
    )

    password_hash: Mapped[str] = mapped_column(
        String(128),
        nullable=False,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    blogs: Mapped[List["Blog"]] = relationship(
        back_populates="user",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username='{self.username}')>"
