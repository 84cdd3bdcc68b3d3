"""
Bloglist Backend — Blog SQLAlchemy Model
=========================================

What:  ORM model for the `blogs` table.

Lifecycle:
    1. Created by an authenticated user (likes defaults to 0)
    2. likes incremented by anyone via PUT /api/blogs/{id}
    3. Deleted only by its owner (or together with the owning user)

Query Patterns:
    - List all blogs with their owner: SELECT ... + selectin load of users
    - Increment likes: UPDATE blogs SET likes = likes + 1 WHERE id = :id
"""

import uuid
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Optional

from sqlalchemy import DateTime, ForeignKey, Integer, String, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bloglist.database import Base

if TYPE_CHECKING:
    from bloglist.models.user import User


class Blog(Base):
    __tablename__ = "blogs"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    title: Mapped[str] = mapped_column(String(255), nullable=False)

    author: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
        default=None,
    )

    url: Mapped[str] = mapped_column(String(2048), nullable=False)

    likes: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        server_default=text("0"),
    )

    # Owner reference; every blog belongs to an existing user
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    user: Mapped["User"] = relationship(back_populates="blogs")

    def __repr__(self) -> str:
        return f"<Blog(id={self.id}, title='{self.title}', likes={self.likes})>"
