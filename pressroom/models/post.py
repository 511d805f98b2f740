"""Post ORM — the blog post aggregate.

Invariants:
    - slug is unique across ALL posts (published or not) and never updated
    - author_id is fixed at creation; ownership decides write authorization
    - version increments on every UPDATE (SQLAlchemy version_id_col);
      a flush against a stale version raises StaleDataError

Design Decisions:
    - author loaded with selectin: async sessions cannot lazy-load on attribute access
    - cover_image stores the CDN-relative path (base URL stripped)
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    String, Text, Boolean, Integer, DateTime, ForeignKey, Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from pressroom.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Post(Base):
    __tablename__ = "posts"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4,
    )
    slug: Mapped[str] = mapped_column(
        String(200), nullable=False, unique=True, index=True,
    )
    title: Mapped[str] = mapped_column(String(300), nullable=False)
    excerpt: Mapped[str | None] = mapped_column(Text, nullable=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    cover_image: Mapped[str | None] = mapped_column(
        String(1024), nullable=True,
    )
    published: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    author_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow, index=True,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
        default=_utcnow, onupdate=_utcnow,
    )
    version: Mapped[int] = mapped_column(Integer, nullable=False)

    author: Mapped["User"] = relationship(
        "User", back_populates="posts", lazy="selectin",
    )

    __mapper_args__ = {"version_id_col": version}
