"""SQLAlchemy model for post categories."""
from datetime import datetime

from sqlalchemy import DateTime, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from aurora.db.session import Base
from aurora.db.time import utcnow


class Category(Base):
    """Topic grouping for posts, addressed by its slug."""

    __tablename__ = "category"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    # Derived from the name once; the true uniqueness constraint for categories.
    slug: Mapped[str] = mapped_column(Text, unique=True, nullable=False)
    icon: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
