"""
Database model for categories.
"""

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Integer, String, Text, func

from app.db.session import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Category(Base):
    """
    Database model for categories.
    """

    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)

    # Timestamps
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now(), onupdate=utcnow
    )

    def __repr__(self) -> str:
        return f"<Category id={self.id} name={self.name!r}>"
