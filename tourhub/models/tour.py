"""
Tour model - the bookable product users can favorite
"""
from sqlalchemy import Column, Integer, String, Float, Boolean, DateTime, JSON
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import relationship

from tourhub.core.db import Base
from tourhub.models.user import utcnow


class Tour(Base):
    """
    Minimal tour record referenced by favorites.
    Soft-deleted tours are treated as missing by the favorites service.
    """
    __tablename__ = "tours"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    price = Column(Float, nullable=False)
    location = Column(String(255), nullable=True)
    images = Column(JSON().with_variant(JSONB, "postgresql"), nullable=True)  # list of image URLs
    status = Column(String(32), nullable=False, default="active")
    is_deleted = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    # Relationships
    favorites = relationship("Favorite", back_populates="tour")

    def __repr__(self) -> str:  # pragma: no cover
        return f"<Tour id={self.id} title={self.title}>"
