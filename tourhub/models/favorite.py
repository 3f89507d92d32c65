from sqlalchemy.orm import relationship
from sqlalchemy import Column, Integer, Boolean, ForeignKey, DateTime, Index, UniqueConstraint
from tourhub.core.db import Base
from tourhub.models.user import utcnow


class Favorite(Base):
    __tablename__ = "favorites"
    __table_args__ = (
        UniqueConstraint("user_id", "tour_id", name="uq_favorites_user_tour"),
        Index("ix_favorites_user_order", "user_id", "order"),
    )

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    tour_id = Column(Integer, ForeignKey("tours.id"), nullable=False, index=True)
    is_deleted = Column(Boolean, nullable=False, default=False)  # soft delete, rows are never removed
    order = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    user = relationship("User", back_populates="favorites", lazy="joined")
    tour = relationship("Tour", back_populates="favorites", lazy="joined")

    def __repr__(self) -> str:  # pragma: no cover
        return f"<Favorite id={self.id} user_id={self.user_id} tour_id={self.tour_id} order={self.order}>"
