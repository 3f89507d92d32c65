from typing import List, Optional

from tourhub.schemas.base import CamelModel


class TourRead(CamelModel):
    id: str
    title: str
    price: float
    location: Optional[str] = None
    images: Optional[List[str]] = None
    status: Optional[str] = None
    is_deleted: Optional[bool] = None

    @classmethod
    def from_model(cls, tour) -> "TourRead":
        return cls(
            id=str(tour.id),
            title=tour.title,
            price=tour.price,
            location=tour.location,
            images=list(tour.images or []),
            status=tour.status,
            is_deleted=tour.is_deleted,
        )
