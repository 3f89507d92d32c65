from typing import Optional

from tourhub.schemas.base import CamelModel


class UserRead(CamelModel):
    id: str
    email: str
    role: Optional[str] = None

    @classmethod
    def from_model(cls, user) -> "UserRead":
        return cls(id=str(user.id), email=user.email, role=user.role)
