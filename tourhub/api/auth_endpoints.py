"""Authentication introspection for bearer tokens."""

from fastapi import APIRouter, Depends

from tourhub.core.dependencies import get_current_user
from tourhub.models.user import User
from tourhub.schemas.user import UserRead

router = APIRouter(prefix="/auth", tags=["auth"])


def _envelope(data=None, error: str | None = None, status: str = "ok"):
    return {"status": status, "data": data, "error": error}


@router.get("/me")
async def read_current_user(current_user: User = Depends(get_current_user)):
    """Return the user behind the Authorization header."""
    return _envelope(data={"user": UserRead.from_model(current_user).model_dump(by_alias=True)})
