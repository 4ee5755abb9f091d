from __future__ import annotations

from fastapi import APIRouter, Depends, Request, Response, status

from noteful.api.v1.schemas.user import UserCreate, UserRead
from noteful.core.services.user_service import UserService
from noteful.dependencies import get_user_service, signup_rate_limit

router = APIRouter()


@router.post(
    "",
    response_model=UserRead,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(signup_rate_limit)],
)
async def create_user(
    payload: UserCreate,
    request: Request,
    response: Response,
    service: UserService = Depends(get_user_service),
):
    """Register a new account. The password hash is never returned."""
    user = await service.create_user(payload)
    response.headers["Location"] = f"{request.url.path.rstrip('/')}/{user.id}"
    return UserRead.model_validate(user)
