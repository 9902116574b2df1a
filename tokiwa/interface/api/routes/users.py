"""User profile routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header
from pydantic import BaseModel, ConfigDict, Field

from tokiwa.application.usecase.user import (
    GetUserDataUseCase,
    GetUserProfileUseCase,
    UpdateUserProfileUseCase,
)
from tokiwa.application.usecase.user.get_user_data import (
    GetUserDataRequest,
    UserDataResponse,
)
from tokiwa.application.usecase.user.get_user_profile import (
    GetUserProfileRequest,
    UserProfileResponse,
)
from tokiwa.application.usecase.user.update_user_profile import (
    UpdateUserDataResponse,
    UpdateUserProfileRequest,
)
from tokiwa.domain.service import SessionService
from tokiwa.interface.api.security import authenticate

router = APIRouter(prefix="/api", tags=["users"], route_class=DishkaRoute)


class UpdateProfileAPIRequest(BaseModel):
    """New display name and color."""

    model_config = ConfigDict(populate_by_name=True)

    user_name: str = Field(alias="userName")
    user_color: str = Field(alias="userColor")


@router.get("/user-profile", response_model=UserProfileResponse)
async def get_user_profile(
    use_case: FromDishka[GetUserProfileUseCase],
    session_service: FromDishka[SessionService],
    authorization: str | None = Header(default=None),
) -> UserProfileResponse:
    """Get the caller's profile and linked providers.

    Callers without a stored identity get default values.
    """
    principal = authenticate(authorization, session_service)
    return await use_case.execute(GetUserProfileRequest(principal=principal))


@router.post("/user-profile", response_model=UserProfileResponse)
async def update_user_profile(
    request: UpdateProfileAPIRequest,
    use_case: FromDishka[UpdateUserProfileUseCase],
    session_service: FromDishka[SessionService],
    authorization: str | None = Header(default=None),
) -> UserProfileResponse:
    """Set the caller's display name and color."""
    principal = authenticate(authorization, session_service)
    return await use_case.execute(
        UpdateUserProfileRequest(
            principal=principal,
            user_name=request.user_name,
            user_color=request.user_color,
        )
    )


@router.get("/user-data", response_model=UserDataResponse)
async def get_user_data(
    use_case: FromDishka[GetUserDataUseCase],
    session_service: FromDishka[SessionService],
    authorization: str | None = Header(default=None),
) -> UserDataResponse:
    principal = authenticate(authorization, session_service)
    return await use_case.execute(GetUserDataRequest(principal=principal))


@router.post("/user-data", response_model=UpdateUserDataResponse)
async def update_user_data(
    request: UpdateProfileAPIRequest,
    use_case: FromDishka[UpdateUserProfileUseCase],
    session_service: FromDishka[SessionService],
    authorization: str | None = Header(default=None),
) -> UpdateUserDataResponse:
    principal = authenticate(authorization, session_service)
    return await use_case.execute_data(
        UpdateUserProfileRequest(
            principal=principal,
            user_name=request.user_name,
            user_color=request.user_color,
        )
    )
