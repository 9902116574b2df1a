"""Authentication routes."""

import logging
from typing import Literal

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header, HTTPException, status
from pydantic import BaseModel, ConfigDict, Field

from tokiwa.application.usecase.auth import (
    OAuthLoginRequest,
    OAuthLoginUseCase,
    PasswordLoginRequest,
    PasswordLoginUseCase,
    SessionResponse,
    SignupRequest,
    SignupResponse,
    SignupUseCase,
)
from tokiwa.domain.error import NotFoundError
from tokiwa.domain.service import SessionService
from tokiwa.domain.value import EmailAddress, ProviderKind
from tokiwa.interface.api.security import authenticate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["authentication"], route_class=DishkaRoute)


class OAuthLoginAPIRequest(BaseModel):
    """Body of an OAuth login callback.

    ``linkUID`` turns the login into a strict link of the provider to that
    identity, and requires a bearer session for the same uid.
    """

    model_config = ConfigDict(populate_by_name=True)

    code: str = Field(min_length=1)
    redirect_uri: str = Field(min_length=1)
    link_uid: str | None = Field(default=None, alias="linkUID")
    code_verifier: str | None = None


class CredentialsAPIRequest(BaseModel):
    """Email/password body for login and signup."""

    email: EmailAddress
    password: str


@router.post("/auth/{provider}", response_model=SessionResponse)
async def oauth_login(
    provider: Literal["google", "github", "twitter"],
    request: OAuthLoginAPIRequest,
    use_case: FromDishka[OAuthLoginUseCase],
    session_service: FromDishka[SessionService],
    authorization: str | None = Header(default=None),
) -> SessionResponse:
    """Complete an OAuth login, or link the provider to the caller.

    Args:
        provider: OAuth provider that issued the code
        request: Authorization code and redirect URI
        use_case: OAuth login use case from DI
        session_service: Validates the bearer session when linking
        authorization: Bearer session header, required with ``linkUID``

    Returns:
        Session for the resolved identity

    Examples:
        POST /api/auth/google
        {"code": "4/0Ab...", "redirect_uri": "https://app.example/callback"}

        Response:
        {"uid": "google_1234", "email": "a@example.com", "sessionToken": "eyJ..."}
    """
    principal = None
    if request.link_uid:
        principal = authenticate(authorization, session_service)

    logger.info(f"OAuth login via {provider}")
    try:
        return await use_case.execute(
            OAuthLoginRequest(
                provider=ProviderKind(provider),
                code=request.code,
                redirect_uri=request.redirect_uri,
                code_verifier=request.code_verifier,
                link_uid=request.link_uid,
                principal=principal,
            )
        )
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.post("/login", response_model=SessionResponse)
async def password_login(
    request: CredentialsAPIRequest,
    use_case: FromDishka[PasswordLoginUseCase],
) -> SessionResponse:
    """Log in with email and password."""
    return await use_case.execute(
        PasswordLoginRequest(email=request.email, password=request.password)
    )


@router.post(
    "/signup", response_model=SignupResponse, status_code=status.HTTP_201_CREATED
)
async def signup(
    request: CredentialsAPIRequest,
    use_case: FromDishka[SignupUseCase],
) -> SignupResponse:
    """Create an email/password account.

    The caller logs in through ``/api/login`` afterwards.
    """
    return await use_case.execute(
        SignupRequest(email=request.email, password=request.password)
    )
