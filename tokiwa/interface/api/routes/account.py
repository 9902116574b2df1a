"""Linked sign-in method routes."""

import logging

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header, HTTPException, status
from pydantic import BaseModel, Field

from tokiwa.application.usecase.account import (
    GetProvidersUseCase,
    LinkAccountUseCase,
    UnlinkAccountUseCase,
)
from tokiwa.application.usecase.account.get_providers import (
    GetProviderDetailsResponse,
    GetProvidersRequest,
    GetProvidersResponse,
)
from tokiwa.application.usecase.account.link_account import (
    AccountChangeResponse,
    LinkAccountRequest,
)
from tokiwa.application.usecase.account.unlink_account import UnlinkAccountRequest
from tokiwa.domain.error import NotFoundError
from tokiwa.domain.service import SessionService
from tokiwa.interface.api.routes.provider import ProviderField
from tokiwa.interface.api.security import authenticate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["account"], route_class=DishkaRoute)


class LinkAccountAPIRequest(BaseModel):
    """Link a provider to the caller.

    ``credential`` is the provider's authorization code.
    """

    provider: ProviderField
    credential: str = Field(min_length=1)
    redirect_uri: str | None = None
    code_verifier: str | None = None


class UnlinkAccountAPIRequest(BaseModel):
    provider: ProviderField


@router.post("/link-account", response_model=AccountChangeResponse)
async def link_account(
    request: LinkAccountAPIRequest,
    use_case: FromDishka[LinkAccountUseCase],
    session_service: FromDishka[SessionService],
    authorization: str | None = Header(default=None),
) -> AccountChangeResponse:
    """Attach another sign-in method to the caller's identity."""
    principal = authenticate(authorization, session_service)
    logger.info(f"Linking {request.provider.value} for {principal.uid}")
    try:
        return await use_case.execute(
            LinkAccountRequest(
                principal=principal,
                provider=request.provider,
                credential=request.credential,
                redirect_uri=request.redirect_uri,
                code_verifier=request.code_verifier,
            )
        )
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.post("/unlink-account", response_model=AccountChangeResponse)
async def unlink_account(
    request: UnlinkAccountAPIRequest,
    use_case: FromDishka[UnlinkAccountUseCase],
    session_service: FromDishka[SessionService],
    authorization: str | None = Header(default=None),
) -> AccountChangeResponse:
    """Detach every binding of one provider from the caller's identity.

    Removing the last remaining sign-in method is refused.
    """
    principal = authenticate(authorization, session_service)
    logger.info(f"Unlinking {request.provider.value} for {principal.uid}")
    try:
        return await use_case.execute(
            UnlinkAccountRequest(principal=principal, provider=request.provider)
        )
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.get("/user-providers", response_model=GetProvidersResponse)
async def user_providers(
    use_case: FromDishka[GetProvidersUseCase],
    session_service: FromDishka[SessionService],
    authorization: str | None = Header(default=None),
) -> GetProvidersResponse:
    """List the provider identifiers linked to the caller."""
    principal = authenticate(authorization, session_service)
    return await use_case.execute(GetProvidersRequest(principal=principal))


@router.get("/user-providers-detail", response_model=GetProviderDetailsResponse)
async def user_providers_detail(
    use_case: FromDishka[GetProvidersUseCase],
    session_service: FromDishka[SessionService],
    authorization: str | None = Header(default=None),
) -> GetProviderDetailsResponse:
    """List linked providers with the email recorded for each binding."""
    principal = authenticate(authorization, session_service)
    return await use_case.execute_detail(GetProvidersRequest(principal=principal))
