"""Get user data use case."""

from pydantic import BaseModel

from tokiwa.application.usecase.base import BaseUseCase, CamelModel
from tokiwa.domain.service import IdentityResolver
from tokiwa.domain.value import AuthenticatedPrincipal


class GetUserDataRequest(BaseModel):
    """Get user data request."""

    principal: AuthenticatedPrincipal


class UserDataResponse(CamelModel):
    """Display name and color only."""

    user_name: str
    user_color: str


class GetUserDataUseCase(BaseUseCase):
    """Use case for reading the caller's display name and color."""

    def __init__(self, identity_resolver: IdentityResolver) -> None:
        self.identity_resolver = identity_resolver

    async def execute(self, request: GetUserDataRequest) -> UserDataResponse:
        identity = await self.identity_resolver.resolve_or_default(
            request.principal.uid
        )
        return UserDataResponse(
            user_name=identity.user_name, user_color=identity.user_color
        )
