"""Get user profile use case."""

from pydantic import BaseModel

from tokiwa.application.usecase.account.get_providers import (
    ProviderDetail,
    provider_details,
    provider_ids,
)
from tokiwa.application.usecase.base import BaseUseCase, CamelModel
from tokiwa.domain.model.identity import Identity
from tokiwa.domain.service import IdentityResolver
from tokiwa.domain.value import AuthenticatedPrincipal


class GetUserProfileRequest(BaseModel):
    """Get user profile request."""

    principal: AuthenticatedPrincipal


class UserProfileResponse(CamelModel):
    """Profile fields together with the linked sign-in methods."""

    user_name: str
    user_color: str
    providers: list[str]
    provider_details: list[ProviderDetail]

    @classmethod
    def from_identity(cls, identity: Identity) -> "UserProfileResponse":
        return cls(
            user_name=identity.user_name,
            user_color=identity.user_color,
            providers=provider_ids(identity),
            provider_details=provider_details(identity),
        )


class GetUserProfileUseCase(BaseUseCase):
    """Use case for reading the caller's full profile.

    A caller with no stored identity gets the default profile.
    """

    def __init__(self, identity_resolver: IdentityResolver) -> None:
        self.identity_resolver = identity_resolver

    async def execute(self, request: GetUserProfileRequest) -> UserProfileResponse:
        identity = await self.identity_resolver.resolve_or_default(
            request.principal.uid
        )
        return UserProfileResponse.from_identity(identity)
