"""Update user profile use case."""

from pydantic import BaseModel

from tokiwa.application.usecase.base import BaseUseCase, CamelModel
from tokiwa.domain.service import AccountLinker, IdentityResolver
from tokiwa.domain.value import AuthenticatedPrincipal

from .get_user_profile import UserProfileResponse


class UpdateUserProfileRequest(BaseModel):
    """Update user profile request."""

    principal: AuthenticatedPrincipal
    user_name: str
    user_color: str


class UpdateUserDataResponse(CamelModel):
    """Acknowledgement returned by the user-data endpoint."""

    message: str = "user data saved"
    user_name: str
    user_color: str


class UpdateUserProfileUseCase(BaseUseCase):
    """Use case for changing the display name and color.

    Bindings are never touched by this use case.
    """

    def __init__(
        self, identity_resolver: IdentityResolver, account_linker: AccountLinker
    ) -> None:
        """Initialize update user profile use case.

        Args:
            identity_resolver: Identity lookup service
            account_linker: Profile mutation service
        """
        self.identity_resolver = identity_resolver
        self.account_linker = account_linker

    async def execute(self, request: UpdateUserProfileRequest) -> UserProfileResponse:
        """Execute update user profile flow.

        Steps:
        1. Resolve the identity the session belongs to
        2. Overwrite user_name and user_color (creating the record if absent)
        3. Return the updated profile

        Raises:
            ValidationError: If either field is empty
        """
        current = await self.identity_resolver.resolve_or_default(
            request.principal.uid
        )
        identity = await self.account_linker.update_profile(
            current.uid, request.user_name, request.user_color
        )
        return UserProfileResponse.from_identity(identity)

    async def execute_data(
        self, request: UpdateUserProfileRequest
    ) -> UpdateUserDataResponse:
        """Same update, answered in the user-data endpoint's shape."""
        profile = await self.execute(request)
        return UpdateUserDataResponse(
            user_name=profile.user_name, user_color=profile.user_color
        )
