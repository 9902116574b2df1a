"""Unlink account use case."""

from pydantic import BaseModel

from tokiwa.application.usecase.base import BaseUseCase
from tokiwa.domain.service import AccountLinker, IdentityResolver
from tokiwa.domain.value import AuthenticatedPrincipal, ProviderKind

from .link_account import AccountChangeResponse


class UnlinkAccountRequest(BaseModel):
    """Remove a sign-in method from the caller's identity."""

    principal: AuthenticatedPrincipal
    provider: ProviderKind


class UnlinkAccountUseCase(BaseUseCase):
    """Use case for detaching a provider from an identity."""

    def __init__(
        self, identity_resolver: IdentityResolver, account_linker: AccountLinker
    ) -> None:
        self.identity_resolver = identity_resolver
        self.account_linker = account_linker

    async def execute(self, request: UnlinkAccountRequest) -> AccountChangeResponse:
        """Remove every binding of the provider kind.

        Raises:
            NotFoundError: If the provider is not linked
            RejectedError: If it is the last sign-in method
        """
        identity = await self.identity_resolver.resolve_or_default(
            request.principal.uid
        )
        await self.account_linker.unlink_provider(identity.uid, request.provider)
        return AccountChangeResponse()
