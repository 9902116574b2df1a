"""Linked provider listing use case."""

from pydantic import BaseModel

from tokiwa.application.usecase.base import BaseUseCase, CamelModel
from tokiwa.domain.model.identity import Identity
from tokiwa.domain.service import IdentityResolver
from tokiwa.domain.value import AuthenticatedPrincipal, ProviderKind


class ProviderDetail(CamelModel):
    """One linked sign-in method."""

    provider: str
    email: str
    display_name: str
    is_linked: bool = True


def provider_ids(identity: Identity) -> list[str]:
    """Wire identifiers of linked kinds, in precedence order."""
    return [kind.provider_id for kind in identity.linked_kinds]


def provider_details(identity: Identity) -> list[ProviderDetail]:
    """One entry per binding, grouped by kind in precedence order."""
    return [
        ProviderDetail(
            provider=kind.provider_id,
            email=binding.email,
            display_name=kind.display_name,
        )
        for kind in ProviderKind.in_precedence_order()
        for binding in identity.bindings(kind)
    ]


class GetProvidersRequest(BaseModel):
    """Get providers request."""

    principal: AuthenticatedPrincipal


class GetProvidersResponse(CamelModel):
    """Linked provider identifiers."""

    providers: list[str]


class GetProviderDetailsResponse(CamelModel):
    """Linked providers with the email recorded for each."""

    providers: list[ProviderDetail]


class GetProvidersUseCase(BaseUseCase):
    """Use case for listing the caller's sign-in methods."""

    def __init__(self, identity_resolver: IdentityResolver) -> None:
        self.identity_resolver = identity_resolver

    async def execute(self, request: GetProvidersRequest) -> GetProvidersResponse:
        """List provider identifiers; an unknown identity has none."""
        identity = await self.identity_resolver.resolve_or_default(
            request.principal.uid
        )
        return GetProvidersResponse(providers=provider_ids(identity))

    async def execute_detail(
        self, request: GetProvidersRequest
    ) -> GetProviderDetailsResponse:
        """List providers with their recorded emails."""
        identity = await self.identity_resolver.resolve_or_default(
            request.principal.uid
        )
        return GetProviderDetailsResponse(providers=provider_details(identity))
