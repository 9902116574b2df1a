"""Link account use case."""

import logfire
from pydantic import BaseModel, Field

from tokiwa.application.usecase.base import BaseUseCase, CamelModel
from tokiwa.config import AuthSettings
from tokiwa.domain.error import NotSupportedError, ValidationError
from tokiwa.domain.service import AccountLinker, AuthService, IdentityResolver
from tokiwa.domain.value import AuthenticatedPrincipal, ProviderKind, normalize_email


class LinkAccountRequest(BaseModel):
    """Link a provider to the caller's identity.

    ``credential`` is the provider's OAuth authorization code.
    """

    principal: AuthenticatedPrincipal
    provider: ProviderKind
    credential: str = Field(min_length=1)
    redirect_uri: str | None = None
    code_verifier: str | None = None


class AccountChangeResponse(CamelModel):
    """Outcome of a link or unlink."""

    success: bool = True


class LinkAccountUseCase(BaseUseCase):
    """Use case for attaching another sign-in method to an identity."""

    def __init__(
        self,
        auth_service: AuthService,
        identity_resolver: IdentityResolver,
        account_linker: AccountLinker,
        auth_settings: AuthSettings,
    ) -> None:
        """Initialize link account use case.

        Args:
            auth_service: Authentication domain service
            identity_resolver: Identity lookup service
            account_linker: Binding mutation service
            auth_settings: Provides default redirect URIs per provider
        """
        self.auth_service = auth_service
        self.identity_resolver = identity_resolver
        self.account_linker = account_linker
        self.auth_settings = auth_settings

    async def execute(self, request: LinkAccountRequest) -> AccountChangeResponse:
        """Verify the provider credential and attach it.

        An email the provider does not vouch for is not recorded on the
        binding, so it can never be matched by email lookup.

        Raises:
            NotSupportedError: For password, which is only bound at signup
            ValidationError: If no redirect URI is available
            NotFoundError: If the caller's identity does not exist
            ConflictError: If the credential belongs to another identity
        """
        kind = request.provider
        if not kind.is_oauth:
            raise NotSupportedError("linking a password account is not supported")

        redirect_uri = request.redirect_uri or self._default_redirect_uri(kind)
        if not redirect_uri:
            raise ValidationError("redirect_uri is required", field="redirect_uri")

        with logfire.span(
            "link_account.execute", uid=request.principal.uid, kind=kind.value
        ):
            profile = await self.auth_service.authenticate_oauth(
                kind, request.credential, redirect_uri, request.code_verifier
            )
            email = normalize_email(profile.email) if profile.email_verified else ""

            identity = await self.identity_resolver.resolve_or_default(
                request.principal.uid
            )
            await self.account_linker.link_provider(
                identity.uid, kind, profile.provider_user_id, email
            )
            return AccountChangeResponse()

    def _default_redirect_uri(self, kind: ProviderKind) -> str:
        return getattr(self.auth_settings, kind.value).redirect_uri
