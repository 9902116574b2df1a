"""OAuth login use case."""

import logfire
from pydantic import BaseModel, Field

from tokiwa.application.usecase.base import BaseUseCase
from tokiwa.domain.error import (
    InvalidCredentialsError,
    NotFoundError,
    StoreError,
    ValidationError,
)
from tokiwa.domain.service import (
    AccountLinker,
    AuthService,
    IdentityResolver,
    SessionService,
)
from tokiwa.domain.value import (
    AuthenticatedPrincipal,
    ProviderKind,
    ProviderProfile,
    normalize_email,
)

from .session import SessionResponse


class OAuthLoginRequest(BaseModel):
    """OAuth login request.

    ``principal`` is the caller's validated session, present only when the
    request carried a bearer token.
    """

    provider: ProviderKind
    code: str = Field(min_length=1)
    redirect_uri: str = Field(min_length=1)
    code_verifier: str | None = None
    link_uid: str | None = None
    principal: AuthenticatedPrincipal | None = None


class OAuthLoginUseCase(BaseUseCase):
    """Use case for logging in, or linking, through an OAuth provider."""

    def __init__(
        self,
        auth_service: AuthService,
        identity_resolver: IdentityResolver,
        account_linker: AccountLinker,
        session_service: SessionService,
    ) -> None:
        """Initialize OAuth login use case.

        Args:
            auth_service: Authentication domain service (handles all providers)
            identity_resolver: Identity lookup service
            account_linker: Binding and profile mutation service
            session_service: Session token service
        """
        self.auth_service = auth_service
        self.identity_resolver = identity_resolver
        self.account_linker = account_linker
        self.session_service = session_service

    async def execute(self, request: OAuthLoginRequest) -> SessionResponse:
        """Execute OAuth login flow.

        Steps:
        1. Exchange the code and fetch the provider profile
        2. Require a verified email
        3. With ``link_uid``: attach the provider to that identity (strict)
        4. Otherwise: resolve the identity by provider uid, then email, then
           the provider-derived uid, and merge the binding (best effort)
        5. Mint a session for the resolved uid

        Args:
            request: Login request with provider code

        Returns:
            Session for the resolved identity

        Raises:
            ValidationError: If the provider gives no verified email
            AuthError: If the code is rejected, or ``link_uid`` does not
                match the caller's session
            ConflictError: If linking a credential owned by another identity
            NotFoundError: If the link target does not exist
        """
        kind = request.provider
        if not kind.is_oauth:
            raise ValidationError("provider must be an OAuth provider", field="provider")

        with logfire.span("oauth_login.execute", kind=kind.value):
            profile = await self.auth_service.authenticate_oauth(
                kind, request.code, request.redirect_uri, request.code_verifier
            )
            email = self._verified_email(profile)

            if request.link_uid:
                uid = await self._link(request, profile, email)
            else:
                uid = await self._resolve_uid(profile, email)
                try:
                    await self.account_linker.merge_login(
                        uid, kind, profile.provider_user_id, email
                    )
                except StoreError as e:
                    # The provider already vouched for the caller
                    logfire.error(
                        "Identity merge failed after OAuth login",
                        uid=uid,
                        kind=kind.value,
                        error=str(e),
                    )

            token = self.session_service.mint(uid, email)
            logfire.info("OAuth login succeeded", uid=uid, kind=kind.value)
            return SessionResponse(uid=uid, email=email, session_token=token)

    @staticmethod
    def _verified_email(profile: ProviderProfile) -> str:
        email = normalize_email(profile.email)
        name = profile.kind.display_name
        if not email:
            raise ValidationError(
                f"{name} did not provide an email address", field="email"
            )
        if not profile.email_verified:
            raise ValidationError(
                f"{name} email address is not verified", field="email"
            )
        return email

    async def _link(
        self, request: OAuthLoginRequest, profile: ProviderProfile, email: str
    ) -> str:
        principal = request.principal
        if principal is None or principal.uid != request.link_uid:
            raise InvalidCredentialsError("session does not match linkUID")

        target = await self.identity_resolver.resolve_by_uid(request.link_uid)
        identity = await self.account_linker.link_provider(
            target.uid, profile.kind, profile.provider_user_id, email
        )
        return identity.uid

    async def _resolve_uid(self, profile: ProviderProfile, email: str) -> str:
        try:
            identity = await self.identity_resolver.resolve_by_provider_uid(
                profile.kind, profile.provider_user_id
            )
            return identity.uid
        except NotFoundError:
            pass

        try:
            identity = await self.identity_resolver.resolve_by_email(email)
            return identity.uid
        except NotFoundError:
            pass

        return profile.kind.derived_uid(profile.provider_user_id)
