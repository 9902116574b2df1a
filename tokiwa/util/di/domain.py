"""Domain layer DI providers."""

from dishka import Scope, provide

from tokiwa.config import AuthSettings, ProfileSettings, StoreSettings
from tokiwa.domain.repository import IdentityRepository
from tokiwa.domain.service import (
    AccountLinker,
    AuthService,
    IdentityResolver,
    OAuthClient,
    PasswordAuthClient,
    SessionService,
)
from tokiwa.domain.value import ProviderKind
from tokiwa.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Domain services provider - concrete, no mocks needed.

    Services touching the store are REQUEST-scoped to share the request's
    database session. Stateless services live for the whole app.
    """

    scope = Scope.REQUEST

    @provide(scope=Scope.APP)
    def get_session_service(self, auth_settings: AuthSettings) -> SessionService:
        """Provide session token domain service."""
        return SessionService(auth_settings=auth_settings)

    @provide(scope=Scope.APP)
    def get_auth_service(
        self,
        oauth_clients: dict[ProviderKind, OAuthClient],
        password_client: PasswordAuthClient,
    ) -> AuthService:
        """Provide multi-provider authentication domain service.

        Args:
            oauth_clients: Dictionary mapping providers to their OAuth clients
            password_client: Password backend client

        Returns:
            AuthService configured with all available credential providers
        """
        return AuthService(oauth_clients=oauth_clients, password_client=password_client)

    @provide
    def get_identity_resolver(
        self,
        identity_repository: IdentityRepository,
        profile_settings: ProfileSettings,
    ) -> IdentityResolver:
        """Provide identity lookup domain service."""
        return IdentityResolver(
            identity_repository=identity_repository,
            default_user_color=profile_settings.default_user_color,
        )

    @provide
    def get_account_linker(
        self,
        identity_repository: IdentityRepository,
        identity_resolver: IdentityResolver,
        store_settings: StoreSettings,
    ) -> AccountLinker:
        """Provide account linking domain service."""
        return AccountLinker(
            identity_repository=identity_repository,
            identity_resolver=identity_resolver,
            max_write_attempts=store_settings.max_write_attempts,
        )
