"""Application layer DI providers."""

from dishka import Scope, provide

from tokiwa.application.usecase.account import (
    GetProvidersUseCase,
    LinkAccountUseCase,
    UnlinkAccountUseCase,
)
from tokiwa.application.usecase.auth import (
    OAuthLoginUseCase,
    PasswordLoginUseCase,
    SignupUseCase,
)
from tokiwa.application.usecase.user import (
    GetUserDataUseCase,
    GetUserProfileUseCase,
    UpdateUserProfileUseCase,
)
from tokiwa.config import AuthSettings
from tokiwa.domain.service import (
    AccountLinker,
    AuthService,
    IdentityResolver,
    SessionService,
)
from tokiwa.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Application use cases provider - concrete, no mocks needed."""

    scope = Scope.REQUEST

    # Auth use cases
    @provide
    def get_oauth_login_use_case(
        self,
        auth_service: AuthService,
        identity_resolver: IdentityResolver,
        account_linker: AccountLinker,
        session_service: SessionService,
    ) -> OAuthLoginUseCase:
        """Provide OAuth login use case."""
        return OAuthLoginUseCase(
            auth_service=auth_service,
            identity_resolver=identity_resolver,
            account_linker=account_linker,
            session_service=session_service,
        )

    @provide
    def get_password_login_use_case(
        self,
        auth_service: AuthService,
        identity_resolver: IdentityResolver,
        account_linker: AccountLinker,
        session_service: SessionService,
    ) -> PasswordLoginUseCase:
        """Provide password login use case."""
        return PasswordLoginUseCase(
            auth_service=auth_service,
            identity_resolver=identity_resolver,
            account_linker=account_linker,
            session_service=session_service,
        )

    @provide
    def get_signup_use_case(
        self,
        auth_service: AuthService,
        identity_resolver: IdentityResolver,
        account_linker: AccountLinker,
        auth_settings: AuthSettings,
    ) -> SignupUseCase:
        """Provide signup use case."""
        return SignupUseCase(
            auth_service=auth_service,
            identity_resolver=identity_resolver,
            account_linker=account_linker,
            min_password_length=auth_settings.password.min_length,
        )

    # Account use cases
    @provide
    def get_link_account_use_case(
        self,
        auth_service: AuthService,
        identity_resolver: IdentityResolver,
        account_linker: AccountLinker,
        auth_settings: AuthSettings,
    ) -> LinkAccountUseCase:
        """Provide link account use case."""
        return LinkAccountUseCase(
            auth_service=auth_service,
            identity_resolver=identity_resolver,
            account_linker=account_linker,
            auth_settings=auth_settings,
        )

    @provide
    def get_unlink_account_use_case(
        self, identity_resolver: IdentityResolver, account_linker: AccountLinker
    ) -> UnlinkAccountUseCase:
        """Provide unlink account use case."""
        return UnlinkAccountUseCase(
            identity_resolver=identity_resolver, account_linker=account_linker
        )

    @provide
    def get_providers_use_case(
        self, identity_resolver: IdentityResolver
    ) -> GetProvidersUseCase:
        """Provide provider listing use case."""
        return GetProvidersUseCase(identity_resolver=identity_resolver)

    # User use cases
    @provide
    def get_user_profile_use_case(
        self, identity_resolver: IdentityResolver
    ) -> GetUserProfileUseCase:
        """Provide get user profile use case."""
        return GetUserProfileUseCase(identity_resolver=identity_resolver)

    @provide
    def get_user_data_use_case(
        self, identity_resolver: IdentityResolver
    ) -> GetUserDataUseCase:
        """Provide get user data use case."""
        return GetUserDataUseCase(identity_resolver=identity_resolver)

    @provide
    def get_update_user_profile_use_case(
        self, identity_resolver: IdentityResolver, account_linker: AccountLinker
    ) -> UpdateUserProfileUseCase:
        """Provide update user profile use case."""
        return UpdateUserProfileUseCase(
            identity_resolver=identity_resolver, account_linker=account_linker
        )
