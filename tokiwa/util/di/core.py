"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from tokiwa.config import AuthSettings, ProfileSettings, Settings, StoreSettings
from tokiwa.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Settings and the sections that services depend on directly."""

    scope = Scope.APP

    @provide
    def provide_settings(self) -> Settings:
        """Load settings from the environment and .env file."""
        return Settings()

    @provide
    def provide_auth_settings(self, settings: Settings) -> AuthSettings:
        return settings.auth

    @provide
    def provide_store_settings(self, settings: Settings) -> StoreSettings:
        return settings.store

    @provide
    def provide_profile_settings(self, settings: Settings) -> ProfileSettings:
        return settings.profile
