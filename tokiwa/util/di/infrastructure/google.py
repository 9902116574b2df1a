"""Google infrastructure providers."""

from dishka import Scope, provide

from tokiwa.adapter.google.client import GoogleOAuthClient, RealGoogleOAuthClient
from tokiwa.config import Settings
from tokiwa.util.di.base import ProviderBase


class GoogleProvider(ProviderBase):
    """Google component base."""

    __mock_component__ = "google"


class ProdGoogleProvider(GoogleProvider):
    """Production Google provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_google_oauth_client(self, settings: Settings) -> GoogleOAuthClient:
        """Provide Google OAuth client."""
        return RealGoogleOAuthClient(
            client_id=settings.auth.google.client_id,
            client_secret=settings.auth.google.client_secret,
        )
