"""Twitter infrastructure providers."""

from dishka import Scope, provide

from tokiwa.adapter.twitter.client import (
    RealTwitterOAuthClient,
    TwitterOAuthClient,
)
from tokiwa.config import Settings
from tokiwa.util.di.base import ProviderBase


class TwitterProvider(ProviderBase):
    """Twitter component base."""

    __mock_component__ = "twitter"


class ProdTwitterProvider(TwitterProvider):
    """Production Twitter provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_twitter_oauth_client(self, settings: Settings) -> TwitterOAuthClient:
        """Provide Twitter OAuth 2.0 client."""
        return RealTwitterOAuthClient(
            client_id=settings.auth.twitter.client_id,
            client_secret=settings.auth.twitter.client_secret,
            default_code_verifier=settings.auth.twitter.default_code_verifier,
        )
