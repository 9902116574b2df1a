"""OAuth infrastructure provider for multi-provider authentication."""

from dishka import Scope, provide
import logfire

from tokiwa.adapter.github.client import GitHubOAuthClient
from tokiwa.adapter.google.client import GoogleOAuthClient
from tokiwa.adapter.twitter.client import TwitterOAuthClient
from tokiwa.domain.service import OAuthClient
from tokiwa.domain.value import ProviderKind
from tokiwa.util.di.base import ProviderBase


class OAuthAggregatorProvider(ProviderBase):
    """Provider that aggregates all OAuth clients into a dictionary."""

    scope = Scope.APP

    @provide(scope=Scope.APP)
    def get_oauth_clients(
        self,
        google_oauth_client: GoogleOAuthClient,
        github_oauth_client: GitHubOAuthClient,
        twitter_oauth_client: TwitterOAuthClient,
    ) -> dict[ProviderKind, OAuthClient]:
        """Provide dictionary of configured OAuth clients by provider.

        Providers without client credentials are left out, so requests for
        them are answered as unsupported rather than failing upstream.

        Returns:
            Dictionary mapping ProviderKind to OAuthClient
        """
        clients: dict[ProviderKind, OAuthClient] = {}
        for client in (google_oauth_client, github_oauth_client, twitter_oauth_client):
            if client.configured:
                clients[client.kind] = client
            else:
                logfire.warn("OAuth provider not configured", kind=client.kind.value)
        return clients
