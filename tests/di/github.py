"""Mock GitHub providers for testing."""

from dishka import Scope, provide

from tokiwa.adapter.github.client import GitHubOAuthClient, MockGitHubOAuthClient
from tokiwa.util.di.infrastructure.github import GitHubProvider


class MockGitHubProvider(GitHubProvider):
    """Mock GitHub provider using mock OAuth client."""

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_github_oauth_client(self) -> GitHubOAuthClient:
        """Provide mock GitHub OAuth client."""
        return MockGitHubOAuthClient()
