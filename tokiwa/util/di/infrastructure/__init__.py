"""Infrastructure providers."""

# Import bases
from .github import GitHubProvider
from .google import GoogleProvider
from .oauth import OAuthAggregatorProvider
from .password import PasswordProvider
from .persistence import PersistenceProvider
from .twitter import TwitterProvider

# Import implementations (needed for __subclasses__())
from .github import ProdGitHubProvider  # noqa: F401
from .google import ProdGoogleProvider  # noqa: F401
from .password import ProdPasswordProvider  # noqa: F401
from .persistence import ProdPersistenceProvider  # noqa: F401
from .twitter import ProdTwitterProvider  # noqa: F401

__all__ = [
    "GitHubProvider",
    "GoogleProvider",
    "OAuthAggregatorProvider",
    "PasswordProvider",
    "PersistenceProvider",
    "ProdGitHubProvider",
    "ProdGoogleProvider",
    "ProdPasswordProvider",
    "ProdPersistenceProvider",
    "ProdTwitterProvider",
    "TwitterProvider",
]
