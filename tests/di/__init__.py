"""Mock providers for testing."""

from .container import build_test_container
from .github import MockGitHubProvider
from .google import MockGoogleProvider
from .password import MockPasswordProvider
from .persistence import MockPersistenceProvider
from .twitter import MockTwitterProvider

__all__ = [
    "MockGitHubProvider",
    "MockGoogleProvider",
    "MockPasswordProvider",
    "MockPersistenceProvider",
    "MockTwitterProvider",
    "build_test_container",
]
