"""Mock password backend providers for testing."""

from dishka import Scope, provide

from tokiwa.adapter.password.client import MockPasswordAuthClient
from tokiwa.domain.service import PasswordAuthClient
from tokiwa.util.di.infrastructure.password import PasswordProvider


class MockPasswordProvider(PasswordProvider):
    """Mock password provider using the in-memory backend."""

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_password_auth_client(self) -> PasswordAuthClient:
        """Provide in-memory password backend."""
        return MockPasswordAuthClient()
