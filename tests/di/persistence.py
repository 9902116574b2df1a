"""Mock persistence providers for testing."""

from dishka import Scope, provide

from tokiwa.domain.repository import IdentityRepository
from tokiwa.persistence.repository.inmemory import InMemoryIdentityRepository
from tokiwa.util.di.infrastructure.persistence import PersistenceProvider


class MockPersistenceProvider(PersistenceProvider):
    """Mock persistence provider using an in-memory repository.

    APP scope, so state survives across requests served by one container
    (e2e flows log in, then read). Each test builds its own container,
    which keeps tests isolated.
    """

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_identity_repository(self) -> IdentityRepository:
        """Provide in-memory identity repository."""
        return InMemoryIdentityRepository()
