"""Unit tests for PasswordLoginUseCase."""

import pytest

from tokiwa.application.usecase.auth import PasswordLoginRequest, PasswordLoginUseCase
from tokiwa.domain.error import (
    AccountDisabledError,
    InvalidCredentialsError,
    RateLimitedError,
    StoreError,
    ValidationError,
)
from tokiwa.domain.model.identity import Identity, ProviderBinding
from tokiwa.domain.repository import IdentityRepository
from tokiwa.domain.service import PasswordAuthClient, SessionService
from tokiwa.domain.value import EmailAddress, ProviderKind
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


def credentials(email: str = "mock@example.com", password: str = "MockPassw0rd"):
    return PasswordLoginRequest(email=EmailAddress(email), password=password)


class TestPasswordLogin:
    """Tests for PasswordLoginUseCase."""

    @pytest.mark.asyncio
    async def test_login_issues_session_and_records_binding(self, unit_env):
        # Arrange
        use_case = await unit_env.get(PasswordLoginUseCase)
        repo = await unit_env.get(IdentityRepository)
        session_service = await unit_env.get(SessionService)

        # Act
        response = await use_case.execute(credentials())

        # Assert
        assert response.uid == "mockpassworduid"
        assert session_service.validate(response.session_token).uid == (
            "mockpassworduid"
        )
        identity = await repo.find_by_uid("mockpassworduid")
        assert identity.password == (
            ProviderBinding(provider_uid="mockpassworduid", email="mock@example.com"),
        )

    @pytest.mark.asyncio
    async def test_password_uid_bound_elsewhere_resolves_to_owner(self, unit_env):
        # Arrange
        use_case = await unit_env.get(PasswordLoginUseCase)
        repo = await unit_env.get(IdentityRepository)
        await repo.save(
            Identity(
                uid="google_42",
                password=(
                    ProviderBinding(
                        provider_uid="mockpassworduid", email="mock@example.com"
                    ),
                ),
            )
        )

        # Act
        response = await use_case.execute(credentials())

        # Assert
        assert response.uid == "google_42"
        assert await repo.find_by_uid("mockpassworduid") is None

    @pytest.mark.asyncio
    async def test_wrong_password_is_invalid_credentials(self, unit_env):
        use_case = await unit_env.get(PasswordLoginUseCase)

        with pytest.raises(InvalidCredentialsError):
            await use_case.execute(credentials(password="nope"))

    @pytest.mark.asyncio
    async def test_empty_password_is_validation_error(self, unit_env):
        use_case = await unit_env.get(PasswordLoginUseCase)

        with pytest.raises(ValidationError):
            await use_case.execute(credentials(password=""))

    @pytest.mark.asyncio
    async def test_disabled_and_throttled_accounts(self, unit_env):
        use_case = await unit_env.get(PasswordLoginUseCase)
        backend = await unit_env.get(PasswordAuthClient)
        backend.add_account("off@x.io", "Secret123")
        backend.disabled.add("off@x.io")
        backend.throttled.add("mock@example.com")

        with pytest.raises(AccountDisabledError):
            await use_case.execute(credentials("off@x.io", "Secret123"))
        with pytest.raises(RateLimitedError):
            await use_case.execute(credentials())

    @pytest.mark.asyncio
    async def test_store_failure_does_not_block_login(self, unit_env):
        # Arrange
        use_case = await unit_env.get(PasswordLoginUseCase)
        repo = await unit_env.get(IdentityRepository)

        async def failing_find(uid):
            raise StoreError("database unavailable")

        repo.find_by_uid = failing_find

        # Act
        response = await use_case.execute(credentials())

        # Assert
        assert response.uid == "mockpassworduid"
        assert response.email == "mock@example.com"

    @pytest.mark.asyncio
    async def test_repeat_login_is_idempotent(self, unit_env):
        use_case = await unit_env.get(PasswordLoginUseCase)
        repo = await unit_env.get(IdentityRepository)

        await use_case.execute(credentials())
        await use_case.execute(credentials())

        identity = await repo.find_by_uid("mockpassworduid")
        assert len(identity.bindings(ProviderKind.PASSWORD)) == 1
        assert identity.version == 1
