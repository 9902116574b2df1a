"""Password backend infrastructure providers."""

from dishka import Scope, provide
import logfire

from tokiwa.adapter.password.client import RealPasswordAuthClient
from tokiwa.config import Settings
from tokiwa.domain.service import PasswordAuthClient
from tokiwa.util.di.base import ProviderBase
from tokiwa.util.error import ConfigurationError


class PasswordProvider(ProviderBase):
    """Password backend component base."""

    __mock_component__ = "password"


class ProdPasswordProvider(PasswordProvider):
    """Production password backend provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_password_auth_client(self, settings: Settings) -> PasswordAuthClient:
        """Provide password backend client.

        Raises:
            ConfigurationError: If no API key is configured outside development
        """
        api_key = settings.auth.password.api_key
        if not api_key:
            if settings.environment in ("staging", "production"):
                raise ConfigurationError(
                    "AUTH__PASSWORD__API_KEY must be configured"
                )
            logfire.warn("Password backend API key not configured")

        return RealPasswordAuthClient(
            api_key=api_key,
            base_url=settings.auth.password.base_url,
        )
