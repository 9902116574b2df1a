"""Infrastructure layer errors."""

from tokiwa.domain.error import DomainError


class AdapterError(DomainError):
    """Base infrastructure error."""

    pass


class ProviderError(AdapterError):
    """External provider error.

    Raised for transport failures and unexpected responses. Rejected
    credentials are reported as ``InvalidCredentialsError`` instead.
    """

    def __init__(self, provider: str, message: str):
        self.provider = provider
        super().__init__(f"{provider}: {message}")
