"""Account linking use cases."""

from .get_providers import GetProvidersUseCase
from .link_account import LinkAccountUseCase
from .unlink_account import UnlinkAccountUseCase

__all__ = ["GetProvidersUseCase", "LinkAccountUseCase", "UnlinkAccountUseCase"]
