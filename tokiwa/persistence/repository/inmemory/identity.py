"""In-memory identity repository for testing."""

from typing import Optional

from tokiwa.domain.error import ConcurrentUpdateError
from tokiwa.domain.model.identity import Identity
from tokiwa.domain.repository.identity import IdentityRepository
from tokiwa.domain.value import ProviderKind


class InMemoryIdentityRepository(IdentityRepository):
    """In-memory implementation of IdentityRepository for testing.

    Dict insertion order stands in for creation order.
    """

    def __init__(self) -> None:
        self._identities: dict[str, Identity] = {}

    async def find_by_uid(self, uid: str) -> Optional[Identity]:
        """Find identity by uid."""
        return self._identities.get(uid)

    async def find_by_provider_uid(
        self, kind: ProviderKind, provider_uid: str
    ) -> Optional[Identity]:
        """Find identity by provider user ID."""
        for identity in self._identities.values():
            if any(b.provider_uid == provider_uid for b in identity.bindings(kind)):
                return identity
        return None

    async def find_by_binding_email(
        self, kind: ProviderKind, email: str
    ) -> Optional[Identity]:
        """Find identity by binding email."""
        for identity in self._identities.values():
            if any(b.email == email for b in identity.bindings(kind)):
                return identity
        return None

    async def save(self, identity: Identity) -> Identity:
        """Save identity if its version matches the stored one."""
        current = self._identities.get(identity.uid)
        current_version = current.version if current else 0
        if current_version != identity.version:
            raise ConcurrentUpdateError(identity.uid, identity.version)

        saved = identity.model_copy(update={"version": identity.version + 1})
        self._identities[identity.uid] = saved
        return saved

    async def delete(self, uid: str) -> bool:
        """Delete identity."""
        return self._identities.pop(uid, None) is not None
