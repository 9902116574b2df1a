"""Identity repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from tokiwa.domain.model.identity import Identity
from tokiwa.domain.value import ProviderKind


class IdentityRepository(ABC):
    """Repository for Identity documents, one per uid.

    Writes are conditional on ``Identity.version`` so that concurrent
    read-modify-write cycles cannot silently overwrite each other.
    """

    @abstractmethod
    async def find_by_uid(self, uid: str) -> Optional[Identity]:
        """Find an identity by uid.

        Args:
            uid: The identity's stable identifier

        Returns:
            The identity if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_provider_uid(
        self, kind: ProviderKind, provider_uid: str
    ) -> Optional[Identity]:
        """Find the identity holding a binding with this provider user ID.

        Args:
            kind: Binding kind to search
            provider_uid: The user's ID at that provider

        Returns:
            The earliest-created matching identity, None if there is none
        """
        pass

    @abstractmethod
    async def find_by_binding_email(
        self, kind: ProviderKind, email: str
    ) -> Optional[Identity]:
        """Find the identity holding a binding of this kind with this email.

        Args:
            kind: Binding kind to search
            email: Normalized email address

        Returns:
            The earliest-created matching identity, None if there is none
        """
        pass

    @abstractmethod
    async def save(self, identity: Identity) -> Identity:
        """Write the whole identity document if its version is current.

        Version 0 inserts and requires that no document exists for the uid.
        Any other version updates and requires the stored version to match.

        Args:
            identity: Identity to persist, carrying the version it was read at

        Returns:
            The identity with its new version

        Raises:
            ConcurrentUpdateError: If the stored version differs
            StoreError: If the store is unavailable
        """
        pass

    @abstractmethod
    async def delete(self, uid: str) -> bool:
        """Delete an identity.

        Used by the cleanup process for abandoned accounts.

        Args:
            uid: The identity's stable identifier

        Returns:
            True if a document was removed
        """
        pass
