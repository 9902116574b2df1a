"""Identity lookup domain service."""

import logfire

from tokiwa.domain.error import NotFoundError
from tokiwa.domain.model.identity import Identity
from tokiwa.domain.repository.identity import IdentityRepository
from tokiwa.domain.value import ProviderKind, normalize_email
from tokiwa.util.logging import mask_email

from .base import Service


class IdentityResolver(Service):
    """Finds identities by uid, by provider user ID, or by email."""

    def __init__(
        self, identity_repository: IdentityRepository, default_user_color: str
    ) -> None:
        """Initialize identity resolver.

        Args:
            identity_repository: Identity store
            default_user_color: Color given to identities that have no record yet
        """
        self.identity_repository = identity_repository
        self.default_user_color = default_user_color

    async def resolve_by_uid(self, uid: str) -> Identity:
        """Point lookup by uid.

        Raises:
            NotFoundError: If no identity has this uid
        """
        identity = await self.identity_repository.find_by_uid(uid)
        if not identity:
            raise NotFoundError("Identity", uid)
        return identity

    async def resolve_by_provider_uid(
        self, kind: ProviderKind, provider_uid: str
    ) -> Identity:
        """Find the identity holding a binding with this provider user ID.

        Raises:
            NotFoundError: If no identity holds such a binding
        """
        identity = await self.identity_repository.find_by_provider_uid(
            kind, provider_uid
        )
        if not identity:
            raise NotFoundError("Identity", f"{kind.value}:{provider_uid}")
        return identity

    async def resolve_by_email(self, email: str) -> Identity:
        """Find an identity by email across all binding kinds.

        Kinds are probed in precedence order (password, google, github,
        twitter) and the first hit wins, so the result does not depend on
        the order bindings were added.

        Args:
            email: Email address, normalized before lookup

        Returns:
            First identity found

        Raises:
            NotFoundError: If no binding of any kind has this email
        """
        email = normalize_email(email)
        if not email:
            raise NotFoundError("Identity", "<empty email>")

        with logfire.span("identity_resolver.resolve_by_email"):
            for kind in ProviderKind.in_precedence_order():
                identity = await self.identity_repository.find_by_binding_email(
                    kind, email
                )
                if identity:
                    logfire.info(
                        "Identity resolved by email",
                        uid=identity.uid,
                        kind=kind.value,
                        email=mask_email(email),
                    )
                    return identity

            raise NotFoundError("Identity", mask_email(email))

    async def resolve_or_default(self, uid: str) -> Identity:
        """Identity for a session uid, or a fresh unsaved one.

        Falls back to provider-uid lookup when no document is keyed by
        ``uid``, since a password backend uid may be bound to an identity
        that was first created through OAuth.

        Returns:
            Stored identity, or ``Identity(uid=uid)`` with default profile
            fields and no bindings
        """
        identity = await self.identity_repository.find_by_uid(uid)
        if identity:
            return identity

        for kind in ProviderKind.in_precedence_order():
            identity = await self.identity_repository.find_by_provider_uid(kind, uid)
            if identity:
                return identity

        return self.default_identity(uid)

    def default_identity(self, uid: str) -> Identity:
        return Identity(uid=uid, user_color=self.default_user_color)
