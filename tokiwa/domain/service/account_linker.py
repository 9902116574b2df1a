"""Account linking domain service."""

from typing import Callable

import logfire

from tokiwa.domain.error import (
    ConcurrentUpdateError,
    ConflictError,
    NotFoundError,
    RejectedError,
    ValidationError,
)
from tokiwa.domain.model.identity import Identity, ProviderBinding
from tokiwa.domain.repository.identity import IdentityRepository
from tokiwa.domain.value import ProviderKind, normalize_email
from tokiwa.util.logging import mask_email

from .base import Service
from .identity_resolver import IdentityResolver


class AccountLinker(Service):
    """Attaches and detaches provider bindings and edits profile fields.

    Every mutation is a read-modify-write against the store: fetch the
    current document, apply the change in memory, then save conditionally
    on the version that was read. A lost race is retried from a fresh read
    up to ``max_write_attempts`` times. No other store error is retried.

    Profile fields (``user_name``, ``user_color``) are only touched by
    :meth:`update_profile`.
    """

    def __init__(
        self,
        identity_repository: IdentityRepository,
        identity_resolver: IdentityResolver,
        max_write_attempts: int = 3,
    ) -> None:
        """Initialize account linker.

        Args:
            identity_repository: Identity store
            identity_resolver: Resolver used for defaults and ownership checks
            max_write_attempts: Attempts per mutation before a version
                conflict is surfaced
        """
        self.identity_repository = identity_repository
        self.identity_resolver = identity_resolver
        self.max_write_attempts = max_write_attempts

    @staticmethod
    def add_binding(
        identity: Identity, kind: ProviderKind, provider_uid: str, email: str
    ) -> Identity:
        """Append a binding unless one already matches.

        A binding matching on provider uid OR email makes this a no-op, so
        retried requests never produce duplicates. Nothing is persisted.

        Args:
            identity: Identity to extend
            kind: Binding kind
            provider_uid: User ID at the provider
            email: Email reported by the provider

        Returns:
            The same identity if already bound, otherwise an updated copy
        """
        email = normalize_email(email)
        if identity.has_binding(kind, provider_uid, email):
            return identity

        binding = ProviderBinding(provider_uid=provider_uid, email=email)
        return identity.with_bindings(kind, identity.bindings(kind) + (binding,))

    @staticmethod
    def remove_bindings(identity: Identity, kind: ProviderKind) -> Identity:
        """Drop every binding of one kind.

        Raises:
            NotFoundError: If the identity has no binding of this kind
            RejectedError: If nothing would remain to sign in with
        """
        existing = identity.bindings(kind)
        if not existing:
            raise NotFoundError("Provider binding", f"{identity.uid}:{kind.value}")
        if identity.binding_count - len(existing) == 0:
            raise RejectedError("cannot remove the last authentication method")
        return identity.with_bindings(kind, ())

    async def link_provider(
        self, target_uid: str, kind: ProviderKind, provider_uid: str, email: str
    ) -> Identity:
        """Attach a verified provider credential to an existing identity.

        Args:
            target_uid: Identity to link into
            kind: Provider kind
            provider_uid: User ID at the provider
            email: Email reported by the provider

        Returns:
            The persisted identity

        Raises:
            NotFoundError: If the target identity does not exist
            ConflictError: If the credential belongs to a different identity
            StoreError: If the store fails or the write keeps losing races
        """
        email = normalize_email(email)
        with logfire.span(
            "account_linker.link_provider", uid=target_uid, kind=kind.value
        ):
            await self._ensure_unowned(target_uid, kind, provider_uid, email)

            identity = await self._apply(
                target_uid,
                lambda current: self.add_binding(current, kind, provider_uid, email),
                create_if_missing=False,
            )
            logfire.info(
                "Provider linked",
                uid=target_uid,
                kind=kind.value,
                email=mask_email(email),
            )
            return identity

    async def unlink_provider(self, uid: str, kind: ProviderKind) -> Identity:
        """Remove all bindings of one kind from an identity.

        Args:
            uid: Identity uid
            kind: Provider kind to remove

        Returns:
            The persisted identity

        Raises:
            NotFoundError: If the identity or the binding does not exist
            RejectedError: If it is the identity's last authentication method
            StoreError: If the store fails or the write keeps losing races
        """
        with logfire.span("account_linker.unlink_provider", uid=uid, kind=kind.value):
            identity = await self._apply(
                uid,
                lambda current: self.remove_bindings(current, kind),
                create_if_missing=False,
            )
            logfire.info("Provider unlinked", uid=uid, kind=kind.value)
            return identity

    async def update_profile(
        self, uid: str, user_name: str, user_color: str
    ) -> Identity:
        """Overwrite the user-chosen display name and color.

        Creates the identity with no bindings if it has no record yet.

        Raises:
            ValidationError: If either field is empty
            StoreError: If the store fails or the write keeps losing races
        """
        user_name = user_name.strip()
        user_color = user_color.strip()
        if not user_name:
            raise ValidationError("userName is required", field="userName")
        if not user_color:
            raise ValidationError("userColor is required", field="userColor")

        with logfire.span("account_linker.update_profile", uid=uid):
            return await self._apply(
                uid,
                lambda current: current.model_copy(
                    update={"user_name": user_name, "user_color": user_color}
                ),
                create_if_missing=True,
            )

    async def merge_login(
        self, uid: str, kind: ProviderKind, provider_uid: str, email: str
    ) -> Identity:
        """Record the credential a login used, creating the identity if needed.

        Args:
            uid: Identity uid chosen by resolution
            kind: Provider kind used to log in
            provider_uid: User ID at the provider
            email: Email reported by the provider

        Returns:
            The persisted identity

        Raises:
            StoreError: If the store fails or the write keeps losing races
        """
        with logfire.span("account_linker.merge_login", uid=uid, kind=kind.value):
            return await self._apply(
                uid,
                lambda current: self.add_binding(current, kind, provider_uid, email),
                create_if_missing=True,
            )

    async def _ensure_unowned(
        self, target_uid: str, kind: ProviderKind, provider_uid: str, email: str
    ) -> None:
        owners = [
            await self.identity_repository.find_by_provider_uid(kind, provider_uid)
        ]
        if email:
            owners.append(
                await self.identity_repository.find_by_binding_email(kind, email)
            )

        for owner in owners:
            if owner and owner.uid != target_uid:
                logfire.warn(
                    "Provider already linked to another identity",
                    uid=target_uid,
                    owner_uid=owner.uid,
                    kind=kind.value,
                )
                raise ConflictError(
                    f"this {kind.display_name} account is linked to another user"
                )

    async def _apply(
        self,
        uid: str,
        change: Callable[[Identity], Identity],
        create_if_missing: bool,
    ) -> Identity:
        for attempt in range(1, self.max_write_attempts + 1):
            current = await self.identity_repository.find_by_uid(uid)
            if current is None:
                if not create_if_missing:
                    raise NotFoundError("Identity", uid)
                current = self.identity_resolver.default_identity(uid)

            updated = change(current)
            if current.is_persisted and updated == current:
                return current

            try:
                return await self.identity_repository.save(updated)
            except ConcurrentUpdateError:
                logfire.warn(
                    "Identity write conflict",
                    uid=uid,
                    attempt=attempt,
                    max_attempts=self.max_write_attempts,
                )
                if attempt == self.max_write_attempts:
                    raise

        raise AssertionError("unreachable")
