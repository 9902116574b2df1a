"""Identity domain model.

An identity is the unified per-user record. It merges every authentication
method the person has used into one document keyed by a stable uid.
"""

from pydantic import Field

from tokiwa.domain.model.common import DomainModel
from tokiwa.domain.value import ProviderKind

DEFAULT_USER_COLOR = "#3b82f6"


class ProviderBinding(DomainModel):
    """A credential attached to an identity.

    Attributes:
        provider_uid: User ID at the provider (password backend uid for password)
        email: Email the provider reported for this credential
    """

    provider_uid: str
    email: str = ""

    def matches(self, provider_uid: str, email: str) -> bool:
        """Whether this binding already records either of the given keys."""
        if provider_uid and self.provider_uid == provider_uid:
            return True
        return bool(email) and self.email == email


class Identity(DomainModel):
    """Unified user record.

    ``user_name`` and ``user_color`` are user-chosen and only change through
    an explicit profile update. ``version`` is the store's optimistic
    concurrency token; 0 means the identity has never been saved.
    """

    uid: str = Field(min_length=1)
    user_name: str = ""
    user_color: str = DEFAULT_USER_COLOR
    password: tuple[ProviderBinding, ...] = ()
    google: tuple[ProviderBinding, ...] = ()
    github: tuple[ProviderBinding, ...] = ()
    twitter: tuple[ProviderBinding, ...] = ()
    version: int = 0

    def bindings(self, kind: ProviderKind) -> tuple[ProviderBinding, ...]:
        """Bindings of one kind, in insertion order."""
        return getattr(self, kind.value)

    def with_bindings(
        self, kind: ProviderKind, bindings: tuple[ProviderBinding, ...]
    ) -> "Identity":
        return self.model_copy(update={kind.value: bindings})

    def has_binding(self, kind: ProviderKind, provider_uid: str, email: str) -> bool:
        return any(b.matches(provider_uid, email) for b in self.bindings(kind))

    @property
    def linked_kinds(self) -> list[ProviderKind]:
        """Kinds with at least one binding, in precedence order."""
        return [k for k in ProviderKind.in_precedence_order() if self.bindings(k)]

    @property
    def binding_count(self) -> int:
        return sum(len(self.bindings(k)) for k in ProviderKind)

    @property
    def is_persisted(self) -> bool:
        return self.version > 0

    def primary_email(self, kind: ProviderKind) -> str:
        """First non-empty email recorded for a kind, or empty string."""
        for binding in self.bindings(kind):
            if binding.email:
                return binding.email
        return ""
