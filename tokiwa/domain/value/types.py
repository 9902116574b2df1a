"""Domain value objects for identity federation.

Value objects are immutable and defined by their values, not identity.
"""

import re
from enum import Enum

from pydantic import field_validator

from tokiwa.domain.value.common import RootValueObject, ValueObject

_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def normalize_email(email: str) -> str:
    """Trim and lowercase an email address for storage and lookup."""
    return email.strip().lower()


class ProviderKind(str, Enum):
    """Authentication method kinds an identity can be bound to.

    Declaration order is the email-search precedence.
    """

    PASSWORD = "password"
    GOOGLE = "google"
    GITHUB = "github"
    TWITTER = "twitter"

    @property
    def document_field(self) -> str:
        """Key holding this kind's bindings in the persisted document."""
        if self is ProviderKind.PASSWORD:
            return "email"
        return self.value

    @property
    def provider_id(self) -> str:
        """Identifier used for this kind on the wire."""
        if self is ProviderKind.PASSWORD:
            return "password"
        return f"{self.value}.com"

    @property
    def display_name(self) -> str:
        """Human-readable label."""
        return _DISPLAY_NAMES[self]

    @property
    def is_oauth(self) -> bool:
        return self is not ProviderKind.PASSWORD

    def derived_uid(self, provider_user_id: str) -> str:
        """Deterministic identity uid for a first login through this provider."""
        return f"{self.value}_{provider_user_id}"

    @classmethod
    def parse(cls, value: str) -> "ProviderKind":
        """Accept either the wire identifier ("google.com") or the short name.

        Raises:
            ValueError: If the value names no known provider
        """
        candidate = value.strip().lower()
        for kind in cls:
            if candidate in (kind.value, kind.provider_id):
                return kind
        raise ValueError(f"unknown provider: {value}")

    @classmethod
    def in_precedence_order(cls) -> tuple["ProviderKind", ...]:
        return tuple(cls)


_DISPLAY_NAMES = {
    ProviderKind.PASSWORD: "Email address",
    ProviderKind.GOOGLE: "Google",
    ProviderKind.GITHUB: "GitHub",
    ProviderKind.TWITTER: "Twitter",
}


class EmailAddress(RootValueObject[str]):
    """Normalized email address.

    Stored trimmed and lowercased so lookups across bindings agree.
    """

    @field_validator("root")
    @classmethod
    def validate_email(cls, v: str) -> str:
        """Normalize and check the basic shape of the address."""
        v = normalize_email(v)
        if not _EMAIL_PATTERN.match(v):
            raise ValueError("invalid email format")
        return v


class ProviderProfile(ValueObject):
    """Verified profile returned by a credential provider.

    Attributes:
        kind: Provider that verified the credential
        provider_user_id: Stable user ID at the provider
        email: Email reported by the provider (may be empty for Twitter)
        display_name: Provider display name, if any
        avatar_url: Provider avatar URL, if any
        email_verified: Whether the provider vouches for the email
    """

    kind: ProviderKind
    provider_user_id: str
    email: str = ""
    display_name: str | None = None
    avatar_url: str | None = None
    email_verified: bool = False


class PasswordAccount(ValueObject):
    """Account in the password backend."""

    uid: str
    email: str


class AuthenticatedPrincipal(ValueObject):
    """Caller identity established by a validated session token."""

    uid: str
    email: str
