"""PostgreSQL repository implementations."""

from tokiwa.persistence.repository.identity import PostgresIdentityRepository

__all__ = [
    "PostgresIdentityRepository",
]
