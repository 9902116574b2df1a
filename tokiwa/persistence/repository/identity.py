"""Identity repository implementation using PostgreSQL."""

from typing import Optional

import logfire
from sqlalchemy import func, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from tokiwa.domain.error import ConcurrentUpdateError, StoreError
from tokiwa.domain.model.identity import Identity
from tokiwa.domain.repository.identity import IdentityRepository
from tokiwa.domain.value import ProviderKind
from tokiwa.persistence.mappers import identity_to_document, row_to_identity
from tokiwa.persistence.tables import identities_table


class PostgresIdentityRepository(IdentityRepository):
    """PostgreSQL implementation of IdentityRepository.

    Binding lookups use JSONB containment against the GIN-indexed document
    column. Writes compare-and-swap on the version column inside a savepoint,
    so a lost race leaves the surrounding request transaction usable.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_uid(self, uid: str) -> Optional[Identity]:
        """Get identity by uid.

        Args:
            uid: Identity uid

        Returns:
            Identity if found, None otherwise
        """
        stmt = select(identities_table).where(identities_table.c.uid == uid)
        return await self._first(stmt)

    async def find_by_provider_uid(
        self, kind: ProviderKind, provider_uid: str
    ) -> Optional[Identity]:
        """Get identity whose bindings of ``kind`` include this provider user ID."""
        return await self._find_by_binding(kind, {"userUID": provider_uid})

    async def find_by_binding_email(
        self, kind: ProviderKind, email: str
    ) -> Optional[Identity]:
        """Get identity whose bindings of ``kind`` include this email."""
        return await self._find_by_binding(kind, {"emailAddress": email})

    async def save(self, identity: Identity) -> Identity:
        """Conditionally write the identity document.

        Args:
            identity: Identity carrying the version it was read at

        Returns:
            Identity with the incremented version

        Raises:
            ConcurrentUpdateError: If another writer got there first
            StoreError: On any database failure
        """
        document = identity_to_document(identity)
        new_version = identity.version + 1

        if identity.version == 0:
            stmt = (
                insert(identities_table)
                .values(uid=identity.uid, document=document, version=new_version)
                .on_conflict_do_nothing(index_elements=[identities_table.c.uid])
            )
        else:
            stmt = (
                identities_table.update()
                .where(
                    identities_table.c.uid == identity.uid,
                    identities_table.c.version == identity.version,
                )
                .values(document=document, version=new_version, updated_at=func.now())
            )

        try:
            async with self.session.begin_nested():
                result = await self.session.execute(stmt)
        except SQLAlchemyError as e:
            logfire.error("Identity write failed", uid=identity.uid, error=str(e))
            raise StoreError(f"failed to write identity {identity.uid}") from e

        if result.rowcount == 0:
            raise ConcurrentUpdateError(identity.uid, identity.version)

        return identity.model_copy(update={"version": new_version})

    async def delete(self, uid: str) -> bool:
        """Delete identity by uid.

        Args:
            uid: Identity uid

        Returns:
            True if a row was deleted
        """
        stmt = identities_table.delete().where(identities_table.c.uid == uid)
        try:
            async with self.session.begin_nested():
                result = await self.session.execute(stmt)
        except SQLAlchemyError as e:
            logfire.error("Identity delete failed", uid=uid, error=str(e))
            raise StoreError(f"failed to delete identity {uid}") from e
        return result.rowcount > 0

    async def _find_by_binding(
        self, kind: ProviderKind, entry: dict[str, str]
    ) -> Optional[Identity]:
        stmt = (
            select(identities_table)
            .where(identities_table.c.document.contains({kind.document_field: [entry]}))
            .order_by(identities_table.c.created_at, identities_table.c.uid)
            .limit(1)
        )
        return await self._first(stmt)

    async def _first(self, stmt) -> Optional[Identity]:
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as e:
            logfire.error("Identity read failed", error=str(e))
            raise StoreError("failed to read identity") from e

        row = result.mappings().first()
        if not row:
            return None

        return row_to_identity(dict(row))
