"""SQLAlchemy table definitions.

They match the schema defined in Alembic migrations.
"""

from sqlalchemy import Column, Index, Integer, MetaData, String, Table, func
from sqlalchemy.dialects.postgresql import JSONB, TIMESTAMP

metadata = MetaData()

# One document per identity. Bindings live inside the JSONB document in the
# same shape clients have always read; version backs conditional writes.
identities_table = Table(
    "identities",
    metadata,
    Column("uid", String(255), primary_key=True),
    Column("document", JSONB, nullable=False),
    Column("version", Integer, nullable=False, server_default="1"),
    Column(
        "created_at",
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=func.now(),
    ),
    Column(
        "updated_at",
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=func.now(),
    ),
)

Index(
    "idx_identities_document",
    identities_table.c.document,
    postgresql_using="gin",
)
Index("idx_identities_created_at", identities_table.c.created_at)
