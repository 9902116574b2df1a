"""create_identities

Create the identity store: one JSONB document per identity holding the
profile fields and the bindings for each sign-in method, plus a version
counter for conditional writes.

Revision ID: 3f1c9a7d2b64
Revises:
Create Date: 2026-10-19 10:12:44.518203

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3f1c9a7d2b64"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "identities",
        sa.Column("uid", sa.String(length=255), nullable=False),
        sa.Column("document", postgresql.JSONB(), nullable=False),
        sa.Column(
            "version", sa.Integer(), server_default=sa.text("1"), nullable=False
        ),
        sa.Column(
            "created_at",
            postgresql.TIMESTAMP(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            postgresql.TIMESTAMP(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("uid"),
    )

    # Containment lookups (document @> '{"google": [{"userUID": ...}]}')
    op.create_index(
        "idx_identities_document",
        "identities",
        ["document"],
        postgresql_using="gin",
    )
    op.create_index("idx_identities_created_at", "identities", ["created_at"])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("idx_identities_created_at", table_name="identities")
    op.drop_index("idx_identities_document", table_name="identities")
    op.drop_table("identities")
