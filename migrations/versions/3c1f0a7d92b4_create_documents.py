"""create_documents

Create the document table that backs every entity store collection:
activities, join_requests, chats, messages and profiles.

Revision ID: 3c1f0a7d92b4
Revises:
Create Date: 2026-10-18 10:12:41.530214

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c1f0a7d92b4"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "documents",
        sa.Column("collection", sa.String(length=50), nullable=False),
        sa.Column("id", sa.String(length=255), nullable=False),
        sa.Column(
            "data",
            postgresql.JSONB(astext_type=sa.Text()),
            server_default=sa.text("'{}'::jsonb"),
            nullable=False,
        ),
        sa.Column(
            "created_at",
            postgresql.TIMESTAMP(timezone=True),
            server_default=sa.text("clock_timestamp()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("collection", "id", name="pk_documents"),
    )

    # Equality filters use JSONB containment (@>)
    op.create_index(
        "idx_documents_data",
        "documents",
        ["data"],
        postgresql_using="gin",
        postgresql_ops={"data": "jsonb_path_ops"},
    )
    # Ordered reads of a collection, e.g. chat messages
    op.create_index(
        "idx_documents_collection_created",
        "documents",
        ["collection", "created_at", "id"],
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("idx_documents_collection_created", table_name="documents")
    op.drop_index("idx_documents_data", table_name="documents")
    op.drop_table("documents")
