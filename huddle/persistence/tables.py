"""SQLAlchemy table definitions for Huddle.

Every collection of the entity store lives in a single JSONB documents
table. They match the schema defined in Alembic migrations.
"""

from sqlalchemy import Column, Index, MetaData, PrimaryKeyConstraint, String, Table, text
from sqlalchemy.dialects.postgresql import JSONB, TIMESTAMP

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# DOCUMENTS TABLE
# ============================================================================
documents_table = Table(
    "documents",
    metadata,
    Column("collection", String(50), nullable=False),
    Column("id", String(255), nullable=False),
    Column("data", JSONB, nullable=False, server_default=text("'{}'::jsonb")),
    Column(
        "created_at",
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=text("clock_timestamp()"),
    ),
    PrimaryKeyConstraint("collection", "id", name="pk_documents"),
)

# Equality filters are evaluated with JSONB containment (@>)
Index(
    "idx_documents_data",
    documents_table.c.data,
    postgresql_using="gin",
    postgresql_ops={"data": "jsonb_path_ops"},
)
Index(
    "idx_documents_collection_created",
    documents_table.c.collection,
    documents_table.c.created_at,
    documents_table.c.id,
)
