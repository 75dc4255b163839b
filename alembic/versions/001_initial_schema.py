"""Initial claim registry schema.

One JSONB document table per entity kind, plus unique expression indexes
on the natural keys.

Revision ID: 001
Revises:
Create Date: 2025-07-02

"""

from collections.abc import Sequence

import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

TABLES: tuple[str, ...] = (
    "claims",
    "agencies",
    "coverages",
    "involved_cars",
    "involved_parties",
    "involved_policies",
    "affected_coverages",
)

# table -> JSONB key that must be unique
NATURAL_KEYS: dict[str, str] = {
    "claims": "claim_number",
    "agencies": "code",
    "coverages": "code",
}


def upgrade() -> None:
    """Create the document tables."""
    for table in TABLES:
        op.create_table(
            table,
            sa.Column(
                "id",
                postgresql.UUID(as_uuid=True),
                nullable=False,
                server_default=sa.text("gen_random_uuid()"),
            ),
            sa.Column(
                "data",
                postgresql.JSONB(astext_type=sa.Text()),
                nullable=False,
                server_default=sa.text("'{}'::jsonb"),
            ),
            sa.Column(
                "created_at",
                sa.DateTime(timezone=True),
                nullable=False,
                server_default=sa.text("CURRENT_TIMESTAMP"),
            ),
            sa.Column(
                "updated_at",
                sa.DateTime(timezone=True),
                nullable=False,
                server_default=sa.text("CURRENT_TIMESTAMP"),
            ),
            sa.PrimaryKeyConstraint("id", name=op.f(f"pk_{table}")),
        )

        # GIN index on JSONB data for containment queries
        op.create_index(
            f"ix_{table}_data_gin",
            table,
            ["data"],
            unique=False,
            postgresql_using="gin",
        )

    for table, key in NATURAL_KEYS.items():
        op.create_index(
            f"uq_{table}_{key}",
            table,
            [sa.text(f"(data->>'{key}')")],
            unique=True,
        )

    # Shared records are looked up by their business identifier
    op.create_index(
        "ix_involved_cars_good_uid",
        "involved_cars",
        [sa.text("(data->>'good_uid')")],
    )
    op.create_index(
        "ix_involved_policies_good_uid",
        "involved_policies",
        [sa.text("(data->>'good_uid')")],
    )
    op.create_index(
        "ix_involved_parties_party_uid",
        "involved_parties",
        [sa.text("(data->>'party_uid')")],
    )


def downgrade() -> None:
    """Drop the document tables."""
    for table in reversed(TABLES):
        op.drop_table(table)
