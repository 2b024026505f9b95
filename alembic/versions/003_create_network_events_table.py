"""Create network_events table

Revision ID: 003
Revises: 002
Create Date: 2025-01-10 00:10:00.000000

"""

from collections.abc import Sequence
from typing import Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "003"
down_revision: Union[str, None] = "002"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "network_events",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("msisdn_hash", sa.String(), nullable=False),
        sa.Column("event_type", sa.String(), nullable=False),
        sa.Column("payload", sa.JSON(), nullable=False),
        sa.Column("processed", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_network_events_msisdn_hash"),
        "network_events",
        ["msisdn_hash"],
        unique=False,
    )
    op.create_index(
        op.f("ix_network_events_processed"),
        "network_events",
        ["processed"],
        unique=False,
    )


def downgrade() -> None:
    op.drop_index(op.f("ix_network_events_processed"), table_name="network_events")
    op.drop_index(op.f("ix_network_events_msisdn_hash"), table_name="network_events")
    op.drop_table("network_events")
