"""create order_sequences

Revision ID: 3f2a9c1d7b40
Revises:
Create Date: 2026-10-19
"""

from __future__ import annotations

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "3f2a9c1d7b40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

TABLE_NAME = "order_sequences"
CK_VALUE = "ck_order_sequence_value_nonneg"


def upgrade() -> None:
    op.create_table(
        TABLE_NAME,
        sa.Column("key", sa.String(length=160), primary_key=True),
        sa.Column("value", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("value >= 0", name=CK_VALUE),
    )


def downgrade() -> None:
    op.drop_table(TABLE_NAME)
