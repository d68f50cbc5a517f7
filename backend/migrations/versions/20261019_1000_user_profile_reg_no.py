"""user profile registration number

Revision ID: 8b4e6d2c1a57
Revises: 3f1c2a9b7d10
Create Date: 2026-10-19 10:00:00
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

revision: str = "8b4e6d2c1a57"
down_revision: Union[str, None] = "3f1c2a9b7d10"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.add_column("user_profile", sa.Column("reg_no", sa.String(length=64), nullable=True))


def downgrade() -> None:
    with op.batch_alter_table("user_profile") as batch_op:
        batch_op.drop_column("reg_no")
