"""Create kv_store table backing the record store.

Revision ID: a7c3e1d2b4f6
Revises:
Create Date: 2026-10-18
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "a7c3e1d2b4f6"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    bind = op.get_bind()
    if sa.inspect(bind).has_table("kv_store"):
        return
    op.create_table(
        "kv_store",
        sa.Column("key", sa.String(512), primary_key=True),
        sa.Column("value", sa.JSON(), nullable=False),
    )
    if bind.dialect.name == "postgresql":
        # Prefix scans use LIKE 'prefix%'; text_pattern_ops makes that indexable.
        op.execute("CREATE INDEX IF NOT EXISTS idx_kv_store_key_prefix ON kv_store (key text_pattern_ops)")


def downgrade() -> None:
    op.execute("DROP INDEX IF EXISTS idx_kv_store_key_prefix")
    op.drop_table("kv_store")
