"""Indexes on reviews_partitioned

An index created on the partitioned parent is created on every partition.

Revision ID: 0004_partitioned_indexes
Revises: 0003_reviews_partitioned
Create Date: 2025-10-25
"""
from alembic import op

revision = '0004_partitioned_indexes'
down_revision = '0003_reviews_partitioned'
branch_labels = None
depends_on = None

INDEXES = (
    ("idx_reviews_partitioned_product_rating", "product_id, rating"),
    ("idx_reviews_partitioned_product", "product_id"),
)


def upgrade():
    for name, columns in INDEXES:
        op.execute(f"CREATE INDEX {name} ON reviews_partitioned ({columns})")


def downgrade():
    for name, _ in INDEXES:
        op.execute(f"DROP INDEX IF EXISTS {name}")
