"""Add single-column indexes to reviews

Revision ID: 0002_reviews_indexes
Revises: 0001_reviews
Create Date: 2025-10-25
"""
from alembic import op

revision = '0002_reviews_indexes'
down_revision = '0001_reviews'
branch_labels = None
depends_on = None

INDEXES = (
    ("idx_reviews_product_id", "product_id"),
    ("idx_reviews_user_id", "user_id"),
    ("idx_reviews_rating", "rating"),
)


def upgrade():
    for name, column in INDEXES:
        op.execute(f"CREATE INDEX {name} ON reviews ({column})")


def downgrade():
    for name, _ in INDEXES:
        op.execute(f"DROP INDEX IF EXISTS {name}")
