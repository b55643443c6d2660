"""Create reviews table

Revision ID: 0001_reviews
Revises: None (first migration)
Create Date: 2025-10-25
"""
from alembic import op

revision = '0001_reviews'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.execute("""
        CREATE TABLE reviews (
            id          SERIAL PRIMARY KEY,
            product_id  INTEGER NOT NULL,
            user_id     INTEGER NOT NULL,
            rating      INTEGER NOT NULL,
            comment     TEXT,
            created_at  TIMESTAMP DEFAULT now()
        )
    """)


def downgrade():
    op.execute("DROP TABLE IF EXISTS reviews")
