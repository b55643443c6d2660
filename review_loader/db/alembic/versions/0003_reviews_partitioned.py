"""Hash-partitioned copy of reviews

This migration creates:
1. reviews_partitioned, hash-partitioned on product_id
2. N partitions reviews_partitioned_p0..p{N-1} (N from config, default 4)
3. a copy of every row already in reviews

The original reviews table is left in place.

Revision ID: 0003_reviews_partitioned
Revises: 0002_reviews_indexes
Create Date: 2025-10-25
"""
from alembic import context, op

from review_loader.db.migrations import partition_count, partition_name

revision = '0003_reviews_partitioned'
down_revision = '0002_reviews_indexes'
branch_labels = None
depends_on = None


def upgrade():
    partitions = partition_count(context.config)

    # the partition key has to be part of the primary key
    op.execute("""
        CREATE TABLE reviews_partitioned (
            id          SERIAL,
            product_id  INTEGER NOT NULL,
            user_id     INTEGER NOT NULL,
            rating      INTEGER NOT NULL,
            comment     TEXT,
            created_at  TIMESTAMP DEFAULT now(),
            PRIMARY KEY (id, product_id)
        ) PARTITION BY HASH (product_id)
    """)

    for i in range(partitions):
        op.execute(f"""
            CREATE TABLE {partition_name(i)} PARTITION OF reviews_partitioned
            FOR VALUES WITH (MODULUS {partitions}, REMAINDER {i})
        """)

    op.execute("""
        INSERT INTO reviews_partitioned
            (id, product_id, user_id, rating, comment, created_at)
        SELECT id, product_id, user_id, rating, comment, created_at
        FROM reviews
    """)

    # keep the id sequence ahead of the copied ids
    op.execute("""
        SELECT setval(
            pg_get_serial_sequence('reviews_partitioned', 'id'),
            COALESCE((SELECT MAX(id) FROM reviews_partitioned), 0) + 1,
            false
        )
    """)


def downgrade():
    for i in range(partition_count(context.config)):
        op.execute(f"DROP TABLE IF EXISTS {partition_name(i)}")
    op.execute("DROP TABLE IF EXISTS reviews_partitioned")
