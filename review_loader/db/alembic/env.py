from alembic import context
from sqlalchemy import create_engine, pool

from review_loader.core.config import settings
from review_loader.db.migrations import sqlalchemy_url

config = context.config


def get_url() -> str:
    return (config.get_main_option("sqlalchemy.url")
            or sqlalchemy_url(settings.pg_dsn))


def run_migrations_offline() -> None:
    """Emit the SQL instead of running it (alembic ... --sql)."""
    context.configure(
        url=get_url(),
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        transaction_per_migration=True,
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    engine = create_engine(get_url(), poolclass=pool.NullPool)
    with engine.connect() as connection:
        context.configure(
            connection=connection,
            transaction_per_migration=True,
        )
        with context.begin_transaction():
            context.run_migrations()
    engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
