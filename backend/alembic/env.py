import os
import sys
from logging.config import fileConfig

from sqlalchemy import pool
from alembic import context

# Make the backend modules importable when alembic runs from this folder
sys.path.insert(0, os.path.realpath(os.path.join(os.path.dirname(__file__), '..')))

from database import Base, SQLALCHEMY_DATABASE_URL, make_engine
import models  # noqa: F401


config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# Storefront tables registered by the models package
target_metadata = Base.metadata


def run_migrations_offline() -> None:
    """Emit the migration SQL for the configured database URL."""
    context.configure(
        url=SQLALCHEMY_DATABASE_URL,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Migrate the live database using the application's engine setup."""
    # NullPool: migrations are one-off, no point keeping connections around
    connectable = make_engine(SQLALCHEMY_DATABASE_URL, poolclass=pool.NullPool)

    with connectable.connect() as connection:
        # SQLite cannot ALTER constraints in place; batch mode recreates tables instead
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            render_as_batch=connection.dialect.name == "sqlite",
            compare_type=True,
        )

        with context.begin_transaction():
            context.run_migrations()

    connectable.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
