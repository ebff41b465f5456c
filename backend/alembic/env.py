# backend/alembic/env.py
import os
import sys
from logging.config import fileConfig

from alembic import context

# Make the backend modules importable when alembic runs from backend/
sys.path.insert(0, os.path.realpath(os.path.join(os.path.dirname(__file__), "..")))

from database import SQLALCHEMY_DATABASE_URL, engine, load_models  # noqa: E402

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# Storefront tables: users, products, product_reviews, cart_items, orders, order_items, logs
target_metadata = load_models()


def run_migrations_offline() -> None:
    """Emit the migration SQL for DATABASE_URL without connecting."""
    context.configure(
        url=SQLALCHEMY_DATABASE_URL,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        render_as_batch=SQLALCHEMY_DATABASE_URL.startswith("sqlite"),
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Migrate through the application's own engine."""
    with engine.connect() as connection:
        # SQLite needs batch mode to alter tables in later revisions
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            render_as_batch=connection.dialect.name == "sqlite",
        )
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
