from logging.config import fileConfig
import os
from sqlalchemy import engine_from_config
from sqlalchemy import pool
from alembic import context

# this is the Alembic Config object, which provides
# access to the values within the .ini file in use.
config = context.config

# Interpret the config file for Python logging.
if config.config_file_name is not None:
    fileConfig(config.config_file_name, disable_existing_loggers=False)

# add your model's MetaData object here
# for 'autogenerate' support
import sys
sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))
from portfolio_tracker.config import DATABASE_URL, sync_database_url
from portfolio_tracker.database import Base
from portfolio_tracker.models.price_model import Price  # noqa: F401

target_metadata = Base.metadata

# Override sqlalchemy.url from environment (DATABASE_URL), falling back to the
# package default. Alembic runs on the sync drivers, so strip +aiosqlite/+asyncpg.
database_url = os.getenv("DATABASE_URL") or DATABASE_URL
config.set_main_option("sqlalchemy.url", sync_database_url(database_url))


def run_migrations_offline():
    url = config.get_main_option("sqlalchemy.url")
    context.configure(url=url, target_metadata=target_metadata, literal_binds=True)

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online():
    connectable = engine_from_config(
        config.get_section(config.config_ini_section),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata)

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
