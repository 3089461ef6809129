from logging.config import fileConfig

from sqlalchemy import create_engine
from sqlmodel import SQLModel

from alembic import context

import app.models  # noqa: F401  # registers every table on SQLModel.metadata
from app.config import settings

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)


def sync_database_url() -> str:
    """Alembic runs synchronously; swap async drivers for their sync counterparts."""
    if settings.DATABASE_URL_SYNC:
        return settings.DATABASE_URL_SYNC
    return (
        settings.DATABASE_URL.replace("+aiomysql", "+pymysql")
        .replace("+asyncmy", "+pymysql")
        .replace("+aiosqlite", "")
    )


config.set_main_option("sqlalchemy.url", sync_database_url())

target_metadata = SQLModel.metadata


def run_migrations_offline() -> None:
    url = config.get_main_option("sqlalchemy.url")
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    connectable = create_engine(config.get_main_option("sqlalchemy.url"))
    with connectable.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata)
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
