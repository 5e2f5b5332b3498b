import sys
from logging.config import fileConfig
from pathlib import Path

from alembic import context
from sqlalchemy import engine_from_config, pool
from sqlmodel import SQLModel

# Put the project root on sys.path for healthvault.* imports
BASE_DIR = Path(__file__).resolve().parents[1]
if str(BASE_DIR) not in sys.path:
    sys.path.append(str(BASE_DIR))

from healthvault import models  # noqa: E402,F401
from healthvault.core.config import settings  # noqa: E402
from healthvault.core.database import normalized_database_url  # noqa: E402

DATABASE_URL = normalized_database_url(settings.database_url)

# Alembic Config object; comes from alembic.ini
config = context.config

# Override sqlalchemy.url with the application's DATABASE_URL
if config.get_main_option("sqlalchemy.url") != str(DATABASE_URL):
    config.set_main_option("sqlalchemy.url", str(DATABASE_URL))

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# Target metadata: every SQLModel table
target_metadata = SQLModel.metadata


def run_migrations_offline() -> None:
    """'offline' mode: emits SQL without creating an engine."""
    url = config.get_main_option("sqlalchemy.url")
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        compare_type=True,
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """'online' mode: runs migrations over a real database connection."""
    connectable = engine_from_config(
        config.get_section(config.config_ini_section),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            compare_type=True,
            render_as_batch=connection.dialect.name == "sqlite",
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
