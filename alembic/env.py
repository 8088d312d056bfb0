"""Alembic environment for the payments database."""
from __future__ import annotations

import os
from logging.config import fileConfig

from alembic import context
from sqlalchemy import engine_from_config, pool

from app.config import get_settings
from app.models import Base

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name, disable_existing_loggers=False)

target_metadata = Base.metadata


def database_url() -> str:
    """DATABASE_URL wins over alembic.ini, which wins over the settings default."""

    return (
        os.getenv("DATABASE_URL")
        or config.get_main_option("sqlalchemy.url")
        or get_settings().database_url
    )


def _context_options() -> dict:
    # SQLite cannot ALTER most things in place; batch mode rebuilds the table.
    return {
        "target_metadata": target_metadata,
        "render_as_batch": True,
        "compare_type": True,
    }


def run_migrations_offline() -> None:
    context.configure(url=database_url(), literal_binds=True, **_context_options())
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    section = config.get_section(config.config_ini_section) or {}
    section["sqlalchemy.url"] = database_url()
    connectable = engine_from_config(section, prefix="sqlalchemy.", poolclass=pool.NullPool)

    with connectable.connect() as connection:
        context.configure(connection=connection, **_context_options())
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
