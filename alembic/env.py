"""Alembic environment configuration.

Reads the database URL from attendance.config and registers all models
so autogenerate can detect schema changes.
"""
from logging.config import fileConfig
from sqlalchemy import engine_from_config, pool
from alembic import context

from attendance.config import settings
from attendance.database import Base

# Import all models so they register with Base.metadata
from attendance.models.user import User                          # noqa: F401
from attendance.models.coordinator import Coordinator            # noqa: F401
from attendance.models.event import Event                        # noqa: F401
from attendance.models.day_keyword import DayKeyword             # noqa: F401
from attendance.models.enrollment import Enrollment              # noqa: F401
from attendance.models.attendance_record import AttendanceRecord  # noqa: F401
from attendance.models.certificate import Certificate            # noqa: F401

config = context.config
config.set_main_option("sqlalchemy.url", settings.DATABASE_URL)

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode."""
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
    """Run migrations in 'online' mode."""
    connectable = engine_from_config(
        config.get_section(config.config_ini_section, {}),
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
