# alembic/env.py - Environment setup per migrations Sector Logbook
from logging.config import fileConfig
from sqlalchemy import engine_from_config, pool
from alembic import context

from sectorlog.config import get_database_url
from sectorlog.models import BaseModel

# Metadata dei models per autogenerate; le migration restano scritte a mano
target_metadata = BaseModel.metadata

# Configurazione Alembic
config = context.config

# Setup logging se alembic.ini presente
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode."""
    url = get_database_url()
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        compare_type=True,
        compare_server_default=True,
        render_as_batch=url.startswith("sqlite"),
    )

    with context.begin_transaction():
        context.run_migrations()

def run_migrations_online() -> None:
    """Run migrations in 'online' mode."""
    # Override della connection string da environment
    configuration = config.get_section(config.config_ini_section) or {}
    configuration["sqlalchemy.url"] = get_database_url()

    connectable = engine_from_config(
        configuration,
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            compare_type=True,
            compare_server_default=True,
            render_as_batch=connection.dialect.name == "sqlite",
        )

        with context.begin_transaction():
            context.run_migrations()

# Esecuzione migrations
if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
