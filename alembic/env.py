from logging.config import fileConfig
from sqlalchemy.engine import Connection
from alembic import context
import asyncio

# Import SQLModel and the table models
from sqlmodel import SQLModel
from todolist_api.core.config import get_settings
from todolist_api.database import create_engine
from todolist_api.models import Todo, TodoList  # noqa: F401

config = context.config

# Connection settings come from the service (.env / environment), not alembic.ini
url = get_settings().sqlalchemy_url()
if not isinstance(url, str):
    url = url.render_as_string(hide_password=False)

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = SQLModel.metadata


def run_migrations_offline() -> None:
    """Emit the SQL for the lists/tasks schema without a connection."""
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection: Connection) -> None:
    context.configure(
        connection=connection,
        target_metadata=target_metadata,
        # SQLite cannot ALTER constraints in place
        render_as_batch=connection.dialect.name == "sqlite",
    )

    with context.begin_transaction():
        context.run_migrations()


async def run_async_migrations() -> None:
    # Same engine setup as the service, so SQLite gets its foreign key pragma
    engine = create_engine(url)

    async with engine.connect() as connection:
        await connection.run_sync(do_run_migrations)

    await engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_async_migrations())
