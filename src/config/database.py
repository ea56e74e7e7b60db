import contextlib
from collections.abc import AsyncIterator

from alembic import command, config
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from src.config.settings import settings


def create_engine(url: str) -> AsyncEngine:
    url = str(url)
    if "sqlite" in url:
        return create_async_engine(url, echo=settings.LOG_DB, connect_args={"timeout": 15})
    # Postgres connections are long-lived, drop the ones the server closed
    return create_async_engine(url, echo=settings.LOG_DB, pool_pre_ping=True)


engine = create_engine(settings.database_url)

async_session_maker = async_sessionmaker(engine, expire_on_commit=False)


def run_upgrade(connection, cfg: config.Config) -> None:
    cfg.attributes["connection"] = connection
    command.upgrade(cfg, "head")


async def upgrade_database() -> None:
    """Apply pending alembic migrations over the app engine."""
    async with engine.begin() as conn:
        await conn.run_sync(run_upgrade, config.Config("alembic.ini"))


@contextlib.asynccontextmanager
async def async_session_manager(
    auto_commit=True, session_overwrite: AsyncSession | None = None
) -> AsyncIterator[AsyncSession]:
    """
    Yield a session that commits on success and rolls back on error.
    A session_overwrite is yielded untouched so tests can share one session
    across models and own its lifecycle.
    """
    if session_overwrite:
        yield session_overwrite
    else:
        async with async_session_maker() as session:
            try:
                yield session
            except Exception as e:
                await session.rollback()
                raise e
            else:
                if auto_commit:
                    await session.commit()
