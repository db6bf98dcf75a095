from sqlalchemy.ext.asyncio import create_async_engine, AsyncEngine, AsyncConnection
from typing import AsyncGenerator
from contextlib import asynccontextmanager


def build_async_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    """Create the async engine (and its connection pool) for a database URL."""
    options = {"echo": echo, "pool_pre_ping": True}
    if not database_url.startswith("sqlite"):
        options["pool_recycle"] = 3600
    return create_async_engine(database_url, **options)


@asynccontextmanager
async def connection_scope(engine: AsyncEngine) -> AsyncGenerator[AsyncConnection, None]:
    """
    Provides a pooled connection inside a transaction.

    The transaction is committed on successful exit and rolled back on error,
    and the connection goes back to the pool on every exit path.
    """
    async with engine.connect() as connection:
        try:
            yield connection
            await connection.commit()
        except Exception:
            await connection.rollback()
            raise
