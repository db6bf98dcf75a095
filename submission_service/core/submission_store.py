"""
Submission store component for the Submission service.

The store owns the submissions table and the engine used to reach it. It
is configured explicitly through ``StoreConfig``; nothing here reads the
process-wide settings.
"""
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional, Protocol

from sqlalchemy import MetaData, insert, inspect
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from submission_service.config.settings import Settings
from submission_service.core.exceptions import StorageError
from submission_service.models.dtos import StoredSubmission, SubmissionRecord
from submission_service.models.submission_table import DEFAULT_TABLE_NAME, build_submissions_table
from submission_service.utils.db_session import build_async_engine, connection_scope

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoreConfig:
    """Connection and table configuration for a submission store."""

    database_url: str
    table_name: str = DEFAULT_TABLE_NAME
    schema: Optional[str] = None
    echo: bool = False

    @classmethod
    def from_settings(cls, settings: Settings) -> "StoreConfig":
        return cls(
            database_url=settings.DATABASE_URL,
            table_name=settings.SUBMISSIONS_TABLE_NAME,
            schema=settings.DB_SCHEMA,
            echo=settings.DEBUG,
        )


class SubmissionStore(Protocol):
    """
    A protocol that defines the interface for submission persistence.

    Any implementation can be handed to the request handler as long as
    ``insert`` is atomic per call and assigns unique, increasing ids.
    """

    async def ensure_schema(self) -> None:
        """
        Create the submissions table if it does not exist yet.

        Idempotent; safe to call on every request.

        Raises:
            StorageError: If the schema cannot be checked or created.
        """
        ...

    async def insert(self, record: SubmissionRecord) -> StoredSubmission:
        """
        Persist one validated submission.

        Returns:
            The stored row, including its generated id and creation timestamp.

        Raises:
            StorageError: If the row could not be written.
        """
        ...


class SQLAlchemySubmissionStore:
    """Submission store backed by an async SQLAlchemy engine (PostgreSQL in production)."""

    def __init__(self, config: StoreConfig, engine: Optional[AsyncEngine] = None):
        """
        Initializes the store.

        Args:
            config: Connection and table configuration.
            engine: An optional pre-built engine. If None, one is created from
                    ``config.database_url``.
        """
        self._config = config
        self._engine = engine if engine is not None else build_async_engine(config.database_url, echo=config.echo)
        self._metadata = MetaData()
        self._table = build_submissions_table(self._metadata, config.table_name, config.schema)

    @property
    def engine(self) -> AsyncEngine:
        return self._engine

    @property
    def table(self):
        return self._table

    async def ensure_schema(self) -> None:
        try:
            async with connection_scope(self._engine) as conn:
                await conn.run_sync(self._metadata.create_all, checkfirst=True)
        except SQLAlchemyError as e:
            # create_all checks then creates; another request may have created the table in between
            if await self._table_exists():
                logger.info(f"Table '{self._table.fullname}' was created concurrently: {e}")
                return
            logger.error(f"Database error while ensuring table '{self._table.fullname}': {e}", exc_info=True)
            raise StorageError("Database operation failed", original=e) from e

    async def _table_exists(self) -> bool:
        try:
            async with connection_scope(self._engine) as conn:
                return await conn.run_sync(
                    lambda sync_conn: inspect(sync_conn).has_table(self._table.name, schema=self._table.schema)
                )
        except SQLAlchemyError:
            logger.debug(f"Could not check whether '{self._table.fullname}' exists", exc_info=True)
            return False

    async def insert(self, record: SubmissionRecord) -> StoredSubmission:
        created_at = datetime.now(timezone.utc)
        stmt = insert(self._table).values(
            title=record.title,
            description=record.description,
            author=record.author,
            created_at=created_at,
        )
        try:
            async with connection_scope(self._engine) as conn:
                result = await conn.execute(stmt)
                new_id = result.inserted_primary_key[0]
        except SQLAlchemyError as e:
            logger.error(f"Database error while inserting submission into '{self._table.fullname}': {e}", exc_info=True)
            raise StorageError("Database operation failed", original=e) from e

        logger.debug(f"Inserted submission id={new_id} into '{self._table.fullname}'")
        return StoredSubmission(
            id=new_id,
            title=record.title,
            description=record.description,
            author=record.author,
            created_at=created_at,
        )

    async def close(self) -> None:
        """Dispose of the engine and its connection pool."""
        await self._engine.dispose()
