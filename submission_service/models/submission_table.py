"""
SQLAlchemy table definition for submissions.

The table name and schema come from configuration, so the table is built
per store from a ``MetaData`` it owns rather than declared once on a
module-level base.
"""

from typing import Optional

from sqlalchemy import Column, Integer, MetaData, String, Table, Text, TIMESTAMP
from sqlalchemy.sql import func

DEFAULT_TABLE_NAME = "submissions"

TITLE_COLUMN_LENGTH = 255


def build_submissions_table(
    metadata: MetaData,
    table_name: str = DEFAULT_TABLE_NAME,
    schema: Optional[str] = None,
) -> Table:
    """
    Define the submissions table on ``metadata``.

    Columns:
        id (int): Primary key, assigned by the database.
        title (str): Trimmed submission title.
        description (str): Trimmed submission description.
        author (str): Trimmed author name. Unbounded, since author names have no length limit.
        created_at (datetime): Insert timestamp (defaults to NOW()).
    """
    return Table(
        table_name,
        metadata,
        Column("id", Integer, primary_key=True, autoincrement=True, comment="Unique identifier of the submission."),
        Column("title", String(TITLE_COLUMN_LENGTH), nullable=False, comment="Submission title."),
        Column("description", Text, nullable=False, comment="Submission description."),
        Column("author", Text, nullable=False, comment="Author name."),
        Column("created_at", TIMESTAMP(timezone=True), nullable=False, server_default=func.now(), comment="Timestamp of insert."),
        schema=schema,
    )
