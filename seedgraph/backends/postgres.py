"""PostgreSQL backend - fetch existing rows with psycopg."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any

from psycopg import Connection, sql
from psycopg.rows import dict_row

from seedgraph.exceptions import SeedGraphError

logger = logging.getLogger(__name__)


class TableNotFoundError(SeedGraphError):
    """Mapped table does not exist in schema."""

    def __init__(self, table: str, schema: str):
        super().__init__(
            f"Table '{table}' not found in schema '{schema}'.\n\n"
            f"Suggestions:\n"
            f"1. Check table name spelling in the tables mapping\n"
            f"2. Check the schema setting ([database] schema in seedgraph.toml)"
        )


class PostgresBackend:
    """
    Existing-data lookup backed by PostgreSQL.

    Each entity class is mapped to a table; rows are fetched as dicts and
    turned into entities with a row factory (default: entity_type(**row)).
    Types without a mapped table have no existing data.
    """

    def __init__(
        self,
        conn: Connection,
        tables: Mapping[type, str],
        schema: str = "public",
        row_factory: Callable[[type, dict[str, Any]], Any] | None = None,
    ):
        """
        Initialize backend.

        Args:
            conn: PostgreSQL connection
            tables: Entity class -> table name
            schema: Schema name for qualified table names
            row_factory: Builds an entity from (entity_type, row dict)

        Raises:
            TableNotFoundError: If a mapped table doesn't exist
        """
        self.conn = conn
        self.schema = schema
        self.tables = dict(tables)
        self.row_factory = row_factory or _construct

        self._validate_tables()

    def _validate_tables(self) -> None:
        """Validate that every mapped table exists in the schema."""
        with self.conn.cursor() as cur:
            for table in self.tables.values():
                cur.execute(
                    """
                    SELECT EXISTS(
                        SELECT 1 FROM information_schema.tables
                        WHERE table_schema = %s AND table_name = %s
                    )
                    """,
                    (self.schema, table),
                )
                exists = cur.fetchone()[0]
                if not exists:
                    raise TableNotFoundError(table, self.schema)

    def __call__(self, entity_type: type) -> list[Any]:
        """
        Fetch existing rows for an entity type.

        Args:
            entity_type: Entity class

        Returns:
            Entities built from every row of the mapped table
        """
        table = self.tables.get(entity_type)
        if table is None:
            return []

        query = sql.SQL("SELECT * FROM {}.{}").format(
            sql.Identifier(self.schema), sql.Identifier(table)
        )
        with self.conn.cursor(row_factory=dict_row) as cur:
            cur.execute(query)
            rows = cur.fetchall()

        logger.debug(f"Fetched {len(rows)} row(s) from {self.schema}.{table}")
        return [self.row_factory(entity_type, row) for row in rows]


def _construct(entity_type: type, row: dict[str, Any]) -> Any:
    return entity_type(**row)
