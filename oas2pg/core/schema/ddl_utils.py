# ============================================================================
# DDL UTILITIES
# ============================================================================
# STATUS: Core - DRY utilities for SQL DDL generation
# PURPOSE: Type mapping, identifier handling, enum/drop statement builders
# CREATED: 19 OCT 2026
# EXPORTS: TYPE_MAP, TEXTUAL_TYPES, get_postgres_type, identifier,
#          TypeBuilder, DropBuilder, SchemaUtils
# DEPENDENCIES: psycopg
# ============================================================================
"""
DDL Utilities - Shared SQL Generation Patterns.

Builders return psycopg.sql.Composed objects; SchemaUtils.render() turns a
list of them into the final semicolon-terminated script. Names are emitted
bare unless they collide with a PostgreSQL reserved word or contain
characters outside [A-Za-z0-9_$], in which case they become quoted
identifiers.

Usage:
    from oas2pg.core.schema.ddl_utils import TypeBuilder, SchemaUtils

    stmt = TypeBuilder.enum("order_status", ["pending", "shipped"])
    print(SchemaUtils.render([stmt]))
    # CREATE TYPE order_status AS ENUM ('pending', 'shipped');
"""

import re
from types import MappingProxyType
from typing import Iterable, List, Mapping, Optional, Sequence, Tuple

from psycopg import sql

from oas2pg.core.schema.naming import is_reserved_word


# ============================================================================
# TYPE MAPPING
# ============================================================================

# (OpenAPI type, OpenAPI format) -> PostgreSQL type. Format "" = not given.
TYPE_MAP: Mapping[Tuple[str, str], str] = MappingProxyType({
    ("integer", ""): "INTEGER",
    ("integer", "int32"): "INTEGER",
    ("integer", "int64"): "BIGINT",
    ("boolean", ""): "BOOLEAN",
    ("number", ""): "NUMERIC",
    ("number", "float"): "REAL",
    ("number", "double"): "DOUBLE PRECISION",
    ("file", ""): "BYTEA",
    ("string", ""): "TEXT",
    ("string", "byte"): "BYTEA",
    ("string", "binary"): "BYTEA",
    ("string", "date"): "DATE",
    ("string", "date-time"): "TIMESTAMP",
    ("string", "time"): "TIME",
    ("string", "uuid"): "UUID",
    ("string", "email"): "TEXT",
    ("string", "uri"): "TEXT",
    ("string", "hostname"): "TEXT",
    ("string", "password"): "TEXT",
    ("string", "enum"): "TEXT",
    ("string", "ipv4"): "INET",
    ("string", "ipv6"): "INET",
    ("array", ""): "JSON",
    ("object", ""): "JSON",
})

# Types whose DEFAULT value is emitted as a quoted literal
TEXTUAL_TYPES = frozenset({"TEXT", "VARCHAR"})

SERIAL_PRIMARY_KEY_TYPE = "BIGSERIAL"
TIMESTAMP_TYPE = "TIMESTAMP"
FOREIGN_KEY_TYPE = "INTEGER"
CURRENT_TIME_DEFAULT = "NOW()"

# Names PostgreSQL accepts unquoted; camelCase stays bare
_PLAIN_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_$]*\Z")


def get_postgres_type(data_type: str, data_format: str = "") -> Optional[str]:
    """
    Map an OpenAPI (type, format) pair to a PostgreSQL type.

    Args:
        data_type: OpenAPI type tag (integer, string, ...)
        data_format: OpenAPI format tag, "" when absent

    Returns:
        PostgreSQL type string, or None when the pair is unmapped
    """
    return TYPE_MAP.get((data_type, data_format or ""))


def identifier(name: str) -> sql.Composable:
    """
    Bare name, or a quoted identifier when the name is a reserved word or
    is not a plain SQL name (e.g. `first-name`, `2fa`).
    """
    if is_reserved_word(name) or not _PLAIN_NAME.match(name):
        return sql.Identifier(name)
    return sql.SQL(name)


def quote_text(value: str) -> str:
    """Single-quote a string for use inside a raw SQL fragment."""
    return "'" + value.replace("'", "''") + "'"


def literal(value: str) -> sql.SQL:
    """String literal as a plain quoted fragment (never the E'...' form)."""
    return sql.SQL(quote_text(value))


# ============================================================================
# TYPE BUILDER
# ============================================================================

class TypeBuilder:
    """
    Builder for PostgreSQL enumerated type DDL statements.
    """

    @staticmethod
    def enum(name: str, values: Sequence[str]) -> sql.Composed:
        """
        CREATE TYPE <name> AS ENUM ('a', 'b').

        Callers guarantee at least one value.
        """
        values_sql = sql.SQL(", ").join(literal(v) for v in values)
        return sql.SQL("CREATE TYPE {} AS ENUM ({})").format(
            identifier(name),
            values_sql,
        )

    @staticmethod
    def drop(name: str) -> sql.Composed:
        return sql.SQL("DROP TYPE IF EXISTS {} CASCADE").format(identifier(name))


# ============================================================================
# DROP BUILDER
# ============================================================================

class DropBuilder:
    """
    Builder for destructive DROP statements (deletion-first mode).
    """

    @staticmethod
    def table(name: str) -> sql.Composed:
        return sql.SQL("DROP TABLE IF EXISTS {} CASCADE").format(identifier(name))


# ============================================================================
# SCHEMA UTILITIES
# ============================================================================

class SchemaUtils:
    """
    Utility methods for turning composed statements into script text.
    """

    @staticmethod
    def as_text(statement: sql.Composable) -> str:
        """Render one statement without a database connection."""
        return statement.as_string(None)

    @staticmethod
    def render(statements: Iterable[sql.Composable]) -> str:
        """
        Render statements one per line, each terminated by a semicolon.
        """
        lines: List[str] = []
        for stmt in statements:
            lines.append(SchemaUtils.as_text(stmt).rstrip(";") + ";")
        return "\n".join(lines)


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    'TYPE_MAP',
    'TEXTUAL_TYPES',
    'SERIAL_PRIMARY_KEY_TYPE',
    'TIMESTAMP_TYPE',
    'FOREIGN_KEY_TYPE',
    'CURRENT_TIME_DEFAULT',
    'get_postgres_type',
    'identifier',
    'quote_text',
    'literal',
    'TypeBuilder',
    'DropBuilder',
    'SchemaUtils',
]
