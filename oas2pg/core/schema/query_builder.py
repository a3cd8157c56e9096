# ============================================================================
# QUERY BUILDER
# ============================================================================
# STATUS: Core - sqlc-style query templates from API operations
# PURPOSE: SELECT / INSERT / UPDATE / DELETE templates per path operation
# CREATED: 19 OCT 2026
# EXPORTS: QueryBuilder, resource_name
# DEPENDENCIES: psycopg
# ============================================================================
"""
Query Builder.

Turns path operations into annotated query templates that sqlc understands:

    -- name: listPets :many
    SELECT * FROM pets;

    -- name: createPet :one
    INSERT INTO pets (name, tag) VALUES ($1, $2);

The resource (table) is the last non-templated segment of the path,
pluralized: /users/{id} -> users.
"""

import re
from typing import List, Optional, Sequence

from psycopg import sql

from oas2pg.core.models import OperationSchema
from oas2pg.core.schema.ddl_utils import SchemaUtils, identifier
from oas2pg.core.schema.naming import pluralize

_RESOURCE_SEGMENT = re.compile(r"/([^/{}]+)(?=/|\Z)")


def resource_name(path: str) -> str:
    """Last non-templated path segment, lower-cased and pluralized ("" if none)."""
    matches = _RESOURCE_SEGMENT.findall(path)
    if not matches:
        return ""
    return pluralize(matches[-1].lower())


def _placeholders(count: int, start: int = 1) -> List[str]:
    return [f"${i}" for i in range(start, start + count)]


class QueryBuilder:
    """
    Builder for annotated query templates.

    All statement methods return sql.Composed objects; build() returns the
    annotated text block for one operation (or None when nothing applies).
    """

    @staticmethod
    def annotation(operation: OperationSchema, resource: str) -> str:
        """sqlc name annotation: :many for array responses, :one otherwise."""
        name = operation.operation_id or f"{operation.method}_{resource}"
        cardinality = ":many" if operation.returns_many else ":one"
        return f"-- name: {name} {cardinality}"

    @staticmethod
    def select(resource: str) -> sql.Composed:
        return sql.SQL("SELECT * FROM {}").format(identifier(resource))

    @staticmethod
    def insert(resource: str, columns: Sequence[str]) -> sql.Composed:
        return sql.SQL("INSERT INTO {} ({}) VALUES ({})").format(
            identifier(resource),
            sql.SQL(", ").join(identifier(c) for c in columns),
            sql.SQL(", ".join(_placeholders(len(columns)))),
        )

    @staticmethod
    def update(resource: str, columns: Sequence[str]) -> sql.Composed:
        assignments = sql.SQL(", ").join(
            sql.SQL("{} = {}").format(identifier(c), sql.SQL(p))
            for c, p in zip(columns, _placeholders(len(columns)))
        )
        return sql.SQL("UPDATE {} SET {} WHERE id = {}").format(
            identifier(resource),
            assignments,
            sql.SQL(f"${len(columns) + 1}"),
        )

    @staticmethod
    def delete(resource: str) -> sql.Composed:
        return sql.SQL("DELETE FROM {} WHERE id = $1").format(identifier(resource))

    def statement(self, operation: OperationSchema, resource: str) -> Optional[sql.Composed]:
        """Query for one operation, or None when it has nothing to write."""
        method = operation.method.lower()
        columns = operation.request_properties

        if method == "get":
            return self.select(resource)
        if method == "post":
            return self.insert(resource, columns) if columns else None
        if method in ("put", "patch"):
            return self.update(resource, columns) if columns else None
        if method == "delete":
            return self.delete(resource)
        return None

    def build(self, operation: OperationSchema) -> Optional[str]:
        """
        Annotated template for one operation.

        Returns:
            "-- name: ... :one\\n<query>;" or None
        """
        resource = resource_name(operation.path)
        if not resource:
            return None

        statement = self.statement(operation, resource)
        if statement is None:
            return None

        return self.annotation(operation, resource) + "\n" + SchemaUtils.render([statement])


__all__ = ["QueryBuilder", "resource_name"]
