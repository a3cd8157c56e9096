# ============================================================================
# SCHEMA MODULE
# ============================================================================
# STATUS: Core - Schema generation from OpenAPI models
# PURPOSE: Turn parsed OpenAPI entities into PostgreSQL DDL
# CREATED: 19 OCT 2026
# ============================================================================

from oas2pg.core.schema.ddl_utils import (
    TYPE_MAP,
    TypeBuilder,
    DropBuilder,
    SchemaUtils,
    get_postgres_type,
    identifier,
)
from oas2pg.core.schema.naming import (
    to_snake_case,
    pluralize,
    singularize,
    table_name_for,
    enum_type_name,
    foreign_key_column,
    is_reserved_word,
)
from oas2pg.core.schema.column_builder import ColumnBuilder
from oas2pg.core.schema.table_builder import (
    TableBuilder,
    composition_blocks,
    flatten_composition,
)
from oas2pg.core.schema.query_builder import QueryBuilder, resource_name

__all__ = [
    # Builders
    "ColumnBuilder",
    "TableBuilder",
    "QueryBuilder",
    "composition_blocks",
    "flatten_composition",
    "resource_name",
    # Utilities
    "TYPE_MAP",
    "TypeBuilder",
    "DropBuilder",
    "SchemaUtils",
    "get_postgres_type",
    "identifier",
    # Naming
    "to_snake_case",
    "pluralize",
    "singularize",
    "table_name_for",
    "enum_type_name",
    "foreign_key_column",
    "is_reserved_word",
]
