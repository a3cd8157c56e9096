# ============================================================================
# COLUMN BUILDER
# ============================================================================
# STATUS: Core - Field to column transformation
# PURPOSE: Resolve SQL type, nullability, keys, enums and CHECK clauses
# CREATED: 19 OCT 2026
# EXPORTS: ColumnBuilder, CONSTRAINT_PRODUCERS
# DEPENDENCIES: psycopg
# ============================================================================
"""
Column Builder.

Converts one FieldSchema into a ColumnSpec and renders a ColumnSpec as the
column definition inside CREATE TABLE. Knows nothing about other fields or
entities; the table builder supplies the owning table name and the
entity-wide required set.

Resolution order for a scalar field:
    1. (type, format) lookup in TYPE_MAP (miss = UnknownDataTypeError)
    2. id + integer          -> BIGSERIAL NOT NULL PRIMARY KEY
    3. created_at/updated_at -> TIMESTAMP NOT NULL DEFAULT NOW()
    4. enum                  -> <table singular>_<column> enum type

Reference fields ($ref, or array of embedded objects) skip all of the above
and become <singular field>_id INTEGER REFERENCES <target>(id).

Rendered column layout:
    name type [NOT NULL] [PRIMARY KEY] [CHECK (...)] [DEFAULT x] [UNIQUE] [REFERENCES t(id)]
"""

from typing import Callable, Collection, List, Tuple

from psycopg import sql

from oas2pg.core.contracts import EnumMode
from oas2pg.core.exceptions import (
    EmptyEnumError,
    MissingDataTypeError,
    UnknownDataTypeError,
)
from oas2pg.core.logging import ComponentType, get_logger
from oas2pg.core.models import ColumnSpec, FieldSchema
from oas2pg.core.schema.ddl_utils import (
    CURRENT_TIME_DEFAULT,
    FOREIGN_KEY_TYPE,
    SERIAL_PRIMARY_KEY_TYPE,
    TEXTUAL_TYPES,
    TIMESTAMP_TYPE,
    SchemaUtils,
    get_postgres_type,
    identifier,
    literal,
    quote_text,
)
from oas2pg.core.schema.naming import (
    enum_type_name,
    foreign_key_column,
    pluralize,
    table_name_for,
)

logger = get_logger(__name__, ComponentType.BUILDER)

TIMESTAMP_COLUMNS = ("created_at", "updated_at")


# ============================================================================
# CONSTRAINT PRODUCERS
# ============================================================================
# Each producer takes the rendered column reference and the field and returns
# zero or more CHECK fragments. Order of the tuple is the order of the clauses.

ClauseProducer = Callable[[str, FieldSchema], List[str]]


def min_max_clauses(column: str, field: FieldSchema) -> List[str]:
    """Numeric bounds, printed with six decimals."""
    clauses = []
    if field.minimum is not None:
        clauses.append(f"{column} >= {field.minimum:f}")
    if field.maximum is not None:
        clauses.append(f"{column} <= {field.maximum:f}")
    return clauses


def char_length_clauses(column: str, field: FieldSchema) -> List[str]:
    clauses = []
    if field.min_length is not None:
        clauses.append(f"char_length({column}) >= {field.min_length}")
    if field.max_length is not None:
        clauses.append(f"char_length({column}) <= {field.max_length}")
    return clauses


def pattern_clauses(column: str, field: FieldSchema) -> List[str]:
    """POSIX regular-expression match."""
    if field.pattern:
        return [f"{column} ~ {quote_text(field.pattern)}"]
    return []


def enum_in_clauses(column: str, field: FieldSchema) -> List[str]:
    """Legacy inline enum for targets without CREATE TYPE support."""
    if field.enum is None:
        return []
    if not field.enum:
        raise EmptyEnumError(field.name)
    values = ", ".join(quote_text(v) for v in field.enum)
    return [f"{column} IN ({values})"]


CONSTRAINT_PRODUCERS: Tuple[ClauseProducer, ...] = (
    min_max_clauses,
    char_length_clauses,
    pattern_clauses,
)


# ============================================================================
# COLUMN BUILDER
# ============================================================================

class ColumnBuilder:
    """
    Convert FieldSchema objects into ColumnSpec objects.

    Stateless apart from the enum rendering mode; one instance can be shared
    by every table of a document.
    """

    def __init__(self, enum_mode: EnumMode = EnumMode.TYPE):
        """
        Initialize the builder.

        Args:
            enum_mode: TYPE creates a dedicated enum type per enum column,
                       CHECK keeps the base type and adds an IN (...) clause.
        """
        self.enum_mode = EnumMode(enum_mode)
        self.producers: Tuple[ClauseProducer, ...] = CONSTRAINT_PRODUCERS
        if self.enum_mode == EnumMode.CHECK:
            self.producers = CONSTRAINT_PRODUCERS + (enum_in_clauses,)

    # =========================================================================
    # BUILD
    # =========================================================================

    def build(
        self,
        table_name: str,
        field: FieldSchema,
        required: Collection[str] = (),
    ) -> ColumnSpec:
        """
        Build the column for one field.

        Args:
            table_name: Plural table name of the owning entity
            field: Parsed field
            required: Field names the owning entity lists as required

        Returns:
            ColumnSpec

        Raises:
            MissingDataTypeError: field declares no type
            UnknownDataTypeError: (type, format) has no SQL mapping
            EmptyEnumError: legacy CHECK enum mode with an empty enum
        """
        not_null = field.nullable is False or field.name in required

        if field.is_foreign_key():
            return self._build_reference(field, not_null)

        if not field.data_type:
            raise MissingDataTypeError(field.name)

        sql_type = get_postgres_type(field.data_type, field.data_format)
        if sql_type is None:
            raise UnknownDataTypeError(field.name, field.data_type, field.data_format)

        name = field.name
        default = field.default

        if name == "id" and field.data_type == "integer":
            sql_type = SERIAL_PRIMARY_KEY_TYPE
            not_null = True

        if name in TIMESTAMP_COLUMNS:
            sql_type = TIMESTAMP_TYPE
            not_null = True
            default = CURRENT_TIME_DEFAULT

        enum_type = None
        enum_values: List[str] = []
        if field.enum is not None and self.enum_mode == EnumMode.TYPE:
            enum_type = enum_type_name(table_name, name)
            enum_values = list(field.enum)
            sql_type = enum_type

        column_ref = SchemaUtils.as_text(identifier(name))
        checks = [clause for produce in self.producers for clause in produce(column_ref, field)]

        logger.debug(f"Column {table_name}.{name} -> {sql_type}")

        return ColumnSpec(
            name=name,
            sql_type=sql_type,
            not_null=not_null,
            default=default,
            primary_key=name == "id",
            unique=field.unique,
            checks=checks,
            enum_type=enum_type,
            enum_values=enum_values,
        )

    def _build_reference(self, field: FieldSchema, not_null: bool) -> ColumnSpec:
        """
        Foreign key column for a $ref or an array of embedded objects.

        The target is the referenced entity's table; inline item objects
        with no schema name fall back to the pluralized field name.
        """
        if field.reference:
            target = table_name_for(field.reference)
        else:
            target = pluralize(field.name)

        name = foreign_key_column(field.name)
        logger.debug(f"Reference {field.name} -> {name} REFERENCES {target}(id)")

        return ColumnSpec(
            name=name,
            sql_type=FOREIGN_KEY_TYPE,
            not_null=not_null,
            primary_key=False,
            foreign_key=target,
        )

    # =========================================================================
    # RENDER
    # =========================================================================

    @staticmethod
    def render(column: ColumnSpec) -> sql.Composed:
        """
        Render the column definition used inside CREATE TABLE.

        Args:
            column: ColumnSpec to render

        Returns:
            sql.Composed column definition
        """
        if column.enum_type:
            type_sql = identifier(column.enum_type)
        else:
            type_sql = sql.SQL(column.sql_type)

        parts: List[sql.Composable] = [identifier(column.name), sql.SQL(" "), type_sql]

        if column.not_null:
            parts.append(sql.SQL(" NOT NULL"))

        if column.primary_key:
            parts.append(sql.SQL(" PRIMARY KEY"))

        if column.checks:
            parts.extend([sql.SQL(" "), sql.SQL(column.check_clause)])

        if column.default is not None and column.default != "":
            if column.sql_type in TEXTUAL_TYPES or column.enum_type:
                parts.extend([sql.SQL(" DEFAULT "), literal(column.default)])
            else:
                parts.extend([sql.SQL(" DEFAULT "), sql.SQL(column.default)])

        if column.unique:
            parts.append(sql.SQL(" UNIQUE"))

        if column.foreign_key:
            parts.append(
                sql.SQL(" REFERENCES {}(id)").format(identifier(column.foreign_key))
            )

        return sql.Composed(parts)


__all__ = [
    "ColumnBuilder",
    "CONSTRAINT_PRODUCERS",
    "min_max_clauses",
    "char_length_clauses",
    "pattern_clauses",
    "enum_in_clauses",
]
