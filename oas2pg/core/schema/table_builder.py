# ============================================================================
# TABLE BUILDER
# ============================================================================
# STATUS: Core - Entity to table transformation
# PURPOSE: Compose entities, collect FK/enum side effects, render DDL
# CREATED: 19 OCT 2026
# EXPORTS: TableBuilder, flatten_composition, composition_blocks
# DEPENDENCIES: psycopg
# ============================================================================
"""
Table Builder.

Converts one EntitySchema into a TableSpec and renders it:

    CREATE TYPE order_status AS ENUM ('pending', 'shipped');
    CREATE TABLE IF NOT EXISTS orders (id BIGSERIAL NOT NULL PRIMARY KEY, status order_status);

Composition (allOf) is a pure flattening step over (properties, required)
blocks - bases first, in declaration order, then the entity's own
properties. Required names from every block form one shared set.

An empty TableSpec (no columns) means "generate nothing" and is returned
for excluded entities and for schemas with neither properties nor allOf.
"""

from typing import Any, Collection, Dict, FrozenSet, List, Sequence, Tuple

from psycopg import sql

from oas2pg.core.contracts import EnumMode
from oas2pg.core.exceptions import (
    ColumnBuildError,
    DuplicateColumnError,
    EmptyEnumError,
    EntityBuildError,
)
from oas2pg.core.logging import ComponentType, get_logger, log_context
from oas2pg.core.models import (
    ColumnSpec,
    EntitySchema,
    EnumTypeSpec,
    FieldSchema,
    ForeignKeySpec,
    TableSpec,
)
from oas2pg.core.schema.column_builder import ColumnBuilder
from oas2pg.core.schema.ddl_utils import DropBuilder, TypeBuilder, identifier
from oas2pg.core.schema.naming import table_name_for

logger = get_logger(__name__, ComponentType.BUILDER)

DEFAULT_EXCLUDE_EXTENSION = "x-database-exclude"
DEFAULT_ENTITY_EXTENSION = "x-database-entity"

_TRUE_LIKE = frozenset({"true", "yes", "y", "1", "on"})
_FALSE_LIKE = frozenset({"false", "no", "n", "0", "off"})

Block = Tuple[Sequence[FieldSchema], Collection[str]]


# ============================================================================
# COMPOSITION
# ============================================================================

def composition_blocks(entity: EntitySchema) -> List[Block]:
    """
    Ordered (properties, required) blocks for an entity.

    Nested allOf bases are expanded depth-first so a base's own bases come
    before the base itself.
    """
    if entity.all_of is None:
        return [(entity.properties or [], entity.required)]

    blocks: List[Block] = []
    for base in entity.all_of:
        blocks.extend(composition_blocks(base))
    blocks.append((entity.properties or [], entity.required))
    return blocks


def flatten_composition(blocks: Sequence[Block]) -> Tuple[List[FieldSchema], FrozenSet[str]]:
    """
    Concatenate the fields of every block and union their required names.

    Args:
        blocks: (properties, required) pairs in declaration order

    Returns:
        (fields in order, shared required set)
    """
    fields: List[FieldSchema] = []
    required = set()
    for properties, block_required in blocks:
        fields.extend(properties)
        required.update(block_required)
    return fields, frozenset(required)


def _is_true_like(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in _TRUE_LIKE


def _is_false_like(value: Any) -> bool:
    if isinstance(value, bool):
        return not value
    return str(value).strip().lower() in _FALSE_LIKE


# ============================================================================
# TABLE BUILDER
# ============================================================================

class TableBuilder:
    """
    Convert EntitySchema objects into TableSpec objects and DDL statements.
    """

    def __init__(
        self,
        column_builder: ColumnBuilder = None,
        enum_mode: EnumMode = EnumMode.TYPE,
        exclude_extension: str = DEFAULT_EXCLUDE_EXTENSION,
        entity_extension: str = DEFAULT_ENTITY_EXTENSION,
    ):
        """
        Initialize the builder.

        Args:
            column_builder: Shared ColumnBuilder (created from enum_mode if omitted)
            enum_mode: Enum rendering mode for the default ColumnBuilder
            exclude_extension: Extension that excludes an entity when true-like
            entity_extension: Extension that excludes an entity when false-like
        """
        self.column_builder = column_builder or ColumnBuilder(enum_mode=enum_mode)
        self.exclude_extension = exclude_extension
        self.entity_extension = entity_extension

    # =========================================================================
    # BUILD
    # =========================================================================

    def is_excluded(self, entity: EntitySchema) -> bool:
        """
        True when the entity opts out of the database.

            x-database-exclude: true   (true-like value)
            x-database-entity: false   (false-like value)
        """
        extensions = entity.extensions
        if self.exclude_extension in extensions and _is_true_like(extensions[self.exclude_extension]):
            return True
        if self.entity_extension in extensions and _is_false_like(extensions[self.entity_extension]):
            return True
        return False

    def build(self, entity: EntitySchema) -> TableSpec:
        """
        Build the table for one entity.

        Args:
            entity: Parsed entity schema

        Returns:
            TableSpec (empty when no table should be generated)

        Raises:
            EntityBuildError: any field failed; wraps the column error
        """
        table_name = table_name_for(entity.name)
        empty = TableSpec(name=table_name, entity_name=entity.name)

        if self.is_excluded(entity):
            logger.info(f"Skipping {entity.name}: excluded from database")
            return empty

        if entity.properties is None and entity.all_of is None:
            logger.debug(f"Skipping {entity.name}: no properties")
            return empty

        fields, required = flatten_composition(composition_blocks(entity))

        # A field redefined by a later block replaces its column in place;
        # two different fields landing on one column name is an error
        columns: Dict[str, ColumnSpec] = {}
        sources: Dict[str, str] = {}
        for field in fields:
            with log_context(field=field.name):
                try:
                    column = self.column_builder.build(table_name, field, required)
                    previous = sources.get(column.name)
                    if previous is not None and previous != field.name:
                        raise DuplicateColumnError(field.name, column.name, previous)
                except (ColumnBuildError, EmptyEnumError) as e:
                    logger.error(f"Field {field.name} of {entity.name} failed: {e}")
                    raise EntityBuildError(entity.name, e) from e
            if column.name in columns:
                logger.debug(f"Column {table_name}.{column.name} redefined, keeping last definition")
            columns[column.name] = column
            sources[column.name] = field.name

        ordered = list(columns.values())
        foreign_keys = [
            ForeignKeySpec(column=c.name, target_table=c.foreign_key)
            for c in ordered if c.foreign_key
        ]
        enum_types = [
            EnumTypeSpec(name=c.enum_type, column=c.name, values=c.enum_values)
            for c in ordered if c.enum_type
        ]

        logger.debug(
            f"Built {table_name}: {len(ordered)} columns, "
            f"{len(foreign_keys)} foreign keys, {len(enum_types)} enum types"
        )

        return TableSpec(
            name=table_name,
            entity_name=entity.name,
            columns=ordered,
            foreign_keys=foreign_keys,
            enum_types=enum_types,
        )

    # =========================================================================
    # RENDER
    # =========================================================================

    @staticmethod
    def render_enum_types(table: TableSpec) -> List[sql.Composed]:
        """
        CREATE TYPE statements for every enum column, in column order.

        Raises:
            EmptyEnumError: an enum type has no values
        """
        statements = []
        for enum in table.enum_types:
            if not enum.values:
                raise EmptyEnumError(enum.column, enum.name)
            statements.append(TypeBuilder.enum(enum.name, enum.values))
        return statements

    @staticmethod
    def render_create(table: TableSpec) -> sql.Composed:
        """CREATE TABLE IF NOT EXISTS with inline column constraints."""
        columns_sql = sql.SQL(", ").join(ColumnBuilder.render(c) for c in table.columns)
        return sql.SQL("CREATE TABLE IF NOT EXISTS {} ({})").format(
            identifier(table.name),
            columns_sql,
        )

    @staticmethod
    def render_drop(table: TableSpec) -> sql.Composed:
        return DropBuilder.table(table.name)

    @staticmethod
    def render_drop_types(table: TableSpec) -> List[sql.Composed]:
        return [TypeBuilder.drop(enum.name) for enum in table.enum_types]

    def render(self, table: TableSpec) -> List[sql.Composed]:
        """
        Full creation fragment for one table: enum types, then the table.

        Raises:
            EntityBuildError: rendering failed (e.g. empty enum)
        """
        if table.is_empty:
            return []
        try:
            statements = self.render_enum_types(table)
        except EmptyEnumError as e:
            logger.error(f"Cannot render {table.name}: {e}")
            raise EntityBuildError(table.entity_name, e) from e
        statements.append(self.render_create(table))
        return statements


__all__ = ["TableBuilder", "flatten_composition", "composition_blocks"]
