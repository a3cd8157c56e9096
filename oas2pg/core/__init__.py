# ============================================================================
# CORE MODULE
# ============================================================================
# STATUS: Core module initialization
# PURPOSE: Export core contracts, models, errors and schema builders
# CREATED: 19 OCT 2026
# ============================================================================

from oas2pg.core.contracts import EnumMode, ErrorPolicy, ReferenceKind
from oas2pg.core.exceptions import (
    SchemaGenerationError,
    SpecParseError,
    CircularReferenceError,
    ColumnBuildError,
    UnknownDataTypeError,
    MissingDataTypeError,
    DuplicateColumnError,
    EmptyEnumError,
    EntityBuildError,
    DuplicateTableError,
    SQLValidationError,
)
from oas2pg.core.models import (
    FieldSchema,
    EntitySchema,
    OperationSchema,
    SpecDocument,
    ColumnSpec,
    TableSpec,
    EnumTypeSpec,
    ForeignKeySpec,
)
from oas2pg.core.schema import ColumnBuilder, TableBuilder, QueryBuilder

__all__ = [
    # Enums
    "EnumMode",
    "ErrorPolicy",
    "ReferenceKind",
    # Errors
    "SchemaGenerationError",
    "SpecParseError",
    "CircularReferenceError",
    "ColumnBuildError",
    "UnknownDataTypeError",
    "MissingDataTypeError",
    "DuplicateColumnError",
    "EmptyEnumError",
    "EntityBuildError",
    "DuplicateTableError",
    "SQLValidationError",
    # Models
    "FieldSchema",
    "EntitySchema",
    "OperationSchema",
    "SpecDocument",
    "ColumnSpec",
    "TableSpec",
    "EnumTypeSpec",
    "ForeignKeySpec",
    # Builders
    "ColumnBuilder",
    "TableBuilder",
    "QueryBuilder",
]
