# ============================================================================
# GENERATION EXCEPTIONS
# ============================================================================
# STATUS: Foundation - Error taxonomy
# PURPOSE: Exceptions raised while loading, building, rendering and validating
# CREATED: 19 OCT 2026
# ============================================================================
"""
Exception hierarchy.

Every error carries the offending entity/field name and the invalid value so
the CLI can print an actionable message.

    SchemaGenerationError
    ├── SpecParseError
    │   └── CircularReferenceError
    ├── ColumnBuildError
    │   ├── UnknownDataTypeError
    │   ├── MissingDataTypeError
    │   └── DuplicateColumnError
    ├── EmptyEnumError
    ├── EntityBuildError
    ├── DuplicateTableError
    └── SQLValidationError
"""

from typing import List, Optional


class SchemaGenerationError(Exception):
    """Base exception for all generator errors."""
    pass


# ============================================================================
# LOADER
# ============================================================================

class SpecParseError(SchemaGenerationError):
    """Raised when the OpenAPI document cannot be read or resolved."""
    pass


class CircularReferenceError(SpecParseError):
    """Raised when an allOf chain reaches a schema already being composed."""
    def __init__(self, chain: List[str]):
        self.chain = list(chain)
        super().__init__(f"Circular schema composition: {' -> '.join(self.chain)}")


# ============================================================================
# COLUMN LEVEL
# ============================================================================

class ColumnBuildError(SchemaGenerationError):
    """Base exception for a field that cannot become a column."""
    def __init__(self, field_name: str, message: str):
        self.field_name = field_name
        super().__init__(message)


class UnknownDataTypeError(ColumnBuildError):
    """Raised when the (type, format) pair has no SQL mapping."""
    def __init__(self, field_name: str, data_type: str, data_format: str = ""):
        self.data_type = data_type
        self.data_format = data_format
        detail = f" (format `{data_format}`)" if data_format else ""
        super().__init__(
            field_name,
            f"unknown data type: `{data_type}`{detail} for field '{field_name}'",
        )


class MissingDataTypeError(ColumnBuildError):
    """Raised when a field declares no type at all."""
    def __init__(self, field_name: str):
        super().__init__(field_name, f"no data type found for field '{field_name}'")


class DuplicateColumnError(ColumnBuildError):
    """Raised when two different fields map to the same column name."""
    def __init__(self, field_name: str, column_name: str, previous_field: str):
        self.column_name = column_name
        self.previous_field = previous_field
        super().__init__(
            field_name,
            f"field '{field_name}' maps to column '{column_name}' "
            f"already generated from field '{previous_field}'",
        )


class EmptyEnumError(SchemaGenerationError):
    """Raised when an enum would be declared with zero values."""
    def __init__(self, column_name: str, type_name: Optional[str] = None):
        self.column_name = column_name
        self.type_name = type_name
        target = f"enum type '{type_name}'" if type_name else "enum"
        super().__init__(f"{target} for column '{column_name}' has no values")


# ============================================================================
# ENTITY / DOCUMENT LEVEL
# ============================================================================

class EntityBuildError(SchemaGenerationError):
    """Raised when any column of an entity fails; wraps the original error."""
    def __init__(self, entity_name: str, cause: Exception):
        self.entity_name = entity_name
        self.cause = cause
        super().__init__(f"could not build table for '{entity_name}': {cause}")


class DuplicateTableError(SchemaGenerationError):
    """Raised when two entities normalize to the same table name."""
    def __init__(self, table_name: str, entity_name: str, previous_entity: str):
        self.table_name = table_name
        self.entity_name = entity_name
        self.previous_entity = previous_entity
        super().__init__(
            f"table '{table_name}' from '{entity_name}' already generated "
            f"from '{previous_entity}'"
        )


class SQLValidationError(SchemaGenerationError):
    """Raised when the generated SQL does not parse (or validation times out)."""
    pass


__all__ = [
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
]
