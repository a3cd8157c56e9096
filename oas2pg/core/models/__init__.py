# ============================================================================
# MODELS MODULE
# ============================================================================
# STATUS: Model exports
# PURPOSE: Central export point for all Pydantic models
# CREATED: 19 OCT 2026
# ============================================================================
"""
Models Module - Central Export Point

Input side (produced by the OpenAPI loader):
    SpecDocument, EntitySchema, FieldSchema, OperationSchema

Output side (produced by the column/table builders):
    ColumnSpec, TableSpec, EnumTypeSpec, ForeignKeySpec
"""

from oas2pg.core.models.document import (
    FieldSchema,
    EntitySchema,
    OperationSchema,
    SpecDocument,
)
from oas2pg.core.models.specs import (
    ColumnSpec,
    EnumTypeSpec,
    ForeignKeySpec,
    TableSpec,
)

__all__ = [
    # Input
    "FieldSchema",
    "EntitySchema",
    "OperationSchema",
    "SpecDocument",
    # Output
    "ColumnSpec",
    "EnumTypeSpec",
    "ForeignKeySpec",
    "TableSpec",
]
