# ============================================================================
# COLUMN & TABLE SPECS
# ============================================================================
# STATUS: Core model - Relational intermediate representation
# PURPOSE: Output of the column/table builders, input of DDL rendering
# CREATED: 19 OCT 2026
# EXPORTS: ColumnSpec, EnumTypeSpec, ForeignKeySpec, TableSpec
# DEPENDENCIES: pydantic
# ============================================================================
"""
Column & Table Specs

Intermediate representation between the parsed OpenAPI document and the DDL
text. Built once per field/entity, rendered immediately, never mutated.
"""

from typing import List, Optional
from pydantic import BaseModel, Field, model_validator


class ColumnSpec(BaseModel):
    """A single table column, post-normalization."""
    name: str
    sql_type: str
    not_null: bool = False
    default: Optional[str] = None
    primary_key: bool = False
    unique: bool = False
    checks: List[str] = Field(default_factory=list)

    # Side effects collected by the table builder
    foreign_key: Optional[str] = None          # target table name
    enum_type: Optional[str] = None
    enum_values: List[str] = Field(default_factory=list)

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _reference_or_enum(self) -> "ColumnSpec":
        """A column is a reference, an enum, or a plain scalar - never both."""
        if self.foreign_key and self.enum_type:
            raise ValueError(
                f"Column {self.name} cannot be both a foreign key and an enum"
            )
        return self

    @property
    def check_clause(self) -> str:
        """CHECK (...) body, or empty string when there are no constraints."""
        if not self.checks:
            return ""
        return "CHECK (" + " AND ".join(self.checks) + ")"


class EnumTypeSpec(BaseModel):
    """A CREATE TYPE ... AS ENUM declaration owned by one column."""
    name: str
    column: str
    values: List[str] = Field(default_factory=list)

    model_config = {"frozen": True}


class ForeignKeySpec(BaseModel):
    """Inline REFERENCES relationship owned by one column."""
    column: str
    target_table: str

    model_config = {"frozen": True}


class TableSpec(BaseModel):
    """
    A table built from one entity.

    A TableSpec with no columns means "no table for this entity" (excluded
    or reference-only schemas).
    """
    name: str
    entity_name: str
    columns: List[ColumnSpec] = Field(default_factory=list)
    foreign_keys: List[ForeignKeySpec] = Field(default_factory=list)
    enum_types: List[EnumTypeSpec] = Field(default_factory=list)

    model_config = {"frozen": True}

    @property
    def is_empty(self) -> bool:
        return not self.columns

    @property
    def column_names(self) -> List[str]:
        return [c.name for c in self.columns]

    def column(self, name: str) -> Optional[ColumnSpec]:
        for col in self.columns:
            if col.name == name:
                return col
        return None


__all__ = ["ColumnSpec", "EnumTypeSpec", "ForeignKeySpec", "TableSpec"]
