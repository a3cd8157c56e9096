# ============================================================================
# BASE CONTRACTS & ENUMS
# ============================================================================
# STATUS: Foundation - Core enums shared by loader, builders and services
# PURPOSE: Reference kinds, enum rendering modes and error policies
# CREATED: 19 OCT 2026
# ============================================================================
"""
Base contracts for the OpenAPI to PostgreSQL generator.

These enums cross every boundary of the project:
- Loader (OpenAPI document -> field/entity models)
- Builders (models -> ColumnSpec / TableSpec)
- Services and CLI (policy selection)
"""

from enum import Enum


class ReferenceKind(str, Enum):
    """
    How a field points at another entity.

    NONE        plain scalar / JSON column
    DIRECT      property is a $ref to another schema
    COLLECTION  array whose items are an object schema with properties
    """
    NONE = "none"
    DIRECT = "direct"
    COLLECTION = "collection"

    def is_foreign_key(self) -> bool:
        """Both reference kinds are modeled as a foreign key column."""
        return self in (ReferenceKind.DIRECT, ReferenceKind.COLLECTION)


class EnumMode(str, Enum):
    """
    How enumerated values are rendered.

    TYPE   dedicated CREATE TYPE ... AS ENUM (default)
    CHECK  legacy inline CHECK (col IN (...)) on the base type
    """
    TYPE = "type"
    CHECK = "check"


class ErrorPolicy(str, Enum):
    """What the orchestrator does when one entity fails to build."""
    ABORT = "abort"    # Re-raise, nothing is written
    SKIP = "skip"      # Log, record and continue with the next entity


__all__ = ["ReferenceKind", "EnumMode", "ErrorPolicy"]
