# ============================================================================
# INFRASTRUCTURE MODULE
# ============================================================================
# STATUS: Infrastructure layer
# PURPOSE: OpenAPI document loading and SQL validation
# CREATED: 19 OCT 2026
# ============================================================================
"""
Infrastructure layer.

Everything that touches raw input or third-party parsers lives here; the
core builders only ever see parsed models.
"""

from oas2pg.infrastructure.openapi_loader import OpenAPILoader, load_spec
from oas2pg.infrastructure.sql_validator import SQLValidator, ValidationResult

__all__ = [
    "OpenAPILoader",
    "load_spec",
    "SQLValidator",
    "ValidationResult",
]
