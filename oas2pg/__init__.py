# ============================================================================
# OAS2PG
# ============================================================================
# STATUS: Package root
# PURPOSE: OpenAPI schema to PostgreSQL DDL generator
# CREATED: 19 OCT 2026
# ============================================================================
"""
oas2pg - OpenAPI 3.x components.schemas to PostgreSQL DDL.

Usage:
    from oas2pg import DDLService, OpenAPILoader

    document = OpenAPILoader().load_file("petstore.yaml")
    print(DDLService().generate(document).sql)
"""

from oas2pg.__version__ import __version__
from oas2pg.infrastructure import OpenAPILoader, SQLValidator, load_spec
from oas2pg.services import DDLService, GenerationResult, QueryService

__all__ = [
    "__version__",
    "OpenAPILoader",
    "SQLValidator",
    "load_spec",
    "DDLService",
    "GenerationResult",
    "QueryService",
]
