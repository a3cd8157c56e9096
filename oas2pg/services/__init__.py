# ============================================================================
# SERVICES MODULE
# ============================================================================
# STATUS: Service layer
# PURPOSE: Document-level orchestration of DDL and query generation
# CREATED: 19 OCT 2026
# ============================================================================

from oas2pg.services.ddl_service import DDLService, GenerationResult
from oas2pg.services.query_service import QueryService

__all__ = [
    "DDLService",
    "GenerationResult",
    "QueryService",
]
