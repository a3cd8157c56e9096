# ============================================================================
# QUERY SERVICE
# ============================================================================
# STATUS: Service layer - Query template generation
# PURPOSE: Annotated SELECT/INSERT/UPDATE/DELETE templates for every path
# CREATED: 19 OCT 2026
# EXPORTS: QueryService
# ============================================================================
"""
Query Service

Walks the document's operations in order and joins the query block of each
one, blank line separated. Operations with nothing to generate (no resource
segment, or a write without request properties) are skipped.
"""

from typing import List

from oas2pg.core.logging import ComponentType, get_logger, log_context
from oas2pg.core.models import SpecDocument
from oas2pg.core.schema import QueryBuilder

logger = get_logger(__name__, ComponentType.SERVICE)


class QueryService:
    """Generate sqlc-style query templates for a parsed document."""

    def __init__(self, builder: QueryBuilder = None):
        self.builder = builder or QueryBuilder()

    def generate(self, document: SpecDocument) -> str:
        blocks: List[str] = []
        with log_context(document=document.title):
            for operation in document.operations:
                with log_context(operation=f"{operation.method.upper()} {operation.path}"):
                    block = self.builder.build(operation)
                if block is None:
                    logger.debug(f"No query for {operation.method.upper()} {operation.path}")
                    continue
                blocks.append(block)

            logger.info(f"Generated {len(blocks)} queries from {len(document.operations)} operations")

        return "\n\n".join(blocks)


__all__ = ["QueryService"]
