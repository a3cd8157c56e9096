# ============================================================================
# DDL SERVICE
# ============================================================================
# STATUS: Service layer - Document to DDL script orchestration
# PURPOSE: Build every entity in order, apply error policy, validate output
# CREATED: 19 OCT 2026
# EXPORTS: DDLService, GenerationResult
# ============================================================================
"""
DDL Service

Drives the table builder over a whole SpecDocument:

    1. build each entity in declaration order
    2. skip empty tables (excluded or no properties)
    3. reject duplicate table names
    4. render fragments, optionally prefixed by DROP statements
    5. optionally validate the final text

The error policy decides what happens when one entity fails: ABORT
re-raises, SKIP logs it, records it on the result and moves on.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from psycopg import sql

from oas2pg.core.config import GeneratorDefaults, ValidatorDefaults
from oas2pg.core.contracts import ErrorPolicy
from oas2pg.core.exceptions import DuplicateTableError, EntityBuildError
from oas2pg.core.logging import ComponentType, get_logger, log_context
from oas2pg.core.models import EntitySchema, SpecDocument, TableSpec
from oas2pg.core.schema import SchemaUtils, TableBuilder
from oas2pg.infrastructure import OpenAPILoader, SQLValidator, ValidationResult

logger = get_logger(__name__, ComponentType.SERVICE)

FRAGMENT_SEPARATOR = "\n\n"


@dataclass
class GenerationResult:
    """Complete result of one generation run."""
    sql: str = ""
    tables: List[str] = field(default_factory=list)
    excluded: List[str] = field(default_factory=list)
    skipped: List[Tuple[str, str]] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    validation: Optional[ValidationResult] = None

    @property
    def success(self) -> bool:
        return not self.errors

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "success": self.success,
            "tables": self.tables,
            "excluded": self.excluded,
            "skipped": [{"entity": e, "reason": r} for e, r in self.skipped],
            "errors": self.errors,
            "validation": self.validation.model_dump() if self.validation else None,
            "summary": {
                "tables": len(self.tables),
                "excluded": len(self.excluded),
                "skipped": len(self.skipped),
            },
        }


class DDLService:
    """
    Generate the DDL script for a parsed document.
    """

    def __init__(
        self,
        generator: Optional[GeneratorDefaults] = None,
        validator: Optional[ValidatorDefaults] = None,
    ):
        """
        Initialize the service.

        Args:
            generator: Generation settings (enum mode, error policy, drops)
            validator: Validation settings; validation is skipped when disabled
        """
        self.generator = generator or GeneratorDefaults()
        self.validator_settings = validator or ValidatorDefaults()
        self.table_builder = TableBuilder(
            enum_mode=self.generator.enum_mode,
            exclude_extension=self.generator.exclude_extension,
            entity_extension=self.generator.entity_extension,
        )
        self.validator = SQLValidator(dialect=self.validator_settings.dialect)

    # =========================================================================
    # ENTRY POINTS
    # =========================================================================

    def generate_from_file(self, path: Union[str, Path]) -> GenerationResult:
        """Load an OpenAPI document from disk and generate its DDL."""
        return self.generate(OpenAPILoader().load_file(path))

    def generate(self, document: SpecDocument) -> GenerationResult:
        """
        Generate the DDL script for every entity of a document.

        Raises:
            EntityBuildError: an entity failed and the policy is ABORT
            DuplicateTableError: two entities share a table name (ABORT)
            SQLValidationError: validation enabled and the script is rejected
        """
        result = GenerationResult()
        fragments: List[str] = []
        drop_tables: List[sql.Composed] = []
        drop_types: List[sql.Composed] = []
        owners: Dict[str, str] = {}

        with log_context(document=document.title):
            for entity in document.entities:
                with log_context(entity=entity.name):
                    statements = self._entity_statements(entity, owners, result)
                if statements is None:
                    continue

                table, rendered = statements
                owners[table.name] = entity.name
                result.tables.append(table.name)
                fragments.append(SchemaUtils.render(rendered))
                drop_tables.append(TableBuilder.render_drop(table))
                drop_types.extend(TableBuilder.render_drop_types(table))

            if self.generator.delete_statements and (drop_tables or drop_types):
                fragments.insert(0, SchemaUtils.render(drop_tables + drop_types))

            result.sql = FRAGMENT_SEPARATOR.join(fragments)

            logger.info(
                f"Generated {len(result.tables)} tables "
                f"({len(result.excluded)} excluded, {len(result.skipped)} skipped)"
            )

            if self.validator_settings.enabled:
                result.validation = self.validator.validate_with_timeout(
                    result.sql, self.validator_settings.timeout_seconds
                )
                logger.info(f"Validated {result.validation.statement_count} statements")

        return result

    # =========================================================================
    # HELPERS
    # =========================================================================

    def _entity_statements(
        self,
        entity: EntitySchema,
        owners: Dict[str, str],
        result: GenerationResult,
    ) -> Optional[Tuple[TableSpec, List[sql.Composed]]]:
        """
        Build and render one entity.

        Returns:
            (table, statements), or None when nothing is generated
        """
        try:
            table = self.table_builder.build(entity)
            if table.is_empty:
                if self.table_builder.is_excluded(entity):
                    result.excluded.append(entity.name)
                else:
                    result.skipped.append((entity.name, "no properties"))
                return None

            if table.name in owners:
                raise DuplicateTableError(table.name, entity.name, owners[table.name])

            return table, self.table_builder.render(table)

        except (EntityBuildError, DuplicateTableError) as e:
            if self.generator.error_policy == ErrorPolicy.ABORT:
                raise
            logger.warning(f"Skipping {entity.name}: {e}")
            result.skipped.append((entity.name, str(e)))
            result.errors.append(str(e))
            return None


__all__ = ["DDLService", "GenerationResult"]
