# ============================================================================
# SQL VALIDATOR
# ============================================================================
# STATUS: Infrastructure - Syntactic check of generated DDL
# PURPOSE: Parse generated SQL with sqlglot, fingerprint the normalized form
# CREATED: 19 OCT 2026
# EXPORTS: SQLValidator, ValidationResult
# DEPENDENCIES: sqlglot, pydantic
# ============================================================================
"""
SQL Validator

Parses generated SQL with sqlglot (postgres dialect by default). The
validator never changes the generated text; it only reports whether the text
parses, how many statements it holds, and a normalized re-rendering whose
sha256 fingerprint can be used to compare two outputs structurally.

Usage:
    validator = SQLValidator()
    result = validator.validate(ddl_text)
    print(result.statement_count, result.fingerprint)
"""

import hashlib
import threading
from typing import Any, Dict, List

import sqlglot
from pydantic import BaseModel
from sqlglot import exp
from sqlglot.errors import SqlglotError

from oas2pg.core.exceptions import SQLValidationError
from oas2pg.core.logging import ComponentType, get_logger

logger = get_logger(__name__, ComponentType.VALIDATOR)


class ValidationResult(BaseModel):
    """Outcome of a successful validation."""
    statement_count: int = 0
    normalized: str = ""
    fingerprint: str = ""

    model_config = {"frozen": True}


def _digest(text: str) -> str:
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


class SQLValidator:
    """
    sqlglot-backed syntax check.
    """

    def __init__(self, dialect: str = "postgres"):
        self.dialect = dialect

    def _parse(self, text: str) -> List[exp.Expression]:
        try:
            expressions = sqlglot.parse(text, read=self.dialect)
        except SqlglotError as e:
            raise SQLValidationError(f"Generated SQL does not parse: {e}") from e
        return [e for e in expressions if e is not None]

    def validate(self, text: str) -> ValidationResult:
        """
        Parse SQL text.

        Args:
            text: One or more semicolon-terminated statements

        Returns:
            ValidationResult (zero statements for blank text)

        Raises:
            SQLValidationError: text does not parse
        """
        if not text or not text.strip():
            return ValidationResult(fingerprint=_digest(""))

        expressions = self._parse(text)
        normalized = ";\n".join(e.sql(dialect=self.dialect) for e in expressions)

        logger.debug(f"Validated {len(expressions)} statements ({self.dialect})")

        return ValidationResult(
            statement_count=len(expressions),
            normalized=normalized,
            fingerprint=_digest(normalized),
        )

    def validate_with_timeout(self, text: str, timeout: float) -> ValidationResult:
        """
        validate() in a daemon worker thread, bounded by timeout seconds.

        A parse cannot be interrupted: on timeout the worker is abandoned
        and keeps running, but it never holds the interpreter open at exit.

        Raises:
            SQLValidationError: parse failure or timeout
        """
        outcome: Dict[str, Any] = {}

        def run() -> None:
            try:
                outcome["result"] = self.validate(text)
            except Exception as e:
                outcome["error"] = e

        worker = threading.Thread(target=run, name="sql-validator", daemon=True)
        worker.start()
        worker.join(timeout)

        if worker.is_alive():
            logger.error(f"SQL validation exceeded {timeout}s")
            raise SQLValidationError(f"SQL validation timed out after {timeout}s")
        if "error" in outcome:
            raise outcome["error"]
        return outcome["result"]

    def fingerprint(self, text: str) -> str:
        """sha256 of the normalized form of text."""
        return self.validate(text).fingerprint


__all__ = ["SQLValidator", "ValidationResult"]
