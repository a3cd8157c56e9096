# ============================================================================
# SQL VALIDATOR TESTS
# ============================================================================
# STATUS: Tests - sqlglot-backed syntax check
# PURPOSE: Verify statement counting, fingerprints, errors and timeouts
# CREATED: 19 OCT 2026
# ============================================================================
"""
SQL Validator Tests

Run with:
    pytest tests/test_sql_validator.py -v
"""

import threading
import time

import pytest
from sqlglot import exp

from oas2pg.core.exceptions import SQLValidationError
from oas2pg.infrastructure import SQLValidator, ValidationResult


@pytest.fixture
def validator():
    return SQLValidator()


class TestValidate:

    def test_counts_statements(self, validator):
        result = validator.validate(
            "CREATE TABLE IF NOT EXISTS tags (id BIGSERIAL NOT NULL PRIMARY KEY, name TEXT);\n"
            "SELECT * FROM tags;"
        )
        assert isinstance(result, ValidationResult)
        assert result.statement_count == 2
        assert len(result.fingerprint) == 64

    def test_empty_text(self, validator):
        result = validator.validate("   \n")
        assert result.statement_count == 0
        assert result.normalized == ""

    def test_parse_error(self, validator):
        with pytest.raises(SQLValidationError, match="does not parse"):
            validator.validate("CREATE TABLE users (id INTEGER")

    def test_does_not_alter_input(self, validator):
        text = "SELECT * FROM pets;"
        validator.validate(text)
        assert text == "SELECT * FROM pets;"


class TestFingerprint:

    def test_formatting_insensitive(self, validator):
        assert validator.fingerprint("select   *\nfrom pets") == validator.fingerprint("SELECT * FROM pets")

    def test_different_statements(self, validator):
        assert validator.fingerprint("SELECT * FROM pets") != validator.fingerprint("SELECT * FROM tags")


class TestTimeout:

    def test_within_timeout(self, validator):
        result = validator.validate_with_timeout("SELECT 1;", timeout=10)
        assert result.statement_count == 1

    def test_timeout_raises(self, validator, monkeypatch):
        def slow_validate(text):
            time.sleep(0.5)
            return ValidationResult()

        monkeypatch.setattr(validator, "validate", slow_validate)

        with pytest.raises(SQLValidationError, match="timed out"):
            validator.validate_with_timeout("SELECT 1;", timeout=0.05)

    def test_parse_error_through_worker(self, validator):
        with pytest.raises(SQLValidationError, match="does not parse"):
            validator.validate_with_timeout("CREATE TABLE pets (id INTEGER", timeout=10)

    def test_abandoned_worker_is_daemon(self, validator, monkeypatch):
        release = threading.Event()
        started = threading.Event()
        workers = []

        def blocked_validate(text):
            workers.append(threading.current_thread())
            started.set()
            release.wait(5)
            return ValidationResult()

        monkeypatch.setattr(validator, "validate", blocked_validate)

        try:
            with pytest.raises(SQLValidationError, match="timed out"):
                validator.validate_with_timeout("SELECT 1;", timeout=0.05)
            assert started.wait(1)
            assert workers[0].daemon is True
        finally:
            release.set()


class TestParsedExpressions:

    def test_parse_returns_expressions(self, validator):
        parsed = validator._parse("SELECT 1; SELECT 2;")
        assert len(parsed) == 2
        assert all(isinstance(e, exp.Expression) for e in parsed)
