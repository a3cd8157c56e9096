# ============================================================================
# SHARED TEST FIXTURES
# ============================================================================
# STATUS: Tests - pytest fixtures shared across modules
# PURPOSE: Fixture documents, loader and service factories
# CREATED: 19 OCT 2026
# ============================================================================

import logging
from pathlib import Path

import pytest

from oas2pg.core.config import GeneratorDefaults, ValidatorDefaults, reset_defaults
from oas2pg.core.models import FieldSchema
from oas2pg.infrastructure import OpenAPILoader
from oas2pg.services import DDLService

TESTDATA = Path(__file__).parent / "testdata"


@pytest.fixture
def testdata() -> Path:
    return TESTDATA


@pytest.fixture
def loader() -> OpenAPILoader:
    return OpenAPILoader()


@pytest.fixture
def load_fixture(loader):
    """Factory: parse tests/testdata/<name>.yaml into a SpecDocument."""
    def _load(name: str):
        return loader.load_file(TESTDATA / f"{name}.yaml")
    return _load


@pytest.fixture
def make_service():
    """Factory for DDLService with validation off unless asked for."""
    def _make(validate: bool = False, **generator_overrides) -> DDLService:
        return DDLService(
            generator=GeneratorDefaults(**generator_overrides),
            validator=ValidatorDefaults(enabled=validate),
        )
    return _make


@pytest.fixture
def make_field():
    """Factory for FieldSchema with a string type by default."""
    def _make(name: str, data_type: str = "string", **kwargs) -> FieldSchema:
        return FieldSchema(name=name, data_type=data_type, **kwargs)
    return _make


@pytest.fixture(autouse=True)
def _clean_defaults():
    reset_defaults()
    yield
    reset_defaults()


@pytest.fixture(autouse=True)
def _restore_logging():
    """configure_logging() replaces root handlers; put pytest's back."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
