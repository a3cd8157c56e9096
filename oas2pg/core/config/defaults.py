# ============================================================================
# CONFIGURATION DEFAULTS
# ============================================================================
# STATUS: Core - Default configuration values
# PURPOSE: Centralized defaults for generation, validation and output
# CREATED: 19 OCT 2026
# ============================================================================
"""
Configuration Defaults

Provides defaults for DDL generation, SQL validation and output files.
These can be overridden via OAS2PG_* environment variables (read by the CLI
layer only) or command-line flags.

Design:
- Immutable dataclasses for defaults
- Environment variable overrides
- Type-safe access
"""

import os
from dataclasses import dataclass, field
from typing import Optional

from oas2pg.core.contracts import EnumMode, ErrorPolicy


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class GeneratorDefaults:
    """
    Defaults for table generation.

    Controls enum rendering, exclusion markers and failure handling.
    """
    enum_mode: EnumMode = EnumMode.TYPE
    error_policy: ErrorPolicy = ErrorPolicy.ABORT
    delete_statements: bool = False

    # Vendor extensions that keep an entity out of the database
    exclude_extension: str = "x-database-exclude"   # excluded when true-like
    entity_extension: str = "x-database-entity"     # excluded when false-like

    @classmethod
    def from_env(cls) -> "GeneratorDefaults":
        """Create from environment variables."""
        return cls(
            enum_mode=EnumMode(os.getenv("OAS2PG_ENUM_MODE", EnumMode.TYPE.value)),
            error_policy=ErrorPolicy(os.getenv("OAS2PG_ERROR_POLICY", ErrorPolicy.ABORT.value)),
            delete_statements=_env_bool("OAS2PG_DELETE_STATEMENTS", False),
            exclude_extension=os.getenv("OAS2PG_EXCLUDE_EXTENSION", "x-database-exclude"),
            entity_extension=os.getenv("OAS2PG_ENTITY_EXTENSION", "x-database-entity"),
        )


@dataclass(frozen=True)
class ValidatorDefaults:
    """
    Defaults for the SQL validator pass.
    """
    enabled: bool = True
    dialect: str = "postgres"
    timeout_seconds: float = 30.0

    @classmethod
    def from_env(cls) -> "ValidatorDefaults":
        """Create from environment variables."""
        return cls(
            enabled=_env_bool("OAS2PG_VALIDATE", True),
            dialect=os.getenv("OAS2PG_VALIDATOR_DIALECT", "postgres"),
            timeout_seconds=float(os.getenv("OAS2PG_VALIDATOR_TIMEOUT", 30.0)),
        )


@dataclass(frozen=True)
class OutputDefaults:
    """
    Defaults for written files.
    """
    output_folder: Optional[str] = None     # None = print to stdout
    schema_filename: str = "schemas.sql"
    queries_filename: str = "queries.sql"

    @classmethod
    def from_env(cls) -> "OutputDefaults":
        """Create from environment variables."""
        return cls(
            output_folder=os.getenv("OAS2PG_OUTPUT_FOLDER") or None,
            schema_filename=os.getenv("OAS2PG_SCHEMA_FILENAME", "schemas.sql"),
            queries_filename=os.getenv("OAS2PG_QUERIES_FILENAME", "queries.sql"),
        )


# ============================================================================
# GLOBAL DEFAULTS INSTANCE
# ============================================================================

@dataclass
class Defaults:
    """Container for all default configurations."""
    generator: GeneratorDefaults = field(default_factory=GeneratorDefaults)
    validator: ValidatorDefaults = field(default_factory=ValidatorDefaults)
    output: OutputDefaults = field(default_factory=OutputDefaults)

    @classmethod
    def from_env(cls) -> "Defaults":
        """Create all defaults from environment variables."""
        return cls(
            generator=GeneratorDefaults.from_env(),
            validator=ValidatorDefaults.from_env(),
            output=OutputDefaults.from_env(),
        )


_defaults: Optional[Defaults] = None


def get_defaults() -> Defaults:
    """Get global defaults instance."""
    global _defaults
    if _defaults is None:
        _defaults = Defaults.from_env()
    return _defaults


def reset_defaults() -> None:
    """Reset defaults (for testing)."""
    global _defaults
    _defaults = None


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "GeneratorDefaults",
    "ValidatorDefaults",
    "OutputDefaults",
    "Defaults",
    "get_defaults",
    "reset_defaults",
]
