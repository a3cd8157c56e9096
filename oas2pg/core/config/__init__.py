# ============================================================================
# CONFIGURATION MODULE
# ============================================================================
# STATUS: Core - Configuration and defaults
# PURPOSE: Centralized configuration management
# CREATED: 19 OCT 2026
# ============================================================================
"""
Configuration Module

Provides centralized configuration and defaults for the generator.
"""

from oas2pg.core.config.defaults import (
    GeneratorDefaults,
    ValidatorDefaults,
    OutputDefaults,
    Defaults,
    get_defaults,
    reset_defaults,
)

__all__ = [
    "GeneratorDefaults",
    "ValidatorDefaults",
    "OutputDefaults",
    "Defaults",
    "get_defaults",
    "reset_defaults",
]
