# ============================================================================
# CONFIGURATION MODULE
# ============================================================================
# STATUS: Core - Configuration and defaults
# PURPOSE: Centralized configuration management
# CREATED: 18 OCT 2026
# ============================================================================
"""
Configuration Module

Provides centralized configuration and defaults for the DDL builder.
"""

from pgddl.config.defaults import (
    SerializerDefaults,
    GeneratorDefaults,
    LoggingDefaults,
    Defaults,
    get_defaults,
    reset_defaults,
)

__all__ = [
    "SerializerDefaults",
    "GeneratorDefaults",
    "LoggingDefaults",
    "Defaults",
    "get_defaults",
    "reset_defaults",
]
