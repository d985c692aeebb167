# ============================================================================
# CONFIGURATION DEFAULTS
# ============================================================================
# STATUS: Core - Default configuration values
# PURPOSE: Centralized defaults for serializers, generator, logging
# CREATED: 18 OCT 2026
# ============================================================================
"""
Configuration Defaults

Provides defaults for statement serialization and model-driven generation.
These can be overridden via environment variables.

Design:
- Immutable dataclasses for defaults
- Environment variable overrides
- Type-safe access
"""

import os
from dataclasses import dataclass, field
from typing import Optional


def _env_flag(name: str, default: bool) -> bool:
    """Read a boolean environment variable."""
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class SerializerDefaults:
    """
    Defaults for statement serialization.

    index_method is stored on every new Index but only rendered when the
    caller sets a method explicitly.
    """
    index_method: str = "btree"

    # ALTER COLUMN <old type> TYPE <new type> (True) or
    # ALTER COLUMN <column> TYPE <new type> (False)
    legacy_alter_type: bool = True

    @classmethod
    def from_env(cls) -> "SerializerDefaults":
        """Create from environment variables."""
        return cls(
            index_method=os.getenv("PGDDL_INDEX_METHOD", "btree"),
            legacy_alter_type=_env_flag("PGDDL_LEGACY_ALTER_TYPE", True),
        )


@dataclass(frozen=True)
class GeneratorDefaults:
    """Defaults for generating entities from pydantic models."""
    schema_name: str = "public"
    cascade_drops: bool = True

    @classmethod
    def from_env(cls) -> "GeneratorDefaults":
        """Create from environment variables."""
        return cls(
            schema_name=os.getenv("PGDDL_SCHEMA", "public"),
            cascade_drops=_env_flag("PGDDL_CASCADE_DROPS", True),
        )


@dataclass(frozen=True)
class LoggingDefaults:
    """Defaults for configure_logging()."""
    level: str = "INFO"
    json_output: bool = False

    @classmethod
    def from_env(cls) -> "LoggingDefaults":
        """Create from environment variables."""
        return cls(
            level=os.getenv("LOG_LEVEL", "INFO"),
            json_output=os.getenv("LOG_FORMAT", "").lower() == "json",
        )


# ============================================================================
# GLOBAL DEFAULTS INSTANCE
# ============================================================================

@dataclass
class Defaults:
    """Container for all default configurations."""
    serializer: SerializerDefaults = field(default_factory=SerializerDefaults)
    generator: GeneratorDefaults = field(default_factory=GeneratorDefaults)
    logging: LoggingDefaults = field(default_factory=LoggingDefaults)

    @classmethod
    def from_env(cls) -> "Defaults":
        """Create all defaults from environment variables."""
        return cls(
            serializer=SerializerDefaults.from_env(),
            generator=GeneratorDefaults.from_env(),
            logging=LoggingDefaults.from_env(),
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
    "SerializerDefaults",
    "GeneratorDefaults",
    "LoggingDefaults",
    "Defaults",
    "get_defaults",
    "reset_defaults",
]
