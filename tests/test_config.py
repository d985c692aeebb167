# ============================================================================
# CONFIGURATION TESTS
# ============================================================================
# STATUS: Tests - Environment-driven defaults
# PURPOSE: Verify defaults, env overrides and the cached global
# CREATED: 18 OCT 2026
# ============================================================================
"""
Configuration Tests

Run with:
    pytest tests/test_config.py -v
"""

import dataclasses

import pytest

from pgddl.config import (
    Defaults,
    GeneratorDefaults,
    LoggingDefaults,
    SerializerDefaults,
    get_defaults,
    reset_defaults,
)


class TestDefaults:
    def test_builtin_values(self):
        defaults = get_defaults()
        assert defaults.serializer.index_method == "btree"
        assert defaults.serializer.legacy_alter_type is True
        assert defaults.generator.schema_name == "public"
        assert defaults.generator.cascade_drops is True
        assert defaults.logging.level == "INFO"
        assert defaults.logging.json_output is False

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("PGDDL_INDEX_METHOD", "brin")
        monkeypatch.setenv("PGDDL_LEGACY_ALTER_TYPE", "no")
        monkeypatch.setenv("PGDDL_SCHEMA", "app")
        monkeypatch.setenv("PGDDL_CASCADE_DROPS", "false")
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("LOG_FORMAT", "JSON")

        defaults = Defaults.from_env()
        assert defaults.serializer == SerializerDefaults(index_method="brin", legacy_alter_type=False)
        assert defaults.generator == GeneratorDefaults(schema_name="app", cascade_drops=False)
        assert defaults.logging == LoggingDefaults(level="DEBUG", json_output=True)

    @pytest.mark.parametrize("raw,expected", [
        ("1", True), ("true", True), (" Yes ", True), ("on", True),
        ("0", False), ("false", False), ("off", False), ("", False),
    ])
    def test_flag_parsing(self, monkeypatch, raw, expected):
        monkeypatch.setenv("PGDDL_LEGACY_ALTER_TYPE", raw)
        assert SerializerDefaults.from_env().legacy_alter_type is expected

    def test_global_is_cached_until_reset(self, monkeypatch):
        first = get_defaults()
        monkeypatch.setenv("PGDDL_SCHEMA", "other")
        assert get_defaults() is first

        reset_defaults()
        assert get_defaults().generator.schema_name == "other"

    def test_sections_are_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            get_defaults().serializer.index_method = "hash"
