# ============================================================================
# SHARED TEST FIXTURES
# ============================================================================
# STATUS: Tests - Fixtures shared by every test module
# PURPOSE: Isolate the cached configuration between tests
# CREATED: 18 OCT 2026
# ============================================================================
"""Shared pytest fixtures."""

import pytest

from pgddl.config import reset_defaults


@pytest.fixture(autouse=True)
def fresh_defaults(monkeypatch):
    """Drop cached defaults and PGDDL_* overrides around each test."""
    for var in (
        "PGDDL_INDEX_METHOD",
        "PGDDL_LEGACY_ALTER_TYPE",
        "PGDDL_SCHEMA",
        "PGDDL_CASCADE_DROPS",
        "LOG_LEVEL",
        "LOG_FORMAT",
    ):
        monkeypatch.delenv(var, raising=False)
    reset_defaults()
    yield
    reset_defaults()
