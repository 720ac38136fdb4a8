"""Shared test fixtures."""
from __future__ import annotations

import pytest

from buildconf_sdk.catalog import default_registry
from buildconf_sdk.schema.registry import SchemaRegistry


@pytest.fixture
def registry() -> SchemaRegistry:
    return SchemaRegistry()


@pytest.fixture
def catalog() -> SchemaRegistry:
    return default_registry()
