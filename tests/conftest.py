"""
Pytest configuration and fixtures for tagcheck tests

This module provides a shared schema and rule files for unit and E2E tests.
"""
from pathlib import Path

import pytest

from tagcheck import RecordSchemaBuilder


# =======================
# PYTEST CONFIGURATION
# =======================

def pytest_configure(config):
    """Configure pytest with custom markers"""
    config.addinivalue_line(
        "markers", "unit: Unit tests that don't require external services"
    )
    config.addinivalue_line(
        "markers", "e2e: End-to-end tests that run the command-line interface"
    )


# =======================
# SCHEMA FIXTURES
# =======================

@pytest.fixture
def user_schema():
    return (
        RecordSchemaBuilder()
        .field("Name", "min=2,max=32")
        .field("Email", "required,email")
        .build("User")
    )


# =======================
# FILE FIXTURES
# =======================

RULES_YAML = """
strict: false
schemas:
  User:
    Name: "min=2,max=32"
    Email: "required,email"
  Contact:
    Phone: "max=20"
    Email: "email,unique"
    Notes:
"""


@pytest.fixture
def rules_file(tmp_path) -> Path:
    """
    Write a rule configuration file with User and Contact schemas

    Returns:
        Path to the YAML file
    """
    path = tmp_path / "rules.yaml"
    path.write_text(RULES_YAML)
    return path


@pytest.fixture
def write_file(tmp_path):
    """Return a helper that writes text to a file under tmp_path."""
    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.write_text(content)
        return path
    return _write
