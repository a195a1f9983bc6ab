"""Root pytest configuration: markers, auto-skip behaviour and shared fixtures.

Test Structure:
    tests/
    ├── unit/           # Fast, isolated tests (no database, no network)
    ├── api/            # FastAPI TestClient against in-memory SQLite
    └── integration/    # Testcontainers PostgreSQL

Environment Variables:
    RUN_INTEGRATION=1    Run @pytest.mark.integration tests
    RUN_ALL_TESTS=1      Run all tests (overrides other settings)

Pytest Options:
    --run-integration    Run integration tests
    --run-all            Run all tests
"""

import os
from datetime import date
from pathlib import Path
from typing import Any

import pytest
from dotenv import load_dotenv

from pdao_config import clear_settings_cache

PROJECT_ROOT = Path(__file__).resolve().parents[1]

# Load .env.dev for tests (same as local development)
CONFIG_DIR = PROJECT_ROOT / "config"
if (CONFIG_DIR / ".env.dev").exists():
    load_dotenv(CONFIG_DIR / ".env.dev")
elif (CONFIG_DIR / ".env").exists():
    load_dotenv(CONFIG_DIR / ".env")


def _enabled(config, option: str, env_var: str) -> bool:
    return config.getoption(option) or os.environ.get(env_var, "").lower() in (
        "1",
        "true",
        "yes",
    )


def pytest_addoption(parser):
    """Add custom command line options."""
    parser.addoption(
        "--run-integration",
        action="store_true",
        default=False,
        help="Run tests marked with @pytest.mark.integration",
    )
    parser.addoption(
        "--run-all",
        action="store_true",
        default=False,
        help="Run all tests regardless of markers",
    )


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: Tests that verify database/persistence behavior (auto-skipped)",
    )
    config.addinivalue_line(
        "markers",
        "slow: Tests that take more than 1 second",
    )


def pytest_collection_modifyitems(config, items):
    """Auto-skip integration tests unless explicitly enabled."""
    if _enabled(config, "--run-all", "RUN_ALL_TESTS"):
        return
    if _enabled(config, "--run-integration", "RUN_INTEGRATION"):
        return

    skip_integration = pytest.mark.skip(
        reason="Integration test - run with --run-integration or RUN_INTEGRATION=1",
    )
    for item in items:
        if "integration" in {mark.name for mark in item.iter_markers()}:
            item.add_marker(skip_integration)


@pytest.fixture(autouse=True)
def configure_app_settings():
    """Drop cached settings around every test."""
    clear_settings_cache()
    yield
    clear_settings_cache()


# -----------------------------------------------------------------------------
# Shared payloads
# -----------------------------------------------------------------------------

TEST_EMAIL = "juan.delacruz@example.com"
TEST_PASSWORD = "SecurePass123"
TEST_CONTACT = "09171234567"


@pytest.fixture
def address_payload() -> dict[str, Any]:
    return {
        "street": "123 Rizal Street",
        "barangay": "Bonuan Binloc",
        "city_municipality": "Dagupan City",
        "province": "Pangasinan",
        "region": "Region I",
        "zip_code": "2400",
    }


@pytest.fixture
def registration_payload(address_payload) -> dict[str, Any]:
    """A registration body that passes every rule."""
    return {
        "first_name": "Juan",
        "middle_name": "Santos",
        "last_name": "Dela Cruz",
        "suffix": "Jr.",
        "sex": "Male",
        "date_of_birth": "1990-05-15",
        "address": address_payload,
        "contact_number": TEST_CONTACT,
        "email": TEST_EMAIL,
        "password": TEST_PASSWORD,
    }


@pytest.fixture
def fixed_today() -> date:
    return date(2024, 6, 1)
