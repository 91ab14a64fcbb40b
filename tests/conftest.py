"""
Name: Pytest Configuration and Shared Fixtures

Responsibilities:
  - Configure test environment (APP_ENV=test => in-memory adapters)
  - Reset container singletons (catalog, job queue) between tests

Notes:
  - Settings never read a local .env during tests
  - Entity factories live in tests/factories.py
"""

import os
import sys
from datetime import datetime
from pathlib import Path

import pytest

TESTS_DIR = Path(__file__).resolve().parent
if str(TESTS_DIR) not in sys.path:
    sys.path.insert(0, str(TESTS_DIR))

os.environ.setdefault("APP_ENV", "test")

from accounts_api.crosscutting import config as app_config  # noqa: E402

app_config.Settings.model_config["env_file"] = None

from factories import NOW  # noqa: E402


def pytest_configure(config) -> None:
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, no external dependencies)"
    )


@pytest.fixture(autouse=True)
def _reset_container_state():
    """R: El catálogo y la cola in-memory son singletons del container."""
    from accounts_api.container import get_in_memory_catalog, get_job_queue

    catalog = get_in_memory_catalog()
    queue = get_job_queue()
    catalog.clear()
    queue.clear()
    yield
    catalog.clear()
    queue.clear()


@pytest.fixture
def catalog():
    from accounts_api.container import get_in_memory_catalog

    return get_in_memory_catalog()


@pytest.fixture
def job_queue():
    from accounts_api.container import get_job_queue

    return get_job_queue()


@pytest.fixture
def now() -> datetime:
    return NOW
