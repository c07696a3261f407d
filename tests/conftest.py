"""Shared pytest fixtures."""

from pathlib import Path

import pytest

from spark_ranker.logging.context import clear_log_context
from tests.helpers import NOW, make_requester

FIXTURES_DIR = Path(__file__).parent / "fixtures"

RANKER_ENV_VARS = ("LOG_LEVEL", "LOG_FORMAT", "ENVIRONMENT", "SPARK_RANKER_CONFIG")


@pytest.fixture(autouse=True)
def clean_context():
    """Clear logging context before and after each test."""
    clear_log_context()
    yield
    clear_log_context()


@pytest.fixture
def clean_env(monkeypatch):
    """Remove ranker environment variables so tests see defaults."""
    for name in RANKER_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def fixtures_dir():
    return FIXTURES_DIR


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def requester():
    """Requester: woman seeking men, into hiking and coffee, in Brooklyn."""
    return make_requester()
