"""Shared pytest configuration and fixtures for aws-sessions-switcher tests.

Every fixture works inside a fresh temporary home directory so the real
``~/.aws`` files are never touched.
"""

import tempfile
from datetime import datetime, timedelta
from pathlib import Path

import pytest

from ..services.config_service import ConfigStore
from ..services.env_config import EXPIRATION_TIMESTAMP_FORMAT, SwitcherConfig
from ..services.iam import CredentialsManager
from ..services.session_service import SessionStore


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Remove environment variables that would redirect the files under test."""
    for name in ('AWS_SESSIONS_SWITCHER_CONFIG_FILENAME', 'AWS_SHARED_CREDENTIALS_FILE',
                 'AWS_SESSIONS_SWITCHER_REGION', 'DEBUG'):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def temp_working_dir():
    """Create temporary home directory for tests.

    Yields:
        Path: Path to temporary directory
    """
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


@pytest.fixture
def switcher_config(temp_working_dir):
    """SwitcherConfig rooted in the temporary home directory."""
    return SwitcherConfig(home=str(temp_working_dir))


@pytest.fixture
def config_store(switcher_config):
    return ConfigStore(switcher_config)


@pytest.fixture
def credentials(switcher_config):
    return CredentialsManager(switcher_config.credentials_file)


@pytest.fixture
def session_store(switcher_config, credentials):
    return SessionStore(switcher_config, credentials)


@pytest.fixture
def timestamp():
    """Build a stored expiration timestamp relative to now.

    Returns:
        Callable: ``timestamp(seconds)`` -> ``YYYY-MM-DD HH:MM:SS``
    """
    def _timestamp(seconds: int, now: datetime = None) -> str:
        now = now or datetime.now()
        return (now + timedelta(seconds=seconds)).strftime(EXPIRATION_TIMESTAMP_FORMAT)
    return _timestamp


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as touching several services and files"
    )
