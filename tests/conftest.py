"""Shared pytest fixtures."""

import logging
from pathlib import Path

import pytest

from career_outlooks.config.environment import EnvironmentConfig
from career_outlooks.config.models import AppConfig
from career_outlooks.data.loader import ProgramCatalog, load_programs, load_unit_groups
from career_outlooks.logging.context import clear_log_context

FIXTURES_DIR = Path(__file__).parent / "fixtures"
DATA_DIR = FIXTURES_DIR / "data"


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture
def data_dir() -> Path:
    return DATA_DIR


@pytest.fixture(autouse=True)
def clean_log_context():
    """Clear logging context before and after each test."""
    clear_log_context()
    yield
    clear_log_context()


@pytest.fixture
def restore_root_logger():
    """Restore root logger handlers and level changed by configure_logging()."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def mock_env_vars(monkeypatch):
    """Environment with an LMI key and no log overrides."""
    monkeypatch.setenv("LMI_API_USER_KEY", "test-user-key")
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.setenv("ENVIRONMENT", "test")


@pytest.fixture
def clean_env(monkeypatch):
    """Environment without any of the variables the app reads."""
    for name in ("LMI_API_USER_KEY", "LOG_LEVEL", "ENVIRONMENT"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def app_config() -> AppConfig:
    """Static-source configuration pointing at the fixture data."""
    return AppConfig(
        data={
            "unit_groups_path": DATA_DIR / "unit_groups.json",
            "programs_path": DATA_DIR / "programs.json",
            "outlooks_path": DATA_DIR / "outlooks.yaml",
        },
    )


@pytest.fixture
def env_config() -> EnvironmentConfig:
    return EnvironmentConfig(environment="test")


@pytest.fixture
def unit_groups():
    return load_unit_groups(DATA_DIR / "unit_groups.json")


@pytest.fixture
def catalog():
    return ProgramCatalog(load_programs(DATA_DIR / "programs.json"))
