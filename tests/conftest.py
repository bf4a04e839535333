"""Test configuration and fixtures for the exchange adapter test suite."""

import os
import sys
from pathlib import Path

import pytest
from dotenv import load_dotenv

ENV_PREFIX = "FARHADMARKET_"


# Add the project root to the Python path
@pytest.fixture(scope="session", autouse=True)
def setup_path() -> None:
    """Add the project root to the Python path and load a local .env."""
    project_root = Path(__file__).parent.parent
    sys.path.insert(0, str(project_root))

    # Credentials for manual runs against the exchange
    load_dotenv()


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep adapter settings from the environment out of each test."""
    for name in list(os.environ):
        if name.upper().startswith(ENV_PREFIX):
            monkeypatch.delenv(name)
