"""Shared fixtures for polyserial tests."""

import pytest

from polyserial import dispatch
from polyserial.config import CONFIG_PATH_ENV


@pytest.fixture(autouse=True)
def reset_default_registry(monkeypatch):
    """Give every test a fresh process-wide registry and no config file."""
    monkeypatch.setattr(dispatch, "_default_registry", None)
    monkeypatch.delenv(CONFIG_PATH_ENV, raising=False)
