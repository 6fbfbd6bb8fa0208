"""Shared fixtures: isolate Constants, environment and root logging per test."""

import json
import logging
from unittest.mock import Mock

import pytest

from constants import Constants

_CONSTANT_NAMES = [name for name in vars(Constants) if name.isupper()]


@pytest.fixture(autouse=True)
def _restore_constants(monkeypatch):
    """Config code writes onto Constants; put the defaults back afterwards."""
    saved = {name: getattr(Constants, name) for name in _CONSTANT_NAMES}
    for var in (
        Constants.ENV_CONFIG,
        Constants.ENV_LOG_LEVEL,
        Constants.ENV_NPM_REGISTRY,
        Constants.ENV_JSR_REGISTRY,
        Constants.ENV_TIMEOUT,
        Constants.ENV_STRICT,
    ):
        monkeypatch.delenv(var, raising=False)
    root = logging.getLogger()
    level = root.level
    yield
    for name, value in saved.items():
        setattr(Constants, name, value)
    for handler in list(root.handlers):
        if getattr(handler, "_latestpin", False):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


@pytest.fixture
def make_response():
    """Build a requests.Response stand-in."""
    def _make(status_code=200, data=None, text=None, reason=None):
        resp = Mock()
        resp.status_code = status_code
        resp.reason = reason
        resp.text = json.dumps(data) if text is None else text
        return resp
    return _make
