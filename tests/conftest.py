"""Shared fixtures for page_assets tests."""
from unittest.mock import MagicMock

import pytest
import requests


def build_response(status_code, headers=None):
    response = requests.Response()
    response.status_code = status_code
    response.headers.update(headers or {})
    return response


@pytest.fixture
def make_response():
    return build_response


@pytest.fixture
def fake_session():
    """A requests.Session stand-in whose ``head`` is configured per test."""
    session = MagicMock(spec=requests.Session)
    return session
