"""
Shared pytest fixtures for the limelight client tests.

HTTP sessions are Mock(spec=requests.Session) objects, so nothing here
touches the network.
"""

from unittest.mock import Mock

import pytest
import requests
from hypothesis import HealthCheck, settings

from limelight import LimelightClient

settings.register_profile(
    "default",
    max_examples=100,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow],
)
settings.register_profile("dev", max_examples=10, deadline=None)
settings.load_profile("default")

FIXED_NOW = 1_700_000_000

LIMELIGHT_ENV_VARS = (
    "LIMELIGHT_ORGANIZATION",
    "LIMELIGHT_ACCESS_KEY",
    "LIMELIGHT_SECRET",
    "LIMELIGHT_HOST",
    "LIMELIGHT_ANALYTICS_HOST",
    "LIMELIGHT_TIMEOUT",
    "LIMELIGHT_UPLOAD_TIMEOUT",
)


def make_response(payload=None, status_code=200):
    resp = Mock(spec=requests.Response)
    resp.status_code = status_code
    resp.json.return_value = payload if payload is not None else {}
    return resp


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the developer's LIMELIGHT_* variables out of every test."""
    for name in LIMELIGHT_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def session():
    s = Mock(spec=requests.Session)
    s.request.return_value = make_response({"ok": True})
    return s


@pytest.fixture
def analytics_session():
    s = Mock(spec=requests.Session)
    s.request.return_value = make_response({"analytics": True})
    return s


@pytest.fixture
def client(session, analytics_session):
    c = LimelightClient(
        organization="org1",
        access_key="ak",
        secret="s3cr3t",
        session=session,
        analytics_session=analytics_session,
    )
    c.signer.clock = lambda: FIXED_NOW
    return c
