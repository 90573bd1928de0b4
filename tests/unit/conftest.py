"""Shared fixtures for unit tests."""
import json
from datetime import datetime, timezone
from pathlib import Path

import pytest

FIXTURES = Path(__file__).resolve().parent.parent / "fixtures"


def load_fixture(name: str):
    """Decode a JSON fixture file."""
    with open(FIXTURES / name) as f:
        return json.load(f)


@pytest.fixture
def clock():
    """Clock frozen at 2016-04-18 00:00 UTC."""
    return lambda: datetime(2016, 4, 18, tzinfo=timezone.utc)


@pytest.fixture
def facebook_body() -> str:
    return (FIXTURES / "facebook.json").read_text()


@pytest.fixture
def facebook_json() -> dict:
    """Raw record of the Facebook stock."""
    return load_fixture("facebook.json")[0]


@pytest.fixture
def unavailable_json() -> dict:
    """Raw record the API returns for an unknown ISIN."""
    return load_fixture("unavailable.json")[0]
