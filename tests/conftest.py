"""Pytest configuration and fixtures.

Provides environment isolation, logging configuration, a transport test double
and automatic API test skipping. All fixtures here are autouse unless noted.
"""

from __future__ import annotations

from contextlib import suppress
import copy
from dataclasses import dataclass, field
import logging
import os
from typing import Any

import pytest

# =============================================================================
# Sample Data
# =============================================================================

DOC_ID = "http://d.opencalais.com/dochash-1/8f3c2b1a"
TOPIC_URI = f"{DOC_ID}/cat/1"
APPLE_URI = "http://d.opencalais.com/comphash-1/5e2d1c4b"
JOBS_URI = "http://d.opencalais.com/pershash-1/9a7b6c5d"
FOUNDED_URI = "http://d.opencalais.com/genericHasher-1/1f2e3d4c"
SAMPLE_TEXT = "Apple Inc. was founded by Steve Jobs."


def calais_response() -> dict[str, Any]:
    """Return a fresh response shaped like the service's JSON output."""
    return {
        "doc": {
            "info": {
                "allowDistribution": "false",
                "allowSearch": "false",
                "docId": DOC_ID,
                "document": SAMPLE_TEXT,
                "externalID": "ext-1",
                "submitter": "calais-client tests",
            },
            "meta": {
                "contentType": "TEXT/RAW",
                "language": "English",
                "processingVer": "CalaisJob01",
                "messages": [],
            },
        },
        TOPIC_URI: {
            "_typeGroup": "topics",
            "category": "http://d.opencalais.com/cat/Calais/BusinessFinance",
            "categoryName": "Business_Finance",
            "classifierName": "Calais",
            "score": 1,
        },
        APPLE_URI: {
            "_typeGroup": "entities",
            "_type": "Company",
            "_typeReference": "http://s.opencalais.com/1/type/em/e/Company",
            "name": "Apple Inc.",
            "nationality": "N/A",
            "relevance": 0.714,
            "instances": [
                {"detection": "[]Apple Inc.[ was founded]", "exact": "Apple Inc.",
                 "offset": 0, "length": 10},
            ],
        },
        JOBS_URI: {
            "_typeGroup": "entities",
            "_type": "Person",
            "name": "Steve Jobs",
            "persontype": "N/A",
            "relevance": 0.571,
        },
        FOUNDED_URI: {
            "_typeGroup": "relations",
            "_type": "CompanyFounded",
            "company": APPLE_URI,
            "person": JOBS_URI,
            "status": "past",
        },
    }


# =============================================================================
# Test Doubles
# =============================================================================


@dataclass
class FakeTransport:
    """Transport test double.

    Records calls and returns a configurable response (or raises it when it
    is an exception). Each call gets a deep copy so tests can't leak state.
    """

    response: dict[str, Any] | BaseException = field(default_factory=calais_response)
    pages: dict[str, str] = field(default_factory=dict)
    posts: list[tuple[str, dict[str, str]]] = field(default_factory=list)
    fetches: list[str] = field(default_factory=list)
    closed: bool = False

    def post(self, url: str, form: dict[str, str]) -> dict[str, Any]:
        self.posts.append((url, dict(form)))
        if isinstance(self.response, BaseException):
            raise self.response
        return copy.deepcopy(self.response)

    def fetch(self, url: str) -> str:
        self.fetches.append(url)
        return self.pages.get(url, "<html><body>Steve Jobs</body></html>")

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def fake_transport() -> FakeTransport:
    """Return a FakeTransport answering with ``calais_response()``. Not autouse."""
    return FakeTransport()


@pytest.fixture
def sample_response() -> dict[str, Any]:
    """Return a fresh sample response. Not autouse."""
    return calais_response()


# =============================================================================
# Environment Isolation (Autouse)
# =============================================================================


@pytest.fixture(autouse=True)
def block_dotenv(request, monkeypatch):
    """Prevent python-dotenv from loading project .env files during tests.

    Opt-out: @pytest.mark.allow_dotenv
    """
    if request.node.get_closest_marker("allow_dotenv"):
        return
    with suppress(Exception):
        monkeypatch.setattr(
            "dotenv.load_dotenv", lambda *_args, **_kwargs: False, raising=False
        )


@pytest.fixture(autouse=True)
def isolate_calais_env(request, monkeypatch):
    """Ensure a clean CALAIS_* environment for each test.

    Opt-out: @pytest.mark.allow_env_pollution or @pytest.mark.api
    """
    if request.node.get_closest_marker("allow_env_pollution") or (
        "api" in request.node.keywords
    ):
        return

    for key in list(os.environ.keys()):
        if key.startswith("CALAIS_"):
            monkeypatch.delenv(key, raising=False)


# =============================================================================
# Logging
# =============================================================================


@pytest.fixture(scope="session", autouse=True)
def quiet_noisy_libraries():
    """Suppress noisy third-party loggers."""
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


# =============================================================================
# Pytest Hooks
# =============================================================================

API_TESTS_REASON = "API tests require ENABLE_API_TESTS=1"


def _api_tests_enabled() -> bool:
    return bool(os.getenv("ENABLE_API_TESTS"))


def pytest_collection_modifyitems(items):
    """Automatically skip API tests when not explicitly enabled."""
    if _api_tests_enabled():
        return
    skip_api = pytest.mark.skip(reason=API_TESTS_REASON)
    for item in items:
        if "api" in item.keywords:
            item.add_marker(skip_api)


@pytest.fixture
def calais_api_key():
    """Return CALAIS_API_KEY or skip the test if unavailable."""
    key = os.getenv("CALAIS_API_KEY")
    if not key:
        pytest.skip("CALAIS_API_KEY not set")
    return key
