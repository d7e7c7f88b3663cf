"""Live service checks. Skipped unless ENABLE_API_TESTS=1."""

from __future__ import annotations

import pytest

from calais import CalaisClient

pytestmark = pytest.mark.api


def test_live_analysis_returns_entities(calais_api_key: str) -> None:
    with CalaisClient(calais_api_key) as client:
        result = client.analyze("Apple Inc. was founded by Steve Jobs.")

    assert result.info.get_field("docId")
    assert any(e.get_field("name") == "Steve Jobs" for e in result.entities)
