"""Mock transport for offline use and tests."""

from __future__ import annotations

import hashlib
from typing import Any


class MockTransport:
    """Transport that answers without network access.

    ``post`` returns a small, deterministic document shaped like a real
    response: a ``doc`` section plus one topic and one entity derived from
    the submitted content.
    """

    def post(self, url: str, form: dict[str, str]) -> dict[str, Any]:  # noqa: ARG002
        """Return a synthetic analysis of ``form['content']``."""
        content = form.get("content", "")
        digest = hashlib.sha1(content.encode("utf-8")).hexdigest()
        doc_id = f"http://d.opencalais.com/dochash-1/{digest}"
        first_word = next(iter(content.split()), "")
        return {
            "doc": {
                "info": {
                    "docId": doc_id,
                    "document": content[:100],
                    "submitter": "mock",
                },
                "meta": {"language": "English", "messages": []},
            },
            f"{doc_id}/cat/1": {
                "_typeGroup": "topics",
                "category": "http://d.opencalais.com/cat/Calais/Other",
                "categoryName": "Other",
                "score": 1,
            },
            f"{doc_id}/ent/1": {
                "_typeGroup": "entities",
                "_type": "Mock",
                "name": first_word,
                "relevance": 0.5,
                "docId": doc_id,
            },
        }

    def fetch(self, url: str) -> str:
        """Return a placeholder body naming *url*."""
        return f"mock content of {url}"
