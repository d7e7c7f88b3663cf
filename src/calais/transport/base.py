"""Transport protocol: the HTTP seam between the client and the service."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Transport(Protocol):
    """Minimal transport protocol: post a form, fetch a document."""

    def post(self, url: str, form: dict[str, str]) -> dict[str, Any]:
        """POST *form* to *url* and return the decoded JSON document."""
        ...

    def fetch(self, url: str) -> str:
        """GET *url* and return its body as text."""
        ...
