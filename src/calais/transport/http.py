"""httpx-backed transport for the Calais REST endpoint."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from calais.errors import TransportError
from calais.transport._errors import wrap_transport_error

logger = logging.getLogger(__name__)

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"
_POST_HEADERS = {"Accept": "application/json", "Content-Type": FORM_CONTENT_TYPE}


class HttpTransport:
    """Synchronous transport over a shared ``httpx.Client``.

    The client is created once here and reused for connection pooling; pass
    *client* to supply a preconfigured one (proxies, mock transports).
    """

    def __init__(
        self, *, timeout_s: float = 30.0, client: httpx.Client | None = None
    ) -> None:
        """Initialize with a timeout or an existing client."""
        self.timeout_s = timeout_s
        self._owns_client = client is None
        self._client = (
            client
            if client is not None
            else httpx.Client(timeout=timeout_s, follow_redirects=True)
        )

    def post(self, url: str, form: dict[str, str]) -> dict[str, Any]:
        """POST *form* and decode the JSON body."""
        try:
            response = self._client.post(url, data=form, headers=_POST_HEADERS)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise wrap_transport_error(exc, url=url, phase="analyze") from exc

        logger.debug(
            "POST %s -> %d (%d bytes)", url, response.status_code, len(response.content)
        )
        try:
            return response.json()  # type: ignore[no-any-return]
        except ValueError as exc:
            raise TransportError(
                f"Calais analyze failed: response body is not valid JSON: {exc}",
                hint="Check that outputFormat is 'application/json'.",
                status_code=response.status_code,
                url=url,
            ) from exc

    def fetch(self, url: str) -> str:
        """GET *url* and return the decoded text body."""
        try:
            response = self._client.get(url)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise wrap_transport_error(exc, url=url, phase="fetch") from exc
        logger.debug("GET %s -> %d", url, response.status_code)
        return response.text

    def close(self) -> None:
        """Close the underlying client if this transport created it."""
        if self._owns_client:
            self._client.close()
