"""CalaisClient: submit content and return a normalized analysis."""

from __future__ import annotations

from dataclasses import replace
import logging
from pathlib import Path
from typing import TYPE_CHECKING
from urllib.parse import urlparse

from calais.config import Settings
from calais.directives import CalaisConfig
from calais.errors import InvalidInputError
from calais.normalize import normalize
from calais.request import build_request
from calais.transport.http import HttpTransport
from calais.transport.mock import MockTransport

if TYPE_CHECKING:
    from types import TracebackType

    from calais.result import AnalysisResult
    from calais.transport.base import Transport

logger = logging.getLogger(__name__)

URL_CONTENT_TYPE = "TEXT/HTML"


class CalaisClient:
    """Synchronous client for the Calais semantic analysis service.

    The default directives (including the generated ``externalID``) are fixed
    at construction and shared by every call that does not pass its own
    config.

    Example:
        with CalaisClient("my-key") as client:
            result = client.analyze("Apple Inc. was founded by Steve Jobs.")
            for entity in result.entities:
                print(entity.get_field("_type"), entity.get_field("name"))
    """

    def __init__(
        self,
        api_key: str | None = None,
        *,
        config: CalaisConfig | None = None,
        settings: Settings | None = None,
        transport: Transport | None = None,
    ) -> None:
        """Resolve settings and pick a transport."""
        if settings is None:
            settings = Settings(api_key=api_key)
        elif api_key is not None:
            settings = replace(settings, api_key=api_key)
        self.settings = settings
        self.config = config if config is not None else CalaisConfig()
        self._transport = transport if transport is not None else _get_transport(settings)

    def analyze(self, text: str, config: CalaisConfig | None = None) -> AnalysisResult:
        """Analyze raw text.

        Args:
            text: Content to analyze, at most 100,000 characters.
            config: Directives for this call. Defaults to the client's.

        Raises:
            InvalidInputError: Before any network call, for empty or oversized text.
            TransportError: If the HTTP exchange fails.
            MalformedResponseError: If the response lacks the expected shape.
        """
        request = build_request(
            self.settings.api_key or "",
            text,
            config if config is not None else self.config,
        )
        logger.debug(
            "Submitting %d characters to %s", len(request.content), self.settings.endpoint
        )
        raw = self._transport.post(str(self.settings.endpoint), request.form())
        return normalize(raw)

    def analyze_url(
        self, url: str, config: CalaisConfig | None = None
    ) -> AnalysisResult:
        """Fetch *url* and analyze its contents as HTML.

        The URL becomes the ``externalID`` and ``contentType`` is set to
        ``TEXT/HTML``; the passed config itself is left unchanged.
        """
        try:
            scheme = urlparse(url).scheme
        except ValueError as exc:
            raise InvalidInputError(
                f"Unparseable URL {url!r}: {exc}",
                hint="Pass an absolute http(s) URL.",
            ) from exc
        if scheme not in ("http", "https"):
            raise InvalidInputError(
                f"Expected an http(s) URL, got {url!r}",
                hint="Use analyze_file() for local documents.",
            )
        base = config if config is not None else self.config
        derived = base.override(externalID=url, contentType=URL_CONTENT_TYPE)
        content = self._transport.fetch(url)
        return self.analyze(content, derived)

    def analyze_file(
        self,
        path: str | Path,
        config: CalaisConfig | None = None,
        *,
        encoding: str = "utf-8",
    ) -> AnalysisResult:
        """Read a local text file and analyze it."""
        p = Path(path)
        if not p.is_file():
            raise InvalidInputError(f"File not found: {p}")
        try:
            content = p.read_text(encoding=encoding)
        except UnicodeDecodeError as exc:
            raise InvalidInputError(
                f"Cannot decode {p} as {encoding}: {exc}",
                hint="Pass encoding=... matching the file, e.g. 'latin-1'.",
            ) from exc
        except OSError as exc:
            raise InvalidInputError(
                f"Cannot read {p}: {exc}",
                hint="Check that the file exists and is readable.",
            ) from exc
        return self.analyze(content, config)

    def close(self) -> None:
        """Release the transport's resources."""
        close = getattr(self._transport, "close", None)
        if callable(close):
            try:
                close()
            except Exception as exc:
                # Cleanup should never mask the primary failure.
                logger.warning("Transport cleanup failed: %s", exc)

    def __enter__(self) -> CalaisClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


def _get_transport(settings: Settings) -> Transport:
    """Get the appropriate transport for *settings*."""
    if settings.use_mock:
        return MockTransport()
    return HttpTransport(timeout_s=settings.timeout_s or 30.0)
