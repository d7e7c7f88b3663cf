"""Shared transport-side error helpers.

Transports map httpx failures into ``TransportError`` carrying the status code
so callers can tell auth problems from outages without parsing messages.
"""

from __future__ import annotations

import httpx

from calais.errors import TransportError, _walk_exception_chain


def extract_status_code(exc: BaseException) -> int | None:
    """Walk the exception chain to find an HTTP status code."""
    for e in _walk_exception_chain(exc):
        for attr in ("status_code", "status"):
            value = getattr(e, attr, None)
            if isinstance(value, int) and 100 <= value <= 599:
                return value
        if isinstance(e, httpx.HTTPStatusError):
            return e.response.status_code
    return None


def _hint_for(exc: BaseException, status_code: int | None) -> str | None:
    if status_code in {401, 403}:
        return "Check credentials (try setting CALAIS_API_KEY or Settings.api_key)."
    if status_code is not None and status_code >= 500:
        return "The service reported an internal error; try again later."
    if isinstance(exc, httpx.TimeoutException):
        return "Increase Settings.timeout_s or CALAIS_TIMEOUT_S."
    return None


def wrap_transport_error(
    exc: httpx.HTTPError,
    *,
    url: str,
    phase: str,
) -> TransportError:
    """Map an httpx exception into ``TransportError``."""
    status_code = extract_status_code(exc)
    msg = f"Calais {phase} failed"
    status_note = f" (status={status_code})" if status_code is not None else ""
    cause = str(exc)
    return TransportError(
        f"{msg}{status_note}: {cause}" if cause else f"{msg}{status_note}",
        hint=_hint_for(exc, status_code),
        status_code=status_code,
        url=url,
    )
