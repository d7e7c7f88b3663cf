"""Exception hierarchy for the Calais client."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator


class CalaisError(Exception):
    """Base exception for all Calais client errors."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint = hint


class ConfigurationError(CalaisError):
    """Settings or directive overrides failed validation."""


class InvalidInputError(CalaisError):
    """Content was empty or exceeded the maximum allowed size.

    Raised before any network activity.
    """


class TransportError(CalaisError):
    """The HTTP exchange failed.

    Covers network failures, non-2xx responses and undecodable bodies. The
    client never retries; the error is surfaced unchanged.
    """

    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        status_code: int | None = None,
        url: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.status_code = status_code
        self.url = url


class MalformedResponseError(CalaisError):
    """The decoded response did not have the expected structure."""


def _walk_exception_chain(exc: BaseException) -> Iterator[BaseException]:
    """Yield *exc* and its ``__cause__``/``__context__`` chain, with cycle protection."""
    seen: set[int] = set()
    stack: list[BaseException] = [exc]
    while stack:
        cur = stack.pop()
        if id(cur) in seen:
            continue
        seen.add(id(cur))
        yield cur

        cause = cur.__cause__
        if isinstance(cause, BaseException):
            stack.append(cause)
        context = cur.__context__
        if isinstance(context, BaseException):
            stack.append(context)
