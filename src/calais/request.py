"""Request building: content validation and the outgoing form payload."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from calais.directives import render_params_xml
from calais.errors import InvalidInputError

if TYPE_CHECKING:
    from calais.directives import CalaisConfig

MAX_CONTENT_SIZE = 100_000


@dataclass(frozen=True)
class CalaisRequest:
    """A validated request ready for the transport."""

    license_id: str
    content: str
    params_xml: str

    def form(self) -> dict[str, str]:
        """Return the form fields posted to the service."""
        return {
            "licenseID": self.license_id,
            "content": self.content,
            "paramsXML": self.params_xml,
        }

    def __repr__(self) -> str:
        """Keep the license key and full content out of logs."""
        return (
            f"CalaisRequest(license_id='[REDACTED]', "
            f"content=<{len(self.content)} chars>, params_xml={self.params_xml!r})"
        )


def validate_content(content: str) -> str:
    """Return *content* unchanged, or raise ``InvalidInputError``."""
    if not isinstance(content, str):
        raise InvalidInputError(
            f"Expected str content, got {type(content).__name__}",
            hint="Use analyze_file() or analyze_url() for other inputs.",
        )
    if not content:
        raise InvalidInputError("Invalid content: empty")
    if len(content) > MAX_CONTENT_SIZE:
        raise InvalidInputError(
            f"Invalid content: {len(content)} characters exceeds the maximum "
            f"allowed size of {MAX_CONTENT_SIZE}",
            hint="Split the document and analyze each part separately.",
        )
    return content


def build_request(api_key: str, content: str, config: CalaisConfig) -> CalaisRequest:
    """Validate *content* and assemble the request for *config*.

    Raises:
        InvalidInputError: If content is empty or too large.
    """
    return CalaisRequest(
        license_id=api_key,
        content=validate_content(content),
        params_xml=render_params_xml(config),
    )
