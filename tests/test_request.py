"""Request building: validation happens before any network call."""

from __future__ import annotations

import pytest

from calais.directives import CalaisConfig, parse_params_xml
from calais.errors import InvalidInputError
from calais.request import MAX_CONTENT_SIZE, build_request, validate_content
from tests.conftest import SAMPLE_TEXT

pytestmark = pytest.mark.unit


def test_build_request_form_fields() -> None:
    config = CalaisConfig()

    request = build_request("license-key", SAMPLE_TEXT, config)
    form = request.form()

    assert set(form) == {"licenseID", "content", "paramsXML"}
    assert form["licenseID"] == "license-key"
    assert form["content"] == SAMPLE_TEXT
    assert 'contentType="TEXT/RAW"' in form["paramsXML"]
    assert 'outputFormat="application/json"' in form["paramsXML"]
    parsed = parse_params_xml(form["paramsXML"])
    assert parsed["userDirectives"]["externalID"] == config.user.external_id


@pytest.mark.parametrize(
    "content", ["", "x" * (MAX_CONTENT_SIZE + 1)], ids=["empty", "oversized"]
)
def test_build_request_rejects_invalid_content(content: str) -> None:
    with pytest.raises(InvalidInputError, match="Invalid content"):
        build_request("k", content, CalaisConfig())


def test_content_at_the_limit_is_accepted() -> None:
    content = "x" * MAX_CONTENT_SIZE
    assert validate_content(content) is content


def test_non_string_content_is_rejected() -> None:
    with pytest.raises(InvalidInputError, match="Expected str"):
        validate_content(b"bytes")  # type: ignore[arg-type]


def test_request_repr_redacts_license_and_content() -> None:
    request = build_request("top-secret", SAMPLE_TEXT, CalaisConfig())

    text = repr(request)

    assert "top-secret" not in text
    assert SAMPLE_TEXT not in text
    assert f"<{len(SAMPLE_TEXT)} chars>" in text
