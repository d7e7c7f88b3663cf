"""Response normalization: flat keyed document to grouped object graph.

The service answers with a flat mapping. ``doc`` holds the ``info`` and
``meta`` sections; every other key is a service-generated URI mapping to one
entry that names its group in ``_typeGroup``. Entries refer to each other by
URI, e.g. a relation's ``subject`` field holding an entity's key.
"""

from __future__ import annotations

from collections.abc import Mapping
import logging
from typing import Any

from pydantic import TypeAdapter, ValidationError

from calais.errors import MalformedResponseError
from calais.result import (
    TYPE_GROUP_FIELD,
    UNTYPED_GROUP,
    URI_FIELD,
    AnalysisObject,
    AnalysisResult,
)

logger = logging.getLogger(__name__)

DOC_KEY = "doc"
REFERENCE_PREFIX = "http://"

_ENTRIES = TypeAdapter(dict[str, dict[str, Any]])


def _extract_section(doc: Mapping[str, Any], key: str) -> AnalysisObject:
    section = doc.get(key)
    if section is None:
        return AnalysisObject()
    if not isinstance(section, Mapping):
        raise MalformedResponseError(
            f"Expected doc.{key} to be an object, got {type(section).__name__}"
        )
    return AnalysisObject(section)


def _validate_entries(raw: Mapping[str, Any]) -> dict[str, dict[str, Any]]:
    try:
        validated = _ENTRIES.validate_python(
            {k: v for k, v in raw.items() if k != DOC_KEY}
        )
    except ValidationError as exc:
        raise MalformedResponseError(
            f"Response entries must be objects keyed by URI "
            f"({exc.error_count()} invalid)",
            hint="The service may have returned an error document instead of JSON results.",
        ) from exc
    return {key: dict(fields) for key, fields in validated.items()}


def resolve_references(entries: dict[str, dict[str, Any]]) -> None:
    """Inline cross references in place, one level deep.

    Every direct string field starting with ``http://`` that equals the key of
    another entry is replaced by that entry's mapping as it was before this
    pass. List elements and ``_uri`` are left alone.
    """
    index = {key: dict(fields) for key, fields in entries.items()}
    for fields in entries.values():
        for name, value in list(fields.items()):
            if name == URI_FIELD:
                continue
            if (
                isinstance(value, str)
                and value.startswith(REFERENCE_PREFIX)
                and value in index
            ):
                fields[name] = index[value]


def group_entries(
    entries: Mapping[str, Mapping[str, Any]],
) -> dict[str, list[AnalysisObject]]:
    """Group entries by ``_typeGroup``.

    Entries without a string ``_typeGroup`` are grouped under ``_untyped``.
    """
    groups: dict[str, list[AnalysisObject]] = {}
    for key, fields in entries.items():
        group = fields.get(TYPE_GROUP_FIELD)
        if not isinstance(group, str) or not group:
            logger.debug("Entry %s has no _typeGroup; grouping as %s", key, UNTYPED_GROUP)
            group = UNTYPED_GROUP
        groups.setdefault(group, []).append(AnalysisObject(fields))
    return groups


def normalize(
    raw: Mapping[str, Any],
    *,
    resolve: bool = True,
    stamp_uri: bool = True,
) -> AnalysisResult:
    """Build an :class:`AnalysisResult` from a decoded response.

    Args:
        raw: The decoded JSON document. It is not modified.
        resolve: Inline cross references between entries.
        stamp_uri: Store each entry's key under ``_uri``.

    Raises:
        MalformedResponseError: If ``doc`` is missing or the shape is wrong.
    """
    if not isinstance(raw, Mapping):
        raise MalformedResponseError(
            f"Expected a JSON object at top level, got {type(raw).__name__}"
        )
    doc = raw.get(DOC_KEY)
    if doc is None:
        raise MalformedResponseError(
            "Response is missing the 'doc' section",
            hint="Check that outputFormat is 'application/json'.",
        )
    if not isinstance(doc, Mapping):
        raise MalformedResponseError(
            f"Expected 'doc' to be an object, got {type(doc).__name__}"
        )

    info = _extract_section(doc, "info")
    meta = _extract_section(doc, "meta")
    entries = _validate_entries(raw)

    if stamp_uri:
        for key, fields in entries.items():
            fields[URI_FIELD] = key
    if resolve:
        resolve_references(entries)

    groups = group_entries(entries)
    logger.debug(
        "Normalized %d entries into groups %s",
        len(entries),
        {name: len(objects) for name, objects in groups.items()},
    )
    return AnalysisResult(info=info, meta=meta, groups=groups)
