"""Processing and user directives, and the ``paramsXML`` block they render to.

Directives are immutable value objects. Each field carries its wire name in
the dataclass field metadata; overrides accept either spelling::

    config = CalaisConfig().override(contentType="TEXT/HTML", allow_search=True)
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, fields, replace
import re
from types import MappingProxyType
from typing import Any
import uuid
from xml.etree import ElementTree
from xml.sax.saxutils import quoteattr

from calais._version import __version__
from calais.errors import ConfigurationError

PRED_NAMESPACE = "http://s.opencalais.com/1/pred/"
RDF_NAMESPACE = "http://www.w3.org/1999/02/22-rdf-syntax-ns#"
PARAMS_HEADER = f'<c:params xmlns:c="{PRED_NAMESPACE}" xmlns:rdf="{RDF_NAMESPACE}">'
PARAMS_FOOTER = "</c:params>"

SUBMITTER = f"calais-client v {__version__}"

# Attribute names end up as ``c:<name>``, so they must be valid NCNames.
_ATTRIBUTE_NAME_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_.\-]*$")


def _wire_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _wire_attributes(directives: Any) -> dict[str, str]:
    """Return ``{wire_name: wire_value}`` for every directive that is set."""
    attributes: dict[str, str] = {}
    for f in fields(directives):
        value = getattr(directives, f.name)
        if value is None:
            continue
        attributes[f.metadata["wire"]] = _wire_value(value)
    return attributes


@dataclass(frozen=True)
class ProcessingDirectives:
    """Service-level instructions controlling how content is analyzed."""

    content_type: str = field(default="TEXT/RAW", metadata={"wire": "contentType"})
    output_format: str = field(
        default="application/json", metadata={"wire": "outputFormat"}
    )
    calculate_relevance_score: bool = field(
        default=True, metadata={"wire": "calculateRelevanceScore"}
    )
    doc_rdf_accessible: bool = field(
        default=True, metadata={"wire": "docRDFaccessible"}
    )
    #: Omitted from the request when *None*.
    reltag_base_url: str | None = field(
        default=None, metadata={"wire": "reltagBaseURL"}
    )
    #: Omitted from the request when *None*.
    enable_metadata_type: str | None = field(
        default=None, metadata={"wire": "enableMetadataType"}
    )

    def __post_init__(self) -> None:
        """Reject empty format directives early."""
        for name in ("content_type", "output_format"):
            value = getattr(self, name)
            if not isinstance(value, str) or not value.strip():
                raise ConfigurationError(
                    f"{name} must be a non-empty string",
                    hint="For example content_type='TEXT/RAW' or 'TEXT/HTML'.",
                )

    def attributes(self) -> dict[str, str]:
        """Return the wire attributes of this directive set."""
        return _wire_attributes(self)


@dataclass(frozen=True)
class UserDirectives:
    """Distribution/search permissions and caller identification."""

    allow_distribution: bool = field(
        default=False, metadata={"wire": "allowDistribution"}
    )
    allow_search: bool = field(default=False, metadata={"wire": "allowSearch"})
    #: A fresh UUID per instance unless given.
    external_id: str = field(
        default_factory=lambda: str(uuid.uuid4()), metadata={"wire": "externalID"}
    )
    submitter: str = field(default=SUBMITTER, metadata={"wire": "submitter"})

    def attributes(self) -> dict[str, str]:
        """Return the wire attributes of this directive set."""
        return _wire_attributes(self)


def _build_directive_index() -> dict[str, tuple[str, str]]:
    index: dict[str, tuple[str, str]] = {}
    for section, cls in (("processing", ProcessingDirectives), ("user", UserDirectives)):
        for f in fields(cls):
            index[f.name] = (section, f.name)
            index[f.metadata["wire"]] = (section, f.name)
    return index


_DIRECTIVE_INDEX = _build_directive_index()


@dataclass(frozen=True)
class CalaisConfig:
    """Immutable set of directives sent with every analysis request.

    Example:
        config = CalaisConfig(user=UserDirectives(allow_search=True))
        html = config.override(contentType="TEXT/HTML")
    """

    processing: ProcessingDirectives = field(default_factory=ProcessingDirectives)
    user: UserDirectives = field(default_factory=UserDirectives)
    external_metadata: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Validate external metadata and freeze it."""
        for key, value in self.external_metadata.items():
            if not isinstance(key, str) or not _ATTRIBUTE_NAME_RE.match(key):
                raise ConfigurationError(
                    f"Invalid external metadata name: {key!r}",
                    hint="Names must be valid XML attribute names, e.g. 'source'.",
                )
            if not isinstance(value, str):
                raise ConfigurationError(
                    f"External metadata {key!r} must be a string, "
                    f"got {type(value).__name__}"
                )
        object.__setattr__(
            self, "external_metadata", MappingProxyType(dict(self.external_metadata))
        )

    def override(self, **directives: Any) -> CalaisConfig:
        """Return a copy with individual directives replaced.

        Keys may be wire names (``contentType``) or field names
        (``content_type``).
        """
        changes: dict[str, dict[str, Any]] = {"processing": {}, "user": {}}
        for name, value in directives.items():
            target = _DIRECTIVE_INDEX.get(name)
            if target is None:
                raise ConfigurationError(
                    f"Unknown directive: {name!r}",
                    hint=f"Known directives: {', '.join(sorted(_DIRECTIVE_INDEX))}",
                )
            section, attr = target
            changes[section][attr] = value
        return replace(
            self,
            processing=replace(self.processing, **changes["processing"]),
            user=replace(self.user, **changes["user"]),
        )

    def sections(self) -> dict[str, dict[str, str]]:
        """Return the three directive blocks keyed by element name."""
        return {
            "processingDirectives": self.processing.attributes(),
            "userDirectives": self.user.attributes(),
            "externalMetadata": dict(self.external_metadata),
        }


def _render_element(name: str, attributes: Mapping[str, str]) -> str:
    rendered = "".join(
        f" c:{key}={quoteattr(value)}" for key, value in attributes.items()
    )
    return f"<c:{name}{rendered}/>"


def render_params_xml(config: CalaisConfig) -> str:
    """Serialize *config* into the ``paramsXML`` form field."""
    parts = [PARAMS_HEADER]
    parts.extend(
        _render_element(name, attributes)
        for name, attributes in config.sections().items()
    )
    parts.append(PARAMS_FOOTER)
    return "".join(parts)


def parse_params_xml(xml: str) -> dict[str, dict[str, str]]:
    """Parse a ``paramsXML`` block back into ``{element: {key: value}}``."""
    try:
        root = ElementTree.fromstring(xml)
    except ElementTree.ParseError as exc:
        raise ConfigurationError(f"Invalid paramsXML: {exc}") from exc

    prefix = f"{{{PRED_NAMESPACE}}}"
    return {
        child.tag.removeprefix(prefix): {
            key.removeprefix(prefix): value for key, value in child.attrib.items()
        }
        for child in root
    }
