"""Read-only views over a normalized analysis response."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any

TYPE_GROUP_FIELD = "_typeGroup"
URI_FIELD = "_uri"
#: Group for entries that carry no usable ``_typeGroup``.
UNTYPED_GROUP = "_untyped"


class TypeGroup(str, Enum):
    """Group names guaranteed on every :class:`AnalysisResult`."""

    TOPICS = "topics"
    ENTITIES = "entities"
    RELATIONS = "relations"


_NAMED_GROUPS = frozenset(g.value for g in TypeGroup)


def _freeze(value: Any) -> Any:
    if isinstance(value, AnalysisObject):
        return value
    if isinstance(value, Mapping):
        return AnalysisObject(value)
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(v) for v in value)
    return value


def _thaw(value: Any) -> Any:
    if isinstance(value, AnalysisObject):
        return value.to_dict()
    if isinstance(value, tuple):
        return [_thaw(v) for v in value]
    return value


class AnalysisObject(Mapping[str, Any]):
    """One immutable entry of an analysis response.

    Values are scalars, tuples (from JSON lists) or nested ``AnalysisObject``
    instances (inlined references). The backing mapping is copied on
    construction, so later changes to the source dict are not visible.
    """

    __slots__ = ("_fields",)

    def __init__(self, fields: Mapping[str, Any] | None = None) -> None:
        self._fields: Mapping[str, Any] = MappingProxyType(
            {str(k): _freeze(v) for k, v in (fields or {}).items()}
        )

    def __getitem__(self, key: str) -> Any:
        return self._fields[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __repr__(self) -> str:
        return f"AnalysisObject({dict(self._fields)!r})"

    def get_field(self, name: str) -> str | None:
        """Return the string form of a scalar field.

        Returns *None* when the field is missing, null, a list, or an inlined
        object. Booleans render as ``"true"``/``"false"``.
        """
        value = self._fields.get(name)
        if value is None or isinstance(value, (tuple, AnalysisObject)):
            return None
        if isinstance(value, bool):
            return "true" if value else "false"
        return str(value)

    def get_list(self, name: str) -> tuple[Any, ...] | None:
        """Return a list field as a tuple, or *None* if it is not a list."""
        value = self._fields.get(name)
        return value if isinstance(value, tuple) else None

    def get_object(self, name: str) -> AnalysisObject | None:
        """Follow an inlined reference, or return *None*."""
        value = self._fields.get(name)
        return value if isinstance(value, AnalysisObject) else None

    @property
    def uri(self) -> str | None:
        """The entry's key in the raw response, when it was stamped."""
        return self.get_field(URI_FIELD)

    @property
    def type_group(self) -> str | None:
        return self.get_field(TYPE_GROUP_FIELD)

    def to_dict(self) -> dict[str, Any]:
        """Return a plain, mutable deep copy using dicts and lists."""
        return {k: _thaw(v) for k, v in self._fields.items()}


@dataclass(frozen=True)
class AnalysisResult:
    """Normalized response: ``info``, ``meta`` and grouped entries.

    ``topics``, ``entities`` and ``relations`` are always available (possibly
    empty). Any other group the service returns is reachable via ``groups``
    or ``group(name)``, and collectively via ``other``.
    """

    info: AnalysisObject = field(default_factory=AnalysisObject)
    meta: AnalysisObject = field(default_factory=AnalysisObject)
    groups: Mapping[str, tuple[AnalysisObject, ...]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "groups",
            MappingProxyType({k: tuple(v) for k, v in self.groups.items()}),
        )

    def group(self, name: str | TypeGroup) -> tuple[AnalysisObject, ...]:
        """Return the entries of group *name* (empty when absent)."""
        key = name.value if isinstance(name, TypeGroup) else name
        return self.groups.get(key, ())

    @property
    def topics(self) -> tuple[AnalysisObject, ...]:
        return self.group(TypeGroup.TOPICS)

    @property
    def entities(self) -> tuple[AnalysisObject, ...]:
        return self.group(TypeGroup.ENTITIES)

    @property
    def relations(self) -> tuple[AnalysisObject, ...]:
        return self.group(TypeGroup.RELATIONS)

    @property
    def other(self) -> tuple[AnalysisObject, ...]:
        """Entries outside the three named groups, untyped ones included."""
        return tuple(
            obj
            for name, objects in self.groups.items()
            if name not in _NAMED_GROUPS
            for obj in objects
        )
