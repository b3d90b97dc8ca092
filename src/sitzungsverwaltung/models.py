"""Resource types served by the topmanager API and their editable fields.

Each resource kind has a declarative field schema (FIELDS) that drives the
edit buffer: which labels appear when creating or editing, how the initial
text is read from a fetched resource, and which wire names are sent back.
The wire name of a field is always its label lower-cased.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Iterable, Union

from sitzungsverwaltung.errors import DecodeError


class ResourceKind(Enum):
    SESSION = "sitzung"
    AGENDA_ITEM = "top"
    MOTION = "antrag"

    @property
    def parent(self) -> "ResourceKind | None":
        """The kind that scopes this one (None for sessions)."""
        if self is ResourceKind.AGENDA_ITEM:
            return ResourceKind.SESSION
        if self is ResourceKind.MOTION:
            return ResourceKind.AGENDA_ITEM
        return None

    @property
    def title(self) -> str:
        return _TITLES[self]


_TITLES = {
    ResourceKind.SESSION: "Sitzung",
    ResourceKind.AGENDA_ITEM: "TOP",
    ResourceKind.MOTION: "Antrag",
}


def _require(data: Any, key: str, typ: type | tuple[type, ...]) -> Any:
    if not isinstance(data, dict):
        raise DecodeError(f"expected JSON object, got {type(data).__name__}")
    if key not in data:
        raise DecodeError(f"missing field {key!r}")
    value = data[key]
    if not isinstance(value, typ) or isinstance(value, bool):
        raise DecodeError(f"field {key!r} has unexpected type {type(value).__name__}")
    return value


def _parse_datetime(raw: str) -> datetime:
    try:
        return datetime.fromisoformat(raw)
    except ValueError as e:
        raise DecodeError(f"invalid datum {raw!r}") from e


@dataclass(frozen=True)
class Session:
    """A scheduled meeting (Sitzung)."""
    id: str
    name: str
    datum: datetime
    # datum as sent by the server; datetime drops digits past microseconds
    raw_datum: str = field(default="", compare=False)

    @classmethod
    def from_json(cls, data: Any) -> "Session":
        raw = _require(data, "datum", str)
        return cls(
            id=str(_require(data, "id", str)),
            name=_require(data, "name", str),
            datum=_parse_datetime(raw),
            raw_datum=raw,
        )

    @property
    def label(self) -> str:
        return f"{self.name} {self.datum.isoformat(sep=' ')}"


@dataclass(frozen=True)
class AgendaItem:
    """An agenda entry (TOP) inside a session."""
    id: str
    name: str
    content: str
    weight: int

    @classmethod
    def from_json(cls, data: Any) -> "AgendaItem":
        return cls(
            id=str(_require(data, "id", str)),
            name=_require(data, "name", str),
            content=_require(data, "inhalt", str),
            weight=_require(data, "weight", int),
        )

    @property
    def label(self) -> str:
        return self.name


@dataclass(frozen=True)
class Motion:
    """A motion (Antrag) filed under an agenda item."""
    id: str
    title: str
    rationale: str
    body: str
    proposer: str = ""

    @classmethod
    def from_json(cls, data: Any) -> "Motion":
        proposer = ""
        if isinstance(data, dict) and data.get("antragssteller") is not None:
            proposer = _require(data, "antragssteller", str)
        return cls(
            id=str(_require(data, "id", str)),
            title=_require(data, "titel", str),
            rationale=_require(data, "begründung", str),
            body=_require(data, "antragstext", str),
            proposer=proposer,
        )

    @property
    def label(self) -> str:
        return self.title


Resource = Union[Session, AgendaItem, Motion]

RESOURCE_TYPES: dict[ResourceKind, type] = {
    ResourceKind.SESSION: Session,
    ResourceKind.AGENDA_ITEM: AgendaItem,
    ResourceKind.MOTION: Motion,
}


def decode(kind: ResourceKind, data: Any) -> Resource:
    """Decode a single resource of the given kind."""
    return RESOURCE_TYPES[kind].from_json(data)


def decode_list(kind: ResourceKind, data: Any) -> list[Resource]:
    """Decode a JSON array of resources, keeping server order."""
    if not isinstance(data, list):
        raise DecodeError(f"expected JSON array of {kind.value}, got {type(data).__name__}")
    return [decode(kind, entry) for entry in data]


# =============================================================================
# Field schema
# =============================================================================

@dataclass(frozen=True)
class FieldSpec:
    """One editable field of a resource kind."""
    label: str
    getter: Callable[[Any], str]
    create_only: bool = False

    @property
    def wire_name(self) -> str:
        return self.label.lower()


FIELDS: dict[ResourceKind, tuple[FieldSpec, ...]] = {
    ResourceKind.SESSION: (
        FieldSpec("Datum", lambda s: s.raw_datum or s.datum.isoformat()),
        FieldSpec("Name", lambda s: s.name),
    ),
    ResourceKind.AGENDA_ITEM: (
        FieldSpec("Name", lambda t: t.name),
        FieldSpec("Inhalt", lambda t: t.content),
    ),
    ResourceKind.MOTION: (
        FieldSpec("Titel", lambda a: a.title),
        FieldSpec("Begründung", lambda a: a.rationale),
        FieldSpec("Antragstext", lambda a: a.body),
        FieldSpec("Antragssteller", lambda a: a.proposer, create_only=True),
    ),
}


def field_specs(kind: ResourceKind, *, creating: bool) -> tuple[FieldSpec, ...]:
    """Fields shown in the edit buffer for kind (create-only fields on create)."""
    return tuple(f for f in FIELDS[kind] if creating or not f.create_only)


def build_body(kind: ResourceKind, params: Iterable[tuple[str, str]]) -> dict[str, str]:
    """Map staged (label, text) pairs to a wire body for kind.

    Labels that are not part of the kind's schema are rejected so a typo in
    a label never reaches the server as an unknown key.
    """
    known = {f.label: f.wire_name for f in FIELDS[kind]}
    body: dict[str, str] = {}
    for label, text in params:
        if label not in known:
            raise KeyError(f"{label!r} is not a field of {kind.value}")
        body[known[label]] = text
    return body
