"""Fake implementations for testing the TUI core."""

from datetime import datetime
from typing import Any

from sitzungsverwaltung.errors import TransportError
from sitzungsverwaltung.models import AgendaItem, Motion, Resource, ResourceKind, Session


def make_session(sid: str, name: str, datum: str = "2024-05-01T18:00:00") -> Session:
    return Session(id=sid, name=name, datum=datetime.fromisoformat(datum))


def make_item(tid: str, name: str, content: str = "", weight: int = 0) -> AgendaItem:
    return AgendaItem(id=tid, name=name, content=content, weight=weight)


def make_motion(mid: str, title: str, rationale: str = "", body: str = "") -> Motion:
    return Motion(id=mid, title=title, rationale=rationale, body=body)


class FakeGateway:
    """In-memory fake for TopManagerApi.

    Holds resources per scope, applies writes to them so re-fetches see the
    result, and records every call for assertions. Operation names listed
    in ``failing`` raise TransportError instead.
    """

    def __init__(self) -> None:
        self.sessions: list[Session] = []
        self.agenda_items: dict[str, list[AgendaItem]] = {}
        self.motions: dict[str, list[Motion]] = {}
        self.calls: list[tuple[Any, ...]] = []
        self.failing: set[str] = set()
        self._next_id = 0

    def _check(self, op: str) -> None:
        if op in self.failing:
            raise TransportError(f"{op} failed: connection refused")

    def _bucket(self, kind: ResourceKind, scope: str | None) -> list:
        if kind is ResourceKind.SESSION:
            return self.sessions
        if kind is ResourceKind.AGENDA_ITEM:
            return self.agenda_items.setdefault(scope, [])
        return self.motions.setdefault(scope, [])

    def _all(self, kind: ResourceKind) -> list:
        if kind is ResourceKind.SESSION:
            return self.sessions
        store = self.agenda_items if kind is ResourceKind.AGENDA_ITEM else self.motions
        return [r for bucket in store.values() for r in bucket]

    def fetch_list(self, kind: ResourceKind, scope: str | None = None) -> list[Resource]:
        self.calls.append(("fetch_list", kind, scope))
        self._check("fetch_list")
        return list(self._bucket(kind, scope))

    def fetch_one(self, kind: ResourceKind, resource_id: str) -> Resource:
        self.calls.append(("fetch_one", kind, resource_id))
        self._check("fetch_one")
        for resource in self._all(kind):
            if resource.id == resource_id:
                return resource
        raise TransportError("not found", 404)

    def create(self, kind: ResourceKind, scope: str | None, fields: dict[str, str]) -> Any:
        self.calls.append(("create", kind, scope, dict(fields)))
        self._check("create")
        self._next_id += 1
        new_id = f"new-{self._next_id}"
        if kind is ResourceKind.SESSION:
            resource = Session(new_id, fields["name"], datetime.fromisoformat(fields["datum"]))
        elif kind is ResourceKind.AGENDA_ITEM:
            resource = AgendaItem(new_id, fields["name"], fields["inhalt"], 0)
        else:
            resource = Motion(
                new_id,
                fields["titel"],
                fields["begründung"],
                fields["antragstext"],
                fields.get("antragssteller", ""),
            )
        self._bucket(kind, scope).append(resource)
        return {"id": new_id}

    def patch(
        self,
        kind: ResourceKind,
        resource_id: str,
        fields: dict[str, str],
        scope: str | None = None,
    ) -> Any:
        self.calls.append(("patch", kind, resource_id, dict(fields), scope))
        self._check("patch")
        return None

    def delete(self, kind: ResourceKind, resource_id: str) -> Any:
        self.calls.append(("delete", kind, resource_id))
        self._check("delete")
        if kind is ResourceKind.SESSION:
            self.sessions[:] = [s for s in self.sessions if s.id != resource_id]
        else:
            store = self.agenda_items if kind is ResourceKind.AGENDA_ITEM else self.motions
            for bucket in store.values():
                bucket[:] = [r for r in bucket if r.id != resource_id]
        return None

    def writes(self) -> list[tuple[Any, ...]]:
        return [c for c in self.calls if c[0] in ("create", "patch", "delete")]
