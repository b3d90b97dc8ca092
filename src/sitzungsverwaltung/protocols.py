"""Protocols for the collaborators the TUI depends on."""

from typing import Any, Protocol, runtime_checkable

from sitzungsverwaltung.models import Resource, ResourceKind


@runtime_checkable
class GatewayProtocol(Protocol):
    """Remote list/get/create/patch/delete per resource kind."""

    def fetch_list(self, kind: ResourceKind, scope: str | None = None) -> list[Resource]:
        ...

    def fetch_one(self, kind: ResourceKind, resource_id: str) -> Resource:
        ...

    def create(self, kind: ResourceKind, scope: str | None, fields: dict[str, str]) -> Any:
        ...

    def patch(
        self,
        kind: ResourceKind,
        resource_id: str,
        fields: dict[str, str],
        scope: str | None = None,
    ) -> Any:
        ...

    def delete(self, kind: ResourceKind, resource_id: str) -> Any:
        ...


@runtime_checkable
class AuthProtocol(Protocol):
    """Supplies the bearer token for mutating calls."""

    def get_access_token(self) -> str:
        """Return a token or raise AuthError."""
        ...
