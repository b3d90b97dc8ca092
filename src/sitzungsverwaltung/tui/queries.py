"""Remote reads that populate view state.

Each function fetches from the gateway and dispatches the result; on any
error it raises before dispatching, so state is left as it was.
"""

from sitzungsverwaltung.models import AgendaItem, Resource, ResourceKind, Session
from sitzungsverwaltung.protocols import GatewayProtocol
from sitzungsverwaltung.tui.state import (
    AppState,
    EditSession,
    Level,
    LEVEL_KINDS,
    OpenAgendaItem,
    OpenSession,
    RefreshLevel,
    SetSessions,
    StartEdit,
)


def load_sessions(state: AppState, gateway: GatewayProtocol) -> None:
    """Fetch all sessions and rebuild the top-level list."""
    items = gateway.fetch_list(ResourceKind.SESSION)
    state.dispatch(SetSessions(items))


def open_session(state: AppState, gateway: GatewayProtocol, session: Session) -> None:
    """Drill into a session: fetch its agenda items and show them."""
    items = gateway.fetch_list(ResourceKind.AGENDA_ITEM, session.id)
    state.dispatch(OpenSession(session, items))


def open_agenda_item(state: AppState, gateway: GatewayProtocol, item: AgendaItem) -> None:
    """Drill into an agenda item: fetch its motions and show them."""
    items = gateway.fetch_list(ResourceKind.MOTION, item.id)
    state.dispatch(OpenAgendaItem(item, items))


def refresh_level(state: AppState, gateway: GatewayProtocol, level: Level) -> None:
    """Re-fetch one level from the server, keeping its cursor."""
    kind = LEVEL_KINDS[level]
    items = gateway.fetch_list(kind, state.tree.scope_for(level))
    state.dispatch(RefreshLevel(level, items))


def begin_edit(state: AppState, gateway: GatewayProtocol, resource: Resource) -> None:
    """Open an edit session seeded from the server's current copy of resource."""
    kind = state.kind
    fresh = gateway.fetch_one(kind, resource.id)
    state.dispatch(StartEdit(EditSession.for_edit(kind, fresh, state.level)))
