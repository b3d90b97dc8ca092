"""Remote mutations for TUI actions.

All writes live here. Controller methods stay thin orchestrators:
guard -> call actions.py -> dispatch state -> re-fetch.
A failing write raises before any state change, so the edit session
stays open for another try. Once the write went through, a failing
re-fetch no longer raises; it is reported in the returned message.
"""

import logging

from sitzungsverwaltung.errors import DecodeError, EmptySelectionError, TransportError
from sitzungsverwaltung.models import build_body
from sitzungsverwaltung.protocols import GatewayProtocol
from sitzungsverwaltung.tui import queries
from sitzungsverwaltung.tui.state import AppState, ExitEditor, Level


logger = logging.getLogger(__name__)


def _refresh_after_write(
    state: AppState, gateway: GatewayProtocol, level: Level, message: str
) -> str:
    try:
        queries.refresh_level(state, gateway, level)
    except (TransportError, DecodeError) as e:
        logger.warning("Reload after write failed: %s", e)
        return f"{message}; reload failed: {e}"
    return message


def commit_edit_session(state: AppState, gateway: GatewayProtocol) -> str:
    """Send the staged fields as a create or patch, then re-fetch the level.

    Returns a short confirmation for the status bar.
    """
    session = state.edit_session
    if session is None:
        raise EmptySelectionError("No edit session to commit")

    body = build_body(session.kind, session.params())
    scope = state.tree.scope_for(session.return_to)

    if session.creating:
        gateway.create(session.kind, scope, body)
        message = f"{session.kind.title} created"
    else:
        if session.original is None:
            raise EmptySelectionError(f"No {session.kind.title} to save")
        gateway.patch(session.kind, session.original.id, body, scope=scope)
        message = f"{session.kind.title} saved"

    logger.info("%s (%s)", message, ", ".join(sorted(body)))
    state.dispatch(ExitEditor())
    return _refresh_after_write(state, gateway, session.return_to, message)


def delete_selected(state: AppState, gateway: GatewayProtocol) -> str:
    """Delete the selected resource at the current level and re-fetch the list."""
    resource = state.selected
    if resource is None:
        raise EmptySelectionError("Nothing selected")

    kind = state.kind
    gateway.delete(kind, resource.id)
    logger.info("Deleted %s %s", kind.value, resource.id)

    return _refresh_after_write(state, gateway, state.level, f"{kind.title} deleted")
