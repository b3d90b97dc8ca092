"""Key routing for the TUI.

NavigationController maps a key press to a state transition based on the
active mode:

    Browsing(level)  j/k/h move, o drill down, e edit, p create, d delete,
                     r reload, q/Esc go back (quit at the top level)
    Editing          j/k/h move between fields, e/Enter edit field,
                     q/Esc commit, c cancel
    FieldEditing     keys edit the buffer, Esc writes it back

Every remote call happens synchronously inside handle_key. The Textual
app runs handle_key in a worker thread and drops keys while
state.awaiting is set, so at most one request is in flight.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from sitzungsverwaltung.errors import EmptySelectionError
from sitzungsverwaltung.protocols import GatewayProtocol
from sitzungsverwaltung.tui import actions, queries
from sitzungsverwaltung.tui.decorators import remote_action
from sitzungsverwaltung.tui.state import (
    AppState,
    Browsing,
    CommitField,
    CursorNext,
    CursorPrevious,
    CursorUnselect,
    EditSession,
    Editing,
    ExitEditor,
    FieldBackspace,
    FieldEditing,
    FieldInsert,
    GoBack,
    OpenFieldEditor,
    SetStatus,
    StartEdit,
)


logger = logging.getLogger(__name__)

QUIT_KEYS = {"q", "escape"}
DOWN_KEYS = {"j", "down"}
UP_KEYS = {"k", "up"}
UNSELECT_KEYS = {"h", "left"}


class NavigationController:
    def __init__(
        self,
        state: AppState,
        gateway: GatewayProtocol,
        on_change: Optional[Callable[[Optional[str]], None]] = None,
    ) -> None:
        self.state = state
        self.gateway = gateway
        self.on_change = on_change

    def _notify(self) -> None:
        """Report the in-flight request, passing its description by value."""
        if self.on_change is not None:
            self.on_change(self.state.awaiting)

    # =====================
    # Entry points
    # =====================

    @remote_action("Loading sessions")
    def start(self) -> None:
        queries.load_sessions(self.state, self.gateway)

    def handle_key(self, key: str, character: Optional[str] = None) -> bool:
        """Handle one key press. Returns False when the program should exit."""
        mode = self.state.mode

        if isinstance(mode, FieldEditing):
            self._handle_field_key(key, character)
            return True

        self.state.dispatch(SetStatus(None))

        if isinstance(mode, Editing):
            self._handle_edit_key(key)
            return True

        return self._handle_browse_key(key, mode)

    # =====================
    # Browsing
    # =====================

    def _handle_browse_key(self, key: str, mode: Browsing) -> bool:
        if key in QUIT_KEYS:
            if mode.level == "sessions":
                return False
            self.state.dispatch(GoBack())
        elif key in DOWN_KEYS:
            self.state.dispatch(CursorNext())
        elif key in UP_KEYS:
            self.state.dispatch(CursorPrevious())
        elif key in UNSELECT_KEYS:
            self.state.dispatch(CursorUnselect())
        elif key == "o":
            self.open_selected()
        elif key == "e":
            self.edit_selected()
        elif key == "p":
            self.create_here()
        elif key == "d":
            self.delete_selected()
        elif key == "r":
            self.reload()
        return True

    @remote_action("Opening")
    def open_selected(self) -> None:
        level = self.state.level
        if level == "motions":
            return
        resource = self._require_selected()
        if level == "sessions":
            queries.open_session(self.state, self.gateway, resource)
        else:
            queries.open_agenda_item(self.state, self.gateway, resource)

    @remote_action("Loading for edit")
    def edit_selected(self) -> None:
        queries.begin_edit(self.state, self.gateway, self._require_selected())

    def create_here(self) -> None:
        level = self.state.level
        if level != "sessions" and self.state.tree.scope_for(level) is None:
            return
        self.state.dispatch(StartEdit(EditSession.for_create(self.state.kind, level)))

    @remote_action("Delete")
    def delete_selected(self) -> None:
        message = actions.delete_selected(self.state, self.gateway)
        self.state.dispatch(SetStatus(message))

    @remote_action("Reload")
    def reload(self) -> None:
        queries.refresh_level(self.state, self.gateway, self.state.level)

    def _require_selected(self):
        resource = self.state.selected
        if resource is None:
            raise EmptySelectionError(f"No {self.state.kind.title} selected")
        return resource

    # =====================
    # Editing / Creating
    # =====================

    def _handle_edit_key(self, key: str) -> None:
        if key in QUIT_KEYS:
            self.commit()
        elif key == "c":
            self.state.dispatch(ExitEditor())
            self.state.dispatch(SetStatus("Edit discarded"))
        elif key in DOWN_KEYS:
            self.state.dispatch(CursorNext())
        elif key in UP_KEYS:
            self.state.dispatch(CursorPrevious())
        elif key in UNSELECT_KEYS:
            self.state.dispatch(CursorUnselect())
        elif key in ("e", "enter"):
            self.state.dispatch(OpenFieldEditor())

    @remote_action("Save")
    def commit(self) -> None:
        message = actions.commit_edit_session(self.state, self.gateway)
        self.state.dispatch(SetStatus(message))

    # =====================
    # Field editing
    # =====================

    def _handle_field_key(self, key: str, character: Optional[str]) -> None:
        if key == "escape":
            self.state.dispatch(CommitField())
        elif key == "backspace":
            self.state.dispatch(FieldBackspace())
        elif key == "enter":
            self.state.dispatch(FieldInsert("\n"))
        elif key == "tab":
            self.state.dispatch(FieldInsert("\t"))
        elif character and character.isprintable():
            self.state.dispatch(FieldInsert(character))
        elif len(key) == 1 and key.isprintable():
            self.state.dispatch(FieldInsert(key))
