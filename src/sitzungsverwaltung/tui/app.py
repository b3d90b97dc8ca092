"""Sitzungsverwaltung TUI application with Elm-inspired architecture.

- Path-based navigation (sessions -> agenda items -> motions)
- One active mode: browsing, editing a resource, or editing one field
- Views are pure functions of state (no remote calls)
- Remote reads in queries.py, remote writes in actions.py
- Key handling runs in a worker thread; keys are dropped while a
  request is in flight
"""

from __future__ import annotations

import logging

from textual import events
from textual.app import App, ComposeResult
from textual.containers import Horizontal
from textual.css.query import NoMatches
from textual.widgets import Footer, Header, Static, TextArea

from sitzungsverwaltung.protocols import GatewayProtocol
from sitzungsverwaltung.tui.controller import NavigationController
from sitzungsverwaltung.tui.state import AppState, Browsing, Editing, FieldEditing, SetFieldText
from sitzungsverwaltung.tui.views.browser import BrowserView
from sitzungsverwaltung.tui.views.edit import EditView
from sitzungsverwaltung.tui.views.editor import FieldEditorView


logger = logging.getLogger(__name__)


class SitzungsApp(App):
    CSS_PATH = "tui.css"
    TITLE = "Sitzungsverwaltung"

    def __init__(self, gateway: GatewayProtocol, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.state = AppState()
        self.controller = NavigationController(
            self.state, gateway, on_change=self._awaiting_from_thread
        )
        self.views = {
            "browser": BrowserView(),
            "edit": EditView(),
            "field_editor": FieldEditorView(),
        }
        self._busy = False

    def compose(self) -> ComposeResult:
        yield Header()
        yield Horizontal(id="main")
        yield Footer()

    def on_mount(self) -> None:
        self._busy = True
        self.run_worker(self._load_initial, thread=True, group="input", exit_on_error=False)

    def _load_initial(self) -> None:
        try:
            self.controller.start()
        finally:
            self.call_from_thread(self._after_key, True)

    # =====================
    # Key handling
    # =====================

    def on_key(self, event: events.Key) -> None:
        if isinstance(self.state.mode, FieldEditing):
            # The TextArea consumes everything but Esc.
            if event.key != "escape":
                return
            self._sync_editor_text()
            event.stop()
            self.controller.handle_key("escape")
            self._render_view()
            return

        event.stop()
        if self._busy:
            logger.debug("Dropped key %r while busy", event.key)
            return

        self._busy = True
        key, character = event.key, event.character
        self.run_worker(
            lambda: self._process_key(key, character),
            thread=True,
            group="input",
            exit_on_error=False,
        )

    def _process_key(self, key: str, character: str | None) -> None:
        keep_running = True
        try:
            keep_running = self.controller.handle_key(key, character)
        finally:
            self.call_from_thread(self._after_key, keep_running)

    def _after_key(self, keep_running: bool) -> None:
        self._busy = False
        if not keep_running:
            self.exit()
            return
        self._render_view()

    def on_text_area_changed(self, event: TextArea.Changed) -> None:
        if getattr(event.text_area, "id", None) != "editor":
            return
        self.state.dispatch(SetFieldText(event.text_area.text))

    def _sync_editor_text(self) -> None:
        """Read current text from the editor widget into the field buffer."""
        try:
            widget = self.screen.query_one("#editor", TextArea)
        except NoMatches:
            return
        self.state.dispatch(SetFieldText(widget.text))

    # =====================
    # Rendering
    # =====================

    def _awaiting_from_thread(self, description: str | None) -> None:
        # call_from_thread blocks the worker until the update is done
        self.call_from_thread(self._show_awaiting, description)

    def _show_awaiting(self, description: str | None) -> None:
        """Update only the status bar; the full view renders after the key."""
        if not description:
            return
        try:
            bar = self.screen.query_one("#status-bar", Static)
        except NoMatches:
            return
        bar.update(f"{description}…")

    def _render_view(self) -> None:
        """Schedule a view re-render.

        Textual's `remove_children()` / `mount()` are async. If we call them
        synchronously, removals are deferred and we can briefly have duplicate ids
        in the DOM.
        """
        self.run_worker(
            self._render_view_async(),
            group="render",
            exclusive=True,
            exit_on_error=False,
        )

    def _current_view_name(self) -> str:
        mode = self.state.mode
        if isinstance(mode, FieldEditing):
            return "field_editor"
        if isinstance(mode, Editing):
            return "edit"
        assert isinstance(mode, Browsing)
        return "browser"

    async def _render_view_async(self) -> None:
        try:
            container = self.screen.query_one("#main")
        except NoMatches:
            return

        await container.remove_children()

        view = self.views[self._current_view_name()]
        await container.mount_all(view.render(self.state))

        if isinstance(self.state.mode, FieldEditing):
            try:
                self.screen.query_one("#editor").focus()
            except NoMatches:
                pass
        else:
            self.set_focus(None)
