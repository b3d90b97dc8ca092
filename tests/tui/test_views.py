"""Views render state into widgets without a running app."""

from sitzungsverwaltung.models import ResourceKind
from sitzungsverwaltung.tui.state import (
    AppState,
    EditSession,
    OpenFieldEditor,
    OpenSession,
    SetSessions,
    SetStatus,
    StartEdit,
)
from sitzungsverwaltung.tui.views.browser import BrowserView
from sitzungsverwaltung.tui.views.edit import EditView
from sitzungsverwaltung.tui.views.editor import FieldEditorView
from tests.fakes import make_item, make_session


class TestBrowserView:
    def test_renders_empty_sessions(self):
        state = AppState()
        result = BrowserView().render(state)
        assert len(result) == 1

    def test_breadcrumb_follows_focus(self):
        state = AppState()
        state.dispatch(SetSessions([make_session("a", "Plenum")]))
        state.dispatch(OpenSession(state.selected, [make_item("x", "Haushalt")]))

        view = BrowserView()
        assert view._build_breadcrumb(state) == "Sitzungen > Plenum"
        assert "o:open" in view._get_hints(state.level)

    def test_detail_shows_selected_item(self):
        view = BrowserView()
        detail = view._detail(make_item("x", "Haushalt", content="Beschluss"))
        assert "Beschluss" in detail

    def test_status_bar_prefers_awaiting(self):
        state = AppState()
        state.dispatch(SetStatus("Save failed"))
        state.awaiting = "Loading sessions"
        bar = BrowserView().status_bar(state)
        assert bar.id == "status-bar"


class TestEditViews:
    def _editing(self):
        state = AppState()
        state.dispatch(SetSessions([make_session("a", "Plenum")]))
        session = EditSession.for_edit(ResourceKind.SESSION, state.selected, "sessions")
        state.dispatch(StartEdit(session))
        return state

    def test_edit_view_renders(self):
        result = EditView().render(self._editing())
        assert len(result) == 1
        assert result[0].id == "edit_layout"

    def test_edit_view_without_session(self):
        result = EditView().render(AppState())
        assert result[0].id == "edit_layout"

    def test_field_editor_renders_buffer(self):
        state = self._editing()
        state.dispatch(OpenFieldEditor())
        result = FieldEditorView().render(state)
        assert result[0].id == "editor_layout"
        assert state.field_editor.text == "2024-05-01T18:00:00"
