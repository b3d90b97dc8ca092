from textual.containers import Vertical
from textual.widgets import Static, TextArea

from sitzungsverwaltung.tui.state import AppState
from sitzungsverwaltung.tui.views.base import View


class FieldEditorView(View):
    name = "field_editor"

    def render(self, state: AppState):
        editor_state = state.field_editor
        session = state.edit_session
        if editor_state is None or session is None:
            title = "Editor"
            text = ""
        else:
            title = f"{session.kind.title} › {editor_state.label}"
            text = editor_state.text

        editor = TextArea(text, id="editor")

        hints = "Esc:done"

        return [
            Vertical(
                Static(title, id="breadcrumb", markup=False),
                editor,
                self.status_bar(state),
                Static(hints, id="hint-bar"),
                id="editor_layout",
            )
        ]
