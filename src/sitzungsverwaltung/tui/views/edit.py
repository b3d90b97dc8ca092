from textual.containers import Horizontal, Vertical
from textual.widgets import ListItem, ListView, Static

from sitzungsverwaltung.tui.state import AppState
from sitzungsverwaltung.tui.views.base import View


def _preview(text: str) -> str:
    """First line of text, trimmed for the field list."""
    lines = text.splitlines()
    return lines[0][:60] if lines else ""


class EditView(View):
    """Field list of the active edit session."""

    name = "edit"

    def render(self, state: AppState):
        session = state.edit_session
        if session is None:
            title = "Editor"
            items = []
            detail = ""
            index = None
        else:
            verb = "New" if session.creating else "Edit"
            title = f"{verb} {session.kind.title}"
            if session.original is not None:
                title += f": {session.original.label}"
            items = [
                ListItem(Static(f"{p.label}: {_preview(p.text)}", markup=False))
                for p in session.fields
            ]
            selected = session.fields.selected
            detail = f"{selected.label}\n\n{selected.text}" if selected else ""
            index = session.fields.selected_index

        nav = ListView(*items, id="fields", initial_index=index)
        nav.can_focus = False

        hints = "j/k:move  e:edit field  Esc:save  c:cancel"

        return [
            Vertical(
                Static(title, id="breadcrumb", markup=False),
                Horizontal(nav, Static(detail, id="detail", markup=False), id="edit-fields"),
                self.status_bar(state),
                Static(hints, id="hint-bar"),
                id="edit_layout",
            )
        ]
