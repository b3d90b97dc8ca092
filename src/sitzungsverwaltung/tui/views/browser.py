from textual.containers import Horizontal, Vertical
from textual.widgets import ListItem, ListView, Static

from sitzungsverwaltung.models import AgendaItem, Motion, Session
from sitzungsverwaltung.tui.state import AppState
from sitzungsverwaltung.tui.views.base import View


LEVEL_TITLES = {
    "sessions": "Sitzungen",
    "agenda_items": "TOPs",
    "motions": "Anträge",
}


class BrowserView(View):
    name = "browser"

    def _build_breadcrumb(self, state: AppState) -> str:
        """Breadcrumb like: Sitzungen > Plenum > TOP 1"""
        parts = ["Sitzungen"]
        level = state.level
        tree = state.tree
        if level in ("agenda_items", "motions") and tree.focused_session is not None:
            parts.append(tree.focused_session.name)
        if level == "motions" and tree.focused_agenda_item is not None:
            parts.append(tree.focused_agenda_item.name)
        return " > ".join(parts)

    def _get_hints(self, level: str) -> str:
        base_hints = {
            "sessions": "j/k:move  o:open  e:edit  p:new  d:delete  r:reload  q:quit",
            "agenda_items": "j/k:move  o:open  e:edit  p:new  d:delete  r:reload  Esc:back",
            "motions": "j/k:move  e:edit  p:new  d:delete  r:reload  Esc:back",
        }
        return base_hints[level]

    def _detail(self, resource) -> str:
        if isinstance(resource, Session):
            return f"Sitzung: {resource.name}\nDatum: {resource.datum.isoformat(sep=' ')}\n\no: open TOPs"
        if isinstance(resource, AgendaItem):
            return f"TOP: {resource.name}\n\n{resource.content}\n\no: open Anträge"
        if isinstance(resource, Motion):
            proposer = f"\nAntragssteller: {resource.proposer}" if resource.proposer else ""
            return (
                f"Antrag: {resource.title}{proposer}\n\n"
                f"Antragstext:\n{resource.body}\n\n"
                f"Begründung:\n{resource.rationale}"
            )
        return ""

    def render(self, state: AppState):
        lst = state.current_list
        title = LEVEL_TITLES[state.level]

        items = [ListItem(Static(resource.label, markup=False)) for resource in lst]

        if not items:
            detail = f"No {title} yet.\nPress 'p' to add one."
        else:
            detail = self._detail(lst.selected)

        nav = ListView(*items, id="nav", initial_index=lst.selected_index)
        nav.can_focus = False

        return [
            Vertical(
                Static(self._build_breadcrumb(state), id="breadcrumb", markup=False),
                Horizontal(
                    nav,
                    Static(detail, id="detail", markup=False),
                    id="browser-layout",
                ),
                self.status_bar(state),
                Static(self._get_hints(state.level), id="hint-bar"),
            )
        ]
