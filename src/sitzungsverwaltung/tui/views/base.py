from abc import ABC, abstractmethod
from typing import Iterable

from textual.widget import Widget
from textual.widgets import Static

from sitzungsverwaltung.tui.state import AppState


class View(ABC):
    name: str

    @abstractmethod
    def render(self, state: AppState) -> Iterable[Widget]: ...

    def status_bar(self, state: AppState) -> Static:
        if state.awaiting:
            text = f"{state.awaiting}…"
        elif state.status:
            text = state.status
        else:
            text = ""
        return Static(text, id="status-bar", markup=False)
