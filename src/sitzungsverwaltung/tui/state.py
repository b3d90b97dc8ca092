"""
TUI state management and actions.

Architecture:
- Actions are frozen dataclasses representing state transitions
- reduce(state, action) applies a transition in place
- AppState.dispatch(action) mutates self by applying reduce
- Exactly one mode is active: Browsing, Editing or FieldEditing
- Remote calls never happen here; see queries.py and actions.py
"""

from dataclasses import dataclass, field
from typing import Optional, Literal, Sequence, Union

from sitzungsverwaltung.models import (
    AgendaItem,
    Resource,
    ResourceKind,
    Session,
    field_specs,
)
from sitzungsverwaltung.tui.selectable import SelectableList


# =============================================================================
# Data Types
# =============================================================================

Level = Literal["sessions", "agenda_items", "motions"]
EditMode = Literal["creating", "editing"]

LEVEL_KINDS: dict[str, ResourceKind] = {
    "sessions": ResourceKind.SESSION,
    "agenda_items": ResourceKind.AGENDA_ITEM,
    "motions": ResourceKind.MOTION,
}

PARENT_LEVEL: dict[str, Optional[Level]] = {
    "sessions": None,
    "agenda_items": "sessions",
    "motions": "agenda_items",
}


@dataclass
class Param:
    """A labelled text field staged for a create or edit."""
    label: str
    text: str = ""


@dataclass
class EditSession:
    """An in-progress create or edit of one resource."""
    kind: ResourceKind
    mode: EditMode
    fields: SelectableList[Param]
    return_to: Level
    original: Optional[Resource] = None

    @classmethod
    def for_create(cls, kind: ResourceKind, return_to: Level) -> "EditSession":
        params = [Param(spec.label) for spec in field_specs(kind, creating=True)]
        return cls(
            kind=kind,
            mode="creating",
            fields=SelectableList.with_items(params),
            return_to=return_to,
        )

    @classmethod
    def for_edit(cls, kind: ResourceKind, resource: Resource, return_to: Level) -> "EditSession":
        params = [
            Param(spec.label, spec.getter(resource))
            for spec in field_specs(kind, creating=False)
        ]
        return cls(
            kind=kind,
            mode="editing",
            fields=SelectableList.with_items(params),
            return_to=return_to,
            original=resource,
        )

    @property
    def creating(self) -> bool:
        return self.mode == "creating"

    def params(self) -> list[tuple[str, str]]:
        return [(p.label, p.text) for p in self.fields]


@dataclass
class FieldEditor:
    """Text buffer for the single field being edited."""
    param_index: int
    label: str
    text: str

    def insert(self, chars: str) -> None:
        self.text += chars

    def backspace(self) -> None:
        self.text = self.text[:-1]


@dataclass
class ResourceTree:
    """The three hierarchy levels and the resources drilled into."""
    sessions: SelectableList[Session] = field(default_factory=SelectableList)
    agenda_items: SelectableList[AgendaItem] = field(default_factory=SelectableList)
    motions: SelectableList = field(default_factory=SelectableList)
    focused_session: Optional[Session] = None
    focused_agenda_item: Optional[AgendaItem] = None

    def list_for(self, level: Level) -> SelectableList:
        return getattr(self, level)

    def scope_for(self, level: Level) -> Optional[str]:
        """Id of the parent resource that scopes level, if any."""
        if level == "agenda_items" and self.focused_session is not None:
            return self.focused_session.id
        if level == "motions" and self.focused_agenda_item is not None:
            return self.focused_agenda_item.id
        return None


# =============================================================================
# Modes
# =============================================================================

@dataclass(frozen=True)
class Browsing:
    level: Level = "sessions"


@dataclass
class Editing:
    session: EditSession


@dataclass
class FieldEditing:
    session: EditSession
    editor: FieldEditor


Mode = Union[Browsing, Editing, FieldEditing]


# =============================================================================
# Actions
# =============================================================================

@dataclass(frozen=True)
class SetSessions:
    """Replace the session list with a fresh fetch."""
    items: Sequence[Session]


@dataclass(frozen=True)
class RefreshLevel:
    """Swap in re-fetched items for a level, keeping the cursor."""
    level: Level
    items: Sequence[Resource]


@dataclass(frozen=True)
class OpenSession:
    """Drill into a session with its freshly fetched agenda items."""
    session: Session
    items: Sequence[AgendaItem]


@dataclass(frozen=True)
class OpenAgendaItem:
    """Drill into an agenda item with its freshly fetched motions."""
    item: AgendaItem
    items: Sequence[Resource]


@dataclass(frozen=True)
class GoBack:
    """Go up one level (no refetch)."""
    pass


@dataclass(frozen=True)
class CursorNext:
    pass


@dataclass(frozen=True)
class CursorPrevious:
    pass


@dataclass(frozen=True)
class CursorUnselect:
    pass


@dataclass(frozen=True)
class StartEdit:
    """Enter Editing mode with a prepared edit session."""
    session: EditSession


@dataclass(frozen=True)
class OpenFieldEditor:
    """Open the selected param in the field editor."""
    pass


@dataclass(frozen=True)
class FieldInsert:
    chars: str


@dataclass(frozen=True)
class FieldBackspace:
    pass


@dataclass(frozen=True)
class SetFieldText:
    """Replace the field editor buffer (used by the TextArea widget)."""
    text: str


@dataclass(frozen=True)
class CommitField:
    """Write the editor buffer back into its param, return to Editing."""
    pass


@dataclass(frozen=True)
class ExitEditor:
    """Discard the edit session and return to browsing."""
    pass


@dataclass(frozen=True)
class SetStatus:
    message: Optional[str]


@dataclass(frozen=True)
class SetAwaiting:
    description: Optional[str]


Action = Union[
    SetSessions,
    RefreshLevel,
    OpenSession,
    OpenAgendaItem,
    GoBack,
    CursorNext,
    CursorPrevious,
    CursorUnselect,
    StartEdit,
    OpenFieldEditor,
    FieldInsert,
    FieldBackspace,
    SetFieldText,
    CommitField,
    ExitEditor,
    SetStatus,
    SetAwaiting,
]


# =============================================================================
# Reducer
# =============================================================================

def reduce(state: "AppState", action: Action) -> None:
    """
    Apply an action to mutate state.

    Actions that do not apply to the current mode are ignored.
    """
    mode = state.mode

    match action:
        case SetSessions(items=items):
            state.tree.sessions = SelectableList.with_items(items)

        case RefreshLevel(level=level, items=items):
            state.tree.list_for(level).replace_items(items)

        case OpenSession(session=session, items=items):
            state.tree.focused_session = session
            state.tree.agenda_items = SelectableList.with_items(items)
            state.mode = Browsing("agenda_items")

        case OpenAgendaItem(item=item, items=items):
            state.tree.focused_agenda_item = item
            state.tree.motions = SelectableList.with_items(items)
            state.mode = Browsing("motions")

        case GoBack():
            if isinstance(mode, Browsing):
                parent = PARENT_LEVEL[mode.level]
                if parent is not None:
                    state.mode = Browsing(parent)

        case CursorNext():
            lst = state.active_list
            if lst is not None:
                lst.next()

        case CursorPrevious():
            lst = state.active_list
            if lst is not None:
                lst.previous()

        case CursorUnselect():
            lst = state.active_list
            if lst is not None:
                lst.unselect()

        case StartEdit(session=session):
            if isinstance(mode, Browsing):
                state.mode = Editing(session)

        case OpenFieldEditor():
            if isinstance(mode, Editing):
                index = mode.session.fields.selected_index
                param = mode.session.fields.selected
                if index is not None and param is not None:
                    editor = FieldEditor(param_index=index, label=param.label, text=param.text)
                    state.mode = FieldEditing(mode.session, editor)

        case FieldInsert(chars=chars):
            if isinstance(mode, FieldEditing):
                mode.editor.insert(chars)

        case FieldBackspace():
            if isinstance(mode, FieldEditing):
                mode.editor.backspace()

        case SetFieldText(text=text):
            if isinstance(mode, FieldEditing):
                mode.editor.text = text

        case CommitField():
            if isinstance(mode, FieldEditing):
                mode.session.fields.items[mode.editor.param_index].text = mode.editor.text
                state.mode = Editing(mode.session)

        case ExitEditor():
            if isinstance(mode, (Editing, FieldEditing)):
                state.mode = Browsing(mode.session.return_to)

        case SetStatus(message=message):
            state.status = message

        case SetAwaiting(description=description):
            state.awaiting = description


# =============================================================================
# App State
# =============================================================================

@dataclass
class AppState:
    """
    Central application state.

    Mutable; changes happen via dispatch(action).
    """

    mode: Mode = field(default_factory=Browsing)
    tree: ResourceTree = field(default_factory=ResourceTree)

    # Last error or confirmation shown in the status bar
    status: Optional[str] = None

    # Description of the request in flight, if any
    awaiting: Optional[str] = None

    # -------------------------------------------------------------------------
    # Dispatch
    # -------------------------------------------------------------------------

    def dispatch(self, action: Action) -> None:
        """Apply an action to update state."""
        reduce(self, action)

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------

    @property
    def level(self) -> Level:
        """The browsing level, or the level an edit returns to."""
        mode = self.mode
        if isinstance(mode, Browsing):
            return mode.level
        return mode.session.return_to

    @property
    def kind(self) -> ResourceKind:
        return LEVEL_KINDS[self.level]

    @property
    def edit_session(self) -> Optional[EditSession]:
        if isinstance(self.mode, (Editing, FieldEditing)):
            return self.mode.session
        return None

    @property
    def field_editor(self) -> Optional[FieldEditor]:
        if isinstance(self.mode, FieldEditing):
            return self.mode.editor
        return None

    @property
    def active_list(self) -> Optional[SelectableList]:
        """The list cursor keys act on in the current mode."""
        mode = self.mode
        if isinstance(mode, Browsing):
            return self.tree.list_for(mode.level)
        if isinstance(mode, Editing):
            return mode.session.fields
        return None

    @property
    def current_list(self) -> SelectableList:
        return self.tree.list_for(self.level)

    @property
    def selected(self) -> Optional[Resource]:
        """Selected resource at the current level."""
        return self.current_list.selected
