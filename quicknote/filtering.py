"""
Derive the visible note list from the full set and a search string.

The list view fetches every note once and narrows it on each keystroke;
nothing here touches the store.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Protocol, Sequence, TypeVar


class HasText(Protocol):
    title: str
    content: str


N = TypeVar("N", bound=HasText)


class ListState(str, Enum):
    LOADING = "loading"
    EMPTY = "empty"
    POPULATED = "populated"


@dataclass
class NoteList:
    state: ListState
    notes: list = field(default_factory=list)
    total: int = 0

    @property
    def store_is_empty(self) -> bool:
        return self.state is ListState.EMPTY and self.total == 0


def matches(note: HasText, query: str) -> bool:
    q = (query or "").lower()
    return q in (note.title or "").lower() or q in (note.content or "").lower()


def filter_notes(notes: Optional[Sequence[N]], query: str) -> list[N]:
    """
    Notes whose title or content contains `query`, case-insensitively.
    - order of `notes` is preserved
    - empty query keeps everything
    - `notes=None` (not fetched yet) gives an empty list
    """
    if notes is None:
        return []
    return [n for n in notes if matches(n, query)]


def derive_list(notes: Optional[Sequence[N]], query: str) -> NoteList:
    if notes is None:
        return NoteList(state=ListState.LOADING)
    visible = filter_notes(notes, query)
    state = ListState.POPULATED if visible else ListState.EMPTY
    return NoteList(state=state, notes=visible, total=len(notes))
