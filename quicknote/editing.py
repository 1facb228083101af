from __future__ import annotations
from typing import Optional
import logging

from .errors import NoteNotFoundError, SessionClosedError
from .models import Note
from .store import NoteStore

logger = logging.getLogger(__name__)


class EditSession:
    """
    State behind the edit screen for one note.

    With autosave on, every change persists the full title and content
    right away, so whatever update lands last is a state the user actually
    typed. With autosave off, changes stay local until `save()`.
    """

    def __init__(self, store: NoteStore, note: Note, autosave: bool = True):
        self.store = store
        self.note_id: int = note.id
        self.title = note.title
        self.content = note.content
        self.autosave = autosave
        self.closed = False
        self._saved = (note.title, note.content)

    @classmethod
    def open(cls, store: NoteStore, note_id: int, autosave: bool = True) -> "EditSession":
        note = store.get(note_id)
        if note is None:
            raise NoteNotFoundError(note_id)
        return cls(store, note, autosave=autosave)

    @property
    def dirty(self) -> bool:
        return (self.title, self.content) != self._saved

    def set_title(self, text: str) -> Optional[Note]:
        self._check_open()
        self.title = text
        return self.save() if self.autosave else None

    def set_content(self, text: str) -> Optional[Note]:
        self._check_open()
        self.content = text
        return self.save() if self.autosave else None

    def save(self) -> Note:
        self._check_open()
        note = self.store.update(self.note_id, self.title, self.content)
        self._saved = (note.title, note.content)
        return note

    def delete(self) -> None:
        self._check_open()
        self.store.delete_by_id(self.note_id)
        self.closed = True
        logger.debug("edit session for note #%s closed by delete", self.note_id)

    def _check_open(self) -> None:
        if self.closed:
            raise SessionClosedError(f"Note #{self.note_id} was deleted")
