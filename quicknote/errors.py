from __future__ import annotations


class StoreError(Exception):
    """Raised when the note store cannot complete an operation."""


class NoteNotFoundError(StoreError, LookupError):
    def __init__(self, note_id: int) -> None:
        self.note_id = note_id
        super().__init__(f"Note '{note_id}' not found")


class SessionClosedError(RuntimeError):
    """Raised when an edit session is used after its note was deleted."""
