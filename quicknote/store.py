from __future__ import annotations
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import SQLModel, Session, create_engine, func, select

from .config import sqlite_url
from .errors import NoteNotFoundError, StoreError
from .filtering import filter_notes
from .models import Note, title_or_untitled

logger = logging.getLogger(__name__)


class NoteStore:
    """
    Handle on the notes database. Open one per process and pass it to
    whatever needs it (CLI commands, API routes, edit sessions).
    """

    def __init__(self, url: str):
        connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
        self.url = url
        self.engine = create_engine(url, echo=False, connect_args=connect_args)

    @classmethod
    def open(cls, target: str | Path) -> "NoteStore":
        """Open (and create if needed) a store from a file path or a DB URL."""
        if isinstance(target, str) and "://" in target:
            url = target
        else:
            try:
                url = sqlite_url(target)
            except OSError as e:
                logger.error("could not prepare %s", target, exc_info=e)
                raise StoreError(f"Cannot open note store: {e}") from e
        store = cls(url)
        store.init()
        return store

    def init(self) -> None:
        try:
            SQLModel.metadata.create_all(self.engine)
        except SQLAlchemyError as e:
            logger.error("could not initialise %s", self.url, exc_info=e)
            raise StoreError(f"Cannot open note store: {e}") from e
        logger.debug("note store ready at %s", self.url)

    def close(self) -> None:
        self.engine.dispose()

    def __enter__(self) -> "NoteStore":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        # keep objects alive after commit so returned models retain values
        session = Session(self.engine, expire_on_commit=False)
        try:
            yield session
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            logger.error("store operation failed", exc_info=e)
            raise StoreError(str(e)) from e
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    # ---------- queries ----------
    def search(self, query: str = "") -> list[Note]:
        """All notes in insertion order, narrowed by `filter_notes`."""
        with self.session_scope() as s:
            notes = list(s.exec(select(Note).order_by(Note.id)))
        return filter_notes(notes, query)

    def get(self, note_id: int) -> Optional[Note]:
        with self.session_scope() as s:
            return s.get(Note, note_id)

    def count(self) -> int:
        with self.session_scope() as s:
            return s.exec(select(func.count()).select_from(Note)).one()

    # ---------- mutations ----------
    def add(self, title: str, content: str = "") -> Note:
        with self.session_scope() as s:
            note = Note(title=title_or_untitled(title), content=content or "")
            s.add(note)
            s.flush()  # get the ID assigned
            s.refresh(note)
        logger.info("added note #%s", note.id)
        return note

    def update(self, note_id: int, title: str, content: str) -> Note:
        """
        Overwrite title and content of a note. Callers always send the
        complete state, so repeating or reordering calls never mixes edits.
        """
        with self.session_scope() as s:
            note = s.get(Note, note_id)
            if note is None:
                raise NoteNotFoundError(note_id)
            note.title = title
            note.content = content
            note.touch()
            s.add(note)
            s.flush()
            s.refresh(note)
        logger.debug("updated note #%s", note_id)
        return note

    def delete_by_id(self, note_id: int) -> None:
        with self.session_scope() as s:
            note = s.get(Note, note_id)
            if note is None:
                logger.debug("delete of missing note #%s ignored", note_id)
                return
            s.delete(note)
        logger.info("deleted note #%s", note_id)

    def delete_all(self) -> int:
        with self.session_scope() as s:
            notes = list(s.exec(select(Note)))
            for note in notes:
                s.delete(note)
        logger.info("deleted all notes (%d)", len(notes))
        return len(notes)
