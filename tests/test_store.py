import pytest
from sqlmodel import SQLModel

from quicknote.errors import NoteNotFoundError, StoreError
from quicknote.models import UNTITLED
from quicknote.store import NoteStore


def test_add_assigns_ids_and_untitled_fallback(tmp_path):
    store = NoteStore.open(tmp_path / "add.sqlite")

    a = store.add("Groceries", "x")
    b = store.add("", "x")
    c = store.add("   ")
    assert a.id is not None and b.id is not None and a.id != b.id
    assert a.title == "Groceries"
    assert b.title == UNTITLED == "Untitled"
    assert c.title == "Untitled" and c.content == ""
    store.close()

def test_search_keeps_insertion_order_and_filters(tmp_path):
    store = NoteStore.open(tmp_path / "search.sqlite")
    n1 = store.add("Groceries", "milk, eggs")
    n2 = store.add("Todo", "buy milk")

    assert [n.id for n in store.search("")] == [n1.id, n2.id]
    assert [n.id for n in store.search("MILK")] == [n1.id, n2.id]
    assert [n.id for n in store.search("eggs")] == [n1.id]

def test_update_overwrites_and_is_idempotent(tmp_path):
    store = NoteStore.open(tmp_path / "update.sqlite")
    n = store.add("draft", "hello")

    first = store.update(n.id, "final", "world")
    second = store.update(n.id, "final", "world")
    assert (first.title, first.content) == ("final", "world")
    assert (second.title, second.content) == ("final", "world")
    assert second.updated_at >= n.updated_at
    assert [(x.title, x.content) for x in store.search("")] == [("final", "world")]

def test_update_keeps_empty_title(tmp_path):
    store = NoteStore.open(tmp_path / "blank.sqlite")
    n = store.add("draft", "")
    assert store.update(n.id, "", "body").title == ""

def test_update_missing_note_raises(tmp_path):
    store = NoteStore.open(tmp_path / "missing.sqlite")
    with pytest.raises(NoteNotFoundError) as info:
        store.update(999, "t", "c")
    assert info.value.note_id == 999
    assert isinstance(info.value, StoreError)

def test_delete_by_id_and_missing_id(tmp_path):
    store = NoteStore.open(tmp_path / "delete.sqlite")
    a = store.add("A", "")
    b = store.add("B", "")

    store.delete_by_id(a.id)
    store.delete_by_id(a.id)  # already gone, not an error
    store.delete_by_id(12345)
    assert store.get(a.id) is None
    assert [n.id for n in store.search("")] == [b.id]

def test_delete_all_then_search_is_empty(tmp_path):
    with NoteStore.open(tmp_path / "clear.sqlite") as store:
        store.add("A", "1")
        store.add("B", "2")
        assert store.count() == 2
        assert store.delete_all() == 2
        assert store.search("") == []
        assert store.count() == 0
        assert store.delete_all() == 0

def test_ids_are_unique_after_deletes(tmp_path):
    store = NoteStore.open(tmp_path / "ids.sqlite")
    ids = [store.add(str(i), "").id for i in range(5)]
    store.delete_by_id(ids[2])
    ids.append(store.add("again", "").id)
    remaining = [n.id for n in store.search("")]
    assert len(remaining) == len(set(remaining)) == 5

def test_database_failures_surface_as_store_error(tmp_path):
    store = NoteStore.open(tmp_path / "broken.sqlite")
    SQLModel.metadata.drop_all(store.engine)
    with pytest.raises(StoreError):
        store.search("")
    with pytest.raises(StoreError):
        store.add("t", "c")

def test_open_under_a_file_raises_store_error(tmp_path):
    blocker = tmp_path / "afile"
    blocker.write_text("")
    with pytest.raises(StoreError, match="Cannot open note store"):
        NoteStore.open(blocker / "n.db")
