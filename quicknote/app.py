# quicknote/app.py
from __future__ import annotations
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Optional
import logging

from fastapi import Depends, FastAPI, Request
from fastapi.responses import HTMLResponse, JSONResponse
from pydantic import BaseModel

from .config import Settings
from .errors import NoteNotFoundError, StoreError
from .filtering import filter_notes
from .log import configure_logging
from .models import Note
from .store import NoteStore

logger = logging.getLogger(__name__)


# ---------- Schemas ----------
class NoteCreate(BaseModel):
    title: str = ""
    content: str = ""

class NoteUpdate(BaseModel):
    title: str
    content: str

class NoteOut(BaseModel):
    id: int
    title: str
    content: str
    created_at: datetime
    updated_at: datetime

def _to_out(n: Note) -> NoteOut:
    return NoteOut(
        id=n.id, title=n.title, content=n.content,
        created_at=n.created_at, updated_at=n.updated_at,
    )


def get_store(request: Request) -> NoteStore:
    return request.app.state.store


def create_app(store: Optional[NoteStore] = None, settings: Optional[Settings] = None) -> FastAPI:
    """Build the API. Without a store, one is opened from settings for the app's lifetime."""
    settings = settings or Settings.from_env()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if store is not None:
            app.state.store = store
            yield
            return
        configure_logging(settings.log_level)
        app.state.store = NoteStore.open(settings.db_path)
        try:
            yield
        finally:
            app.state.store.close()

    app = FastAPI(title="QuickNote API", lifespan=lifespan)
    if store is not None:
        app.state.store = store

    @app.exception_handler(NoteNotFoundError)
    async def _not_found(request: Request, exc: NoteNotFoundError):
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(StoreError)
    async def _store_failed(request: Request, exc: StoreError):
        logger.error("store error on %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=500, content={"detail": "Note store error"})

    # ---------- API ----------
    @app.get("/api/settings")
    def api_settings():
        return {"autosave": settings.autosave}

    @app.get("/api/notes", response_model=list[NoteOut])
    def api_list_notes(q: str = "", store: NoteStore = Depends(get_store)):
        return [_to_out(n) for n in filter_notes(store.search(""), q)]

    @app.post("/api/notes", response_model=NoteOut, status_code=201)
    def api_create_note(payload: NoteCreate, store: NoteStore = Depends(get_store)):
        return _to_out(store.add(payload.title, payload.content))

    @app.get("/api/notes/{note_id}", response_model=NoteOut)
    def api_get_note(note_id: int, store: NoteStore = Depends(get_store)):
        n = store.get(note_id)
        if not n:
            raise NoteNotFoundError(note_id)
        return _to_out(n)

    @app.put("/api/notes/{note_id}", response_model=NoteOut)
    def api_update_note(note_id: int, payload: NoteUpdate, store: NoteStore = Depends(get_store)):
        return _to_out(store.update(note_id, payload.title, payload.content))

    @app.delete("/api/notes/{note_id}")
    def api_delete_note(note_id: int, store: NoteStore = Depends(get_store)):
        store.delete_by_id(note_id)
        return {"ok": True}

    @app.delete("/api/notes")
    def api_delete_all(store: NoteStore = Depends(get_store)):
        return {"ok": True, "deleted": store.delete_all()}

    @app.get("/", response_class=HTMLResponse)
    def index():
        return HTMLResponse(content=_INDEX)

    return app


# ---------- Tiny UI (single file, no build) ----------
_INDEX = """
<!doctype html>
<html lang="en" class="h-full">
<head>
  <meta charset="utf-8"/>
  <meta name="viewport" content="width=device-width,initial-scale=1"/>
  <title>QuickNote</title>
  <script src="https://cdn.tailwindcss.com"></script>
  <script>
    // Tailwind config for dark mode class
    tailwind.config = { darkMode: 'class' };
  </script>
<style>
  .btn { display: inline-flex; align-items: center; justify-content: center; padding: 8px 14px;
         border-radius: 999px; background: #3b82f6; color: #fff; transition: transform .1s ease; }
  .btn:hover { transform: translateY(-2px); }
  .dark .btn { background-color: #2563eb; }
  .btn.hidden { display: none; }
</style>
</head>
<body class="h-full bg-purple-400 dark:bg-slate-950 text-slate-900 dark:text-slate-100">
  <header class="sticky top-0 z-40 flex items-center gap-2 px-4 py-3 bg-purple-300 dark:bg-slate-900">
    <button id="back" class="btn hidden">&lt; Back</button>
    <h1 class="flex-1 text-xl font-bold text-white">Notes</h1>
    <button id="trash" class="btn hidden" title="Delete note">&#128465;</button>
    <button id="clearAll" class="btn" title="Delete all notes">Delete all</button>
    <button id="themeBtn" class="btn" title="Toggle theme">&#9680;</button>
  </header>

  <main id="home" class="p-2">
    <input id="q" class="w-full rounded p-2 mb-4 bg-white dark:bg-slate-900" placeholder="Search"/>
    <div id="list" class="columns-2 gap-0.5 pb-20"></div>
    <button id="addBtn" class="btn fixed bottom-[5%] right-8 w-12 h-12 text-3xl">+</button>
  </main>

  <main id="editor" class="hidden p-4">
    <input id="title" class="w-full rounded p-2 mb-4 bg-white dark:bg-slate-900" placeholder="Title"/>
    <textarea id="content" class="w-full h-[40vh] rounded p-2 mb-4 bg-white dark:bg-slate-900" placeholder="New Note"></textarea>
    <button id="saveBtn" class="btn w-full p-4">Add Note</button>
  </main>

  <script>
    const $ = (sel) => document.querySelector(sel);
    async function j(url, opts={}){
      const res = await fetch(url, {headers:{'content-type':'application/json'}, ...opts});
      if(!res.ok){
        let text = await res.text().catch(()=>res.statusText);
        try{ text = JSON.parse(text).detail || text }catch{}
        throw new Error(text);
      }
      return res.json();
    }
    function escapeHtml(s){ return (s||'').replace(/[&<>"]/g, c=>({'&':'&amp;','<':'&lt;','>':'&gt;','"':'&quot;'}[c])); }

    // ---------- theme ----------
    function applyTheme(){
      const dark = localStorage.getItem('quicknote-theme') === 'dark';
      document.documentElement.classList.toggle('dark', dark);
    }
    applyTheme();
    $('#themeBtn').onclick = ()=>{
      const next = document.documentElement.classList.contains('dark') ? 'light' : 'dark';
      localStorage.setItem('quicknote-theme', next); applyTheme();
    };

    // ---------- list ----------
    let notes = null;     // null while the first fetch is pending
    let editing = null;   // note being edited, null on the add screen

    function matches(n, q){
      q = q.toLowerCase();
      return n.title.toLowerCase().includes(q) || n.content.toLowerCase().includes(q);
    }
    function renderList(){
      const list = $('#list');
      if(notes === null){ list.innerHTML = '<div class="text-center text-white mt-10">Loading…</div>'; return; }
      const visible = notes.filter(n => matches(n, $('#q').value));
      if(!visible.length){
        list.innerHTML = `<div class="text-center text-white mt-10">${notes.length ? 'No notes found' : 'No notes yet'}</div>`;
        return;
      }
      list.innerHTML = visible.map(n => `
        <div class="break-inside-avoid mb-0.5 rounded-sm px-1 bg-purple-300 dark:bg-slate-800 cursor-pointer" data-id="${n.id}"><b class="block text-lg font-bold">${escapeHtml(n.title)}</b>${escapeHtml(n.content)}</div>`).join('');
      list.querySelectorAll('[data-id]').forEach(el => el.onclick = ()=> openEdit(+el.dataset.id));
    }
    async function showHome(){
      $('#editor').classList.add('hidden'); $('#home').classList.remove('hidden');
      $('#back').classList.add('hidden'); $('#trash').classList.add('hidden'); $('#clearAll').classList.remove('hidden');
      editing = null; notes = null; renderList();
      notes = await j('/api/notes'); renderList();
    }

    // ---------- add / edit ----------
    function showEditor(note){
      editing = note;
      $('#home').classList.add('hidden'); $('#editor').classList.remove('hidden');
      $('#back').classList.remove('hidden'); $('#clearAll').classList.add('hidden');
      $('#trash').classList.toggle('hidden', !note);
      $('#saveBtn').classList.toggle('hidden', !!note && autosaveOn);
      $('#saveBtn').textContent = note ? 'Save Note' : 'Add Note';
      $('#title').value = note ? note.title : '';
      $('#content').value = note ? note.content : '';
      $('#title').focus();
    }
    function openEdit(id){ showEditor(notes.find(n => n.id === id)); }
    function saveEdit(){
      // always send the whole note so the last write is a real state
      return j(`/api/notes/${editing.id}`, {method:'PUT',
        body: JSON.stringify({title: $('#title').value, content: $('#content').value})});
    }
    async function autosave(){
      if(!editing || !autosaveOn) return;
      const saved = await saveEdit();
      // the user may have left the editor while the save was in flight
      if(editing && editing.id === saved.id) editing = saved;
    }
    $('#title').addEventListener('input', autosave);
    $('#content').addEventListener('input', autosave);
    $('#saveBtn').onclick = async ()=>{
      if(editing){ await saveEdit(); showHome(); return; }
      await j('/api/notes', {method:'POST', body: JSON.stringify({title: $('#title').value, content: $('#content').value})});
      showHome();
    };
    $('#trash').onclick = async ()=>{
      await j(`/api/notes/${editing.id}`, {method:'DELETE'}); showHome();
    };
    $('#clearAll').onclick = async ()=>{
      if(!confirm('Delete all notes?')) return;
      await j('/api/notes', {method:'DELETE'}); showHome();
    };
    $('#back').onclick = showHome;
    $('#addBtn').onclick = ()=> showEditor(null);
    $('#q').addEventListener('input', renderList);

    let autosaveOn = true;
    j('/api/settings').then(s => { autosaveOn = s.autosave; });
    showHome();
  </script>
</body>
</html>
"""


app = create_app()
