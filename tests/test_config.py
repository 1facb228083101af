from pathlib import Path

from quicknote.config import DEFAULT_DB_PATH, Settings, sqlite_url


def test_defaults(monkeypatch):
    for var in ("QUICKNOTE_DB_PATH", "QUICKNOTE_LOG_LEVEL", "QUICKNOTE_AUTOSAVE"):
        monkeypatch.delenv(var, raising=False)
    s = Settings.from_env()
    assert s.db_path == DEFAULT_DB_PATH
    assert s.log_level == "WARNING"
    assert s.autosave is True

def test_env_overrides(tmp_path, monkeypatch):
    monkeypatch.setenv("QUICKNOTE_DB_PATH", str(tmp_path / "sub" / "n.db"))
    monkeypatch.setenv("QUICKNOTE_LOG_LEVEL", "debug")
    monkeypatch.setenv("QUICKNOTE_AUTOSAVE", "off")
    s = Settings.from_env()
    assert s.db_path == tmp_path / "sub" / "n.db"
    assert s.log_level == "DEBUG"
    assert s.autosave is False
    assert s.db_url == f"sqlite:///{tmp_path / 'sub' / 'n.db'}"
    assert (tmp_path / "sub").is_dir()

def test_sqlite_url_accepts_strings(tmp_path):
    assert sqlite_url(str(tmp_path / "x.db")) == f"sqlite:///{Path(tmp_path) / 'x.db'}"
