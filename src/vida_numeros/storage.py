"""Persistência: documento JSON dos registros e configuração em SQLite."""

from __future__ import annotations

import json
import logging
import os
import sqlite3
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from vida_numeros.model import Entry

logger = logging.getLogger(__name__)

DATA_FILE_NAME = "registros.json"
CONFIG_FILE_NAME = "config.sqlite3"
DELIVERY_MODES: tuple[str, ...] = ("auto", "directory", "store-file", "none")

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS app_config (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL
);
"""


def default_data_dir() -> Path:
    """Data folder used when none is configured."""
    return Path.cwd() / "vida_numeros_dados"


def dumps(entries: Iterable[Entry]) -> str:
    """Serialize entries as the pretty-printed JSON array."""
    payload = [entry.to_dict() for entry in entries]
    return json.dumps(payload, ensure_ascii=False, indent=2)


class JsonEntryStore:
    """Read-all/write-all store backed by a single JSON document."""

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        """Location of the persisted document."""
        return self._path

    def exists(self) -> bool:
        return self._path.is_file()

    def load_all(self) -> list[Entry]:
        """Devolve os registros salvos, ou lista vazia se não houver dados."""
        try:
            text = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return []
        except OSError:
            logger.warning("Could not read %s", self._path, exc_info=True)
            return []
        except UnicodeDecodeError:
            logger.warning("Data document %s is not valid UTF-8", self._path)
            return []
        try:
            raw: Any = json.loads(text)
        except (json.JSONDecodeError, RecursionError):
            logger.warning("Ignoring corrupt data document %s", self._path)
            return []
        if not isinstance(raw, list):
            logger.warning("Data document %s is not a JSON array", self._path)
            return []
        return _entries_from_raw(raw)

    def save_all(self, entries: Iterable[Entry]) -> None:
        """Overwrite the document with ``entries``.

        Raises:
            OSError: If the document cannot be written.
        """
        text = dumps(entries)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._path.with_name(self._path.name + ".tmp")
        try:
            tmp_path.write_text(text, encoding="utf-8")
            os.replace(tmp_path, self._path)
        except OSError:
            tmp_path.unlink(missing_ok=True)
            raise
        logger.debug("Saved data document %s", self._path)


@dataclass(frozen=True)
class AppConfig:
    """Configuração persistida da app."""

    export_dir: str = ""
    delivery: str = "auto"

    def resolved_export_dir(self) -> Path:
        if self.export_dir:
            return Path(self.export_dir).expanduser()
        return Path.cwd() / "exportados"


class SQLiteConfigStore:
    """Repositório SQLite chave/valor para a configuração."""

    def __init__(self, db_path: Path) -> None:
        """Create store and ensure schema exists."""
        self._db_path = db_path
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_schema()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self._db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _init_schema(self) -> None:
        with self._connect() as conn:
            conn.executescript(SCHEMA_SQL)
            conn.commit()

    def load_config(self) -> AppConfig:
        """Devolve configuração salva ou defaults."""
        defaults = {"export_dir": "", "delivery": "auto"}
        with self._connect() as conn:
            rows = conn.execute("SELECT key, value FROM app_config").fetchall()
        values = {row["key"]: row["value"] for row in rows}
        merged = {**defaults, **values}
        delivery = merged["delivery"]
        if delivery not in DELIVERY_MODES:
            logger.warning("Unknown delivery mode %r, using auto", delivery)
            delivery = "auto"
        return AppConfig(export_dir=merged["export_dir"], delivery=delivery)

    def save_config(self, config: AppConfig) -> None:
        """Guarda a configuração na tabela key/value."""
        payload = {"export_dir": config.export_dir, "delivery": config.delivery}
        with self._connect() as conn:
            conn.executemany(
                """
                INSERT INTO app_config(key, value) VALUES(?, ?)
                ON CONFLICT(key) DO UPDATE SET value=excluded.value
                """,
                payload.items(),
            )
            conn.commit()


def _entries_from_raw(raw: list[Any]) -> list[Entry]:
    out: list[Entry] = []
    seen: set[int] = set()
    for item in raw:
        if not isinstance(item, dict):
            continue
        try:
            entry = Entry.from_dict(item)
        except ValueError:
            logger.warning("Skipping record without a numeric id: %r", item)
            continue
        if entry.id in seen:
            continue
        seen.add(entry.id)
        out.append(entry)
    return out
