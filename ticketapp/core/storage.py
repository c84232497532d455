# ticketapp/core/storage.py
import json
import os
import tempfile
import threading
from pathlib import Path
from typing import Any, Dict, List

from .logging_config import logger

COLLECTIONS = ("users", "tickets")


class StorageError(Exception):
    """Raised when a collection document cannot be read or written."""


class JsonStore:
    """
    Whole-document JSON persistence: one array file per collection.

    Every document has its own re-entrant lock. Callers doing a
    read-modify-write hold ``lock(name)`` for the whole cycle so a
    concurrent writer cannot clobber their changes.
    """

    def __init__(self, storage_dir: str):
        self.storage_dir = Path(storage_dir)
        self._locks: Dict[str, threading.RLock] = {name: threading.RLock() for name in COLLECTIONS}
        self._init_lock = threading.Lock()
        self._ready = False

    # -----------------------------------------------------
    # 🔹 Paths & bootstrap
    # -----------------------------------------------------
    def path(self, name: str) -> Path:
        if name not in COLLECTIONS:
            raise KeyError(f"Unknown collection: {name}")
        return self.storage_dir / f"{name}.json"

    def lock(self, name: str) -> threading.RLock:
        if name not in COLLECTIONS:
            raise KeyError(f"Unknown collection: {name}")
        return self._locks[name]

    def _ensure_ready(self) -> None:
        if self._ready:
            return
        with self._init_lock:
            if self._ready:
                return
            try:
                self.storage_dir.mkdir(parents=True, exist_ok=True)
                for name in COLLECTIONS:
                    if not self.path(name).exists():
                        self._write(name, [])
            except OSError as e:
                raise StorageError(f"Cannot initialise storage at {self.storage_dir}: {e}") from e
            self._ready = True
            logger.info("Storage ready at %s", self.storage_dir.resolve())

    # -----------------------------------------------------
    # 🔹 Load / save
    # -----------------------------------------------------
    def load(self, name: str) -> List[Dict[str, Any]]:
        self._ensure_ready()
        path = self.path(name)
        with self.lock(name):
            try:
                with open(path, encoding="utf-8") as f:
                    content = f.read()
            except OSError as e:
                raise StorageError(f"Cannot read {path}: {e}") from e
        if not content.strip():
            return []
        try:
            records = json.loads(content)
        except json.JSONDecodeError as e:
            raise StorageError(f"Corrupt JSON in {path}: {e}") from e
        if not isinstance(records, list):
            raise StorageError(f"Expected a JSON array in {path}")
        return records

    def save(self, name: str, records: List[Dict[str, Any]]) -> None:
        self._ensure_ready()
        with self.lock(name):
            try:
                self._write(name, records)
            except OSError as e:
                raise StorageError(f"Cannot write {self.path(name)}: {e}") from e

    def _write(self, name: str, records: List[Dict[str, Any]]) -> None:
        # temp file + rename keeps readers from seeing a half-written document
        path = self.path(name)
        fd, tmp_path = tempfile.mkstemp(dir=str(path.parent), prefix=f".{name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(records, f, indent=4, ensure_ascii=False)
            os.replace(tmp_path, path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise
