from __future__ import annotations

import io
import json
import os
import tempfile
from contextlib import contextmanager
from typing import Dict, Iterator, Optional

from pantry_manager.core.models import InventoryEvent
from pantry_manager.services.exceptions import StoreUnavailable
from pantry_manager.config import Settings
from .base import DocumentStore, EventRepo


# Cross-platform file lock (fcntl for *nix; msvcrt for Windows)
@contextmanager
def _locked(path: str) -> Iterator[io.FileIO]:
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    f = open(path, "a+b")  # create if missing
    try:
        import fcntl  # type: ignore
    except ImportError:
        fcntl = None
    try:
        if fcntl is not None:
            fcntl.flock(f.fileno(), fcntl.LOCK_EX)
        else:
            import msvcrt  # type: ignore
            msvcrt.locking(f.fileno(), msvcrt.LK_LOCK, 1)
    except OSError as e:
        f.close()
        raise StoreUnavailable(f"Could not lock file {path}: {e}") from e
    try:
        yield f
    finally:
        try:
            if fcntl is not None:
                fcntl.flock(f.fileno(), fcntl.LOCK_UN)
            else:
                import msvcrt  # type: ignore
                msvcrt.locking(f.fileno(), msvcrt.LK_UNLCK, 1)
        finally:
            f.close()


def _atomic_write(path: str, data: bytes) -> None:
    d = os.path.dirname(path) or "."
    os.makedirs(d, exist_ok=True)
    fd, tmp = tempfile.mkstemp(prefix=".tmp-", dir=d)
    try:
        with os.fdopen(fd, "wb") as w:
            w.write(data)
            w.flush()
            os.fsync(w.fileno())
        os.replace(tmp, path)
    except OSError as e:
        if os.path.exists(tmp):
            os.remove(tmp)
        raise StoreUnavailable(f"Atomic write failed for {path}: {e}") from e


class JSONDocumentStore(DocumentStore):
    """
    One JSON file per collection: {"documents": {<id>: {...}}}.

    Every call takes an exclusive lock on a sidecar .lock file, so a
    read-modify-write such as increment() is atomic across processes.
    """

    def __init__(self, settings: Settings):
        self.path = os.path.join(settings.data_dir, f"{settings.inventory_collection}.json")
        self._lock_path = self.path + ".lock"

    def _read(self) -> Dict[str, dict]:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "rb") as f:
                raw = f.read() or b"{}"
            obj = json.loads(raw.decode("utf-8"))
        except (OSError, ValueError) as e:
            raise StoreUnavailable(f"Failed to load collection from {self.path}: {e}") from e
        docs = obj.get("documents", {}) if isinstance(obj, dict) else None
        if not isinstance(docs, dict):
            raise StoreUnavailable(f"Unexpected collection layout in {self.path}")
        return docs

    def _write(self, docs: Dict[str, dict]) -> None:
        payload = json.dumps({"documents": docs}, ensure_ascii=False, separators=(",", ":")).encode("utf-8")
        _atomic_write(self.path, payload)

    def get(self, doc_id: str) -> Optional[dict]:
        with _locked(self._lock_path):
            return self._read().get(doc_id)

    def set(self, doc_id: str, data: dict) -> None:
        with _locked(self._lock_path):
            docs = self._read()
            docs[doc_id] = dict(data)
            self._write(docs)

    def update(self, doc_id: str, fields: dict) -> bool:
        with _locked(self._lock_path):
            docs = self._read()
            if doc_id not in docs:
                return False
            docs[doc_id].update(fields)
            self._write(docs)
            return True

    def delete(self, doc_id: str) -> None:
        with _locked(self._lock_path):
            docs = self._read()
            if docs.pop(doc_id, None) is not None:
                self._write(docs)

    def replace(self, old_id: str, new_id: str, data: dict) -> None:
        with _locked(self._lock_path):
            docs = self._read()
            docs.pop(old_id, None)
            docs[new_id] = dict(data)
            self._write(docs)

    def list(self) -> Dict[str, dict]:
        with _locked(self._lock_path):
            return self._read()

    def increment(self, doc_id: str, field: str, amount: int) -> Optional[int]:
        with _locked(self._lock_path):
            docs = self._read()
            doc = docs.get(doc_id)
            if doc is None:
                return None
            try:
                doc[field] = int(doc.get(field) or 0) + amount
            except (TypeError, ValueError) as e:
                raise StoreUnavailable(f"Document {doc_id!r} has a non-numeric {field}: {e}") from e
            self._write(docs)
            return doc[field]


class JSONEventRepo(EventRepo):
    def __init__(self, settings: Settings):
        self.path = settings.events_file

    def append(self, event: InventoryEvent) -> None:
        try:
            line = (event.model_dump_json() + "\n").encode("utf-8")
            with _locked(self.path) as f:
                f.seek(0, os.SEEK_END)
                f.write(line)
                f.flush()
                os.fsync(f.fileno())
        except OSError as e:
            raise StoreUnavailable(f"Failed to append event to {self.path}: {e}") from e
