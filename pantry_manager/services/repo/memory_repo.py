from __future__ import annotations

import copy
import threading
from typing import Dict, List, Optional

from .base import DocumentStore


class InMemoryDocumentStore(DocumentStore):
    """Process-local collection. Insertion order is the native list order."""

    def __init__(self, documents: Optional[Dict[str, dict]] = None):
        self._docs: Dict[str, dict] = copy.deepcopy(documents or {})
        self._lock = threading.Lock()

    def get(self, doc_id: str) -> Optional[dict]:
        with self._lock:
            doc = self._docs.get(doc_id)
            return copy.deepcopy(doc) if doc is not None else None

    def set(self, doc_id: str, data: dict) -> None:
        with self._lock:
            self._docs[doc_id] = copy.deepcopy(data)

    def update(self, doc_id: str, fields: dict) -> bool:
        with self._lock:
            if doc_id not in self._docs:
                return False
            self._docs[doc_id].update(copy.deepcopy(fields))
            return True

    def delete(self, doc_id: str) -> None:
        with self._lock:
            self._docs.pop(doc_id, None)

    def list(self) -> Dict[str, dict]:
        with self._lock:
            return copy.deepcopy(self._docs)

    def replace(self, old_id: str, new_id: str, data: dict) -> None:
        with self._lock:
            self._docs.pop(old_id, None)
            self._docs[new_id] = copy.deepcopy(data)

    def increment(self, doc_id: str, field: str, amount: int) -> Optional[int]:
        with self._lock:
            doc = self._docs.get(doc_id)
            if doc is None:
                return None
            doc[field] = int(doc.get(field) or 0) + amount
            return doc[field]
