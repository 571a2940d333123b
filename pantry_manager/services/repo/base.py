from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Dict, Optional
from pantry_manager.core.models import InventoryEvent


class DocumentStore(ABC):
    """A collection of semi-structured documents addressed by a string id."""

    @abstractmethod
    def get(self, doc_id: str) -> Optional[dict]: ...
    @abstractmethod
    def set(self, doc_id: str, data: dict) -> None: ...
    @abstractmethod
    def update(self, doc_id: str, fields: dict) -> bool: ...
    @abstractmethod
    def delete(self, doc_id: str) -> None: ...
    @abstractmethod
    def list(self) -> Dict[str, dict]: ...

    def increment(self, doc_id: str, field: str, amount: int) -> Optional[int]:
        """
        Add `amount` to a numeric field and return the new value, or None if the
        document doesn't exist. This default is a plain read-then-write; stores
        with an atomic primitive override it.
        """
        current = self.get(doc_id)
        if current is None:
            return None
        value = int(current.get(field) or 0) + amount
        self.update(doc_id, {field: value})
        return value


    def replace(self, old_id: str, new_id: str, data: dict) -> None:
        """
        Move a document to a new id with new contents. This default removes the
        old document first and puts it back if writing the new one fails, so a
        failure leaves the collection as it was.
        """
        previous = self.get(old_id)
        if previous is not None:
            self.delete(old_id)
        try:
            self.set(new_id, data)
        except Exception:
            if previous is not None:
                self.set(old_id, previous)
            raise


class EventRepo(ABC):
    @abstractmethod
    def append(self, event: InventoryEvent) -> None: ...


class NullEventRepo(EventRepo):
    """Drops events; used with the in-memory store."""

    def append(self, event: InventoryEvent) -> None:
        return None
