from __future__ import annotations

import logging
from typing import List, Optional

from pydantic import ValidationError

from pantry_manager.core.inventory import parse_quantity
from pantry_manager.core.models import InventoryEvent, InventoryItem, RawQuantity
from pantry_manager.services.exceptions import InvalidInput, ServiceError, StoreUnavailable
from pantry_manager.services.repo.base import DocumentStore, EventRepo, NullEventRepo

logger = logging.getLogger(__name__)


class InventoryStore:
    """
    Inventory operations on top of a document collection keyed by item name.

    Raises InvalidInput for bad caller input and StoreUnavailable when the
    collection can't be reached. Callers that must not fail (PantrySession)
    catch both.
    """

    def __init__(self, store: DocumentStore, events: Optional[EventRepo] = None):
        self._store = store
        self._events = events or NullEventRepo()

    def list_items(self) -> List[InventoryItem]:
        try:
            documents = self._store.list()
        except StoreUnavailable:
            raise
        except Exception as e:
            raise StoreUnavailable(f"Listing inventory failed: {e}") from e

        items: List[InventoryItem] = []
        for doc_id, doc in documents.items():
            if not isinstance(doc, dict):
                logger.warning("Skipping inventory document %r: not a mapping", doc_id)
                continue
            try:
                items.append(InventoryItem(
                    name=doc.get("name") or doc_id,
                    quantity=parse_quantity(doc.get("quantity"), allow_negative=True),
                    measurement=doc.get("measurement"),
                ))
            except (ValidationError, ValueError) as e:
                # A document that breaks the positive-quantity invariant is skipped, not fatal.
                logger.warning("Skipping malformed inventory document %r: %s", doc_id, e)
        return items

    def upsert_item(
        self,
        name: str,
        quantity: RawQuantity,
        measurement: Optional[str] = "",
        *,
        edit: bool = False,
        original_name: Optional[str] = None,
    ) -> None:
        """
        Save an item.

        In add mode an existing document gets `quantity` added to its stored
        quantity and keeps its measurement. In edit mode the document is replaced
        wholesale; when `original_name` differs from `name` the document moves to
        the new name in a single store call.
        """
        item = self._validate(name, quantity, measurement)
        try:
            if edit and original_name and original_name != item.name:
                self._store.replace(original_name, item.name, item.document())
            elif edit:
                self._store.set(item.name, item.document())
            else:
                # Merge-add through the store's increment so concurrent adds don't lose updates.
                merged = self._store.increment(item.name, "quantity", item.quantity)
                if merged is None:
                    self._store.set(item.name, item.document())
        except StoreUnavailable:
            raise
        except Exception as e:
            raise StoreUnavailable(f"Saving {item.name!r} failed: {e}") from e

        self._record("edit" if edit else "add", {
            "name": item.name,
            "quantity": item.quantity,
            "measurement": item.measurement,
            "original_name": original_name,
        })

    def adjust_quantity(self, name: str, delta: RawQuantity) -> None:
        """
        Add `delta` (negative to remove) to an item's quantity, deleting it when
        the result is <= 0. An empty or unparseable delta is logged and ignored,
        as is an item that doesn't exist.
        """
        try:
            change = parse_quantity(delta, allow_negative=True)
        except ValueError as e:
            logger.warning("Ignoring quantity change for %r (%s): %s", name, InvalidInput.code, e)
            return

        try:
            new_quantity = self._store.increment(name, "quantity", change)
            if new_quantity is None:
                logger.info("Ignoring quantity change for %r: item not in inventory", name)
                return
            if new_quantity <= 0:
                self._store.delete(name)
        except StoreUnavailable:
            raise
        except Exception as e:
            raise StoreUnavailable(f"Adjusting {name!r} failed: {e}") from e

        self._record("adjust", {"name": name, "delta": change, "quantity": max(new_quantity, 0)})

    def delete_item(self, name: str) -> None:
        try:
            self._store.delete(name)
        except StoreUnavailable:
            raise
        except Exception as e:
            raise StoreUnavailable(f"Deleting {name!r} failed: {e}") from e
        self._record("delete", {"name": name})

    # ---- helpers -------------------------------------------------------------

    @staticmethod
    def _validate(name: str, quantity: RawQuantity, measurement: Optional[str]) -> InventoryItem:
        if not name or not name.strip():
            raise InvalidInput("Item name is required")
        try:
            return InventoryItem(
                name=name,
                quantity=parse_quantity(quantity),
                measurement=measurement or "",
            )
        except (ValidationError, ValueError) as e:
            raise InvalidInput(str(e)) from e

    def _record(self, kind: str, payload: dict) -> None:
        # Audit log is best-effort; the write already happened.
        try:
            self._events.append(InventoryEvent(type=kind, payload=payload))
        except ServiceError as e:
            logger.warning("Could not record %s event: %s", kind, e)
