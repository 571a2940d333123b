from __future__ import annotations

import logging
from typing import Optional, Tuple

from pantry_manager.core.inventory import filter_items
from pantry_manager.core.models import InventoryEvent, InventoryItem, InventoryView, RawQuantity, SuggestResponse
from .exceptions import GenerationFailed, InvalidInput, ServiceError, StoreUnavailable
from .inventory import InventoryStore
from .llm import RecipeSuggester
from .repo.base import EventRepo, NullEventRepo

logger = logging.getLogger(__name__)


class PantrySession:
    """
    The read model the presentation layer works against.

    Holds the last inventory snapshot and re-reads it from the store after every
    mutation attempt; nothing is patched locally. No call raises: errors are
    logged and reported through the `error` field of the returned view.
    """

    def __init__(
        self,
        inventory: InventoryStore,
        suggester: RecipeSuggester,
        events: Optional[EventRepo] = None,
    ):
        self._inventory = inventory
        self._suggester = suggester
        self._events = events or NullEventRepo()
        self._items: Tuple[InventoryItem, ...] = ()
        self._stale = True
        self._loaded = False

    @property
    def items(self) -> Tuple[InventoryItem, ...]:
        return self._items

    @property
    def stale(self) -> bool:
        """True when the last refresh failed and `items` may be out of date."""
        return self._stale

    def view(self, error: Optional[str] = None, search: str = "") -> InventoryView:
        items = filter_items(self._items, search) if search else list(self._items)
        return InventoryView(items=items, stale=self._stale, error=error)

    def refresh(self) -> InventoryView:
        try:
            self._items = tuple(self._inventory.list_items())
            self._stale = False
            self._loaded = True
        except StoreUnavailable as e:
            logger.error("Could not load inventory, keeping previous snapshot: %s", e)
            self._stale = True
            return self.view(error=e.code)
        return self.view()

    def search(self, term: str) -> InventoryView:
        return self.view(search=term)

    def save_item(
        self,
        name: str,
        quantity: RawQuantity,
        measurement: Optional[str] = "",
        *,
        edit: bool = False,
        original_name: Optional[str] = None,
    ) -> InventoryView:
        try:
            self._inventory.upsert_item(name, quantity, measurement, edit=edit, original_name=original_name)
        except InvalidInput as e:
            logger.warning("Not saving item %r: %s", name, e)
            return self.view(error=e.code)
        except StoreUnavailable as e:
            logger.error("Saving item %r failed: %s", name, e)
            return self._refresh_with_error(e)
        return self.refresh()

    def update_quantity(self, name: str, delta: RawQuantity) -> InventoryView:
        try:
            self._inventory.adjust_quantity(name, delta)
        except StoreUnavailable as e:
            logger.error("Changing quantity of %r failed: %s", name, e)
            return self._refresh_with_error(e)
        return self.refresh()

    def remove_item(self, name: str) -> InventoryView:
        try:
            self._inventory.delete_item(name)
        except StoreUnavailable as e:
            logger.error("Removing item %r failed: %s", name, e)
            return self._refresh_with_error(e)
        return self.refresh()

    def generate_recipes(self, meal_description: str) -> SuggestResponse:
        """Recipes for the current snapshot; an empty list when generation fails."""
        if self._stale:
            view = self.refresh()
            if view.error and not self._loaded:
                # Never prompt with an inventory that was never read.
                return SuggestResponse(recipes=[], error=view.error, stale=True)
        try:
            recipes = self._suggester.request_recipes(self._items, meal_description)
        except GenerationFailed as e:
            logger.error("Error generating recipes: %s", e)
            return SuggestResponse(recipes=[], error=e.code, stale=self._stale)

        try:
            self._events.append(InventoryEvent(
                type="suggest",
                payload={"meal_description": meal_description, "recipe_count": len(recipes)},
            ))
        except ServiceError as e:
            logger.warning("Could not record suggest event: %s", e)
        return SuggestResponse(recipes=recipes, stale=self._stale)

    def _refresh_with_error(self, error: ServiceError) -> InventoryView:
        view = self.refresh()
        return view.model_copy(update={"error": view.error or error.code})
