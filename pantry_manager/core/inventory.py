# pantry_manager/core/inventory.py
from __future__ import annotations

from typing import Iterable, List

from .models import InventoryItem, RawQuantity


def parse_quantity(raw: RawQuantity, *, allow_negative: bool = False) -> int:
    """
    Turn user-entered quantity text into an int.

    Accepts ints and strings holding an integer (surrounding whitespace ignored).
    Raises ValueError for anything else; callers wrap it in InvalidInput.
    With allow_negative the value may be zero or negative (quantity deltas).
    """
    if raw is None or isinstance(raw, bool):
        raise ValueError(f"Quantity is required, got {raw!r}")
    if isinstance(raw, int):
        value = raw
    else:
        text = str(raw).strip()
        if not text:
            raise ValueError("Quantity is required")
        digits = text[1:] if text[0] in "+-" else text
        if not (digits.isascii() and digits.isdigit()):
            raise ValueError(f"Quantity must be a whole number, got {raw!r}")
        value = int(text)
    if not allow_negative and value < 1:
        raise ValueError(f"Quantity must be a number greater than 0, got {value}")
    return value


def filter_items(items: Iterable[InventoryItem], term: str) -> List[InventoryItem]:
    """Case-insensitive substring search on item names; empty term keeps everything."""
    needle = (term or "").lower()
    return [it for it in items if needle in it.name.lower()]
