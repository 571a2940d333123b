# pantry_manager/core/models.py
from __future__ import annotations

from datetime import datetime, timezone
from typing import Literal, Optional, List, Union

from pydantic import BaseModel, Field, field_validator


# ---------- Core value objects ----------

class InventoryItem(BaseModel):
    """A single pantry item as stored in the inventory collection.

    The name doubles as the document key. It is kept verbatim: "Egg" and "egg"
    are different documents.
    """
    name: str = Field(..., min_length=1, description="Display name and document key")
    quantity: int = Field(..., ge=1, description="Positive quantity; absent items have none")
    measurement: str = Field("", description="Unit label, e.g. 'cups'; may be empty")

    @field_validator("name")
    def _reject_blank_name(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("InventoryItem.name cannot be blank")
        return v

    @field_validator("measurement", mode="before")
    def _measurement_default(cls, v: Optional[str]) -> str:
        return v or ""

    def document(self) -> dict:
        """Fields as written to the document store."""
        return {"name": self.name, "quantity": self.quantity, "measurement": self.measurement}


# ---------- Requests coming from the presentation layer ----------

# Quantities are typed in by users, so they may arrive as text.
RawQuantity = Union[int, str, None]


class ItemSave(BaseModel):
    name: str = ""
    quantity: RawQuantity = None
    measurement: Optional[str] = ""


class QuantityChange(BaseModel):
    name: str
    delta: RawQuantity = None


# ---------- Suggestion domain ----------

class RecipeDocument(BaseModel):
    """One '---' separated block of model output, kept as opaque text."""
    text: str


class SuggestRequest(BaseModel):
    meal_description: str = ""


class SuggestResponse(BaseModel):
    recipes: List[RecipeDocument] = Field(default_factory=list)
    error: Optional[str] = None
    stale: bool = False


class InventoryView(BaseModel):
    """Snapshot returned to the presentation layer after every call."""
    items: List[InventoryItem] = Field(default_factory=list)
    stale: bool = False
    error: Optional[str] = None


# ---------- Auditing / events ----------

class InventoryEvent(BaseModel):
    ts: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    type: Literal["add", "edit", "adjust", "delete", "suggest"]
    payload: dict
    schema_version: int = 1
