from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Request, Response, status

from pantry_manager.core.models import InventoryView, ItemSave, QuantityChange
from pantry_manager.services.exceptions import InvalidInput, StoreUnavailable
from pantry_manager.services.session import PantrySession

router = APIRouter(tags=["inventory"])

_STATUS_FOR_ERROR = {
    InvalidInput.code: 422,
    StoreUnavailable.code: status.HTTP_503_SERVICE_UNAVAILABLE,
}

# ---- DI helpers --------------------------------------------------------------

def get_session(request: Request) -> PantrySession:
    return request.app.state.session


def _respond(view: InventoryView, response: Response) -> InventoryView:
    if view.error:
        response.status_code = _STATUS_FOR_ERROR.get(view.error, status.HTTP_500_INTERNAL_SERVER_ERROR)
    return view

# ---- Routes ------------------------------------------------------------------

@router.get("/api/inventory", response_model=InventoryView)
def list_inventory(response: Response, search: Optional[str] = None, session: PantrySession = Depends(get_session)):
    view = session.refresh()
    if search:
        view = session.view(error=view.error, search=search)
    return _respond(view, response)


@router.post("/api/inventory", response_model=InventoryView)
def add_item(item: ItemSave, response: Response, session: PantrySession = Depends(get_session)):
    view = session.save_item(item.name, item.quantity, item.measurement)
    return _respond(view, response)


@router.put("/api/inventory/{name:path}", response_model=InventoryView)
def edit_item(name: str, item: ItemSave, response: Response, session: PantrySession = Depends(get_session)):
    view = session.save_item(item.name, item.quantity, item.measurement, edit=True, original_name=name)
    return _respond(view, response)


@router.post("/api/inventory/quantity", response_model=InventoryView)
def change_quantity(change: QuantityChange, response: Response, session: PantrySession = Depends(get_session)):
    view = session.update_quantity(change.name, change.delta)
    return _respond(view, response)


@router.delete("/api/inventory/{name:path}", response_model=InventoryView)
def delete_item(name: str, response: Response, session: PantrySession = Depends(get_session)):
    view = session.remove_item(name)
    return _respond(view, response)
