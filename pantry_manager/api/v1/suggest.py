from __future__ import annotations

from fastapi import APIRouter, Depends

from pantry_manager.core.models import SuggestRequest, SuggestResponse
from pantry_manager.services.session import PantrySession
from .inventory import get_session

router = APIRouter(tags=["suggestions"])


@router.post("/api/suggest_recipes", response_model=SuggestResponse)
def suggest_recipes(body: SuggestRequest, session: PantrySession = Depends(get_session)):
    # Generation failures come back as an empty list with `error` set, not an HTTP error.
    return session.generate_recipes(body.meal_description)
