from __future__ import annotations

import logging
import os
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pantry_manager.api.v1.inventory import router as inventory_router
from pantry_manager.api.v1.suggest import router as suggest_router
from pantry_manager.config import Settings
from pantry_manager.services.inventory import InventoryStore
from pantry_manager.services.llm import RecipeSuggester, make_generator
from pantry_manager.services.repo.base import NullEventRepo
from pantry_manager.services.repo.json_repo import JSONDocumentStore, JSONEventRepo
from pantry_manager.services.repo.memory_repo import InMemoryDocumentStore
from pantry_manager.services.session import PantrySession

logger = logging.getLogger(__name__)


def build_session(settings: Settings) -> PantrySession:
    if settings.store_backend == "memory":
        store, events = InMemoryDocumentStore(), NullEventRepo()
    else:
        # Ensure data dir exists so repos can write
        os.makedirs(settings.data_dir, exist_ok=True)
        store, events = JSONDocumentStore(settings), JSONEventRepo(settings)
    suggester = RecipeSuggester(make_generator(settings))
    return PantrySession(InventoryStore(store, events), suggester, events)


def create_app(settings: Optional[Settings] = None, session: Optional[PantrySession] = None) -> FastAPI:
    settings = settings or Settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(title="Pantry Manager API", version="1.0")
    app.state.session = session or build_session(settings)
    # Load the snapshot up front; a store outage here only leaves it stale.
    app.state.session.refresh()
    logger.info("Pantry manager using %s store and %s recipes", settings.store_backend, settings.recipe_engine)

    # CORS (narrow it down in .env via CORS_ALLOW_ORIGINS if you want)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(inventory_router)
    app.include_router(suggest_router)

    @app.get("/healthz")
    def healthz():
        return {"status": "ok"}

    @app.get("/readyz")
    def readyz():
        return {"status": "ready", "stale": app.state.session.stale}

    return app
