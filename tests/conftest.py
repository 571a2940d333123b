from typing import Dict, List, Optional

import pytest

from pantry_manager.services.inventory import InventoryStore
from pantry_manager.services.llm import RecipeSuggester, TextGenerator
from pantry_manager.services.exceptions import GenerationFailed
from pantry_manager.services.repo.base import DocumentStore
from pantry_manager.services.repo.memory_repo import InMemoryDocumentStore
from pantry_manager.services.session import PantrySession


class FakeGenerator(TextGenerator):
    """Returns a canned reply and remembers the prompts it was given."""

    def __init__(self, reply: str = "", error: Optional[Exception] = None):
        self.reply = reply
        self.error = error
        self.prompts: List[str] = []

    def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.reply


class FlakyStore(DocumentStore):
    """
    In-memory store that raises ConnectionError on every call while `down` is set,
    and on deletes only while `fail_deletes` is set. Uses the default replace().
    """

    def __init__(self):
        self.inner = InMemoryDocumentStore()
        self.down = False
        self.fail_deletes = False
        self.writes = 0

    def _check(self):
        if self.down:
            raise ConnectionError("store offline")

    def get(self, doc_id: str) -> Optional[dict]:
        self._check()
        return self.inner.get(doc_id)

    def set(self, doc_id: str, data: dict) -> None:
        self._check()
        self.writes += 1
        self.inner.set(doc_id, data)

    def update(self, doc_id: str, fields: dict) -> bool:
        self._check()
        self.writes += 1
        return self.inner.update(doc_id, fields)

    def delete(self, doc_id: str) -> None:
        self._check()
        if self.fail_deletes:
            raise ConnectionError("delete rejected")
        self.writes += 1
        self.inner.delete(doc_id)

    def list(self) -> Dict[str, dict]:
        self._check()
        return self.inner.list()

    def increment(self, doc_id: str, field: str, amount: int) -> Optional[int]:
        self._check()
        self.writes += 1
        return self.inner.increment(doc_id, field, amount)


@pytest.fixture
def store():
    return FlakyStore()


@pytest.fixture
def inventory(store):
    return InventoryStore(store)


@pytest.fixture
def generator():
    return FakeGenerator(reply="## Omelette\nEggs.\n---\n## Pancakes\nFlour.")


@pytest.fixture
def session(inventory, generator):
    return PantrySession(inventory, RecipeSuggester(generator))


@pytest.fixture
def failing_generator():
    return FakeGenerator(error=GenerationFailed("model offline"))
