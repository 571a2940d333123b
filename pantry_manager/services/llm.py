from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Iterable, List, Optional

from google import genai
from openai import OpenAI

from .exceptions import GenerationFailed
from pantry_manager.core.models import InventoryItem, RecipeDocument
from pantry_manager.core.prompt import build_recipe_prompt, split_recipes
from pantry_manager.config import Settings

logger = logging.getLogger(__name__)


class TextGenerator(ABC):
    """A hosted model that turns one prompt into one text completion."""

    @abstractmethod
    def generate(self, prompt: str) -> str: ...


class OpenAITextGenerator(TextGenerator):
    def __init__(self, settings: Settings):
        self._api_key = settings.openai_api_key
        self._model = settings.openai_model_suggest
        self._client: Optional[OpenAI] = None

    def _get_client(self) -> OpenAI:
        if self._client is None:
            # Falls back to OPENAI_API_KEY from the environment when unset.
            self._client = OpenAI(api_key=self._api_key)
        return self._client

    def generate(self, prompt: str) -> str:
        try:
            resp = self._get_client().chat.completions.create(
                model=self._model,
                messages=[{"role": "user", "content": prompt}],
            )
            content = resp.choices[0].message.content
        except Exception as e:
            raise GenerationFailed(f"OpenAI generate failed: {e}") from e
        if not isinstance(content, str):
            raise GenerationFailed("OpenAI response had no text content")
        return content


class GeminiTextGenerator(TextGenerator):
    def __init__(self, settings: Settings):
        self._api_key = settings.gemini_api_key
        self._model = settings.gemini_model
        self._client: Optional[genai.Client] = None

    def _get_client(self) -> genai.Client:
        if self._client is None:
            self._client = genai.Client(api_key=self._api_key)
        return self._client

    def generate(self, prompt: str) -> str:
        try:
            response = self._get_client().models.generate_content(
                model=self._model,
                contents=prompt,
            )
            text = response.text
        except Exception as e:
            raise GenerationFailed(f"Gemini generate failed: {e}") from e
        if not isinstance(text, str):
            raise GenerationFailed("Gemini response had no text content")
        return text


def make_generator(settings: Settings) -> TextGenerator:
    if settings.recipe_engine == "gemini":
        return GeminiTextGenerator(settings)
    return OpenAITextGenerator(settings)


class RecipeSuggester:
    """Builds the recipe prompt from an inventory snapshot and splits the reply into recipes."""

    def __init__(self, generator: TextGenerator):
        self._generator = generator

    def request_recipes(
        self, inventory: Iterable[InventoryItem], meal_description: str
    ) -> List[RecipeDocument]:
        """Like suggest_recipes(), but raises GenerationFailed instead of returning []."""
        prompt = build_recipe_prompt(list(inventory), meal_description)
        raw = self._generator.generate(prompt)
        return [RecipeDocument(text=block) for block in split_recipes(raw)]

    def suggest_recipes(
        self, inventory: Iterable[InventoryItem], meal_description: str
    ) -> List[RecipeDocument]:
        try:
            return self.request_recipes(inventory, meal_description)
        except GenerationFailed as e:
            logger.error("Error generating recipes: %s", e)
            return []
