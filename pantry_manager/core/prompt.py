# pantry_manager/core/prompt.py
from __future__ import annotations

from typing import Iterable, List

from .models import InventoryItem

RECIPE_SEPARATOR = "---"
RECIPE_COUNT = 3

# Pantries smaller than this must be used exclusively.
SMALL_PANTRY_ITEMS = 4
# Recipes with fewer ingredients than this must be fully pantry-sourced.
SHORT_RECIPE_INGREDIENTS = 5
MIN_PANTRY_SHARE_PERCENT = 80


def pantry_string(items: Iterable[InventoryItem]) -> str:
    """'<name> <quantity> <measurement>' tuples joined by ', '."""
    return ", ".join(f"{it.name} {it.quantity} {it.measurement}" for it in items)


def build_recipe_prompt(items: Iterable[InventoryItem], meal_description: str) -> str:
    pantry = pantry_string(items)
    return (
        f"Here's a list of items I have in my pantry: {pantry}.\n"
        "Follow these rules exactly.\n"
        "1. How to choose the meals\n"
        f"1.1 Suggest {RECIPE_COUNT} different recipes based on the ingredients in the pantry that are "
        f"most similar to a {meal_description} type of meal.\n"
        f"1.2 If the pantry has fewer than {SMALL_PANTRY_ITEMS} unique items, the recipes must not use "
        "any ingredient that isn't in the pantry.\n"
        f"1.3 If the pantry has {SMALL_PANTRY_ITEMS} or more unique items, the recipes may include some "
        "items that aren't in the pantry.\n"
        f"1.4 A recipe with fewer than {SHORT_RECIPE_INGREDIENTS} ingredients must only use pantry items; "
        f"any other recipe must take at least {MIN_PANTRY_SHARE_PERCENT}% of its ingredients from the pantry, "
        "otherwise pick a different recipe.\n"
        "1.5 Every recipe must be a real, common dish that someone would actually cook.\n"
        "1.6 Portion sizes serve 1-2 people unless the meal description says otherwise.\n"
        "2. Formatting for each recipe\n"
        "2.1 Everything left aligned.\n"
        "2.2 An H2 title containing only the name of the dish.\n"
        "2.3 Regular text describing the dish.\n"
        '2.4 An H3 heading saying "Ingredients".\n'
        "2.5 A bullet list of ingredients with appropriate measurements.\n"
        '2.6 An H3 heading saying "Steps".\n'
        "2.7 A bullet list of detailed steps explaining how to make the dish.\n"
        f'3. Separate each recipe with the divider "{RECIPE_SEPARATOR}".\n'
        "4. Leave out anything from the pantry you don't recognize.\n"
        "5. Use sensible proportions and measurement types for each ingredient. If an item has no "
        "measurement, assume the most common unit for that kind and amount of item.\n"
        "6. Only use as much of an item as the recipe needs; it doesn't have to use all of it."
    )


def split_recipes(raw: str) -> List[str]:
    """Split model output on the separator, trimming blocks and dropping empty ones."""
    blocks = (block.strip() for block in (raw or "").split(RECIPE_SEPARATOR))
    return [block for block in blocks if block]
