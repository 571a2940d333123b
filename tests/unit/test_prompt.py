from pantry_manager.core.models import InventoryItem
from pantry_manager.core.prompt import build_recipe_prompt, pantry_string, split_recipes


def _pantry():
    return [
        InventoryItem(name="egg", quantity=2, measurement="pcs"),
        InventoryItem(name="flour", quantity=1, measurement="cup"),
        InventoryItem(name="salt", quantity=1),
    ]


def test_pantry_string_joins_name_quantity_measurement():
    assert pantry_string(_pantry()) == "egg 2 pcs, flour 1 cup, salt 1 "


def test_prompt_embeds_pantry_and_meal_description():
    prompt = build_recipe_prompt(_pantry(), "breakfast")
    assert "egg 2 pcs, flour 1 cup, salt 1 " in prompt
    assert "similar to a breakfast type of meal" in prompt


def test_prompt_carries_generation_rules():
    prompt = build_recipe_prompt(_pantry(), "dinner")
    assert "Suggest 3 different recipes" in prompt
    assert "fewer than 4 unique items" in prompt
    assert "fewer than 5 ingredients" in prompt
    assert "at least 80%" in prompt
    assert "1-2 people" in prompt
    assert '"Ingredients"' in prompt and '"Steps"' in prompt
    assert 'divider "---"' in prompt


def test_split_recipes_trims_and_drops_empty_blocks():
    assert split_recipes("A---B---   ---C") == ["A", "B", "C"]


def test_split_recipes_passes_malformed_text_through():
    assert split_recipes("no headings at all") == ["no headings at all"]
    assert split_recipes("") == []
    assert split_recipes("---\n---") == []
