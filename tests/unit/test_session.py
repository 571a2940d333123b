from pantry_manager.services.llm import RecipeSuggester
from pantry_manager.services.session import PantrySession


def test_every_mutation_refreshes_snapshot(session):
    view = session.save_item("egg", "2", "pcs")
    assert [(i.name, i.quantity) for i in view.items] == [("egg", 2)]
    assert session.save_item("egg", 3).items[0].quantity == 5
    assert session.update_quantity("egg", -1).items[0].quantity == 4
    assert session.remove_item("egg").items == []
    assert session.items == ()


def test_snapshot_reflects_writes_made_elsewhere(session, inventory):
    session.refresh()
    inventory.upsert_item("milk", 1, "l")
    assert session.items == ()
    assert [i.name for i in session.refresh().items] == ["milk"]


def test_invalid_save_reports_error_without_writing(session, store):
    view = session.save_item("", 1, "")
    assert view.error == "invalid_input"
    assert store.writes == 0


def test_store_outage_keeps_previous_snapshot(session, store):
    session.save_item("egg", 2, "pcs")
    store.down = True
    view = session.refresh()
    assert view.error == "store_unavailable"
    assert view.stale is True
    assert [i.name for i in view.items] == ["egg"]

    assert session.save_item("flour", 1).error == "store_unavailable"
    assert session.update_quantity("egg", 1).error == "store_unavailable"
    assert session.remove_item("egg").error == "store_unavailable"

    store.down = False
    view = session.refresh()
    assert view.error is None and view.stale is False


def test_unparseable_quantity_change_is_noop(session):
    session.save_item("egg", 2, "pcs")
    view = session.update_quantity("egg", "")
    assert view.error is None
    assert view.items[0].quantity == 2


def test_search_filters_cached_snapshot(session):
    session.save_item("Brown Rice", 1)
    session.save_item("egg", 2)
    assert [i.name for i in session.search("rice").items] == ["Brown Rice"]


def test_generate_recipes_uses_current_snapshot(session, generator):
    session.save_item("egg", 2, "pcs")
    response = session.generate_recipes("breakfast")
    assert [r.text for r in response.recipes] == ["## Omelette\nEggs.", "## Pancakes\nFlour."]
    assert response.error is None
    assert "egg 2 pcs" in generator.prompts[0]


def test_generate_recipes_loads_inventory_when_never_refreshed(inventory, generator):
    inventory.upsert_item("flour", 1, "cup")
    session = PantrySession(inventory, RecipeSuggester(generator))
    session.generate_recipes("dinner")
    assert "flour 1 cup" in generator.prompts[0]


def test_generation_failure_returns_no_recipes(inventory, failing_generator):
    session = PantrySession(inventory, RecipeSuggester(failing_generator))
    response = session.generate_recipes("breakfast")
    assert response.recipes == []
    assert response.error == "generation_failed"


def test_generate_recipes_with_unreadable_store_sends_no_prompt(inventory, store, generator):
    store.down = True
    session = PantrySession(inventory, RecipeSuggester(generator))
    response = session.generate_recipes("breakfast")
    assert response.recipes == []
    assert response.error == "store_unavailable"
    assert response.stale is True
    assert generator.prompts == []


def test_generate_recipes_on_stale_snapshot_is_flagged(session, store, generator):
    session.save_item("egg", 2, "pcs")
    store.down = True
    session.refresh()
    response = session.generate_recipes("breakfast")
    assert len(response.recipes) == 2
    assert response.stale is True
    assert "egg 2 pcs" in generator.prompts[0]
