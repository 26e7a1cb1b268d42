import json

from core.entry_extractor import extract_entries
from tools.plugin_view import FavoritesStore, build_plugin_groups, favorite_key, pick_entry, toggle_favorite


def keys(entries):
    return [e.key for e in entries]


def test_groups_sorted_a_to_z(core_plugins_text):
    groups = build_plugin_groups(extract_entries(core_plugins_text), "currency", favorites={"currency:monero"})

    assert list(groups) == ["Favorites", "Enabled", "Disabled"]
    assert keys(groups["Favorites"]) == ["monero"]
    assert keys(groups["Enabled"]) == ["bitcoin", "ethereum", "monero"]
    assert keys(groups["Disabled"]) == ["litecoin"]


def test_groups_in_document_order_with_filter(core_plugins_text):
    entries = extract_entries(core_plugins_text)

    groups = build_plugin_groups(entries, "swap", filter_text="  DE ", sort_az=False)
    assert keys(groups["Enabled"]) == ["godex"]

    groups = build_plugin_groups(entries, "swap", sort_az=False)
    assert keys(groups["Enabled"]) == ["changenow", "godex", "lifi"]


def test_favorites_of_other_section_are_ignored(core_plugins_text):
    groups = build_plugin_groups(extract_entries(core_plugins_text), "swap", favorites={"currency:lifi"})

    assert groups["Favorites"] == []


def test_toggle_favorite_returns_new_set(core_plugins_text):
    lifi = next(e for e in extract_entries(core_plugins_text) if e.key == "lifi")
    favorites = {"currency:bitcoin"}

    added = toggle_favorite(favorites, lifi)

    assert added == {"currency:bitcoin", "swap:lifi"}
    assert favorites == {"currency:bitcoin"}
    assert toggle_favorite(added, lifi) == favorites
    assert favorite_key(lifi) == "swap:lifi"


def test_pick_entry_exact_fuzzy_and_prefixed(core_plugins_text):
    entries = extract_entries(core_plugins_text)

    assert pick_entry(entries, "godex").key == "godex"
    assert pick_entry(entries, "etherem").key == "ethereum"
    assert pick_entry(entries, "swap:lifi").section == "swap"
    assert pick_entry(entries, "lifi", section="currency") is None
    assert pick_entry(entries, "zzzzzz") is None
    assert pick_entry(entries, "") is None


def test_favorites_store_round_trip(tmp_path):
    path = tmp_path / "state" / "state.json"
    store = FavoritesStore(str(path))

    assert store.load() == set()

    store.save({"swap:lifi", "currency:bitcoin"})
    assert FavoritesStore(str(path)).load() == {"swap:lifi", "currency:bitcoin"}
    assert json.loads(path.read_text())["favorites"] == ["currency:bitcoin", "swap:lifi"]


def test_favorites_store_keeps_other_state(tmp_path):
    path = tmp_path / "state.json"
    path.write_text(json.dumps({"sortAZ": False, "favorites": ["swap:godex", 7]}))
    store = FavoritesStore(str(path))

    assert store.load() == {"swap:godex"}
    store.save(set())
    assert json.loads(path.read_text()) == {"sortAZ": False, "favorites": []}


def test_favorites_store_ignores_corrupt_file(tmp_path):
    path = tmp_path / "state.json"
    path.write_text("{ nope")

    assert FavoritesStore(str(path)).load() == set()
