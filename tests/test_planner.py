"""
Tests for the caller-facing crafting planner
"""
from minecraft_skills.crafting.models import NoRecipe, StationUnavailable
from minecraft_skills.crafting.planner import CraftingPlanner

from mocks import make_catalog, make_recipe, wooden_tools_catalog


def test_resolve_does_not_touch_live_inventory():
    """Planning works on a copy of the inventory"""
    inventory = {"oak_log": 2}
    planner = CraftingPlanner(wooden_tools_catalog(), lambda: inventory)

    result = planner.resolve("torch", 4)

    assert result.ok
    assert inventory == {"oak_log": 2}


def test_resolve_reads_inventory_each_time():
    inventory = {}
    planner = CraftingPlanner(wooden_tools_catalog(), lambda: inventory)

    assert not planner.resolve("stick", 4).ok

    inventory["oak_planks"] = 2
    assert planner.resolve("stick", 4).ok


def test_resolve_zero_count():
    planner = CraftingPlanner(wooden_tools_catalog(), lambda: {"oak_planks": 64})

    result = planner.resolve("stick", 0)

    assert not result.ok
    assert result.narration == "you can't craft nothing!"


def test_station_flag_may_be_callable():
    station = {"nearby": False}
    planner = CraftingPlanner(
        wooden_tools_catalog(), lambda: {"oak_planks": 3, "stick": 2}, station_available=lambda: station["nearby"]
    )

    assert not planner.resolve("wooden_pickaxe").ok

    station["nearby"] = True
    assert planner.resolve("wooden_pickaxe").ok


class TestStationPrecheck:
    """Up-front explanations when the location rules out crafting"""

    def test_unknown_item(self):
        planner = CraftingPlanner(wooden_tools_catalog(), dict)

        failure = planner.station_precheck("diamond_sword")

        assert isinstance(failure, NoRecipe)
        assert failure.message == "you couldn't figure out a recipe for diamond sword."

    def test_table_needed_and_carried(self):
        planner = CraftingPlanner(wooden_tools_catalog(), dict, station_available=False)

        failure = planner.station_precheck("wooden_pickaxe", has_station_item=True)

        assert isinstance(failure, StationUnavailable)
        assert failure.message == (
            "you need to place down a crafting table to craft wooden pickaxe. You have one in your inventory."
        )

    def test_table_needed_and_missing(self):
        planner = CraftingPlanner(wooden_tools_catalog(), dict, station_available=False)

        failure = planner.station_precheck("wooden_pickaxe")

        assert isinstance(failure, StationUnavailable)
        assert failure.message == "you need a crafting table."

    def test_no_problem(self):
        planner = CraftingPlanner(wooden_tools_catalog(), dict, station_available=True)

        assert planner.station_precheck("wooden_pickaxe") is None
        assert planner.station_precheck("stick") is None


def test_craftable_items():
    """Only recipes satisfiable from the inventory alone are listed"""
    catalog = wooden_tools_catalog()
    planner = CraftingPlanner(catalog, lambda: {"oak_planks": 4, "stick": 2})

    craftable = planner.craftable_items(catalog.producible_items())

    assert craftable == ["stick", "crafting_table", "torch"]


def test_craftable_items_with_station():
    catalog = make_catalog(
        make_recipe("table", "crafting_table", 1, {"oak_planks": 4}),
        make_recipe("chest", "chest", 1, {"oak_planks": 8}, requires_station=True),
    )
    inventory = {"oak_planks": 8}

    assert CraftingPlanner(catalog, lambda: inventory).craftable_items(["chest", "crafting_table"]) == [
        "crafting_table"
    ]
    assert CraftingPlanner(catalog, lambda: inventory, station_available=True).craftable_items(
        ["chest", "crafting_table"]
    ) == ["chest", "crafting_table"]
