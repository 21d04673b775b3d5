"""
Mock implementations and sample recipe data for testing without a Minecraft server
"""
from typing import Dict, List, Optional

from minecraft_skills.crafting.catalog import InMemoryRecipeCatalog
from minecraft_skills.crafting.executor import NavigationOutcome, NavigationResult, Station
from minecraft_skills.crafting.models import Ingredient, Item, ItemStack, Recipe


def make_recipe(
    recipe_id: str, result: str, count: int, inputs: Dict[str, int], requires_station: bool = False
) -> Recipe:
    """Recipe producing ``count`` of ``result`` from the per-craft ``inputs``"""
    return Recipe(
        id=recipe_id,
        result=ItemStack(result, count),
        ingredients=tuple(Ingredient(name, -needed) for name, needed in inputs.items()),
        requires_station=requires_station,
    )


def make_catalog(*recipes: Recipe, items: Optional[List[str]] = None) -> InMemoryRecipeCatalog:
    """Catalog keyed by item name, with an Item for every name that appears"""
    names = list(items or [])
    for recipe in recipes:
        names.append(recipe.result.item_id)
        names.extend(ingredient.item_id for ingredient in recipe.ingredients)
    catalog = InMemoryRecipeCatalog(recipes=recipes)
    for name in dict.fromkeys(names):
        catalog.add_item(Item(id=name, name=name))
    return catalog


def wooden_tools_catalog() -> InMemoryRecipeCatalog:
    """Log -> planks -> sticks -> torch / pickaxe, plus a crafting table"""
    return make_catalog(
        make_recipe("planks", "oak_planks", 4, {"oak_log": 1}),
        make_recipe("sticks", "stick", 4, {"oak_planks": 2}),
        make_recipe("table", "crafting_table", 1, {"oak_planks": 4}),
        make_recipe("torch", "torch", 4, {"oak_planks": 1, "stick": 1}),
        make_recipe("pickaxe", "wooden_pickaxe", 1, {"oak_planks": 3, "stick": 2}, requires_station=True),
    )


class MockToolContext:
    """Mock tool context"""

    def __init__(self):
        self.state = {}


class MockBridgeManager:
    """Mock command bridge recording every command it receives"""

    def __init__(self, responses: Optional[Dict] = None, connected: bool = True):
        self.is_connected = connected
        self.responses = responses or {}
        self.commands = []

    async def execute_command(self, method, **kwargs):
        """Mock command execution"""
        self.commands.append((method, kwargs))
        response = self.responses.get(method, {"status": "success"})
        if isinstance(response, Exception):
            raise response
        return response


class MockCraftingPrimitives:
    """Records the character actions the executor performs"""

    def __init__(self, position=(0, 64, 0), navigation=NavigationOutcome.REACHED, fail_on_craft=None):
        self.calls = []
        self._position = position
        self.navigation = navigation
        self.fail_on_craft = fail_on_craft
        self.on_craft = None

    async def craft(self, recipe, times, station):
        self.calls.append(("craft", recipe.id, times, station))
        if self.fail_on_craft == recipe.id:
            raise RuntimeError(f"missing ingredients for {recipe.id}")
        if self.on_craft:
            self.on_craft(recipe)

    async def equip(self, item_id):
        self.calls.append(("equip", item_id))

    async def navigate_near(self, position, range, cancel_signal=None):
        self.calls.append(("navigate", position, range))
        if self.navigation == NavigationOutcome.ERROR:
            return NavigationResult(NavigationOutcome.ERROR, error="path blocked")
        return NavigationResult(self.navigation)

    async def position(self):
        return self._position

    def crafted(self):
        return [call[1] for call in self.calls if call[0] == "craft"]


class MockStationLocator:
    """Station locator returning a fixed station (or none)"""

    def __init__(self, position=None):
        self.station = Station(position=position, block="crafting_table") if position is not None else None
        self.lookups = 0

    async def nearest_station(self):
        self.lookups += 1
        return self.station


MOCK_ITEMS = [
    {"id": 0, "name": "air", "stackSize": 64},
    {"id": 1, "name": "oak_log", "stackSize": 64},
    {"id": 2, "name": "oak_planks", "stackSize": 64},
    {"id": 3, "name": "stick", "stackSize": 64},
    {"id": 4, "name": "crafting_table", "stackSize": 64},
    {"id": 5, "name": "wooden_pickaxe", "stackSize": 1},
    {"id": 6, "name": "birch_log", "stackSize": 64},
    {"id": 7, "name": "birch_planks", "stackSize": 64},
    {"id": 8, "name": "white_wool", "stackSize": 64},
    {"id": 9, "name": "red_wool", "stackSize": 64},
    {"id": 10, "name": "white_bed", "stackSize": 1},
    {"id": 11, "name": "red_bed", "stackSize": 1},
]

# minecraft-data recipe format, keyed by result item id
RECIPES = {
    "2": [{"ingredients": [1], "result": {"id": 2, "count": 4}}],
    "3": [{"inShape": [[2], [2]], "result": {"id": 3, "count": 4}}],
    "4": [{"inShape": [[2, 2], [2, 2]], "result": {"id": 4, "count": 1}}],
    "5": [{"inShape": [[2, 2, 2], [None, 3, None], [None, 3, None]], "result": {"id": 5, "count": 1}}],
    "7": [{"ingredients": [6], "result": {"id": 7, "count": 4}}],
    "10": [{"inShape": [[8, 8, 8], [2, 2, 2]], "result": {"id": 10, "count": 1}}],
    "11": [{"inShape": [[9, 9, 9], [2, 2, 2]], "result": {"id": 11, "count": 1}}],
}


class MockMinecraftData:
    """Subset of the minecraft_data accessors the data service relies on"""

    def __init__(self, version):
        self.version = version
        self.items_list = MOCK_ITEMS
        self.items_name = {item["name"]: item for item in MOCK_ITEMS}
        self.blocks_name = {"crafting_table": {"id": 182, "name": "crafting_table"}}
        self.recipes = RECIPES
