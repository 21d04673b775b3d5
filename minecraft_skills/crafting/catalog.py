"""
Recipe catalog - read-only item and recipe reference data
"""
from collections import OrderedDict
from typing import Dict, Iterable, List, Optional, Protocol

from .models import Item, ItemId, Recipe, display_name


class RecipeCatalog(Protocol):
    """Source of recipes the resolver plans against"""

    def recipes_for(self, item_id: ItemId, station_available: bool) -> List[Recipe]:
        """Recipes producing ``item_id`` in declaration order.

        Recipes that require a crafting station are left out when no station
        is available.
        """
        ...

    def get_item(self, item_id: ItemId) -> Optional[Item]:
        ...


class InMemoryRecipeCatalog:
    """Catalog backed by ordered in-memory item and recipe lists"""

    def __init__(self, items: Iterable[Item] = (), recipes: Iterable[Recipe] = ()):
        self._items: Dict[ItemId, Item] = {}
        self._recipes: Dict[ItemId, List[Recipe]] = OrderedDict()
        for item in items:
            self.add_item(item)
        for recipe in recipes:
            self.add_recipe(recipe)

    def add_item(self, item: Item) -> None:
        self._items[item.id] = item

    def add_recipe(self, recipe: Recipe) -> None:
        self._recipes.setdefault(recipe.result.item_id, []).append(recipe)

    def recipes_for(self, item_id: ItemId, station_available: bool) -> List[Recipe]:
        recipes = self._recipes.get(item_id, [])
        if station_available:
            return list(recipes)
        return [recipe for recipe in recipes if not recipe.requires_station]

    def get_item(self, item_id: ItemId) -> Optional[Item]:
        return self._items.get(item_id)

    def item_name(self, item_id: ItemId) -> str:
        """Display name for an item id, falling back to the id itself"""
        item = self._items.get(item_id)
        return item.display_name if item else display_name(str(item_id))

    def producible_items(self) -> List[ItemId]:
        return list(self._recipes.keys())

    def __len__(self) -> int:
        return sum(len(recipes) for recipes in self._recipes.values())


def item_name(catalog: RecipeCatalog, item_id: ItemId) -> str:
    """Display name for ``item_id`` from any catalog"""
    item = catalog.get_item(item_id)
    return item.display_name if item else display_name(str(item_id))
