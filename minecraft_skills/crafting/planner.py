"""
Crafting planner - caller-facing entry point for plan resolution
"""
from typing import Callable, List, Mapping, Optional, Union

from ..logging_config import get_logger
from .catalog import RecipeCatalog, item_name
from .models import Failure, InventorySnapshot, ItemId, NoRecipe, ResolutionResult, StationUnavailable
from .resolver import DEFAULT_MAX_DEPTH, RecipeResolver

logger = get_logger(__name__)

InventorySource = Callable[[], Mapping[ItemId, int]]
StationFlag = Union[bool, Callable[[], bool]]


class CraftingPlanner:
    """Resolves crafts against a private copy of the live inventory

    Args:
        catalog: Recipe catalog for the current game version
        inventory_counts: Read-only query returning the live item counts
        station_available: Flag, or callable returning it, telling whether a
            crafting station can be used
    """

    def __init__(
        self,
        catalog: RecipeCatalog,
        inventory_counts: InventorySource,
        station_available: StationFlag = False,
        max_depth: int = DEFAULT_MAX_DEPTH,
        max_alternatives: int = 8,
    ):
        self.catalog = catalog
        self.inventory_counts = inventory_counts
        self._station_available = station_available
        self.resolver = RecipeResolver(catalog, max_depth=max_depth, max_alternatives=max_alternatives)

    @property
    def station_available(self) -> bool:
        if callable(self._station_available):
            return bool(self._station_available())
        return bool(self._station_available)

    def snapshot(self) -> InventorySnapshot:
        """Fresh simulation copy of the live inventory"""
        return InventorySnapshot(self.inventory_counts())

    def resolve(self, item_id: ItemId, count: int = 1) -> ResolutionResult:
        """Plan crafting ``count`` of ``item_id``. The live inventory is never touched."""
        if count < 1:
            return Failure("you can't craft nothing!")

        station = self.station_available
        result = self.resolver.resolve(self.snapshot(), item_id, count, 0, station)
        logger.info(
            "Resolved craft",
            item=item_name(self.catalog, item_id),
            count=count,
            station_available=station,
            ok=result.ok,
            steps=len(result.plan) if result.ok else 0,
        )
        return result

    def station_precheck(self, item_id: ItemId, has_station_item: bool = False) -> Optional[Failure]:
        """Explain up front why an item cannot be crafted at the current location

        Returns:
            A Failure when the item has no recipe at all, or only has recipes
            that need a station while none is nearby. None otherwise.
        """
        name = item_name(self.catalog, item_id)
        if not self.catalog.recipes_for(item_id, True):
            return NoRecipe(f"you couldn't figure out a recipe for {name}.", item_id=item_id)

        if self.station_available or self.catalog.recipes_for(item_id, False):
            return None

        if has_station_item:
            return StationUnavailable(
                f"you need to place down a crafting table to craft {name}. You have one in your inventory.",
                item_id=item_id,
            )
        return StationUnavailable("you need a crafting table.", item_id=item_id)

    def craftable_items(self, candidates: List[ItemId]) -> List[ItemId]:
        """Items among ``candidates`` with a recipe satisfiable directly from the inventory"""
        snapshot = self.snapshot()
        station = self.station_available
        craftable = []
        for candidate in candidates:
            for recipe in self.catalog.recipes_for(candidate, station):
                if all(snapshot[ingredient_id] >= needed for ingredient_id, needed in recipe.input_totals().items()):
                    craftable.append(candidate)
                    break
        return craftable

