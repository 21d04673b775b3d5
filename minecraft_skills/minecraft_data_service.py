"""
Minecraft Data Service - recipe catalog and item lookups backed by python-minecraft-data
"""
import difflib
import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

import minecraft_data

from .crafting.catalog import InMemoryRecipeCatalog
from .crafting.models import (
    Failure,
    Ingredient,
    InsufficientMaterials,
    Item,
    ItemStack,
    NoRecipe,
    Recipe,
    display_name,
)

logger = logging.getLogger(__name__)

INVENTORY_GRID_SLOTS = 4

# Wool and planks a bed takes
BED_WOOL = 3
BED_PLANKS = 3


def _ingredient_id(entry: Any) -> Optional[int]:
    """Item id of a recipe grid entry (plain id, {"id": ...} dict or empty slot)"""
    if entry is None:
        return None
    if isinstance(entry, dict):
        entry = entry.get("id")
        if entry is None:
            return None
    if isinstance(entry, list):
        # Alternative ingredients, the first one is used
        return _ingredient_id(entry[0]) if entry else None
    if isinstance(entry, (int, float)) and entry >= 0:
        return int(entry)
    return None


def _cells(shape: Iterable) -> List[Optional[int]]:
    cells = []
    for row in shape or []:
        if isinstance(row, list):
            cells.extend(_ingredient_id(entry) for entry in row)
        else:
            cells.append(_ingredient_id(row))
    return cells


def requires_crafting_table(raw_recipe: Dict[str, Any]) -> bool:
    """Whether a raw recipe does not fit the 2x2 inventory crafting grid"""
    space_left = INVENTORY_GRID_SLOTS

    shape = raw_recipe.get("inShape")
    if shape:
        if len(shape) > 2:
            return True
        for row in shape:
            if isinstance(row, list) and len(row) > 2:
                return True
        space_left -= sum(1 for cell in _cells(shape) if cell is not None)

    ingredients = raw_recipe.get("ingredients")
    if ingredients:
        space_left -= len(ingredients)

    return space_left < 0


def normalize_recipe(raw_recipe: Dict[str, Any], recipe_id: str) -> Optional[Recipe]:
    """Flatten a shaped or shapeless minecraft-data recipe into a Recipe

    Returns:
        The normalized recipe, or None when the result is missing
    """
    result = raw_recipe.get("result") or {}
    result_id = _ingredient_id(result)
    if result_id is None:
        return None

    consumed: Dict[int, int] = {}
    if raw_recipe.get("inShape"):
        cells = _cells(raw_recipe["inShape"])
    else:
        cells = [_ingredient_id(entry) for entry in raw_recipe.get("ingredients") or []]
    for cell in cells:
        if cell is not None:
            consumed[cell] = consumed.get(cell, 0) + 1

    left_over: Dict[int, int] = {}
    for cell in _cells(raw_recipe.get("outShape")):
        if cell is not None:
            left_over[cell] = left_over.get(cell, 0) + 1

    ingredients = [Ingredient(item_id, -count) for item_id, count in consumed.items()]
    ingredients += [Ingredient(item_id, count) for item_id, count in left_over.items()]

    return Recipe(
        id=recipe_id,
        result=ItemStack(result_id, int(result.get("count", 1))),
        ingredients=tuple(ingredients),
        requires_station=requires_crafting_table(raw_recipe),
    )


class MinecraftDataService:
    """Service for Minecraft item and recipe lookups using python-minecraft-data"""

    _instance = None
    _version = None

    def __new__(cls, mc_version: str = "1.21.1"):
        if cls._instance is None or cls._version != mc_version:
            cls._instance = super().__new__(cls)
            cls._version = mc_version
        return cls._instance

    def __init__(self, mc_version: str = "1.21.1"):
        """Initialize the MinecraftDataService with specified Minecraft version

        Args:
            mc_version: Minecraft version string (e.g., "1.21.1")
        """
        # Only initialize if not already initialized or version changed
        if not hasattr(self, "mc_data") or self.version != mc_version:
            try:
                self.mc_data = minecraft_data(mc_version)
                self.version = mc_version
                self._catalog: Optional[InMemoryRecipeCatalog] = None
                logger.info(f"Initialized MinecraftDataService for version {mc_version}")
            except Exception as e:
                logger.error(f"Failed to initialize minecraft-data for version {mc_version}: {e}")
                raise

    def get_block_by_name(self, name: str) -> Optional[Dict[str, Any]]:
        """Get block data by name

        Args:
            name: Block name (e.g., "stone", "crafting_table")

        Returns:
            Block data dict or None if not found
        """
        return self.mc_data.blocks_name.get(name)

    def get_item_by_name(self, name: str) -> Optional[Dict[str, Any]]:
        """Get item data by name

        Args:
            name: Item name (e.g., "diamond", "stick")

        Returns:
            Item data dict or None if not found
        """
        return self.mc_data.items_name.get(name)

    def get_item_by_id(self, item_id: int) -> Optional[Dict[str, Any]]:
        """Get item data by ID

        Args:
            item_id: Item numeric ID

        Returns:
            Item data dict or None if not found
        """
        if 0 <= item_id < len(self.mc_data.items_list):
            return self.mc_data.items_list[item_id]
        return None

    def get_all_items(self) -> List[Dict[str, Any]]:
        return list(self.mc_data.items_name.values())

    def get_recipes_for_item_id(self, item_id: int) -> List[Dict[str, Any]]:
        """Get raw minecraft-data recipes producing the specified item

        Args:
            item_id: Item ID to find recipes for

        Returns:
            List of recipe dicts
        """
        # Recipes are keyed by result item ID as string
        return self.mc_data.recipes.get(str(item_id), [])

    def build_catalog(self) -> InMemoryRecipeCatalog:
        """Normalized recipe catalog for this game version, built once and cached"""
        if self._catalog is not None:
            return self._catalog

        catalog = InMemoryRecipeCatalog()
        for item in self.get_all_items():
            catalog.add_item(Item(id=item["id"], name=item["name"], stack_size=item.get("stackSize", 64)))

        skipped = 0
        for item_id_str, raw_recipes in self.mc_data.recipes.items():
            for index, raw_recipe in enumerate(raw_recipes):
                recipe = normalize_recipe(raw_recipe, f"{item_id_str}:{index}")
                if recipe is None:
                    skipped += 1
                    continue
                catalog.add_recipe(recipe)

        logger.info(f"Built recipe catalog with {len(catalog)} recipes for {self.version} ({skipped} skipped)")
        self._catalog = catalog
        return catalog

    def needs_crafting_table(self, item_name: str) -> bool:
        """Check if every recipe of an item requires a crafting table

        Args:
            item_name: Name of the item to craft

        Returns:
            True if crafting table required, False if can craft in inventory
        """
        item = self.get_item_by_name(item_name)
        if not item:
            return True
        catalog = self.build_catalog()
        return not catalog.recipes_for(item["id"], False)

    def counts_by_id(self, counts_by_name: Mapping[str, int]) -> Dict[int, int]:
        """Convert an item-name keyed inventory to item ids, dropping unknown names"""
        counts: Dict[int, int] = {}
        for name, count in counts_by_name.items():
            item = self.get_item_by_name(name)
            if item is None:
                logger.warning(f"Unknown inventory item '{name}' ignored for crafting")
                continue
            counts[item["id"]] = counts.get(item["id"], 0) + count
        return counts

    def most_held(self, kind: str, inventory_by_name: Mapping[str, int]) -> Tuple[Optional[str], int]:
        """Item whose name contains ``kind`` (e.g. "wool") held in the largest stack

        Returns:
            (item name, count), or (None, 0) when none is held
        """
        best, most = None, 0
        for item in self.mc_data.items_list:
            name = item["name"]
            if kind in name and inventory_by_name.get(name, 0) > most:
                best, most = name, inventory_by_name[name]
        return best, most

    def _planks_for_held_log(self, inventory_by_name: Mapping[str, int]) -> Optional[str]:
        best, most = None, 0
        for item in self.mc_data.items_list:
            name = item["name"]
            if "log" not in name or inventory_by_name.get(name, 0) <= most:
                continue
            planks = name.replace("stripped_", "").replace("_log", "_planks")
            if self.get_item_by_name(planks):
                best, most = planks, inventory_by_name[name]
        return best

    def select_craft_target(self, requested: str, inventory_by_name: Mapping[str, int]) -> Union[str, Failure]:
        """Pick the item to craft for a request, using the inventory for generic names

        A plain "bed" becomes the bed matching the wool held most. "Wood planks"
        become the planks of the log held most. Any other name goes through
        normalize_item_name.

        Args:
            requested: Raw item name from user
            inventory_by_name: Current inventory keyed by item name

        Returns:
            The item name to craft, or a Failure explaining why none can be chosen
        """
        normalized = requested.lower().strip().replace(" ", "_")

        if normalized.rstrip("s").split("_")[-1] == "bed" and self._exact_item_name(normalized) is None:
            wool, wool_count = self.most_held("wool", inventory_by_name)
            _, planks_count = self.most_held("planks", inventory_by_name)
            if wool_count < BED_WOOL and planks_count < BED_PLANKS:
                return InsufficientMaterials(
                    f"you need {BED_WOOL - wool_count} more wool and {BED_PLANKS - planks_count} more planks "
                    "to craft a bed."
                )
            if wool_count < BED_WOOL:
                return InsufficientMaterials(f"you need {BED_WOOL - wool_count} more wool to craft a bed.")
            if planks_count < BED_PLANKS:
                return InsufficientMaterials(f"you need {BED_PLANKS - planks_count} more planks to craft a bed.")
            bed = wool.replace("_wool", "_bed")
            logger.info(f"Crafting '{requested}' as {bed}")
            return bed

        if self._exact_item_name(normalized) is None and "wood" in normalized and "plank" in normalized:
            planks = self._planks_for_held_log(inventory_by_name)
            if planks is None:
                return InsufficientMaterials(
                    "you don't have any sort of wood in your inventory to make planks with. You should mine some."
                )
            logger.info(f"Crafting '{requested}' as {planks}")
            return planks

        name = self.normalize_item_name(requested)
        if name is None:
            return NoRecipe(f"you couldn't figure out what {display_name(normalized)} is.")
        return name

    def _exact_item_name(self, normalized: str) -> Optional[str]:
        if self.get_item_by_name(normalized):
            return normalized
        if normalized.endswith("s") and len(normalized) > 2 and self.get_item_by_name(normalized[:-1]):
            return normalized[:-1]
        return None

    def normalize_item_name(self, item_name: str) -> Optional[str]:
        """Map a user supplied name onto a minecraft-data item name

        Tries an exact match, then the singular form, then the closest known
        item name.

        Args:
            item_name: Raw item name from user

        Returns:
            Normalized item name, or None if nothing is close enough
        """
        normalized = item_name.lower().strip().replace(" ", "_")

        exact = self._exact_item_name(normalized)
        if exact:
            return exact

        matches = difflib.get_close_matches(normalized, list(self.mc_data.items_name.keys()), n=1, cutoff=0.75)
        if matches:
            logger.info(f"Fuzzy matched '{item_name}' to '{matches[0]}'")
            return matches[0]
        return None
