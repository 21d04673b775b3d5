from .catalog import InMemoryRecipeCatalog, RecipeCatalog
from .executor import Cancelled, Completed, ExecutionFailure, PlanExecutor
from .models import (
    CraftPlan,
    DepthExceeded,
    Failure,
    Ingredient,
    InsufficientMaterials,
    InventorySnapshot,
    Item,
    ItemStack,
    NoRecipe,
    PlanStep,
    Recipe,
    StationUnavailable,
    Success,
)
from .planner import CraftingPlanner
from .resolver import RecipeResolver

__all__ = [
    "Cancelled",
    "Completed",
    "CraftPlan",
    "CraftingPlanner",
    "DepthExceeded",
    "ExecutionFailure",
    "Failure",
    "InMemoryRecipeCatalog",
    "Ingredient",
    "InsufficientMaterials",
    "InventorySnapshot",
    "Item",
    "ItemStack",
    "NoRecipe",
    "PlanExecutor",
    "PlanStep",
    "Recipe",
    "RecipeCatalog",
    "RecipeResolver",
    "StationUnavailable",
    "Success",
]
