"""
Crafting data model - items, recipes, inventory snapshots, plans and results
"""
from collections.abc import MutableMapping
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Tuple, Union

ItemId = Union[int, str]


def display_name(name: str) -> str:
    """Human readable form of an item name ("oak_planks" -> "oak planks")"""
    return str(name).replace("_", " ")


@dataclass(frozen=True)
class Item:
    """Read-only item reference data"""

    id: ItemId
    name: str
    stack_size: int = 64

    @property
    def display_name(self) -> str:
        return display_name(self.name)


@dataclass(frozen=True)
class ItemStack:
    """An item id with a count, used for recipe results"""

    item_id: ItemId
    count: int = 1


@dataclass(frozen=True)
class Ingredient:
    """A signed recipe delta entry. Negative counts are consumed inputs."""

    item_id: ItemId
    count: int

    @property
    def is_input(self) -> bool:
        return self.count < 0


@dataclass(frozen=True)
class Recipe:
    """A normalized crafting recipe

    Shaped and shapeless recipes are both flattened into an ordered ingredient
    list when the catalog is built, and ``requires_station`` is computed once
    at that point.
    """

    id: str
    result: ItemStack
    ingredients: Tuple[Ingredient, ...] = ()
    requires_station: bool = False

    @property
    def inputs(self) -> List[Ingredient]:
        return [ingredient for ingredient in self.ingredients if ingredient.is_input]

    def crafts_required(self, count: int) -> int:
        """Number of times this recipe must run to produce at least ``count`` items"""
        return -(-count // self.result.count)

    def input_totals(self) -> Dict[ItemId, int]:
        """Items consumed by one craft, repeated grid entries summed"""
        totals: Dict[ItemId, int] = {}
        for ingredient in self.inputs:
            totals[ingredient.item_id] = totals.get(ingredient.item_id, 0) - ingredient.count
        return totals

    def consumes(self, item_id: ItemId) -> bool:
        return any(ingredient.item_id == item_id for ingredient in self.inputs)


class InventorySnapshot(MutableMapping):
    """Simulated, call-local item counts used only for planning

    Counts never go below zero. Removing more than is held leaves the count
    untouched.
    """

    def __init__(self, counts: Optional[Mapping[ItemId, int]] = None):
        self._counts: Dict[ItemId, int] = {}
        for item_id, count in (counts or {}).items():
            if count < 0:
                raise ValueError(f"Negative count {count} for item {item_id!r}")
            if count:
                self._counts[item_id] = int(count)

    @classmethod
    def from_items(cls, items: Iterable[Mapping], key: str = "name") -> "InventorySnapshot":
        """Build a snapshot from inventory item dicts ({"name": ..., "count": ...})"""
        counts: Dict[ItemId, int] = {}
        for item in items:
            item_id = item.get(key)
            count = item.get("count", 0)
            if item_id is None or not count:
                continue
            counts[item_id] = counts.get(item_id, 0) + count
        return cls(counts)

    def __getitem__(self, item_id: ItemId) -> int:
        return self._counts.get(item_id, 0)

    def __setitem__(self, item_id: ItemId, count: int) -> None:
        if count < 0:
            raise ValueError(f"Negative count {count} for item {item_id!r}")
        if count:
            self._counts[item_id] = count
        else:
            self._counts.pop(item_id, None)

    def __delitem__(self, item_id: ItemId) -> None:
        del self._counts[item_id]

    def __iter__(self) -> Iterator[ItemId]:
        return iter(self._counts)

    def __len__(self) -> int:
        return len(self._counts)

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._counts

    def __repr__(self) -> str:
        return f"InventorySnapshot({self._counts!r})"

    def copy(self) -> "InventorySnapshot":
        return InventorySnapshot(self._counts)

    def add(self, item_id: ItemId, count: int) -> None:
        self[item_id] = self[item_id] + count

    def remove(self, item_id: ItemId, count: int) -> None:
        held = self[item_id]
        if held >= count:
            self[item_id] = held - count

    def replace_with(self, other: "InventorySnapshot") -> None:
        """Take over the counts of another snapshot (commit of a speculative branch)"""
        self._counts = dict(other._counts)

    def as_dict(self) -> Dict[ItemId, int]:
        return dict(self._counts)


@dataclass(frozen=True)
class PlanStep:
    """A recipe and the number of times it has to be invoked"""

    recipe: Recipe
    multiplicity: int

    @property
    def produced(self) -> int:
        return self.recipe.result.count * self.multiplicity


@dataclass(frozen=True)
class CraftPlan:
    """Ordered craft steps, leaf ingredients first and the target item last"""

    steps: Tuple[PlanStep, ...] = ()

    def __len__(self) -> int:
        return len(self.steps)

    def __iter__(self) -> Iterator[PlanStep]:
        return iter(self.steps)

    def __getitem__(self, index: int) -> PlanStep:
        return self.steps[index]

    def __add__(self, other: "CraftPlan") -> "CraftPlan":
        return CraftPlan(self.steps + other.steps)

    def append(self, step: PlanStep) -> "CraftPlan":
        return CraftPlan(self.steps + (step,))

    @property
    def target(self) -> Optional[ItemId]:
        return self.steps[-1].recipe.result.item_id if self.steps else None


@dataclass(frozen=True)
class Success:
    """Resolution succeeded with a plan"""

    plan: CraftPlan
    ok: bool = field(default=True, init=False)

    @property
    def narration(self) -> str:
        return f"found a plan with {len(self.plan)} crafting step(s)"


@dataclass(frozen=True)
class Failure:
    """Resolution failed. ``message`` is the user-facing diagnostic."""

    message: str
    ok: bool = field(default=False, init=False)

    @property
    def narration(self) -> str:
        return self.message


@dataclass(frozen=True)
class NoRecipe(Failure):
    """The catalog knows no usable recipe for the item"""

    item_id: Optional[ItemId] = None


@dataclass(frozen=True)
class InsufficientMaterials(Failure):
    """Every recipe is short of ingredients that could not be crafted either

    ``alternatives`` holds the missing-item map (display name -> count) of each
    equally short recipe, in catalog order.
    """

    alternatives: Tuple[Dict[str, int], ...] = ()


@dataclass(frozen=True)
class StationUnavailable(Failure):
    """The item can only be crafted at a station and none is nearby"""

    item_id: Optional[ItemId] = None


@dataclass(frozen=True)
class DepthExceeded(Failure):
    """The ingredient chain nested deeper than the resolver allows

    Keeps the empty ``message`` of a silent depth failure, but is a distinct
    type so callers never surface an empty string to a user.
    """

    message: str = ""
    item_id: Optional[ItemId] = None
    depth: int = 0

    @property
    def narration(self) -> str:
        return "it takes too many intermediate crafting steps"


ResolutionResult = Union[Success, Failure]
