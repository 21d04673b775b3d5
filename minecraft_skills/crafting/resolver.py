"""
Recipe Resolver - plans the crafts needed to produce an item

The resolver simulates crafting against an InventorySnapshot. When the
cheapest recipe for an item is short of ingredients, it recursively plans the
missing ingredients and re-evaluates with the extra simulated material, until
a recipe is fully satisfiable or the retry budget runs out.

Every speculative sub-resolution runs on a cloned snapshot. Only the branch
that resolves all of a recipe's missing ingredients is committed, so abandoned
branches never leak consumed or produced items into the caller's snapshot.
"""
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from ..logging_config import get_logger
from .catalog import RecipeCatalog, item_name
from .diagnostics import MAX_ALTERNATIVES, describe_shortfall
from .models import (
    CraftPlan,
    DepthExceeded,
    Failure,
    InsufficientMaterials,
    InventorySnapshot,
    ItemId,
    NoRecipe,
    PlanStep,
    Recipe,
    ResolutionResult,
    Success,
)

logger = get_logger(__name__)

DEFAULT_MAX_DEPTH = 5


@dataclass
class RecipeEvaluation:
    """How far a recipe is from being craftable with the current snapshot"""

    recipe: Recipe
    crafts_required: int
    required: Dict[ItemId, int] = field(default_factory=OrderedDict)
    missing: Dict[ItemId, int] = field(default_factory=OrderedDict)

    @property
    def total_missing(self) -> int:
        return sum(self.missing.values())


@dataclass
class _Attempt:
    """Outcome of trying to resolve the missing ingredients of the tied recipes"""

    plan: Optional[CraftPlan] = None
    snapshot: Optional[InventorySnapshot] = None
    failures: List[Failure] = field(default_factory=list)

    @property
    def resolved(self) -> bool:
        return self.plan is not None

    @property
    def depth_blocked(self) -> bool:
        return bool(self.failures) and all(isinstance(failure, DepthExceeded) for failure in self.failures)


class RecipeResolver:
    """Resolves multi-level ingredient dependencies into an ordered CraftPlan"""

    def __init__(
        self,
        catalog: RecipeCatalog,
        max_depth: int = DEFAULT_MAX_DEPTH,
        max_alternatives: int = MAX_ALTERNATIVES,
    ):
        self.catalog = catalog
        self.max_depth = max_depth
        self.max_alternatives = max_alternatives

    def resolve(
        self,
        snapshot: InventorySnapshot,
        item_id: ItemId,
        count: int,
        depth: int = 0,
        station_available: bool = False,
    ) -> ResolutionResult:
        """Plan the crafts producing at least ``count`` of ``item_id``.

        Args:
            snapshot: Simulated inventory. Updated in place only on success.
            item_id: Item to produce
            count: Number of items wanted (>= 1)
            depth: Nesting level of this call, 0 for the requested item
            station_available: Whether recipes needing a crafting table may be used

        Returns:
            Success with the plan, or a Failure describing what is missing
        """
        if count < 1:
            return Failure("you can't craft nothing!")

        if depth > self.max_depth:
            logger.debug("Craft depth exceeded", item=item_id, depth=depth, max_depth=self.max_depth)
            return DepthExceeded(item_id=item_id, depth=depth)

        name = item_name(self.catalog, item_id)
        recipes = self.catalog.recipes_for(item_id, station_available)
        if not recipes:
            return NoRecipe(f"no known recipe for {name}", item_id=item_id)

        logger.debug("Resolving craft", item=name, count=count, depth=depth, candidates=len(recipes))

        working = snapshot.copy()
        plan = CraftPlan()
        retries_left: Optional[int] = None
        attempt = _Attempt()

        while True:
            evaluations = [self._evaluate(recipe, count, working) for recipe in recipes]
            minimum = min(evaluation.total_missing for evaluation in evaluations)
            tied = [evaluation for evaluation in evaluations if evaluation.total_missing == minimum]

            if retries_left is None:
                retries_left = len(tied[0].missing)

            if minimum == 0 or retries_left <= 0:
                break

            attempt = self._resolve_missing(working, tied, depth, station_available)
            if not attempt.resolved:
                break

            plan = plan + attempt.plan
            working.replace_with(attempt.snapshot)
            retries_left -= 1
            # Earlier depth failures no longer explain the shortfall
            attempt = _Attempt()

        if minimum > 0:
            if attempt.depth_blocked:
                logger.debug("Every ingredient branch hit the depth cap", item=name, depth=depth)
                return DepthExceeded(item_id=item_id, depth=depth)
            alternatives = tuple(self._named(evaluation.missing) for evaluation in tied)
            message = describe_shortfall(list(alternatives), limit=self.max_alternatives)
            logger.debug("Cannot craft", item=name, count=count, depth=depth, reason=message)
            return InsufficientMaterials(message, alternatives=alternatives)

        winner = tied[0]
        for ingredient_id, required in winner.required.items():
            working.remove(ingredient_id, required)
        working.add(item_id, winner.recipe.result.count * winner.crafts_required)
        snapshot.replace_with(working)

        step = PlanStep(winner.recipe, winner.crafts_required)
        logger.debug("Planned craft", item=name, recipe=winner.recipe.id, times=step.multiplicity, depth=depth)
        return Success(plan.append(step))

    def _evaluate(self, recipe: Recipe, count: int, snapshot: InventorySnapshot) -> RecipeEvaluation:
        crafts_required = recipe.crafts_required(count)
        evaluation = RecipeEvaluation(recipe=recipe, crafts_required=crafts_required)

        for ingredient_id, per_craft in recipe.input_totals().items():
            evaluation.required[ingredient_id] = per_craft * crafts_required

        for ingredient_id, needed in evaluation.required.items():
            missing = max(0, needed - snapshot[ingredient_id])
            if missing:
                evaluation.missing[ingredient_id] = missing

        return evaluation

    def _resolve_missing(
        self,
        snapshot: InventorySnapshot,
        tied: List[RecipeEvaluation],
        depth: int,
        station_available: bool,
    ) -> _Attempt:
        """Try each tied recipe in catalog order; the first whose missing set fully resolves wins"""
        attempt = _Attempt()

        for evaluation in tied:
            trial = snapshot.copy()
            sub_plan, failure = self._resolve_all(trial, evaluation.missing, depth, station_available)
            if failure is None:
                attempt.plan = sub_plan
                attempt.snapshot = trial
                return attempt
            attempt.failures.append(failure)

        return attempt

    def _resolve_all(
        self,
        trial: InventorySnapshot,
        missing: Dict[ItemId, int],
        depth: int,
        station_available: bool,
    ) -> Tuple[CraftPlan, Optional[Failure]]:
        sub_plan = CraftPlan()
        for ingredient_id, missing_count in missing.items():
            result = self.resolve(trial, ingredient_id, missing_count, depth + 1, station_available)
            if not result.ok:
                return sub_plan, result
            sub_plan = sub_plan + result.plan
        return sub_plan, None

    def _named(self, missing: Dict[ItemId, int]) -> Dict[str, int]:
        return OrderedDict((item_name(self.catalog, item_id), count) for item_id, count in missing.items())
