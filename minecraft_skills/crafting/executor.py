"""
Plan Executor - performs a resolved CraftPlan against the live character
"""
import asyncio
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional, Protocol, Tuple

from ..logging_config import get_logger
from .models import CraftPlan, ItemId, PlanStep, Recipe

logger = get_logger(__name__)

Position = Tuple[float, float, float]


class CraftingPrimitiveError(Exception):
    """A craft, equip or navigation primitive reported an error"""


class NavigationOutcome(str, Enum):
    REACHED = "reached"
    CANCELLED = "cancelled"
    ERROR = "error"


@dataclass(frozen=True)
class NavigationResult:
    outcome: NavigationOutcome
    error: Optional[str] = None


@dataclass(frozen=True)
class Station:
    """A placed crafting station the bot can walk to"""

    position: Position
    block: Any = None


class CraftingPrimitives(Protocol):
    """Character actions the executor relies on"""

    async def craft(self, recipe: Recipe, times: int, station: Optional[Station]) -> None:
        ...

    async def equip(self, item_id: ItemId) -> None:
        ...

    async def navigate_near(
        self, position: Position, range: float, cancel_signal: Optional[asyncio.Event]
    ) -> NavigationResult:
        ...

    async def position(self) -> Position:
        ...


class StationLocator(Protocol):
    async def nearest_station(self) -> Optional[Station]:
        ...


@dataclass(frozen=True)
class Completed:
    plan: CraftPlan
    ok: bool = field(default=True, init=False)

    @property
    def narration(self) -> str:
        return f"finished {len(self.plan)} crafting step(s)"


@dataclass(frozen=True)
class Cancelled:
    """Execution stopped on request. Steps already performed are not undone."""

    performed: CraftPlan
    ok: bool = field(default=False, init=False)

    @property
    def narration(self) -> str:
        return "You decided to do something else and stop crafting."


@dataclass(frozen=True)
class ExecutionFailure:
    reason: str
    performed: CraftPlan = CraftPlan()
    ok: bool = field(default=False, init=False)

    @property
    def narration(self) -> str:
        return self.reason


def _distance(a: Position, b: Position) -> float:
    return math.sqrt(sum((p - q) ** 2 for p, q in zip(a, b)))


class PlanExecutor:
    """Walks a CraftPlan step by step, travelling to a station when a recipe needs one

    Only one execution may run against a character at a time; callers
    serialize invocations per character. Cancellation is checked between
    steps, never in the middle of one.
    """

    def __init__(
        self,
        primitives: CraftingPrimitives,
        station_locator: StationLocator,
        station_reach: float = 3,
        adjacency: float = 5,
    ):
        self.primitives = primitives
        self.station_locator = station_locator
        self.station_reach = station_reach
        self.adjacency = adjacency

    async def execute(self, plan: CraftPlan, cancel_signal: Optional[asyncio.Event] = None):
        """Perform every step of ``plan`` in order.

        Returns:
            Completed, Cancelled (with the steps already performed) or
            ExecutionFailure (with the reason and the steps already performed)
        """
        performed: List[PlanStep] = []
        steps = list(plan)

        for index, step in enumerate(steps):
            if cancel_signal is not None and cancel_signal.is_set():
                logger.info("Crafting cancelled", performed=len(performed), remaining=len(steps) - index)
                return Cancelled(CraftPlan(tuple(performed)))

            try:
                station = None
                if step.recipe.requires_station:
                    station, outcome = await self._approach_station(cancel_signal)
                    if outcome is not None:
                        outcome_performed = CraftPlan(tuple(performed))
                        if outcome.outcome == NavigationOutcome.CANCELLED:
                            return Cancelled(outcome_performed)
                        return ExecutionFailure(
                            f"could not reach the crafting table: {outcome.error or 'unknown error'}",
                            outcome_performed,
                        )
                    if station is None:
                        return ExecutionFailure("you need a crafting table.", CraftPlan(tuple(performed)))

                await self._craft_step(step, station)

                next_step = steps[index + 1] if index + 1 < len(steps) else None
                produced = step.recipe.result.item_id
                if next_step is not None and next_step.recipe.consumes(produced):
                    await self.primitives.equip(produced)
            except Exception as e:
                logger.error("Crafting step failed", recipe=step.recipe.id, step=index, error=str(e))
                return ExecutionFailure(f"due to an error: {e}", CraftPlan(tuple(performed)))

            performed.append(step)

        logger.info("Crafting plan completed", steps=len(performed))
        return Completed(plan)

    async def _approach_station(
        self, cancel_signal: Optional[asyncio.Event]
    ) -> Tuple[Optional[Station], Optional[NavigationResult]]:
        station = await self.station_locator.nearest_station()
        if station is None:
            return None, None

        current = await self.primitives.position()
        distance = _distance(current, station.position)
        if distance <= self.adjacency:
            return station, None

        logger.info("Going to crafting table", position=station.position, distance=round(distance, 1))
        result = await self.primitives.navigate_near(station.position, self.station_reach, cancel_signal)
        if result.outcome == NavigationOutcome.REACHED:
            return station, None
        return station, result

    async def _craft_step(self, step: PlanStep, station: Optional[Station]) -> None:
        for n in range(step.multiplicity):
            logger.debug("Crafting", recipe=step.recipe.id, iteration=n + 1, of=step.multiplicity)
            await self.primitives.craft(step.recipe, 1, station)
