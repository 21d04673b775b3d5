"""
Executor primitives backed by the BotController
"""
import asyncio
from typing import Any, Dict, Optional

from ..logging_config import get_logger
from ..minecraft_bot_controller import BotController
from .executor import (
    CraftingPrimitiveError,
    NavigationOutcome,
    NavigationResult,
    Position,
    Station,
)
from .models import ItemId, Recipe

logger = get_logger(__name__)

CRAFTING_TABLE = "crafting_table"


def _raise_for_status(result: Dict[str, Any], action: str) -> Dict[str, Any]:
    if result.get("status") == "error":
        raise CraftingPrimitiveError(f"{action} failed: {result.get('error', 'unknown error')}")
    return result


class BotCraftingPrimitives:
    """Turns the controller's status dicts into the executor's primitive contract"""

    def __init__(self, controller: BotController, pathfinder_timeout_ms: Optional[int] = None):
        self.controller = controller
        self.pathfinder_timeout_ms = pathfinder_timeout_ms

    async def craft(self, recipe: Recipe, times: int, station: Optional[Station]) -> None:
        table = None
        if station is not None:
            x, y, z = station.position
            table = {"x": x, "y": y, "z": z}
        result = await self.controller.craft_item(recipe.result.item_id, recipe.id, times, table)
        _raise_for_status(result, "craft")

    async def equip(self, item_id: ItemId) -> None:
        result = await self.controller.equip_item(item_id, "hand")
        _raise_for_status(result, "equip")

    async def navigate_near(
        self, position: Position, range: float, cancel_signal: Optional[asyncio.Event] = None
    ) -> NavigationResult:
        if cancel_signal is not None and cancel_signal.is_set():
            return NavigationResult(NavigationOutcome.CANCELLED)

        x, y, z = position
        result = await self.controller.move_to(x, y, z, timeout=self.pathfinder_timeout_ms, range=range)
        if result.get("status") == "success":
            return NavigationResult(NavigationOutcome.REACHED)
        return NavigationResult(NavigationOutcome.ERROR, error=result.get("error"))

    async def position(self) -> Position:
        pos = _raise_for_status(await self.controller.get_position(), "position query")
        return (pos["x"], pos["y"], pos["z"])


class BotStationLocator:
    """Finds the nearest crafting table around the bot"""

    def __init__(self, controller: BotController, max_distance: int = 32, block_name: str = CRAFTING_TABLE):
        self.controller = controller
        self.max_distance = max_distance
        self.block_name = block_name

    async def nearest_station(self) -> Optional[Station]:
        blocks = await self.controller.find_blocks(self.block_name, max_distance=self.max_distance, count=1)
        for block in blocks:
            if all(axis in block for axis in ("x", "y", "z")):
                return Station(position=(block["x"], block["y"], block["z"]), block=self.block_name)
        logger.debug("No crafting table nearby", max_distance=self.max_distance)
        return None
