"""
Crafting Tools for Google ADK - Wraps the crafting skill as ADK tools
"""
import asyncio
from typing import Any, Dict, List, Optional

from google.adk.tools import ToolContext

from ..config import SkillsConfig, get_config
from ..crafting.bot_primitives import CRAFTING_TABLE, BotCraftingPrimitives, BotStationLocator
from ..crafting.catalog import InMemoryRecipeCatalog
from ..crafting.executor import Cancelled, Completed, PlanExecutor
from ..crafting.models import (
    CraftPlan,
    DepthExceeded,
    Failure,
    InsufficientMaterials,
    NoRecipe,
    StationUnavailable,
    display_name,
)
from ..crafting.planner import CraftingPlanner
from ..logging_config import get_logger
from ..minecraft_bot_controller import BotController
from ..minecraft_data_service import MinecraftDataService
from ..schemas import CraftableItemsResponse, CraftItemCommand, CraftItemResponse, CraftStepSummary, ErrorDetails
from ..state_schema import StateKeys, TaskStatus

logger = get_logger(__name__)

# Global references for tool functions
_bot_controller: Optional[BotController] = None
_mc_data_service: Optional[MinecraftDataService] = None
_config: Optional[SkillsConfig] = None
_cancel_signal: Optional[asyncio.Event] = None
_craft_lock: Optional[asyncio.Lock] = None


def _set_bot_controller(controller: BotController):
    """Set the global bot controller for tool functions"""
    global _bot_controller
    _bot_controller = controller


def _set_minecraft_data_service(mc_data: MinecraftDataService):
    """Set the global minecraft data service for tool functions"""
    global _mc_data_service
    _mc_data_service = mc_data


def _set_config(config: SkillsConfig):
    global _config
    _config = config


def _get_cancel_signal() -> asyncio.Event:
    global _cancel_signal
    if _cancel_signal is None:
        _cancel_signal = asyncio.Event()
    return _cancel_signal


def _get_craft_lock() -> asyncio.Lock:
    # One crafting run per bot at a time
    global _craft_lock
    if _craft_lock is None:
        _craft_lock = asyncio.Lock()
    return _craft_lock


def _error_type(failure: Failure) -> str:
    if isinstance(failure, DepthExceeded):
        return "depth_exceeded"
    if isinstance(failure, NoRecipe):
        return "no_recipe"
    if isinstance(failure, StationUnavailable):
        return "station_unavailable"
    if isinstance(failure, InsufficientMaterials):
        return "insufficient_materials"
    return "invalid_request"


def _step_summaries(plan: CraftPlan, catalog: InMemoryRecipeCatalog) -> List[CraftStepSummary]:
    return [
        CraftStepSummary(
            recipe_id=str(step.recipe.id),
            result=catalog.item_name(step.recipe.result.item_id),
            times=step.multiplicity,
            produced=step.produced,
            requires_crafting_table=step.recipe.requires_station,
        )
        for step in plan
    ]


def _store_result(tool_context: Optional[ToolContext], response: CraftItemResponse) -> Dict[str, Any]:
    result = response.model_dump(mode="json")
    if tool_context and hasattr(tool_context, "state"):
        if response.status == "success":
            task_status = TaskStatus.COMPLETED
        elif response.error_details and response.error_details.error_type == "cancelled":
            task_status = TaskStatus.CANCELLED
        else:
            task_status = TaskStatus.FAILED
        tool_context.state[StateKeys.CRAFT_RESULT] = {**result, "task_status": task_status}
    return result


def _failed(
    item: str,
    count: int,
    reason: str,
    error_type: str,
    tool_context: Optional[ToolContext],
    steps: Optional[List[CraftStepSummary]] = None,
    steps_performed: int = 0,
) -> Dict[str, Any]:
    message = f"You have failed to craft {count} {display_name(item)} because {reason}"
    logger.info("Crafting failed", item=item, count=count, error_type=error_type, reason=reason)
    response = CraftItemResponse(
        status="error",
        item_name=item,
        count_requested=count,
        message=message,
        steps=steps or [],
        steps_performed=steps_performed,
        error_details=ErrorDetails(error_type=error_type, message=reason),
    )
    return _store_result(tool_context, response)


async def craft_items(item: str, count: int = 1, tool_context: Optional[ToolContext] = None) -> Dict[str, Any]:
    """Craft an item, first crafting any intermediate ingredients it needs.

    Plans the whole chain of crafts from the current inventory, walks to a
    nearby crafting table when a recipe needs one, then performs the crafts.

    Args:
        item: Name of the item to craft (e.g. "stick", "wooden pickaxe")
        count: Number of items wanted

    Returns:
        Dictionary with the crafting result, the planned steps and a message
        describing what happened or what is missing
    """
    if not _bot_controller or not _mc_data_service:
        return {"status": "error", "error": "BotController not initialized"}

    command = CraftItemCommand(item=item, count=count)
    if not command.item:
        return await list_craftable_items(tool_context)
    if command.count < 1:
        return _failed(command.item, command.count, "you can't craft nothing!", "invalid_request", tool_context)

    lock = _get_craft_lock()
    if lock.locked():
        return _failed(
            command.item, command.count, "you are already crafting something.", "invalid_request", tool_context
        )

    async with lock:
        return await _craft(command, tool_context)


async def _craft(command: CraftItemCommand, tool_context: Optional[ToolContext]) -> Dict[str, Any]:
    config = _config or get_config()
    cancel_signal = _get_cancel_signal()
    cancel_signal.clear()

    try:
        inventory_by_name = await _bot_controller.inventory_counts()
    except Exception as e:
        logger.error("Reading the inventory failed", item=command.item, error=str(e))
        return _failed(command.item, command.count, f"due to an error: {e}", "execution_failure", tool_context)

    if tool_context and hasattr(tool_context, "state"):
        tool_context.state[StateKeys.MINECRAFT_INVENTORY] = inventory_by_name

    target = _mc_data_service.select_craft_target(command.item, inventory_by_name)
    if isinstance(target, Failure):
        return _failed(command.item, command.count, target.narration, _error_type(target), tool_context)
    name = target
    item_id = _mc_data_service.get_item_by_name(name)["id"]
    catalog = _mc_data_service.build_catalog()

    if tool_context and hasattr(tool_context, "state"):
        tool_context.state[StateKeys.CRAFT_TASK] = {"item": name, "count": command.count}

    try:
        inventory = _mc_data_service.counts_by_id(inventory_by_name)
        locator = BotStationLocator(_bot_controller, max_distance=config.station_search_range)
        station = await locator.nearest_station()

        planner = CraftingPlanner(
            catalog,
            lambda: inventory,
            station_available=station is not None,
            max_depth=config.max_craft_depth,
            max_alternatives=config.max_displayed_alternatives,
        )

        table = _mc_data_service.get_item_by_name(CRAFTING_TABLE)
        has_table_item = bool(table) and inventory.get(table["id"], 0) > 0
        precheck = planner.station_precheck(item_id, has_station_item=has_table_item)
        if precheck is not None:
            return _failed(name, command.count, precheck.narration, _error_type(precheck), tool_context)

        resolution = planner.resolve(item_id, command.count)
        if not resolution.ok:
            return _failed(name, command.count, resolution.narration, _error_type(resolution), tool_context)

        steps = _step_summaries(resolution.plan, catalog)
        if tool_context and hasattr(tool_context, "state"):
            tool_context.state[StateKeys.CRAFT_PLAN] = [step.model_dump() for step in steps]

        executor = PlanExecutor(
            BotCraftingPrimitives(_bot_controller, pathfinder_timeout_ms=config.pathfinder_timeout_ms),
            locator,
            station_reach=config.station_reach,
            adjacency=config.station_adjacency,
        )
        outcome = await executor.execute(resolution.plan, cancel_signal)
    except Exception as e:
        logger.error("Crafting failed unexpectedly", item=name, count=command.count, error=str(e))
        return _failed(name, command.count, f"due to an error: {e}", "execution_failure", tool_context)

    if isinstance(outcome, Completed):
        message = f"You have successfully finished crafting {command.count} {display_name(name)}."
        logger.info("Crafting completed", item=name, count=command.count, steps=len(outcome.plan))
        response = CraftItemResponse(
            status="success",
            item_name=name,
            count_requested=command.count,
            message=message,
            steps=steps,
            steps_performed=len(outcome.plan),
        )
        return _store_result(tool_context, response)

    if isinstance(outcome, Cancelled):
        error_type = "cancelled"
    else:
        error_type = "execution_failure"
    return _failed(
        name,
        command.count,
        outcome.narration,
        error_type,
        tool_context,
        steps=steps,
        steps_performed=len(outcome.performed),
    )


async def cancel_crafting(tool_context: Optional[ToolContext] = None) -> Dict[str, Any]:
    """Stop the crafting currently in progress after the current step.

    Returns:
        Dictionary telling whether a crafting run was interrupted
    """
    crafting = _craft_lock is not None and _craft_lock.locked()
    if crafting:
        _get_cancel_signal().set()
        logger.info("Crafting cancel requested")
    return {"status": "success", "cancelled": crafting}


async def list_craftable_items(tool_context: Optional[ToolContext] = None) -> Dict[str, Any]:
    """List the items that can be crafted right now from the inventory alone.

    Returns:
        Dictionary with the nearby crafting stations and the craftable item names
    """
    if not _bot_controller or not _mc_data_service:
        return {"status": "error", "error": "BotController not initialized"}

    config = _config or get_config()
    try:
        catalog = _mc_data_service.build_catalog()
        inventory = _mc_data_service.counts_by_id(await _bot_controller.inventory_counts())
        locator = BotStationLocator(_bot_controller, max_distance=config.station_search_range)
        station = await locator.nearest_station()

        planner = CraftingPlanner(catalog, lambda: inventory, station_available=station is not None)
        craftable = [catalog.item_name(item_id) for item_id in planner.craftable_items(catalog.producible_items())]
    except Exception as e:
        logger.error("Listing craftable items failed", error=str(e))
        return {"status": "error", "error": str(e)}

    response = CraftableItemsResponse(
        crafting_stations=[display_name(CRAFTING_TABLE)] if station is not None else [],
        craftable_items=craftable,
    )
    result = response.model_dump()
    if tool_context and hasattr(tool_context, "state"):
        tool_context.state[StateKeys.CRAFTABLE_ITEMS] = result

    logger.info("Listed craftable items", count=len(craftable), station=station is not None)
    return result


def create_crafting_tools(
    bot_controller: BotController, mc_data_service: MinecraftDataService, config: Optional[SkillsConfig] = None
) -> List:
    """Create the crafting tools bound to a BotController and MinecraftDataService.

    Args:
        bot_controller: BotController instance
        mc_data_service: MinecraftDataService instance
        config: Skill configuration, loaded from the environment when omitted

    Returns:
        List of tool functions (ADK will automatically wrap them)
    """
    _set_bot_controller(bot_controller)
    _set_minecraft_data_service(mc_data_service)
    _set_config(config or get_config())

    return [craft_items, list_craftable_items, cancel_crafting]
