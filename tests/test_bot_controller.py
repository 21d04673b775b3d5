"""
Tests for the BotController and the crafting primitives built on it
"""
import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from minecraft_skills.crafting.bot_primitives import BotCraftingPrimitives, BotStationLocator
from minecraft_skills.crafting.executor import CraftingPrimitiveError, NavigationOutcome, Station
from minecraft_skills.minecraft_bot_controller import BotController

from mocks import MockBridgeManager, make_recipe


class TestBotController:
    """Command translation and error handling of the controller"""

    @pytest.mark.asyncio
    async def test_craft_item_sends_recipe(self):
        bridge = MockBridgeManager()
        controller = BotController(bridge)

        result = await controller.craft_item(280, "280:0", 1, {"x": 1, "y": 64, "z": 2})

        assert result["status"] == "success"
        assert bridge.commands == [
            ("craft", {"itemId": 280, "recipeId": "280:0", "count": 1, "craftingTable": {"x": 1, "y": 64, "z": 2}})
        ]

    @pytest.mark.asyncio
    async def test_craft_item_error_from_bot(self):
        bridge = MockBridgeManager(responses={"craft": {"success": False, "error": "missing ingredients"}})
        controller = BotController(bridge)

        result = await controller.craft_item(280, "280:0", 1)

        assert result == {"status": "error", "error": "missing ingredients"}

    @pytest.mark.asyncio
    async def test_craft_item_exception(self):
        bridge = MockBridgeManager(responses={"craft": RuntimeError("bot disconnected")})

        result = await BotController(bridge).craft_item(280, "280:0", 1)

        assert result["status"] == "error"
        assert "bot disconnected" in result["error"]

    @pytest.mark.asyncio
    async def test_not_connected(self):
        bridge = MockBridgeManager(connected=False)
        controller = BotController(bridge)

        result = await controller.move_to(1, 2, 3)

        assert result["status"] == "error"
        assert bridge.commands == []
        assert await controller.get_inventory_items() == []
        assert await controller.find_blocks("crafting_table") == []

    @pytest.mark.asyncio
    async def test_move_to_with_range(self):
        bridge = MockBridgeManager(responses={"pathfinder.goto": {"status": "success"}})

        result = await BotController(bridge).move_to(5, 64, 5, timeout=1000, range=3)

        assert result["status"] == "success"
        assert bridge.commands == [("pathfinder.goto", {"x": 5, "y": 64, "z": 5, "timeout": 1000, "range": 3})]

    @pytest.mark.asyncio
    async def test_move_to_timeout(self):
        bridge = MockBridgeManager(responses={"pathfinder.goto": TimeoutError("timeout waiting for goal")})

        result = await BotController(bridge).move_to(5, 64, 5, timeout=1000)

        assert result["status"] == "error"
        assert "timed out after 1000ms" in result["error"]

    @pytest.mark.asyncio
    async def test_inventory_counts_summed(self):
        bridge = MockBridgeManager(
            responses={
                "inventory.items": [
                    {"name": "oak_log", "count": 64},
                    {"name": "oak_log", "count": 10},
                    {"name": "stick", "count": 3},
                ]
            }
        )

        counts = await BotController(bridge).inventory_counts()

        assert counts == {"oak_log": 74, "stick": 3}

    @pytest.mark.asyncio
    async def test_get_position_from_proxy(self):
        position = MagicMock(x=1.5, y=64.0, z=-3.0)
        bridge = MockBridgeManager(responses={"entity.position": position})

        assert await BotController(bridge).get_position() == {"x": 1.5, "y": 64.0, "z": -3.0}


@pytest.fixture
def controller():
    controller = MagicMock()
    controller.craft_item = AsyncMock(return_value={"status": "success"})
    controller.equip_item = AsyncMock(return_value={"status": "success"})
    controller.move_to = AsyncMock(return_value={"status": "success"})
    controller.get_position = AsyncMock(return_value={"x": 0, "y": 64, "z": 0})
    controller.find_blocks = AsyncMock(return_value=[{"x": 4, "y": 64, "z": 4}])
    return controller


class TestBotCraftingPrimitives:
    """Primitive contract on top of the controller's status dicts"""

    @pytest.mark.asyncio
    async def test_craft_at_station(self, controller):
        primitives = BotCraftingPrimitives(controller)
        recipe = make_recipe("280:0", "stick", 4, {"oak_planks": 2})

        await primitives.craft(recipe, 1, Station(position=(4, 64, 4)))

        controller.craft_item.assert_awaited_once_with("stick", "280:0", 1, {"x": 4, "y": 64, "z": 4})

    @pytest.mark.asyncio
    async def test_craft_error_raises(self, controller):
        controller.craft_item.return_value = {"status": "error", "error": "missing ingredients"}
        primitives = BotCraftingPrimitives(controller)

        with pytest.raises(CraftingPrimitiveError, match="missing ingredients"):
            await primitives.craft(make_recipe("sticks", "stick", 4, {"oak_planks": 2}), 1, None)

    @pytest.mark.asyncio
    async def test_navigate_near(self, controller):
        primitives = BotCraftingPrimitives(controller, pathfinder_timeout_ms=5000)

        result = await primitives.navigate_near((4, 64, 4), 3)

        assert result.outcome == NavigationOutcome.REACHED
        controller.move_to.assert_awaited_once_with(4, 64, 4, timeout=5000, range=3)

    @pytest.mark.asyncio
    async def test_navigate_near_cancelled(self, controller):
        cancel = asyncio.Event()
        cancel.set()

        result = await BotCraftingPrimitives(controller).navigate_near((4, 64, 4), 3, cancel)

        assert result.outcome == NavigationOutcome.CANCELLED
        controller.move_to.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_navigate_near_error(self, controller):
        controller.move_to.return_value = {"status": "error", "error": "No path"}

        result = await BotCraftingPrimitives(controller).navigate_near((4, 64, 4), 3)

        assert result.outcome == NavigationOutcome.ERROR
        assert result.error == "No path"

    @pytest.mark.asyncio
    async def test_position(self, controller):
        assert await BotCraftingPrimitives(controller).position() == (0, 64, 0)

    @pytest.mark.asyncio
    async def test_station_locator(self, controller):
        station = await BotStationLocator(controller, max_distance=16).nearest_station()

        assert station.position == (4, 64, 4)
        controller.find_blocks.assert_awaited_once_with("crafting_table", max_distance=16, count=1)

    @pytest.mark.asyncio
    async def test_station_locator_none_found(self, controller):
        controller.find_blocks.return_value = []

        assert await BotStationLocator(controller).nearest_station() is None
