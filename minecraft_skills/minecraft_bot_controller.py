"""
BotController - Python class that encapsulates the bot actions used by skills
Provides a Python-centric interface over the command transport to the Mineflayer bot
"""
import logging
from typing import Any, Dict, List, Optional, Protocol, Union

logger = logging.getLogger(__name__)


class CommandBridge(Protocol):
    """Transport to the running bot (JSPyBridge, MCP client, ...)"""

    is_connected: bool

    async def execute_command(self, method: str, **kwargs) -> Any:
        ...


class BotController:
    """Python controller for Minecraft bot actions via a command bridge"""

    _instance = None
    _bridge_manager = None

    def __new__(cls, bridge_manager_instance: CommandBridge):
        if cls._instance is None or cls._bridge_manager is not bridge_manager_instance:
            cls._instance = super().__new__(cls)
            cls._bridge_manager = bridge_manager_instance
        return cls._instance

    def __init__(self, bridge_manager_instance: CommandBridge):
        """Initialize the BotController with a command bridge

        Args:
            bridge_manager_instance: A connected command bridge
        """
        # Only initialize if not already initialized or bridge changed
        if not hasattr(self, "bridge_manager_instance") or self.bridge_manager_instance is not bridge_manager_instance:
            self.bridge_manager_instance = bridge_manager_instance
            logger.info("Initialized BotController")

    def _check_connection(self) -> Optional[Dict[str, Any]]:
        """Check if bridge is connected and return error message if not

        Returns:
            None if connected, error dict if not connected
        """
        if not self.bridge_manager_instance.is_connected:
            return {
                "status": "error",
                "error": "Not connected to server",
                "message": "I am not currently connected to a Minecraft server.",
            }
        return None

    async def move_to(
        self, x: float, y: float, z: float, timeout: Optional[int] = None, range: Optional[float] = None
    ) -> Dict[str, Any]:
        """Move bot to (or near) specific coordinates

        Args:
            x: Target X coordinate
            y: Target Y coordinate
            z: Target Z coordinate
            timeout: Optional timeout in milliseconds
            range: Stop once within this distance of the target

        Returns:
            Dict with movement result
        """
        conn_error = self._check_connection()
        if conn_error:
            return conn_error

        args: Dict[str, Any] = {"x": x, "y": y, "z": z}
        if timeout is not None:
            args["timeout"] = timeout
        if range is not None:
            args["range"] = range

        try:
            result = await self.bridge_manager_instance.execute_command("pathfinder.goto", **args)

            if isinstance(result, dict):
                # Error dict from bridge callback ({"error": "..."})
                if "error" in result and not result.get("status"):
                    return {"status": "error", "error": str(result["error"])}
                elif result.get("status") == "error":
                    return {"status": "error", "error": result.get("error", "Unknown error")}

            return {"status": "success", "target": {"x": x, "y": y, "z": z}, "result": result}
        except Exception as e:
            error_msg = str(e)
            logger.error(f"Movement failed: {error_msg}")

            if "timeout" in error_msg.lower():
                return {"status": "error", "error": f"Movement timed out after {timeout}ms: {error_msg}"}
            return {"status": "error", "error": error_msg}

    async def equip_item(self, item_name_or_id: Union[str, int], destination: str = "hand") -> Dict[str, Any]:
        """Equip an item

        Args:
            item_name_or_id: Item name or numeric ID
            destination: Where to equip ('hand', 'head', 'torso', 'legs', 'feet', 'off-hand')

        Returns:
            Dict with equip result
        """
        conn_error = self._check_connection()
        if conn_error:
            return conn_error

        try:
            await self.bridge_manager_instance.execute_command(
                "inventory.equip", item=item_name_or_id, destination=destination
            )
            return {"status": "success", "equipped": item_name_or_id, "destination": destination}
        except Exception as e:
            logger.error(f"Equip item failed: {e}")
            return {"status": "error", "error": str(e)}

    async def craft_item(
        self,
        item_id: Union[str, int],
        recipe_id: str,
        count: int,
        crafting_table_position: Optional[Dict[str, float]] = None,
    ) -> Dict[str, Any]:
        """Craft an item using a specific recipe

        Args:
            item_id: Result item of the recipe
            recipe_id: Recipe identifier chosen by the planner
            count: Number of times to run the recipe
            crafting_table_position: Crafting table to use, or None for inventory crafting

        Returns:
            Dict with craft result
        """
        conn_error = self._check_connection()
        if conn_error:
            return conn_error

        try:
            result = await self.bridge_manager_instance.execute_command(
                "craft",
                itemId=item_id,
                recipeId=recipe_id,
                count=count,
                craftingTable=crafting_table_position,
            )
            if isinstance(result, dict) and (result.get("status") == "error" or result.get("success") is False):
                return {"status": "error", "error": result.get("error", "Craft failed")}
            return {"status": "success", "crafted": item_id, "count": count, "result": result}
        except Exception as e:
            logger.error(f"Craft item failed: {e}")
            return {"status": "error", "error": str(e)}

    async def get_inventory_items(self) -> List[Dict[str, Any]]:
        """Get current inventory items

        Returns:
            List of inventory item dicts
        """
        # Check connection but don't return error dict since this method returns a list
        if not self.bridge_manager_instance.is_connected:
            logger.info("Get inventory called while disconnected - returning empty inventory")
            return []

        try:
            items = await self.bridge_manager_instance.execute_command("inventory.items")
            return items if isinstance(items, list) else []
        except Exception as e:
            logger.error(f"Get inventory failed: {e}")
            return []

    async def inventory_counts(self) -> Dict[str, int]:
        """Get current inventory summed per item name"""
        counts: Dict[str, int] = {}
        for item in await self.get_inventory_items():
            counts[item["name"]] = counts.get(item["name"], 0) + item["count"]
        return counts

    async def get_position(self) -> Dict[str, Any]:
        """Get current bot position

        Returns:
            Dict with x, y, z coordinates or error
        """
        conn_error = self._check_connection()
        if conn_error:
            return conn_error

        try:
            pos = await self.bridge_manager_instance.execute_command("entity.position")
            if isinstance(pos, dict):
                return {"x": pos["x"], "y": pos["y"], "z": pos["z"]}
            # JSPyBridge Vec3 proxy
            return {"x": pos.x, "y": pos.y, "z": pos.z}
        except Exception as e:
            logger.error(f"Get position failed: {e}")
            return {"status": "error", "error": str(e)}

    async def find_blocks(
        self, block_identifiers: Union[int, str, List[Union[int, str]]], max_distance: int = 64, count: int = 1
    ) -> List[Dict[str, Any]]:
        """Find blocks by ID(s) or name(s)

        Args:
            block_identifiers: Single block ID/name or list of block IDs/names to find
            max_distance: Maximum search distance
            count: Maximum number of blocks to return

        Returns:
            List of block positions
        """
        if not self.bridge_manager_instance.is_connected:
            logger.info("Find blocks called while disconnected - returning empty list")
            return []

        try:
            result = await self.bridge_manager_instance.execute_command(
                "world.findBlocks", matching=block_identifiers, maxDistance=max_distance, count=count
            )
            if isinstance(result, list):
                return result
            elif hasattr(result, "__len__") and hasattr(result, "__iter__"):
                # Convert proxy object to Python list
                python_list = []
                for item in result:
                    x = getattr(item, "x", None)
                    y = getattr(item, "y", None)
                    z = getattr(item, "z", None)
                    if x is not None and y is not None and z is not None:
                        python_list.append({"x": x, "y": y, "z": z})
                return python_list
            else:
                return []
        except Exception as e:
            logger.error(f"Find blocks failed: {e}")
            return []
