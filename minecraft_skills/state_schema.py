"""
Shared state keys written by skills into the tool context
"""

from typing import Final


class StateKeys:
    """Standardized state keys for skill results"""

    MINECRAFT_INVENTORY: Final[str] = "minecraft.inventory"

    CRAFT_TASK: Final[str] = "task.craft"
    CRAFT_RESULT: Final[str] = "task.craft.result"
    CRAFT_PLAN: Final[str] = "task.craft.plan"
    CRAFTABLE_ITEMS: Final[str] = "task.craft.craftable_items"


class TaskStatus:
    """Standard task status values"""

    COMPLETED: Final[str] = "completed"
    FAILED: Final[str] = "failed"
    CANCELLED: Final[str] = "cancelled"
