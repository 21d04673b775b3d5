"""Schema definitions for Minecraft skill commands and responses."""

from .crafting import (
    CraftableItemsResponse,
    CraftItemCommand,
    CraftItemResponse,
    CraftStepSummary,
    ErrorDetails,
)

__all__ = [
    "CraftItemCommand",
    "CraftItemResponse",
    "CraftStepSummary",
    "CraftableItemsResponse",
    "ErrorDetails",
]
