"""Crafting skill command and response schemas - internal Pydantic models."""

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field


class CraftItemCommand(BaseModel):
    """Request to craft an item, as received from the tool layer."""
    item: Optional[str] = Field(None, description="Item name to craft; empty to list craftable items")
    count: int = Field(1, description="Number of items wanted")


class CraftStepSummary(BaseModel):
    """One step of a crafting plan."""
    recipe_id: str
    result: str = Field(..., description="Name of the item produced")
    times: int = Field(..., description="How many times the recipe runs")
    produced: int = Field(..., description="Total items produced by the step")
    requires_crafting_table: bool = False


class ErrorDetails(BaseModel):
    """Detailed error information."""
    error_type: Literal["no_recipe", "depth_exceeded", "insufficient_materials", "station_unavailable",
                        "execution_failure", "cancelled", "invalid_request"]
    message: str = Field(..., description="Human-readable error message")


class CraftItemResponse(BaseModel):
    """Response from the craft skill."""
    status: Literal["success", "error"]
    timestamp: datetime = Field(default_factory=datetime.now)
    item_name: Optional[str] = None
    count_requested: int
    message: str = Field(..., description="Narration returned to the caller")
    steps: List[CraftStepSummary] = Field(default_factory=list)
    steps_performed: int = 0
    error_details: Optional[ErrorDetails] = None


class CraftableItemsResponse(BaseModel):
    """Response listing what can be crafted right now."""
    status: Literal["success", "error"] = "success"
    crafting_stations: List[str] = Field(default_factory=list)
    craftable_items: List[str] = Field(default_factory=list)
