"""
Configuration management for the Minecraft skills package
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class SkillsConfig(BaseSettings):
    """Configuration for crafting and the other bot skills"""

    # Minecraft data configuration
    minecraft_version: str = Field(default="1.21.1", description="Minecraft version used to load recipe data")

    # Crafting resolver configuration
    max_craft_depth: int = Field(
        default=5, ge=0, description="Maximum nesting of ingredient crafts before planning gives up"
    )
    max_displayed_alternatives: int = Field(
        default=8, ge=1, description="Maximum alternative recipes listed in a missing-materials message"
    )

    # Crafting station configuration
    station_search_range: int = Field(default=32, description="Block radius searched for a crafting table")
    station_reach: int = Field(default=3, description="Distance the bot walks to when approaching a station")
    station_adjacency: float = Field(
        default=5.0, description="Distance under which the bot is considered next to a station"
    )

    # Timeout configuration
    pathfinder_timeout_ms: int = Field(default=30000, description="Timeout for pathfinder movement in milliseconds")

    # Logging configuration
    log_level: str = Field(default="INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR)")
    log_file: Optional[str] = Field(default=None, description="Log file path (None for a timestamped file)")
    log_json_format: bool = Field(default=False, description="Use JSON format for console logs")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="MINECRAFT_SKILLS_",
        case_sensitive=False,
        extra="ignore",  # Ignore extra environment variables
    )


def get_config() -> SkillsConfig:
    """Get the configuration instance"""
    return SkillsConfig()
