"""
Minecraft skills - recipe planning and crafting for a Mineflayer bot
"""

__version__ = "0.1.0"
