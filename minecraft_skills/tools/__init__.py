from .crafting_tools import create_crafting_tools

__all__ = ["create_crafting_tools"]
