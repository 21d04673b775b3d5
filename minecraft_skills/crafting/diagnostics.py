"""
Diagnostic formatter - turns missing-material maps into user-facing text
"""
from typing import Mapping, Sequence

from .models import display_name

MESSAGE_PREFIX = "you still need"
MAX_ALTERNATIVES = 8


def _missing_items(missing: Mapping[str, int]) -> str:
    return ", ".join(f"{count} more {display_name(name)}" for name, count in missing.items())


def format_missing(missing: Mapping[str, int]) -> str:
    """Shortfall of a single recipe, e.g. "you still need 2 more stick, 1 more coal"."""
    return f"{MESSAGE_PREFIX} {_missing_items(missing)}"


def format_alternatives(alternatives: Sequence[Mapping[str, int]], limit: int = MAX_ALTERNATIVES) -> str:
    """Shortfall of several equally short recipes, separated by "or"."""
    shown = [_missing_items(missing) for missing in alternatives[:limit]]
    return f"{MESSAGE_PREFIX} " + ", or ".join(shown)


def describe_shortfall(alternatives: Sequence[Mapping[str, int]], limit: int = MAX_ALTERNATIVES) -> str:
    if len(alternatives) == 1:
        return format_missing(alternatives[0])
    return format_alternatives(alternatives, limit=limit)
