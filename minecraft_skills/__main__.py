"""
Command line entry point - plan crafts offline against the minecraft-data recipes

    python -m minecraft_skills plan wooden_pickaxe --have oak_log=3
    python -m minecraft_skills craftable --have oak_planks=4 --station
"""

import argparse
import sys
from typing import Dict, List

from dotenv import load_dotenv

from .config import get_config
from .crafting.models import Failure, display_name
from .crafting.planner import CraftingPlanner
from .logging_config import get_logger, setup_logging
from .minecraft_data_service import MinecraftDataService

logger = get_logger(__name__)


def _parse_inventory(entries: List[str]) -> Dict[str, int]:
    inventory: Dict[str, int] = {}
    for entry in entries:
        name, sep, count = entry.partition("=")
        if not sep or not count.isdigit():
            raise argparse.ArgumentTypeError(f"Inventory entries look like name=count, got '{entry}'")
        inventory[name] = inventory.get(name, 0) + int(count)
    return inventory


def parse_args(argv=None):
    """Parse command line arguments

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(description="Minecraft skills - plan crafting chains from an inventory")
    subparsers = parser.add_subparsers(dest="action", required=True)

    plan = subparsers.add_parser("plan", help="Plan the crafts needed to produce an item")
    plan.add_argument("item", help="Item to craft (e.g. 'wooden_pickaxe', 'stick')")
    plan.add_argument("--count", "-n", type=int, default=1, help="Number of items wanted")

    craftable = subparsers.add_parser("craftable", help="List items craftable directly from the inventory")

    for sub in (plan, craftable):
        sub.add_argument(
            "--have", action="append", default=[], metavar="NAME=COUNT", help="Inventory entry, may be repeated"
        )
        sub.add_argument("--station", action="store_true", help="A crafting table is available")
        sub.add_argument("--version", dest="mc_version", help="Minecraft version (defaults to configuration)")
        sub.add_argument("--verbose", "-v", action="store_true", help="Print log output to the console")

    return parser.parse_args(argv)


def main(argv=None) -> int:
    """Run the planner once and print the result"""
    load_dotenv()
    args = parse_args(argv)
    config = get_config()

    setup_logging(
        log_level=config.log_level,
        log_file=config.log_file,
        console_output=args.verbose,
        json_format=config.log_json_format,
    )

    try:
        inventory_by_name = _parse_inventory(args.have)
    except argparse.ArgumentTypeError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    mc_data = MinecraftDataService(args.mc_version or config.minecraft_version)
    catalog = mc_data.build_catalog()
    inventory = mc_data.counts_by_id(inventory_by_name)

    planner = CraftingPlanner(
        catalog,
        lambda: inventory,
        station_available=args.station,
        max_depth=config.max_craft_depth,
        max_alternatives=config.max_displayed_alternatives,
    )

    if args.action == "craftable":
        for item_id in planner.craftable_items(catalog.producible_items()):
            print(catalog.item_name(item_id))
        return 0

    target = mc_data.select_craft_target(args.item, inventory_by_name)
    if isinstance(target, Failure):
        print(f"Cannot craft {args.count} {display_name(args.item)}: {target.narration}")
        return 1
    name = target
    item_id = mc_data.get_item_by_name(name)["id"]

    table = mc_data.get_item_by_name("crafting_table")
    failure = planner.station_precheck(item_id, has_station_item=bool(table) and inventory.get(table["id"], 0) > 0)
    result = failure or planner.resolve(item_id, args.count)

    if not result.ok:
        print(f"Cannot craft {args.count} {display_name(name)}: {result.narration}")
        return 1

    print(f"Plan for {args.count} {display_name(name)}:")
    for number, step in enumerate(result.plan, start=1):
        table_note = " (crafting table)" if step.recipe.requires_station else ""
        print(
            f"  {number}. {catalog.item_name(step.recipe.result.item_id)} x{step.multiplicity}"
            f" -> {step.produced}{table_note}"
        )
    return 0


if __name__ == "__main__":
    sys.exit(main())
