# ABOUTME: Demo entry point that exercises a stat pool in the terminal
# ABOUTME: Runs the boundary test suite and a health example, printing every notification

import argparse
import os
import sys
from typing import List, Optional

from dotenv import load_dotenv

from statpool.core.stat_pool import StatPool
from statpool.ui.rich_ui import (
    init_console,
    print_banner,
    print_error,
    print_message,
    print_pool_status,
    print_pool_table,
    print_section,
    print_status_message,
)
from statpool.utils.events import Event, EventType
from statpool.utils.logging_config import get_logging_config, reset_logging


VERSION = "0.1.0"
SCENARIOS = ["suite", "health", "all"]


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Args:
        argv: Argument list (defaults to sys.argv[1:])

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(
        description="StatPool terminal demo",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  statpool-demo                     # Run every scenario
  statpool-demo --scenario suite    # Only the boundary test suite
  statpool-demo --scenario health   # Only the health example
  statpool-demo --debug             # Enable debug logging
        """
    )

    parser.add_argument(
        "--scenario",
        choices=SCENARIOS,
        default=os.getenv("STATPOOL_SCENARIO", "all").lower(),
        help="Scenario to run (default: from STATPOOL_SCENARIO env var, else all)"
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        default=os.getenv("DEBUG_MODE", "false").lower() in ["true", "1", "yes"],
        help="Enable debug mode with file logging and detailed error traces"
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"StatPool Demo v{VERSION}"
    )

    args = parser.parse_args(argv)
    if args.scenario not in SCENARIOS:
        parser.error(f"invalid scenario: {args.scenario!r}")
    return args


def on_value_changed(event: Event) -> None:
    """Print the direction and size of a value change."""
    old_value = event.data["old_value"]
    new_value = event.data["new_value"]
    direction = "↑" if event.data["increased"] else "↓"
    change = abs(new_value - old_value)
    print_message(f"  {direction} Value changed by {change}: {old_value} → {new_value}")


def on_depleted(event: Event) -> None:
    print_status_message("Stat depleted!", "warning")


def on_restored(event: Event) -> None:
    print_status_message("Restored from empty!", "info")


def on_restored_fully(event: Event) -> None:
    print_status_message("Fully restored!", "success")


def connect_handlers(pool: StatPool) -> None:
    """Subscribe the demo's print handlers to a pool."""
    pool.connect(EventType.VALUE_CHANGED, on_value_changed)
    pool.connect(EventType.DEPLETED, on_depleted)
    pool.connect(EventType.RESTORED, on_restored)
    pool.connect(EventType.RESTORED_FULLY, on_restored_fully)


def run_suite(pool: Optional[StatPool] = None) -> StatPool:
    """
    Walk a pool through every boundary transition.

    Args:
        pool: Pool to exercise (a default 0/100/100 pool if None)

    Returns:
        The exercised pool
    """
    if pool is None:
        pool = StatPool()
    connect_handlers(pool)

    print_section("StatPool Test Suite")
    print_pool_status(pool, "Initial state")

    print_message("\nTesting value modifications...")
    pool.decrease(30)
    print_pool_status(pool, "After decreasing by 30")

    pool.increase(15)
    print_pool_status(pool, "After increasing by 15")

    print_message("\nTesting boundaries...")
    pool.deplete()
    print_pool_status(pool, "After deplete()")

    pool.increase(25)
    print_pool_status(pool, "After restoring by 25")

    pool.fill()
    print_pool_status(pool, "After fill()")

    print_message("\nTesting range changes...")
    pool.set_max_value(150)
    print_pool_status(pool, "Max changed to 150")

    print_status_message("Tests completed!", "success")
    return pool


def run_health_example() -> StatPool:
    """
    Build a 0/200/150 health pool and shrink its maximum to 150.

    Returns:
        The health pool
    """
    health = StatPool(min_value=0, max_value=200, value=150, name="health")

    print_message(f"\nHealth example: {health.value}/{health.max_value} HP")
    print_message(f"  min: {health.min_value}")
    print_message(f"  max: {health.max_value}")

    health.set_max_value(150)
    print_message(f"  max after shrink: {health.max_value}")
    return health


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the demo.

    Flow:
        1. Load environment variables
        2. Parse command-line arguments
        3. Initialize console and debug logging
        4. Run the selected scenarios
        5. Show a summary table

    Returns:
        Process exit code
    """
    load_dotenv()

    args = parse_arguments(argv)

    init_console(debug_mode=args.debug)

    if args.debug:
        logging_config = get_logging_config()
        if logging_config and logging_config.get_log_file_path():
            print_status_message(
                f"Debug mode enabled. Logging to: {logging_config.get_log_file_path()}",
                "info"
            )

    print_banner("StatPool Demo", version=VERSION, color="cyan")

    try:
        pools = []
        if args.scenario in ("suite", "all"):
            pools.append(run_suite(StatPool(name="stat")))
        if args.scenario in ("health", "all"):
            pools.append(run_health_example())
        print_pool_table(pools)
        return 0
    except KeyboardInterrupt:
        print_status_message("Demo interrupted.", "info")
        return 130
    except Exception as e:
        if args.debug:
            raise
        print_error(str(e))
        print_status_message("Use --debug flag for detailed error information.", "info")
        return 1
    finally:
        reset_logging()


if __name__ == "__main__":
    sys.exit(main())
