#!/usr/bin/env python3
"""
Inventory command-script runner.

Executes a list of ``{"action": ..., "args": [...]}`` commands against a fresh
in-memory inventory and prints every report to stdout. Without ``--script``
it runs the built-in demo sequence: four fruit/dairy items, a sale, a
restock, every view, and a custom field.

Usage:
    python3 scripts/inventory_demo.py
    python3 scripts/inventory_demo.py --script commands.yaml --config inventory.yaml

Script file format (YAML):

    - action: add
      args: [Apple, Fruit, 10, 1.5, kg]
    - action: sell
      args: [Apple, 2]
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any, Callable, Sequence, TextIO

from inventory_kernel.config import (
    InventoryConfig,
    load_inventory_config,
    load_yaml_file,
)
from inventory_kernel.domain.clock import Clock, SystemClock
from inventory_kernel.logging_config import configure_logging, get_logger
from inventory_kernel.services.inventory_store import InventoryStore
from inventory_kernel.services.orchestrator import InventoryOrchestrator
from inventory_kernel.services.reporting import TextReportSink

logger = get_logger("scripts.inventory_demo")

DEMO_COMMANDS: list[dict[str, Any]] = [
    {"action": "add", "args": ["Apple", "Fruit", 10, "1.5", "kg"]},
    {"action": "add", "args": ["Banana", "Fruit", 5, "1", "kg"]},
    {"action": "add", "args": ["Orange", "Fruit", 3, "2", "kg"]},
    {"action": "add", "args": ["Milk", "Dairy", 5, "3", "litre"]},
    {"action": "sell", "args": ["Apple", 2]},
    {"action": "restock", "args": ["Milk", 2]},
    {"action": "search", "args": ["mil"]},
    {"action": "view", "args": []},
    {"action": "ages", "args": []},
    {"action": "export", "args": []},
    {"action": "transactions", "args": []},
    {"action": "add_field", "args": ["Origin"]},
    {"action": "set_field", "args": ["Apple", "Origin", "India"]},
]


def _actions(orch: InventoryOrchestrator) -> dict[str, Callable[..., Any]]:
    return {
        "add": orch.add,
        "edit": orch.edit_at,
        "remove": orch.remove,
        "sell": orch.sell,
        "restock": orch.restock,
        "search": orch.search,
        "view": orch.view_inventory,
        "export": orch.export_csv,
        "transactions": orch.view_transactions,
        "ages": orch.view_ages,
        "dashboard": orch.dashboard,
        "import": orch.import_batch,
        "add_field": orch.register_custom_field,
        "set_field": orch.set_custom_field,
    }


def run_commands(
    orch: InventoryOrchestrator,
    commands: Sequence[dict[str, Any]],
) -> list[Any]:
    """
    Execute commands in order and return each action's return value.

    Raises:
        ValueError: on an unknown action.
    """
    actions = _actions(orch)
    outcomes = []
    for position, command in enumerate(commands):
        action = command.get("action")
        handler = actions.get(action)
        if handler is None:
            raise ValueError(
                f"Unknown action {action!r} at command {position}; "
                f"expected one of {sorted(actions)}"
            )
        logger.debug("command_started", extra={"action": action, "position": position})
        outcomes.append(handler(*command.get("args", [])))
    return outcomes


def build_orchestrator(
    config: InventoryConfig,
    stream: TextIO | None = None,
    clock: Clock | None = None,
) -> InventoryOrchestrator:
    store = InventoryStore(clock=clock or SystemClock(), config=config)
    return InventoryOrchestrator(store, TextReportSink(stream, config))


def main(
    argv: Sequence[str] | None = None,
    stream: TextIO | None = None,
    clock: Clock | None = None,
) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("--script", type=Path, help="YAML list of commands")
    parser.add_argument("--config", type=Path, help="YAML inventory config")
    parser.add_argument("--log-level", help="override the configured log level")
    args = parser.parse_args(argv)

    config = (
        load_inventory_config(args.config)
        if args.config
        else InventoryConfig.with_defaults()
    )
    configure_logging(level=(args.log_level or config.log_level).upper())

    commands = load_yaml_file(args.script) if args.script else DEMO_COMMANDS
    if not isinstance(commands, list):
        parser.error("script must be a YAML list of commands")

    out = stream or sys.stdout
    out.write("Running inventory commands...\n")
    run_commands(build_orchestrator(config, out, clock), commands)
    return 0


if __name__ == "__main__":
    sys.exit(main())
