#!/usr/bin/env python3
"""
Run script for the core plugin toggler

Runs one command given on the command line, or starts an interactive session
when none is given.
"""

import os
import shlex
import argparse
import logging
from dotenv import load_dotenv

from config.plugin_config import BACKUP_DIR
from core.strategies import STRATEGIES
from tools.command_registry import CommandRegistry
from tools.plugin_tool import PluginToggleTool, register_plugin_commands
from utils.constants import (
    DEFAULT_LOG_LEVEL,
    DEFAULT_STRATEGY,
    LOG_FORMAT,
    LOG_LEVEL_ENV_VAR,
    STRATEGY_ENV_VAR,
    get_workspace_folders,
)

logger = logging.getLogger("plugin_toggler")


def parse_command_line(registry, tokens):
    """Turn command tokens into a command name and parameters

    Positional values fill the command's parameters in declaration order;
    name=value tokens set a parameter by name. "true"/"false" become booleans
    for boolean parameters only.

    Args:
        registry: CommandRegistry holding the command specs
        tokens: Command name followed by its arguments

    Returns:
        Tuple of (command_name, params)
    """
    name, args = tokens[0], tokens[1:]
    spec = next((s for s in registry.get_command_specs() if s["name"] == name), None)
    param_names = list(spec["parameters"]) if spec else []
    types = {p: s.get("type") for p, s in spec["parameters"].items()} if spec else {}

    params = {}
    positional = 0
    for arg in args:
        if "=" in arg:
            param, _, value = arg.partition("=")
        elif positional < len(param_names):
            param, value = param_names[positional], arg
            positional += 1
        else:
            continue
        if types.get(param) == "boolean" and value.lower() in ("true", "false"):
            value = value.lower() == "true"
        params[param] = value
    return name, params


def run_command(registry, tokens):
    """Run one command and return the text to show"""
    name, params = parse_command_line(registry, tokens)
    func = registry.get_command(name)
    if func is None:
        return f"Error: Unknown command '{name}'. Available: {', '.join(registry.list_commands())}"
    missing = registry.missing_params(name, params)
    if missing:
        return f"Error: Missing parameters for {name}: {', '.join(missing)}"
    return func(**params)


def format_help(registry):
    lines = ["Available commands:"]
    for spec in registry.get_command_specs():
        args = " ".join(f"<{p}>" if p in spec["required"] else f"[{p}]" for p in spec["parameters"])
        lines.append(f"- {spec['name']} {args}".rstrip() + f": {spec['description']}")
    return "\n".join(lines)


def main(argv=None):
    """Main entry point for the plugin toggler"""
    # Load environment variables
    load_dotenv()

    # Parse command line arguments
    parser = argparse.ArgumentParser(description="Toggle currency and swap plugins of an edge-react-gui checkout")
    parser.add_argument("--workspace", action="append", help="Workspace folder to search (repeatable, default: current directory)")
    parser.add_argument("--strategy", choices=list(STRATEGIES), default=os.getenv(STRATEGY_ENV_VAR, DEFAULT_STRATEGY),
                        help=f"How plugins are enabled (default: {DEFAULT_STRATEGY})")
    parser.add_argument("--backup-dir", default=BACKUP_DIR, help=f"Backup directory inside the workspace (default: {BACKUP_DIR})")
    parser.add_argument("--log-level", default=os.getenv(LOG_LEVEL_ENV_VAR, DEFAULT_LOG_LEVEL), help=f"Logging level (default: {DEFAULT_LOG_LEVEL})")
    parser.add_argument("command", nargs=argparse.REMAINDER, help="Command to run once, e.g. 'toggle bitcoin'")

    args = parser.parse_args(argv)
    if args.strategy not in STRATEGIES:
        parser.error(f"invalid strategy '{args.strategy}' (choose from {', '.join(STRATEGIES)})")

    # Configure logging
    logging.basicConfig(level=args.log_level.upper(), format=LOG_FORMAT)
    logger.info(f"Starting with the {args.strategy} strategy")

    plugin_tool = PluginToggleTool(
        workspace_folders=args.workspace or get_workspace_folders(),
        strategy=args.strategy,
        backup_dir=args.backup_dir
    )
    registry = register_plugin_commands(CommandRegistry(), plugin_tool)

    if args.command:
        print(run_command(registry, args.command))
        return

    print("Core plugin toggler")
    print(f"Strategy: {args.strategy}")
    print(f"Workspace folders: {', '.join(plugin_tool.locator.folders)}")
    print("Type 'help' for commands, 'exit' or 'quit' to end the session")
    print("=" * 50)

    while True:
        try:
            line = input("\n> ").strip()

            if line.lower() in ["exit", "quit"]:
                print("\nGoodbye!")
                break
            if not line:
                continue
            if line.lower() == "help":
                print(format_help(registry))
                continue

            print(run_command(registry, shlex.split(line)))

        except (KeyboardInterrupt, EOFError):
            print("\nSession interrupted. Goodbye!")
            break
        except ValueError as e:
            print(f"\nError: {str(e)}")


if __name__ == "__main__":
    main()
